"""
traversal.py - Per-run Traversal State
=======================================
Mutable structures an executor owns for exactly one run:

    • NodeArena             - Dijkstra traversal nodes, parent links as indices
    • IndexedPriorityQueue  - binary min-heap with decrease-key and removal
    • TraversalResult       - what an executor generator returns when it ends

Design decisions:
  - A traversal node never points at another node; `source_index` is a
    position in the arena.  The arena outlives every node in it, so the
    backtracking chain can be walked after the pending set is gone.
  - The heap is keyed on (priority, sequence).  The sequence counter is
    bumped on every insert and every decrease, so among equal priorities
    the entry that entered (or re-entered) first comes out first.  This
    is the same order a stable re-sort of a pending list would give.
  - `_pos` maps key -> heap slot, which makes decrease-key and removal
    O(log n) instead of a linear scan.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Hashable, List, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)


# ---------------------------------------------------------------------------
# Traversal nodes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TraversalNode:
    vertex_id:    str
    cost:         float
    source_index: Optional[int] = None   # arena index of the node we came from


class NodeArena:
    """Append-only store of TraversalNodes for one run."""

    def __init__(self):
        self._nodes: List[TraversalNode] = []

    def add(self, vertex_id: str, cost: float, source_index: Optional[int] = None) -> int:
        self._nodes.append(TraversalNode(vertex_id, cost, source_index))
        return len(self._nodes) - 1

    def __getitem__(self, index: int) -> TraversalNode:
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)

    def source_of(self, index: int) -> Optional[TraversalNode]:
        parent = self._nodes[index].source_index
        return None if parent is None else self._nodes[parent]

    def chain(self, index: int) -> List[int]:
        """Indices from `index` back to the root, following source links."""
        out: List[int] = []
        cur: Optional[int] = index
        while cur is not None:
            out.append(cur)
            cur = self._nodes[cur].source_index
        return out


# ---------------------------------------------------------------------------
# Indexed priority queue
# ---------------------------------------------------------------------------
class IndexedPriorityQueue(Generic[K]):
    """
    Min-heap holding at most one entry per key.

        pq = IndexedPriorityQueue()
        pq.push("A", 0, payload)
        pq.decrease("A", -1, new_payload)
        key, priority, payload = pq.pop()

    Ties on priority are broken by insertion sequence (FIFO).
    """

    def __init__(self):
        self._heap: List[List[Any]] = []      # [priority, seq, key, payload]
        self._pos:  Dict[K, int]    = {}
        self._seq:  int             = 0

    # -- queries --
    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, key: K) -> bool:
        return key in self._pos

    def priority_of(self, key: K) -> float:
        return self._heap[self._pos[key]][0]

    def payload_of(self, key: K) -> Any:
        return self._heap[self._pos[key]][3]

    def peek(self) -> Tuple[K, float, Any]:
        if not self._heap:
            raise IndexError("peek from an empty priority queue")
        priority, _, key, payload = self._heap[0]
        return key, priority, payload

    def snapshot(self) -> List[Tuple[K, float]]:
        """(key, priority) pairs in pop order; does not disturb the heap."""
        return [(e[2], e[0]) for e in sorted(self._heap, key=lambda e: (e[0], e[1]))]

    # -- mutation --
    def push(self, key: K, priority: float, payload: Any = None) -> None:
        if key in self._pos:
            raise KeyError(f"{key!r} is already queued; use decrease()")
        self._heap.append([priority, self._next_seq(), key, payload])
        self._pos[key] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def decrease(self, key: K, priority: float, payload: Any = None) -> None:
        """Lower the priority of a queued key; it re-enters the tie order last."""
        i = self._pos[key]
        if not priority < self._heap[i][0]:
            raise ValueError(f"new priority {priority} does not improve {self._heap[i][0]} for {key!r}")
        self._heap[i] = [priority, self._next_seq(), key, payload]
        self._sift_up(i)

    def pop(self) -> Tuple[K, float, Any]:
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        entry = self._heap[0]
        self._remove_at(0)
        return entry[2], entry[0], entry[3]

    def remove(self, key: K) -> Any:
        """Drop a key wherever it sits in the heap; returns its payload."""
        i = self._pos[key]
        payload = self._heap[i][3]
        self._remove_at(i)
        return payload

    # -- internals --
    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def _remove_at(self, i: int) -> None:
        removed = self._heap[i]
        last = self._heap.pop()
        del self._pos[removed[2]]
        if last is not removed:
            self._heap[i] = last
            self._pos[last[2]] = i
            self._sift_up(i)
            self._sift_down(self._pos[last[2]])

    @staticmethod
    def _less(a: List[Any], b: List[Any]) -> bool:
        return (a[0], a[1]) < (b[0], b[1])

    def _swap(self, i: int, j: int) -> None:
        h = self._heap
        h[i], h[j] = h[j], h[i]
        self._pos[h[i][2]] = i
        self._pos[h[j][2]] = j

    def _sift_up(self, i: int) -> None:
        while i > 0:
            parent = (i - 1) // 2
            if not self._less(self._heap[i], self._heap[parent]):
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        n = len(self._heap)
        while True:
            smallest = i
            for child in (2 * i + 1, 2 * i + 2):
                if child < n and self._less(self._heap[child], self._heap[smallest]):
                    smallest = child
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------
@dataclass
class TraversalResult:
    """
    Attributes:
        visited : Vertex ids in the order they were visited / finalised.
        levels  : BFS only: {vertex_id: hop distance from the source}.
        costs   : Dijkstra only: cost table at termination.
        path    : Source -> destination vertex ids (empty if not reached).
        cost    : Final cost at the destination, or None.
    """

    visited: List[str]           = field(default_factory=list)
    levels:  Dict[str, int]      = field(default_factory=dict)
    costs:   Dict[str, float]    = field(default_factory=dict)
    path:    List[str]           = field(default_factory=list)
    cost:    Optional[float]     = None

    @property
    def reached(self) -> bool:
        return bool(self.path)

    def to_dict(self) -> dict:
        return {
            "visited": list(self.visited),
            "levels":  dict(self.levels),
            "costs":   dict(self.costs),
            "path":    list(self.path),
            "cost":    self.cost,
            "reached": self.reached,
        }
