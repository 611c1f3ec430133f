"""
graph.py - Graph Store
=======================
Single source of truth for the graph.  Executors read it, the host
builds it.

Responsibilities:
  1. CRUD on vertices & edges               (add / remove / get)
  2. Adjacency queries                      (neighbours, incident edges, other end)
  3. Graph-generation factory methods       (random, grid)
  4. Import from adjacency-list / matrix    (text -> graph)
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Vertices & edges stored in plain dicts keyed by id for O(1) lookup.
  - A separate adjacency dict  `_adj[vertex_id] -> [(neighbour_id, edge_id)]`
    is maintained incrementally so neighbour queries are O(degree), not O(E).
  - At most one edge per vertex pair.  `create_edge` on an existing pair
    updates its weight instead, so `get_edge(a, b)` is never ambiguous.
  - The store is not guarded against mutation during a run; callers
    must leave it alone until the run is done.
"""

import random
from typing import Dict, List, Tuple, Optional, Set

from graph.vertex import Vertex
from graph.edge import Edge, check_weight
from graph.errors import GraphError, VertexNotFoundError, EdgeNotFoundError


class Graph:
    """
    Attributes:
        vertices : {vertex_id: Vertex}
        edges    : {edge_id: Edge}
        directed : bool - graph-level directedness
        _adj     : {vertex_id: [(neighbour_id, edge_id), ...]}
    """

    def __init__(self, directed: bool = False):
        self.vertices: Dict[str, Vertex] = {}
        self.edges:    Dict[str, Edge]   = {}
        self.directed: bool              = directed
        self._adj:     Dict[str, List[Tuple[str, str]]] = {}   # vertex_id -> [(nbr, edge_id)]

    # ==================================================================
    # VERTEX CRUD
    # ==================================================================
    def add_vertex(self, vertex: Vertex) -> Vertex:
        if vertex.id in self.vertices:
            raise GraphError(f"Vertex '{vertex.id}' already exists")
        self.vertices[vertex.id] = vertex
        self._adj.setdefault(vertex.id, [])
        return vertex

    def create_vertex(self, vertex_id: Optional[str] = None, label: Optional[str] = None, payload: Optional[dict] = None) -> Vertex:
        """Convenience: create + add in one call."""
        return self.add_vertex(Vertex(vertex_id=vertex_id, label=label, payload=payload))

    def remove_vertex(self, vertex_id: str) -> None:
        if vertex_id not in self.vertices:
            return
        # remove every edge touching this vertex
        touching = [eid for eid, e in self.edges.items() if vertex_id in (e.source, e.target)]
        for eid in touching:
            self.remove_edge(eid)
        del self.vertices[vertex_id]
        self._adj.pop(vertex_id, None)

    def get_vertex(self, vertex_id: str) -> Vertex:
        try:
            return self.vertices[vertex_id]
        except KeyError:
            raise VertexNotFoundError(vertex_id) from None

    def has_vertex(self, vertex_id: str) -> bool:
        return vertex_id in self.vertices

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        for endpoint in (edge.source, edge.target):
            if endpoint not in self.vertices:
                raise VertexNotFoundError(endpoint)
        if edge.directed != self.directed:
            kind = "directed" if self.directed else "undirected"
            raise GraphError(f"Edge {edge.id} does not match this {kind} graph")
        if self._find_edge(edge.source, edge.target, edge.directed) is not None:
            raise GraphError(f"An edge between '{edge.source}' and '{edge.target}' already exists")

        self.edges[edge.id] = edge
        # maintain adjacency; a self-loop is listed once
        self._adj[edge.source].append((edge.target, edge.id))
        if not edge.directed and edge.source != edge.target:
            self._adj[edge.target].append((edge.source, edge.id))
        return edge

    def create_edge(self, source: str, target: str, weight: float = 1, edge_id: Optional[str] = None) -> Edge:
        """Add an edge, or update the weight of the one already joining the pair."""
        existing = self._find_edge(source, target, self.directed)
        if existing is not None:
            existing.weight = check_weight(weight, source, target)
            return existing
        return self.add_edge(Edge(source=source, target=target, weight=weight, directed=self.directed, edge_id=edge_id))

    def remove_edge(self, edge_id: str) -> None:
        if edge_id not in self.edges:
            return
        e = self.edges.pop(edge_id)
        for endpoint in (e.source, e.target):
            if endpoint in self._adj:
                self._adj[endpoint][:] = [(n, eid) for n, eid in self._adj[endpoint] if eid != edge_id]

    def get_edge_by_id(self, edge_id: str) -> Optional[Edge]:
        return self.edges.get(edge_id)

    def get_edge(self, a: str, b: str) -> Edge:
        """The edge joining a and b (direction-aware).  Raises if there is none."""
        edge = self._find_edge(a, b, self.directed)
        if edge is None:
            raise EdgeNotFoundError(a, b)
        return edge

    def _find_edge(self, a: str, b: str, directed: bool) -> Optional[Edge]:
        for _, eid in self._adj.get(a, []):
            e = self.edges[eid]
            if directed and e.source == a and e.target == b:
                return e
            if not directed and e.connects(a, b):
                return e
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def get_neighbors(self, vertex_id: str) -> List[Vertex]:
        """Every vertex reachable over one incident edge, in insertion order."""
        self._require(vertex_id)
        return [self.vertices[nbr] for nbr, _ in self._adj[vertex_id]]

    def get_neighbor_edges(self, vertex_id: str) -> List[Edge]:
        """Edges leaving vertex_id (all incident edges when undirected)."""
        self._require(vertex_id)
        return [self.edges[eid] for _, eid in self._adj[vertex_id]]

    def get_other_end(self, edge: Edge, vertex_id: str) -> Vertex:
        other = edge.other_end(vertex_id)
        if other is None:
            raise GraphError(f"Vertex '{vertex_id}' is not an endpoint of {edge!r}")
        return self.vertices[other]

    def degree(self, vertex_id: str) -> int:
        return len(self._adj.get(vertex_id, []))

    def _require(self, vertex_id: str) -> None:
        if vertex_id not in self._adj:
            raise VertexNotFoundError(vertex_id)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "vertices": [v.to_dict() for v in self.vertices.values()],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(directed=data.get("directed", False))
        for vd in data.get("vertices", []):
            g.add_vertex(Vertex.from_dict(vd))
        for ed in data.get("edges", []):
            ed = dict(ed)
            ed.setdefault("directed", g.directed)
            g.add_edge(Edge.from_dict(ed))
        return g

    # ==================================================================
    # GENERATORS - Factory class-methods
    # ==================================================================

    # ---------- Random Graph ----------
    @classmethod
    def generate_random(
        cls,
        num_vertices: int = 10,
        edge_probability: float = 0.3,
        directed: bool = False,
        weight_range: Tuple[int, int] = (1, 10),
        connected: bool = True,
        seed: Optional[int] = None,
    ) -> "Graph":
        """
        Erdos-Renyi style random graph.
        Each possible edge is included with probability `edge_probability`.
        With `connected`, a random spanning path is added on top.
        """
        rng = random.Random(seed)
        g = cls(directed=directed)

        ids = [str(i) for i in range(num_vertices)]
        for vid in ids:
            g.create_vertex(vid)

        for i in range(num_vertices):
            for j in range(num_vertices):
                if i == j or (not directed and j <= i):
                    continue
                if rng.random() < edge_probability:
                    g.create_edge(ids[i], ids[j], weight=rng.randint(*weight_range))

        if connected:
            shuffled = list(ids)
            rng.shuffle(shuffled)
            for k in range(1, len(shuffled)):
                if g._find_edge(shuffled[k - 1], shuffled[k], directed) is None:
                    g.create_edge(shuffled[k - 1], shuffled[k], weight=rng.randint(*weight_range))

        return g

    # ---------- Grid Graph ----------
    @classmethod
    def generate_grid(cls, rows: int = 6, cols: int = 8, weight: float = 1) -> "Graph":
        """
        Undirected 2-D grid graph.  Vertex ids are "row_col"; edges connect
        4-neighbours (up / down / left / right).
        """
        g = cls(directed=False)

        # helper: (row, col) -> vertex-id string
        def vid(r, c):
            return f"{r}_{c}"

        for r in range(rows):
            for c in range(cols):
                g.create_vertex(vid(r, c))

        for r in range(rows):
            for c in range(cols):
                for dr, dc in ((0, 1), (1, 0)):   # right, down  (undirected covers both)
                    nr, nc = r + dr, c + dc
                    if nr < rows and nc < cols:
                        g.create_edge(vid(r, c), vid(nr, nc), weight=weight)

        return g

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(cls, text: str, directed: bool = False) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one vertex per line):
            A: B C D            -> A connects to B, C, D  (weight 1)
            A: B(3) C(7)        -> A-B weight 3, A-C weight 7
            0 -> 1,2,3          -> alternate arrow syntax
            0: 1(5), 2(3)       -> comma-separated with weights

        Lines starting with '#' are comments.  A malformed weight raises
        ValueError.
        """
        g = cls(directed=directed)
        adjacency: Dict[str, List[Tuple[str, float]]] = {}

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            # split on ':' or '->'
            if ":" in line:
                parts = line.split(":", 1)
            elif "→" in line:
                parts = line.split("→", 1)
            elif "->" in line:
                parts = line.split("->", 1)
            else:
                adjacency.setdefault(line, [])   # bare vertex
                continue

            src = parts[0].strip()
            adjacency.setdefault(src, [])

            for token in parts[1].replace(",", " ").split():
                # parse optional weight: "B(3)" or "B"
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                    w = _parse_number(w_str)
                else:
                    tgt, w = token, 1
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w))

        for label in adjacency:
            g.create_vertex(label)

        # an undirected pair listed from both ends keeps its first weight
        seen: Set = set()
        for src, targets in adjacency.items():
            for tgt, w in targets:
                key = frozenset((src, tgt)) if not directed else (src, tgt)
                if key in seen:
                    continue
                seen.add(key)
                g.create_edge(src, tgt, weight=w)

        return g

    # ---------- Import from Adjacency Matrix (text) ----------
    @classmethod
    def from_adjacency_matrix(
        cls,
        text: str,
        directed: bool = False,
        labels: Optional[List[str]] = None,
    ) -> "Graph":
        """
        Parse a whitespace / comma-separated adjacency matrix.

        Example:
            0 4 0 0
            4 0 8 0
            0 8 0 7
            0 0 7 0

        0 / inf / -1 = no edge.  Any other value = weight.
        First row can optionally be vertex labels (if non-numeric).
        """
        g = cls(directed=directed)

        rows_raw = [r.strip() for r in text.strip().splitlines() if r.strip()]
        if not rows_raw:
            return g

        # detect if first row is labels
        first_tokens = rows_raw[0].replace(",", " ").split()
        try:
            [float(t) for t in first_tokens]
            has_label_row = False
        except ValueError:
            has_label_row = True

        if has_label_row:
            labels = first_tokens
            rows_raw = rows_raw[1:]

        matrix: List[List[float]] = [
            [_parse_number(v) for v in row.replace(",", " ").split()] for row in rows_raw
        ]

        n = len(matrix)
        if labels is None:
            labels = [str(i) for i in range(n)]
        if len(labels) != n or any(len(row) != n for row in matrix):
            raise ValueError(f"Adjacency matrix must be square with {len(labels)} labels")

        for label in labels:
            g.create_vertex(label)

        seen: Set = set()
        for i in range(n):
            for j in range(n):
                val = matrix[i][j]
                if val == 0 or val == float("inf") or val == -1:
                    continue
                key = frozenset((i, j)) if not directed else (i, j)
                if key in seen:
                    continue
                seen.add(key)
                g.create_edge(labels[i], labels[j], weight=val)

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def vertex_count(self) -> int:
        return len(self.vertices)

    def edge_count(self) -> int:
        return len(self.edges)

    def vertex_ids(self) -> List[str]:
        return list(self.vertices.keys())

    def __repr__(self) -> str:
        return f"Graph(vertices={self.vertex_count()}, edges={self.edge_count()}, directed={self.directed})"


def _parse_number(text: str) -> float:
    """Integers stay integers so labels read "3", not "3.0"."""
    value = float(text)
    return int(value) if value.is_integer() else value
