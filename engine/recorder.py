"""
recorder.py - Recording Sink & Run Metrics
============================================
An in-memory rendering sink: it applies every patch to a plain
attribute table, remembers what each patch overwrote (a single linear
rollback chain), and stamps each event with the virtual time it was
emitted at.

Usage:
    rec = Recorder(graph)
    metrics = rec.run("dijkstra", source="A", destination="D")
    rec.sink.vertex_state("D")     # {"under_label": "Destination : 3 from B", ...}
    rec.sink.rollback()            # undo the last patch
    rec.export()                   # serialisable timeline for a host

The Recorder always paces with a VirtualClockPacing, so a full run
completes instantly while `at_ms` still shows when each patch would
land on screen.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Tuple

from graph import Graph
from algorithms.events import EdgeUpdate, EventKind, RenderEvent, VertexUpdate
from engine.controller import CancellationToken, ExecutionController, ExecutionSummary
from engine.pacing import VirtualClockPacing

_VERTEX_FIELDS = ("border_color", "inner_color", "under_label")
_EDGE_FIELDS   = ("edge_color", "label_background")


# ---------------------------------------------------------------------------
# Recorded entries
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RecordedEvent:
    index: int
    at_ms: float
    event: RenderEvent

    def to_dict(self) -> Dict[str, Any]:
        data = self.event.to_dict()
        data["index"] = self.index
        data["at_ms"] = self.at_ms
        return data


@dataclass(frozen=True)
class _Undo:
    table:    str                      # "vertex" | "edge"
    key:      str
    previous: Dict[str, Optional[str]] # field -> old value (None = was unset)


# ---------------------------------------------------------------------------
# Sink
# ---------------------------------------------------------------------------
class RecordingSink:
    """
    Attributes:
        vertices : {vertex_id: {field: value}} current visual attributes.
        edges    : {edge_id: {field: value}}
        events   : Every event applied and not rolled back, in order.
    """

    def __init__(self, clock: Optional[VirtualClockPacing] = None):
        self.clock:    Optional[VirtualClockPacing] = clock
        self.vertices: Dict[str, Dict[str, str]]    = {}
        self.edges:    Dict[str, Dict[str, str]]    = {}
        self.events:   List[RecordedEvent]          = []
        self._undo:    List[_Undo]                  = []

    def apply(self, event: RenderEvent) -> None:
        if isinstance(event, VertexUpdate):
            table, key, names = self.vertices, event.vertex_id, _VERTEX_FIELDS
        elif isinstance(event, EdgeUpdate):
            table, key, names = self.edges, event.edge_id, _EDGE_FIELDS
        else:
            raise TypeError(f"Not a render event: {event!r}")

        attrs = table.setdefault(key, {})
        previous = {}
        for name in names:
            value = getattr(event, name)
            if value is None:
                continue
            previous[name] = attrs.get(name)
            attrs[name] = value

        self._undo.append(_Undo("vertex" if table is self.vertices else "edge", key, previous))
        at_ms = self.clock.now_ms if self.clock is not None else 0.0
        self.events.append(RecordedEvent(len(self.events), at_ms, event))

    __call__ = apply

    # ------------------------------------------------------------------
    # Rollback
    # ------------------------------------------------------------------
    def rollback(self) -> Optional[RenderEvent]:
        """Undo the most recent patch.  Returns it, or None when nothing is left."""
        if not self._undo:
            return None
        undo = self._undo.pop()
        table = self.vertices if undo.table == "vertex" else self.edges
        attrs = table[undo.key]
        for name, old in undo.previous.items():
            if old is None:
                attrs.pop(name, None)
            else:
                attrs[name] = old
        if not attrs:
            del table[undo.key]
        return self.events.pop().event

    def rollback_all(self) -> int:
        count = 0
        while self.rollback() is not None:
            count += 1
        return count

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def vertex_state(self, vertex_id: str) -> Dict[str, str]:
        return dict(self.vertices.get(vertex_id, {}))

    def edge_state(self, edge_id: str) -> Dict[str, str]:
        return dict(self.edges.get(edge_id, {}))

    def of_kind(self, kind: EventKind) -> List[RenderEvent]:
        return [r.event for r in self.events if r.event.kind == kind]

    def __len__(self) -> int:
        return len(self.events)


# ---------------------------------------------------------------------------
# Metrics dataclass - what a host's analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:         str   = ""
    source:           str   = ""
    destination:      str   = ""
    vertices_visited: int   = 0
    edges_probed:     int   = 0
    path_length:      int   = 0          # number of edges on the final path
    path_cost:        float = 0.0        # total weight of the final path
    total_events:     int   = 0
    total_pauses:     int   = 0
    timeline_ms:      float = 0.0        # virtual duration of the animation
    wall_time_ms:     float = 0.0
    path_found:       bool  = False
    cancelled:        bool  = False


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """Runs one executor against a RecordingSink on a virtual clock."""

    def __init__(self, graph: Graph):
        self.graph:   Graph                      = graph
        self.clock:   VirtualClockPacing         = VirtualClockPacing()
        self.sink:    RecordingSink              = RecordingSink(self.clock)
        self.summary: Optional[ExecutionSummary] = None
        self.metrics: Optional[RunMetrics]       = None

    def run(
        self,
        algo_key: str,
        source: str,
        destination: Optional[str] = None,
        token: Optional[CancellationToken] = None,
    ) -> RunMetrics:
        self.clock = VirtualClockPacing()
        self.sink = RecordingSink(self.clock)
        controller = ExecutionController(
            self.graph,
            algo_key,
            source,
            destination,
            on_event=self.sink.apply,
            pacing=self.clock,
            token=token,
        )
        self.summary = controller.start_execution()
        self.metrics = self._compute_metrics(self.summary)
        return self.metrics

    def export(self) -> Dict[str, Any]:
        result = self.summary.result if self.summary else None
        return {
            "events":  [r.to_dict() for r in self.sink.events],
            "metrics": asdict(self.metrics) if self.metrics else {},
            "result":  result.to_dict() if result else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, summary: ExecutionSummary) -> RunMetrics:
        result = summary.result
        path = result.path if result else []

        path_cost = 0.0
        for a, b in _pairs(path):
            path_cost += self.graph.get_edge(a, b).weight

        return RunMetrics(
            algo_key=summary.algo_key,
            source=summary.source,
            destination=summary.destination or "",
            vertices_visited=len(result.visited) if result else 0,
            edges_probed=len(self.sink.of_kind(EventKind.PROBE_EDGE)),
            path_length=max(len(path) - 1, 0),
            path_cost=path_cost,
            total_events=summary.events_emitted,
            total_pauses=summary.pauses,
            timeline_ms=self.clock.now_ms,
            wall_time_ms=summary.wall_time_ms,
            path_found=bool(path),
            cancelled=summary.cancelled,
        )


def _pairs(path: List[str]) -> List[Tuple[str, str]]:
    return list(zip(path, path[1:]))
