"""
events.py - Render Events
==========================
Every executor is a generator that yields, in order, the patches a
renderer must apply and the pauses in between:

    • VertexUpdate - patch one vertex's border / fill / under-label
    • EdgeUpdate   - patch one edge's colour / label background
    • Pause        - suspend for `delay_ms` before continuing

Design decisions:
  - All three are frozen dataclasses.  The executor is the only writer;
    the controller and the sink are pure readers.
  - Patch semantics: a field left as None means "leave unchanged".
  - `kind` names why the patch was emitted, so hosts and tests can
    filter without comparing colours.
  - Pauses never reach the sink; the controller consumes them.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Union, Dict, Any


# ---------------------------------------------------------------------------
# Event kinds
# ---------------------------------------------------------------------------
class EventKind(Enum):
    VISITED        = "visited"          # BFS: vertex visited, label = level
    LEVEL_EDGE     = "level-edge"       # BFS: edge traversed one level behind
    SOURCE_LABEL   = "source-label"     # Dijkstra: source announced
    FINALIZED      = "finalized"        # Dijkstra: vertex popped, cost is final
    TREE_EDGE      = "tree-edge"        # Dijkstra: edge into a finalised vertex
    PROBE_EDGE     = "probe-edge"       # Dijkstra: edge examined during relaxation
    FRONTIER       = "frontier"         # Dijkstra: neighbour tinted as pending
    DISTANCE_LABEL = "distance-label"   # Dijkstra: cost label set / improved
    DESTINATION    = "destination"      # Dijkstra: destination popped
    PATH_EDGE      = "path-edge"        # backtracking: edge on the final path
    PATH_VERTEX    = "path-vertex"      # backtracking: vertex on the final path


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class VertexUpdate:
    vertex_id:    str
    kind:         EventKind
    border_color: Optional[str] = None
    inner_color:  Optional[str] = None
    under_label:  Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {k: v for k, v in asdict(self).items() if v is not None}
        data["type"] = "vertex"
        data["kind"] = self.kind.value
        return data


@dataclass(frozen=True)
class EdgeUpdate:
    edge_id:          str
    kind:             EventKind
    edge_color:       Optional[str] = None
    label_background: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {k: v for k, v in asdict(self).items() if v is not None}
        data["type"] = "edge"
        data["kind"] = self.kind.value
        return data


@dataclass(frozen=True)
class Pause:
    """
    Attributes:
        delay_ms : Requested suspension in milliseconds (before speed scaling).
        phase    : Which pacing point this is, e.g. "bfs-level", "backtrack".
    """

    delay_ms: float
    phase:    str


RenderEvent = Union[VertexUpdate, EdgeUpdate]
ExecutorItem = Union[VertexUpdate, EdgeUpdate, Pause]
