"""
algorithms/__init__.py - Algorithm Registry
=============================================
Single source of truth for every executor the animator knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, needs_destination, ...),
        ...
    }

AlgoInfo is a lightweight dataclass.  The engine and the HTTP host both
consume it, so adding an executor is: write the generator, add one
entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from algorithms.bfs      import bfs      as _bfs
from algorithms.dijkstra import dijkstra as _dijkstra


# ---------------------------------------------------------------------------
# AlgoInfo - metadata card for each executor
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "bfs"
    label:             str                    # human label, e.g. "Breadth-First Search"
    fn:                Callable               # the generator function
    needs_destination: bool     = False       # Dijkstra stops at a destination
    tags:              List[str] = field(default_factory=list)
    complexity_time:   str      = ""          # e.g. "O(V + E)"
    description:       str      = ""          # one-liner for hosts

    def to_dict(self) -> dict:
        return {
            "key":               self.key,
            "label":             self.label,
            "needs_destination": self.needs_destination,
            "tags":              list(self.tags),
            "complexity_time":   self.complexity_time,
            "description":       self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)",
        description="Visits the source's component level by level, labelling each vertex with its hop count.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra,
        needs_destination=True,
        tags=["weighted", "shortest-path"],
        complexity_time="O((V + E) log V)",
        description="Expands the cheapest pending vertex until the destination is reached, then traces the path back.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered executors in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
]
