"""
edge.py - Graph Edge
====================
Connects two vertices and carries a non-negative weight.

Design decisions:
  - `source` and `target` are vertex-id strings, NOT Vertex references.
    This keeps edges serialisable and avoids circular references.
  - Weight defaults to 1 for unweighted graphs; BFS simply never reads it.
  - Negative weights are refused up front: neither executor defines
    behaviour for them.
"""

from typing import Optional
import uuid


class Edge:
    """
    Attributes:
        id       : Unique identifier.
        source   : ID of the tail vertex.
        target   : ID of the head vertex.
        weight   : Non-negative numeric cost (default 1).
        directed : If False, traversal works in both directions.
    """

    __slots__ = ("id", "source", "target", "weight", "directed")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1,
        directed: bool = False,
        edge_id: Optional[str] = None,
    ):
        weight = check_weight(weight, source, target)
        self.id:       str   = edge_id or str(uuid.uuid4())[:8]
        self.source:   str   = source
        self.target:   str   = target
        self.weight:   float = weight
        self.directed: bool  = directed

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def connects(self, vertex_a: str, vertex_b: str) -> bool:
        """True if this edge links vertex_a and vertex_b (respects directedness)."""
        if self.directed:
            return self.source == vertex_a and self.target == vertex_b
        return (self.source, self.target) in ((vertex_a, vertex_b), (vertex_b, vertex_a))

    def other_end(self, vertex_id: str) -> Optional[str]:
        """Given one endpoint, return the other. None if vertex_id isn't an endpoint."""
        if vertex_id == self.source:
            return self.target
        if vertex_id == self.target:
            return self.source
        return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "source":   self.source,
            "target":   self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=str(data["source"]),
            target=str(data["target"]),
            weight=_weight_from_json(data.get("weight", 1)),
            directed=data.get("directed", False),
            edge_id=data.get("id"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        arrow = " -> " if self.directed else " <-> "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def check_weight(weight, source: str, target: str) -> float:
    """Return weight unchanged, or raise ValueError unless it is a number >= 0."""
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise ValueError(f"Edge weight on {source}-{target} must be a number, got {weight!r}")
    if not weight >= 0:   # also catches NaN
        raise ValueError(f"Negative edge weight {weight} on {source}-{target} is not supported")
    return weight


def _weight_from_json(value):
    """Numeric strings ("3", "2.5") become numbers; anything else is left for check_weight."""
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return value
        return int(number) if number.is_integer() else number
    return value
