from typing import Optional, Dict, Any
import uuid


# ---------------------------------------------------------------------------
# Vertex
# ---------------------------------------------------------------------------
class Vertex:
    """
    Stable identity plus an opaque payload.  Executors only ever read it.

    Attributes:
        id      : Unique identifier (uuid string by default, or user-supplied).
        label   : Human-readable name handed to the renderer.
        payload : Free-form dict owned by the host (the engine never looks inside).
    """

    __slots__ = ("id", "label", "payload")

    def __init__(
        self,
        vertex_id: Optional[str] = None,
        label: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        self.id: str                 = vertex_id or str(uuid.uuid4())[:8]
        self.label: str              = label or self.id
        self.payload: Dict[str, Any] = dict(payload or {})

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        data = {"id": self.id, "label": self.label}
        if self.payload:
            data["payload"] = dict(self.payload)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Vertex":
        return cls(vertex_id=str(data["id"]), label=data.get("label"), payload=data.get("payload"))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Vertex(id={self.id}, label={self.label})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Vertex) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
