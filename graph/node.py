"""
node.py — Graph Node
====================
A vertex of the editable graph.  Only `id` and `label` matter to the
tracers; `x` / `y` are layout coordinates the editor drags around.
"""

from typing import Optional
import uuid


class Node:
    """
    Attributes:
        id    : Unique identifier (short uuid by default, or user-supplied).
        label : Human-readable name used in step narration.
        x, y  : Canvas coordinates (pixels — the editor decides).
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        node_id: Optional[str] = None,
    ):
        self.id: str    = node_id or str(uuid.uuid4())[:8]
        self.label: str = label or self.id
        self.x: float   = x
        self.y: float   = y

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            label=data.get("label"),
            node_id=str(data["id"]),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label}, pos=({self.x:.2f},{self.y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
