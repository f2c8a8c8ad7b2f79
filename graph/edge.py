"""
edge.py — Directed Weighted Edge
================================
Connects two nodes in one direction only.  The tracers read
`source`, `target` and `weight`; nothing else.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weights are positive integers.  The browser editor sends them
    under `from` / `to`, so `from_dict` accepts both spellings.
  - Parallel edges between the same ordered pair are allowed; each one
    gets its own id.
"""

from typing import Optional
import uuid


class Edge:
    """
    Attributes:
        id     : Unique identifier.
        source : ID of the tail node.
        target : ID of the head node.
        weight : Positive integer cost.
    """

    __slots__ = ("id", "source", "target", "weight")

    def __init__(
        self,
        source: str,
        target: str,
        weight: int = 1,
        edge_id: Optional[str] = None,
    ):
        self.id:     str = edge_id or str(uuid.uuid4())[:8]
        self.source: str = source
        self.target: str = target
        self.weight: int = weight

    def connects(self, node_a: str, node_b: str) -> bool:
        """True if this edge runs node_a → node_b."""
        return self.source == node_a and self.target == node_b

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        source = data.get("source", data.get("from"))
        target = data.get("target", data.get("to"))
        if source is None or target is None:
            raise KeyError("edge needs 'source'/'target' (or 'from'/'to')")
        return cls(
            source=str(source),
            target=str(target),
            weight=data.get("weight", 1),
            edge_id=data.get("id"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
