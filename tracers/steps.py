"""
steps.py — Trace Frame Snapshots
================================
Every tracer returns a list of frames.  A frame is a frozen-in-time
picture of everything the visualizer needs to render one step:

    • DijkstraStep – visited order, the heap's literal array, the
                     distance / previous table and the edge under test
    • WarshallStep – the full reachability matrix plus the (k, i, j)
                     cell being decided

Design decisions:
  - Frames are frozen dataclasses holding their OWN read-only copies
    of the tracer's working state: sequences become tuples, tables
    become MappingProxyType views over a private dict, matrices become
    tuples of tuples.  __post_init__ does the copying, so a frame can
    never be changed after construction.  The tracer is the only writer; the stepper and the HTTP
    layer are pure readers, and seeking to frame N never depends on
    frames before it.
  - `INF` is a float so it compares greater than every int distance.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


INF = float("inf")

Matrix = Tuple[Tuple[bool, ...], ...]


@dataclass(frozen=True)
class QueueEntry:
    id:    str
    value: float


@dataclass(frozen=True)
class ActiveEdge:
    source: str
    target: str


# ---------------------------------------------------------------------------
# Dijkstra
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DijkstraStep:
    """
    Attributes:
        visited         : Node ids finalised so far, in finalisation order.
        queue           : Priority-queue contents in heap ARRAY order.
        distances       : {node_id: best known distance} (INF when unreached).
        previous        : {node_id: predecessor id or None}.
        current         : Node being expanded, or None between expansions.
        target_neighbor : Neighbour being relaxed, or None.
        active_edges    : The single edge current → target_neighbor, or empty.
        table_highlight : Row of the distance table to emphasise, or None.
        description     : Narration of what this frame shows.
    """

    visited:         Tuple[str, ...]             = ()
    queue:           Tuple[QueueEntry, ...]      = ()
    distances:       Mapping[str, float]         = field(default_factory=dict)
    previous:        Mapping[str, Optional[str]] = field(default_factory=dict)
    current:         Optional[str]               = None
    target_neighbor: Optional[str]               = None
    active_edges:    Tuple[ActiveEdge, ...]      = ()
    table_highlight: Optional[str]               = None
    description:     str                         = ""

    def __post_init__(self):
        object.__setattr__(self, "visited",      tuple(self.visited))
        object.__setattr__(self, "queue",        tuple(self.queue))
        object.__setattr__(self, "distances",    MappingProxyType(dict(self.distances)))
        object.__setattr__(self, "previous",     MappingProxyType(dict(self.previous)))
        object.__setattr__(self, "active_edges", tuple(self.active_edges))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visited":         list(self.visited),
            "queue":           [{"id": q.id, "value": _num(q.value)} for q in self.queue],
            "distances":       {nid: _num(d) for nid, d in self.distances.items()},
            "previous":        dict(self.previous),
            "current":         self.current,
            "target_neighbor": self.target_neighbor,
            "active_edges":    [{"source": e.source, "target": e.target} for e in self.active_edges],
            "table_highlight": self.table_highlight,
            "description":     self.description,
        }


# ---------------------------------------------------------------------------
# Warshall
# ---------------------------------------------------------------------------
class WarshallStepType(Enum):
    INIT       = "init"
    K_START    = "k-start"
    CHECKING   = "checking"
    FOUND      = "found"
    NO_CHANGE  = "no-change"
    K_COMPLETE = "k-complete"
    COMPLETE   = "complete"


@dataclass(frozen=True)
class WarshallStep:
    """
    Attributes:
        type         : Which transition of the stage state machine this is.
        k, i, j      : Intermediate / row / column index, -1 when not applicable.
        matrix       : Full V×V reachability snapshot (not a diff).
        description  : Narration of what this frame shows.
        active_nodes : Node ids the renderer should highlight.
    """

    type:         WarshallStepType
    k:            int             = -1
    i:            int             = -1
    j:            int             = -1
    matrix:       Matrix          = ()
    description:  str             = ""
    active_nodes: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "matrix",       freeze_matrix(self.matrix))
        object.__setattr__(self, "active_nodes", tuple(self.active_nodes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type":         self.type.value,
            "k":            self.k,
            "i":            self.i,
            "j":            self.j,
            "matrix":       [list(row) for row in self.matrix],
            "description":  self.description,
            "active_nodes": list(self.active_nodes),
        }


def freeze_matrix(matrix) -> Matrix:
    return tuple(tuple(row) for row in matrix)


def format_distance(value: float) -> str:
    return "∞" if value == INF else str(value)


def _num(value: float):
    # JSON has no infinity literal
    return "∞" if value == INF else value
