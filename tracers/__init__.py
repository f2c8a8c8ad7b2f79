"""
tracers/__init__.py — Tracer Registry
======================================
Single source of truth for every algorithm the visualizer can trace.

    from tracers import REGISTRY, get_tracer, run_tracer

REGISTRY is a dict:
    {
        "dijkstra": TracerInfo(key, label, fn, pseudocode, needs_source, …),
        "warshall": TracerInfo(…),
    }

The HTTP layer only ever goes through `run_tracer`, so the two tracer
functions keep their plain (nodes, edges[, source]) signatures.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from tracers.dijkstra import PSEUDOCODE as _dij_pc
from tracers.dijkstra import reconstruct_path, trace_shortest_path
from tracers.errors import InvalidSourceError, TraceError
from tracers.priority_queue import MinPriorityQueue
from tracers.steps import (
    INF,
    ActiveEdge,
    DijkstraStep,
    QueueEntry,
    WarshallStep,
    WarshallStepType,
)
from tracers.warshall import PSEUDOCODE as _war_pc
from tracers.warshall import trace_transitive_closure


# ---------------------------------------------------------------------------
# TracerInfo — metadata card for each tracer
# ---------------------------------------------------------------------------
@dataclass
class TracerInfo:
    key:              str            # registry key, e.g. "dijkstra"
    label:            str            # human label
    fn:               Callable       # the trace function
    pseudocode:       List[str]      # lines for the code panel
    needs_source:     bool = False   # single-source algorithm?
    complexity_time:  str  = ""
    complexity_space: str  = ""
    description:      str  = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "pseudocode":       list(self.pseudocode),
            "needs_source":     self.needs_source,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, TracerInfo] = {

    "dijkstra": TracerInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=trace_shortest_path, pseudocode=_dij_pc,
        needs_source=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Shortest distances from one source. Greedily finalises the closest node.",
    ),

    "warshall": TracerInfo(
        key="warshall", label="Warshall's Algorithm", fn=trace_transitive_closure, pseudocode=_war_pc,
        complexity_time="O(V³)", complexity_space="O(V²)",
        description="Which nodes can reach which. Watch the reachability matrix fill in.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_tracer(key: str) -> Optional[TracerInfo]:
    """Return TracerInfo by key, or None."""
    return REGISTRY.get(key)


def list_tracers() -> List[TracerInfo]:
    """Return all registered tracers in insertion order."""
    return list(REGISTRY.values())


def run_tracer(key: str, graph, source: Optional[str] = None) -> list:
    """Trace `graph` (anything with node_list() / edge_list()) with the tracer `key`."""
    info = get_tracer(key)
    if info is None:
        raise TraceError(f"Unknown tracer: {key}")
    if info.needs_source:
        return info.fn(graph.node_list(), graph.edge_list(), source)
    return info.fn(graph.node_list(), graph.edge_list())


__all__ = [
    "INF",
    "ActiveEdge",
    "DijkstraStep",
    "InvalidSourceError",
    "MinPriorityQueue",
    "QueueEntry",
    "TraceError",
    "TracerInfo",
    "REGISTRY",
    "WarshallStep",
    "WarshallStepType",
    "get_tracer",
    "list_tracers",
    "reconstruct_path",
    "run_tracer",
    "trace_shortest_path",
    "trace_transitive_closure",
]
