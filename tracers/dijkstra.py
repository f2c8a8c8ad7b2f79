"""
dijkstra.py — Dijkstra's Shortest-Path Tracer
==============================================
Single-source Dijkstra over a directed graph, using MinPriorityQueue
with lazy deletion.  The whole run is recorded as DijkstraStep frames.

Emits a frame at:
  1. Initialise distances / push source            (init)
  2. Pop the minimum entry → CURRENT               (select — even if stale)
  3. Each unvisited neighbour considered           (compare)
  4. Successful relaxation                         (update)
  5. All neighbours of the current node handled    (node-done)
  6. Queue empty                                   (final)

A stale pop (popped distance > recorded distance) produces only the
select frame; the loop then moves on.

Correctness note: Dijkstra requires positive weights.  Weights are not
checked here; the HTTP layer validates graphs before tracing.
"""

import logging
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

from tracers.errors import InvalidSourceError
from tracers.priority_queue import MinPriorityQueue
from tracers.steps import INF, ActiveEdge, DijkstraStep, format_distance

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def dijkstra(graph, start):",                          # 0
    "    distances = {v: inf for v in graph}",              # 1
    "    previous = {v: None for v in graph}",              # 2
    "    distances[start] = 0",                             # 3
    "    pq = MinHeap([(start, 0)])",                       # 4
    "    visited = set()",                                  # 5
    "    while pq:",                                        # 6
    "        u, d = pq.extract_min()",                      # 7
    "        if d > distances[u]: continue",                # 8
    "        visited.add(u)",                               # 9
    "        for v, w in graph[u]:",                        # 10
    "            if v in visited: continue",                # 11
    "            if distances[u] + w < distances[v]:",      # 12
    "                distances[v] = distances[u] + w",      # 13
    "                previous[v] = u",                      # 14
    "                pq.insert(v, distances[v])",           # 15
    "    return distances, previous",                       # 16
]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def trace_shortest_path(nodes: Sequence, edges: Sequence, source_id: str) -> List[DijkstraStep]:
    """
    Run Dijkstra from `source_id` and return every frame.

    `nodes` need `.id` and `.label`; `edges` need `.source`, `.target`
    and `.weight`.  Edges touching unknown node ids are ignored.  An
    empty node list gives an empty trace; a source that is not one of
    the nodes raises InvalidSourceError.
    """
    if not nodes:
        return []
    if all(n.id != source_id for n in nodes):
        raise InvalidSourceError(source_id)

    steps = list(_dijkstra(nodes, edges, source_id))
    logger.debug(
        "dijkstra from %s: %d nodes, %d edges -> %d frames",
        source_id, len(nodes), len(edges), len(steps),
    )
    return steps


def reconstruct_path(previous: Mapping[str, Optional[str]], target: str) -> List[str]:
    """
    Follow `previous` pointers back from `target`; return the path
    source-first.  Unknown targets give [].  The walk is capped at
    len(previous) + 1 hops so a corrupt table cannot loop forever.
    """
    if target not in previous:
        return []
    path, cur = [], target
    safety = len(previous) + 1
    while cur is not None and safety > 0:
        path.append(cur)
        cur = previous.get(cur)
        safety -= 1
    path.reverse()
    return path


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def _dijkstra(nodes: Sequence, edges: Sequence, source: str) -> Iterator[DijkstraStep]:
    labels = {n.id: n.label for n in nodes}

    def label(nid: str) -> str:
        return labels.get(nid, nid)

    # adjacency, directed only; edges with an unknown endpoint contribute nothing
    adj: Dict[str, List] = {n.id: [] for n in nodes}
    for e in edges:
        if e.source in adj and e.target in adj:
            adj[e.source].append((e.target, e.weight))

    distances: Dict[str, float]         = {n.id: INF for n in nodes}
    previous:  Dict[str, Optional[str]] = {n.id: None for n in nodes}
    distances[source] = 0

    pq = MinPriorityQueue()
    pq.insert(source, 0)
    visited: List[str] = []
    visited_set = set()

    def frame(description, current=None, neighbor=None, highlight=None, queue=None):
        return DijkstraStep(
            visited=visited,
            queue=pq.snapshot() if queue is None else queue,
            distances=distances,
            previous=previous,
            current=current,
            target_neighbor=neighbor,
            active_edges=[ActiveEdge(current, neighbor)] if neighbor is not None else [],
            table_highlight=highlight,
            description=description,
        )

    # --- init ---
    yield frame(
        f"INITIALIZATION:\n"
        f"Set start node ({label(source)}) distance to 0.\n"
        f"Set all other nodes to infinity (∞).\n"
        f"Previous column is empty.",
        highlight=source,
    )

    # --- main loop ---
    while not pq.is_empty():
        entry = pq.extract_min()
        u, d = entry.id, entry.value

        yield frame(
            f"SELECT NODE {label(u)}:\n"
            f"It has the minimum distance in the queue ({format_distance(d)}).\n"
            f"Mark it as current.",
            current=u, highlight=u,
        )

        # stale entry — a shorter distance was recorded after this push
        if d > distances[u]:
            continue

        visited.append(u)
        visited_set.add(u)

        for v, weight in adj[u]:
            if v in visited_set:
                continue

            new_dist = distances[u] + weight
            old_dist = distances[v]

            yield frame(
                f"CHECK NEIGHBOR {label(v)}:\n"
                f"Cost: {distances[u]} (current) + {weight} (edge) = {new_dist}.\n"
                f"Is {new_dist} < {format_distance(old_dist)}?",
                current=u, neighbor=v, highlight=v,
            )

            if new_dist < old_dist:
                distances[v] = new_dist
                previous[v]  = u
                pq.insert(v, new_dist)

                yield frame(
                    f"UPDATE TABLE for {label(v)}:\n"
                    f"1. Distance updated to {new_dist}.\n"
                    f"2. Previous node set to {label(u)}.\n"
                    f"3. Added to the priority queue.",
                    current=u, neighbor=v, highlight=v,
                )

        yield frame(
            f"FINISHED processing {label(u)}.\n"
            f"Proceed to the next node in the queue.",
        )

    # --- final ---
    yield frame(
        "ALGORITHM COMPLETE:\n"
        "All reachable nodes visited.\n"
        "Use the Previous column to trace back paths.",
        queue=[],
    )
