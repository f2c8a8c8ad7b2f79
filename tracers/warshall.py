"""
warshall.py — Warshall's Transitive-Closure Tracer
===================================================
Boolean Floyd–Warshall: after stage k, reach[i][j] is true iff there is
a path i → … → j whose intermediate nodes all come from node[0..k].

Structure:
  for k in nodes:                    ← intermediate node
      new = copy(prev)
      for i in nodes:
          if not any(prev[i]): skip  ← row can never gain a path
          for j in nodes:
              if i == k or j == k or prev[i][j]: carry over
              new[i][j] = prev[i][k] and prev[k][j]
      prev = new

Frames, in order:
  init → (k-start → (checking → found | no-change)* → k-complete) × V → complete

Every read inside a stage comes from the previous stage's matrix, never
from the buffer being written.  Skipped rows and already-true cells emit
no frames; the trace shape depends on that.

No diagonal seeding: reach[i][i] only becomes true through an explicit
self-loop or a cycle, and such a cell is checked like any other.
"""

import logging
from typing import Dict, Iterator, List, Sequence

from tracers.steps import WarshallStep, WarshallStepType, freeze_matrix

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def warshall(graph):",                                 # 0
    "    n = len(graph)",                                   # 1
    "    reach = adjacency_matrix(graph)",                  # 2
    "    for k in range(n):",                               # 3
    "        new = [row[:] for row in reach]",              # 4
    "        for i in range(n):",                           # 5
    "            if not any(reach[i]): continue",           # 6
    "            for j in range(n):",                       # 7
    "                if i == k or j == k or reach[i][j]:",  # 8
    "                    continue",                         # 9
    "                new[i][j] = reach[i][k] and reach[k][j]",  # 10
    "        reach = new",                                  # 11
    "    return reach",                                     # 12
]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def trace_transitive_closure(nodes: Sequence, edges: Sequence) -> List[WarshallStep]:
    """
    Run Warshall over the graph and return every frame.  Matrix index i
    is the i-th entry of `nodes`.  Edges touching unknown node ids are
    ignored; an empty node list gives an empty trace.
    """
    if not nodes:
        return []

    steps = list(_warshall(nodes, edges))
    logger.debug(
        "warshall: %d nodes, %d edges -> %d frames",
        len(nodes), len(edges), len(steps),
    )
    return steps


def _yes_no(value: bool) -> str:
    return "true (1)" if value else "false (0)"


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def _warshall(nodes: Sequence, edges: Sequence) -> Iterator[WarshallStep]:
    n      = len(nodes)
    ids    = [node.id for node in nodes]
    labels = [node.label for node in nodes]
    idx: Dict[str, int] = {nid: i for i, nid in enumerate(ids)}

    reach: List[List[bool]] = [[False] * n for _ in range(n)]
    for e in edges:
        u = idx.get(e.source)
        v = idx.get(e.target)
        if u is not None and v is not None:
            reach[u][v] = True

    yield WarshallStep(
        type=WarshallStepType.INIT,
        matrix=freeze_matrix(reach),
        description=(
            "Initial reachability matrix:\n"
            "Built from the direct edges of the graph.\n"
            "true = path exists"
        ),
    )

    for k in range(n):
        yield WarshallStep(
            type=WarshallStepType.K_START,
            k=k,
            matrix=freeze_matrix(reach),
            description=(
                f"Using {labels[k]} as intermediate node:\n"
                f"Checking all pairs (i, j) through {labels[k]}."
            ),
            active_nodes=[ids[k]],
        )

        prev = reach
        new  = [row[:] for row in prev]

        for i in range(n):
            if not any(prev[i]):
                continue

            for j in range(n):
                if i == k or j == k:
                    continue
                if prev[i][j]:
                    continue

                has_ik = prev[i][k]
                has_kj = prev[k][j]
                active = [ids[i], ids[k], ids[j]]
                cycle_note = "\n\n(Checking for a cycle back to the same node)" if i == j else ""

                yield WarshallStep(
                    type=WarshallStepType.CHECKING,
                    k=k, i=i, j=j,
                    matrix=freeze_matrix(new),
                    description=(
                        f"Checking: {labels[i]} → {labels[j]}\n\n"
                        f"Current (from M{k}): {_yes_no(prev[i][j])}\n"
                        f"{labels[i]}→{labels[k]}: {_yes_no(has_ik)}\n"
                        f"{labels[k]}→{labels[j]}: {_yes_no(has_kj)}"
                        f"{cycle_note}"
                    ),
                    active_nodes=active,
                )

                if has_ik and has_kj:
                    new[i][j] = True
                    cycle_found = (
                        f"\n\nCYCLE DETECTED: {labels[i]} can reach itself!" if i == j else ""
                    )
                    yield WarshallStep(
                        type=WarshallStepType.FOUND,
                        k=k, i=i, j=j,
                        matrix=freeze_matrix(new),
                        description=(
                            f"PATH FOUND!\n"
                            f"{labels[i]} → {labels[k]} → {labels[j]}\n\n"
                            f"Both connections exist, so set matrix[{i}][{j}] = true"
                            f"{cycle_found}"
                        ),
                        active_nodes=active,
                    )
                else:
                    yield WarshallStep(
                        type=WarshallStepType.NO_CHANGE,
                        k=k, i=i, j=j,
                        matrix=freeze_matrix(new),
                        description=(
                            f"No path through {labels[k]}:\n"
                            f"{labels[i]} cannot reach {labels[k]}, "
                            f"or {labels[k]} cannot reach {labels[j]}.\n\n"
                            f"No update (remains false)."
                        ),
                        active_nodes=active,
                    )

        # row k and column k pass through k unchanged
        for x in range(n):
            new[k][x] = prev[k][x]
            new[x][k] = prev[x][k]

        reach = new

        yield WarshallStep(
            type=WarshallStepType.K_COMPLETE,
            k=k,
            matrix=freeze_matrix(reach),
            description=(
                f"Completed node {labels[k]}:\n"
                f"All pairs checked through {labels[k]}."
            ),
            active_nodes=[ids[k]],
        )

    yield WarshallStep(
        type=WarshallStepType.COMPLETE,
        matrix=freeze_matrix(reach),
        description=(
            "WARSHALL ALGORITHM COMPLETE!\n\n"
            "Transitive closure computed.\n"
            "true = path exists, false = no path"
        ),
    )
