"""
Pytest configuration and shared fixtures.

Sample graphs are built through the real Graph container so tests also
cover the node_list() / edge_list() hand-off to the tracers.
"""

import pytest

from graph import Graph


def build_graph(node_ids, edges):
    """Graph with nodes labelled by id and (source, target, weight) edges."""
    g = Graph()
    for i, nid in enumerate(node_ids):
        g.create_node(x=float(i) * 100, y=0.0, label=nid, node_id=nid)
    for src, tgt, w in edges:
        g.create_edge(src, tgt, weight=w)
    return g


# =========================================================================
# Sample Graphs
# =========================================================================


@pytest.fixture
def scenario_graph() -> Graph:
    """A→B(4), A→C(2), C→B(1), B→D(3), C→D(5)."""
    return build_graph(
        ["A", "B", "C", "D"],
        [("A", "B", 4), ("A", "C", 2), ("C", "B", 1), ("B", "D", 3), ("C", "D", 5)],
    )


@pytest.fixture
def disconnected_graph() -> Graph:
    """The scenario graph plus an isolated node E."""
    return build_graph(
        ["A", "B", "C", "D", "E"],
        [("A", "B", 4), ("A", "C", 2), ("C", "B", 1), ("B", "D", 3), ("C", "D", 5)],
    )


@pytest.fixture
def single_node_graph() -> Graph:
    return build_graph(["A"], [])


@pytest.fixture
def cycle_graph() -> Graph:
    """A ⇄ B."""
    return build_graph(["A", "B"], [("A", "B", 1), ("B", "A", 1)])


@pytest.fixture
def demo_graphs():
    """A spread of random demo graphs for property checks."""
    return [Graph.generate_random(num_nodes=n, seed=seed) for n in (2, 3, 5, 7) for seed in range(5)]


# =========================================================================
# Flask
# =========================================================================


@pytest.fixture
def client():
    from config import TestConfig
    from main import app

    app.config.from_object(TestConfig)
    with app.test_client() as c:
        yield c
