"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, GraphError
"""

from graph.node  import Node
from graph.edge  import Edge
from graph.graph import Graph, GraphError, node_label

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "GraphError",
    "node_label",
]
