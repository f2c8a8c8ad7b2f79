"""
graph.py — Graph Container
==========================
Single source of truth for the graph the user is editing.  The tracers
never see this object directly: callers hand them `node_list()` and
`edge_list()`, which are plain ordered sequences.

Responsibilities:
  1. CRUD on nodes & edges                  (add / remove / get)
  2. Adjacency queries                      (neighbours, edges_from, …)
  3. Demo-graph generation                  (ring + random chords)
  4. Import from adjacency-list text        (text → graph)
  5. Serialisation round-trip               (to_dict / from_dict)
  6. Validation for untrusted input         (validate)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
    Insertion order is the order the tracers see, so node index `k`
    in the Warshall matrix is the k-th node added.
  - A separate adjacency dict  `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally so neighbour queries are O(degree), not O(E).
  - Every edge is directed.
"""

import random
import math
from typing import Dict, List, Tuple, Optional

from graph.node import Node
from graph.edge import Edge


class GraphError(ValueError):
    """Raised when graph input is malformed (duplicate ids, bad weights, …)."""


class Graph:
    """
    Attributes:
        nodes : {node_id: Node}
        edges : {edge_id: Edge}
        _adj  : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.edges: Dict[str, Edge] = {}
        self._adj:  Dict[str, List[Tuple[str, str]]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, x: float, y: float, label: Optional[str] = None, node_id: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(x=x, y=y, label=label, node_id=node_id))

    def remove_node(self, node_id: str) -> None:
        if node_id not in self.nodes:
            return
        # remove every edge touching this node
        edge_ids_to_remove = [eid for eid, e in self.edges.items() if node_id in (e.source, e.target)]
        for eid in edge_ids_to_remove:
            self.remove_edge(eid)
        del self.nodes[node_id]
        self._adj.pop(node_id, None)

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        self.edges[edge.id] = edge
        self._adj.setdefault(edge.source, []).append((edge.target, edge.id))
        return edge

    def create_edge(self, source: str, target: str, weight: int = 1, edge_id: Optional[str] = None) -> Edge:
        return self.add_edge(Edge(source=source, target=target, weight=weight, edge_id=edge_id))

    def remove_edge(self, edge_id: str) -> None:
        if edge_id not in self.edges:
            return
        e = self.edges[edge_id]
        self._adj.get(e.source, [])[:] = [(n, eid) for n, eid in self._adj.get(e.source, []) if eid != edge_id]
        del self.edges[edge_id]

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge running a → b."""
        for _, eid in self._adj.get(a, []):
            e = self.edges[eid]
            if e.target == b:
                return e
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] for every outgoing edge."""
        return [(nbr_id, self.edges[eid]) for nbr_id, eid in self._adj.get(node_id, [])]

    def edges_from(self, node_id: str) -> List[Edge]:
        return [self.edges[eid] for _, eid in self._adj.get(node_id, [])]

    def node_list(self) -> List[Node]:
        return list(self.nodes.values())

    def edge_list(self) -> List[Edge]:
        return list(self.edges.values())

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    # ==================================================================
    # VALIDATION
    # ==================================================================
    def validate(self) -> None:
        """
        Raise GraphError if any edge dangles or carries a weight that is
        not a positive integer.  Node-id uniqueness is enforced earlier,
        by from_dict.
        """
        for e in self.edges.values():
            if e.source not in self.nodes or e.target not in self.nodes:
                raise GraphError(f"Edge {e.source}→{e.target} references an unknown node")
            if isinstance(e.weight, bool) or not isinstance(e.weight, int) or e.weight <= 0:
                raise GraphError(f"Edge {e.source}→{e.target} has invalid weight {e.weight!r}")

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls()
        try:
            for nd in data.get("nodes", []):
                node = Node.from_dict(nd)
                if node.id in g.nodes:
                    raise GraphError(f"Duplicate node id '{node.id}'")
                g.add_node(node)
            for ed in data.get("edges", []):
                g.add_edge(Edge.from_dict(ed))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise GraphError(f"Malformed graph payload: {exc}") from exc
        return g

    # ==================================================================
    # DEMO GENERATOR
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 5,
        weight_range: Tuple[int, int] = (1, 9),
        seed: Optional[int] = None,
        center: Tuple[float, float] = (450, 250),
        radius: float = 180,
    ) -> "Graph":
        """
        Demo graph: nodes on a circle (first one at 12 o'clock), a directed
        ring i → i+1 so every node is reachable from every other, then a
        handful of random chords.  Self-loops and duplicate chords are
        avoided; a chord is dropped after 20 failed placement attempts.
        """
        rng = random.Random(seed)
        g = cls()
        cx, cy = center

        ids = []
        for i in range(num_nodes):
            angle = 2 * math.pi * i / num_nodes - math.pi / 2
            nid = str(i)
            g.create_node(cx + radius * math.cos(angle), cy + radius * math.sin(angle),
                          label=node_label(i), node_id=nid)
            ids.append(nid)

        if num_nodes < 2:
            return g

        for i in range(num_nodes):
            g.create_edge(ids[i], ids[(i + 1) % num_nodes], weight=rng.randint(*weight_range))

        extra = rng.randint(5, 8)
        for _ in range(extra):
            src = rng.randrange(num_nodes)
            tgt = rng.randrange(num_nodes)
            attempts = 0
            while (tgt == src or g.get_edge_between(ids[src], ids[tgt])) and attempts < 20:
                tgt = rng.randrange(num_nodes)
                attempts += 1
            if attempts < 20:
                g.create_edge(ids[src], ids[tgt], weight=rng.randint(*weight_range))

        return g

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(
        cls,
        text: str,
        canvas_w: float = 900,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            → A→B, A→C, A→D  (weight 1)
            A: B(3) C(7)        → A→B weight 3, A→C weight 7
            A -> B(3), C(7)     → alternate arrow syntax

        Every edge is directed.  Nodes are auto-laid-out in a circle in
        order of first appearance.
        """
        adjacency: Dict[str, List[Tuple[str, int]]] = {}

        for lineno, line in enumerate(text.strip().splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if ":" in line:
                parts = line.split(":", 1)
            elif "→" in line:
                parts = line.split("→", 1)
            elif "->" in line:
                parts = line.split("->", 1)
            else:
                raise GraphError(f"Line {lineno}: expected 'node: neighbours'")

            src = parts[0].strip()
            adjacency.setdefault(src, [])

            for token in parts[1].replace(",", " ").split():
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                    try:
                        w = int(w_str)
                    except ValueError:
                        raise GraphError(f"Line {lineno}: weight '{w_str}' is not an integer") from None
                else:
                    tgt, w = token, 1
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w))

        g = cls()
        labels = list(adjacency.keys())
        n = len(labels)
        if n == 0:
            return g

        cx, cy = canvas_w / 2, canvas_h / 2
        radius = min(canvas_w, canvas_h) * 0.35
        for i, label in enumerate(labels):
            angle = 2 * math.pi * i / n - math.pi / 2
            g.create_node(cx + radius * math.cos(angle), cy + radius * math.sin(angle),
                          label=label, node_id=label)

        for src, targets in adjacency.items():
            for tgt, w in targets:
                g.create_edge(src, tgt, weight=w)

        return g

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, edges={len(self.edges)})"


def node_label(index: int) -> str:
    """A, B, …, Z, A1, B1, … — the editor's labelling scheme."""
    suffix = index // 26
    return chr(65 + index % 26) + (str(suffix) if suffix > 0 else "")
