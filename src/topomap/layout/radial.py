"""Radial layout.

Nodes sit on concentric rings around a center node; a node's ring is
its breadth-first distance from the center over the undirected edge
graph. Nodes the center cannot reach share one extra outer ring.
"""

import math

import networkx as nx

from topomap.layout.base import NODE_HEIGHT, NODE_WIDTH, known_edges
from topomap.model.topology import Edge, Node, NodeType

CENTER_X = 500
CENTER_Y = 400
RADIUS_STEP = 180

# Where a lone node is put
SINGLE_NODE_POSITION = (400, 300)


def pick_center(nodes: list[Node]) -> Node:
    """First CIDR node, else first network device, else first node."""
    for node_type in (NodeType.CIDR, NodeType.NETWORK_DEVICE):
        for node in nodes:
            if node.type == node_type:
                return node
    return nodes[0]


def ring_levels(nodes: list[Node], edges: list[Edge], center: Node) -> dict[str, int]:
    """BFS distance from the center; unreachable nodes go one ring out."""
    graph = nx.Graph()
    graph.add_nodes_from(node.id for node in nodes)
    graph.add_edges_from((e.source, e.target) for e in known_edges(nodes, edges))

    levels = dict(nx.single_source_shortest_path_length(graph, center.id))
    outer = max(levels.values()) + 1
    return {node.id: levels.get(node.id, outer) for node in nodes}


def radial_layout(nodes: list[Node], edges: list[Edge]) -> list[Node]:
    """Place nodes on rings around the chosen center node."""
    if not nodes:
        return []
    if len(nodes) == 1:
        return [nodes[0].moved_to(*SINGLE_NODE_POSITION)]

    center = pick_center(nodes)
    levels = ring_levels(nodes, edges, center)

    rings: dict[int, list[Node]] = {}
    for node in nodes:
        if node.id != center.id:
            rings.setdefault(levels[node.id], []).append(node)

    positions = {center.id: (CENTER_X - NODE_WIDTH / 2, CENTER_Y - NODE_HEIGHT / 2)}
    for level, ring in rings.items():
        radius = level * RADIUS_STEP
        angle_step = 2 * math.pi / len(ring)
        for index, node in enumerate(ring):
            angle = index * angle_step - math.pi / 2
            positions[node.id] = (
                CENTER_X + math.cos(angle) * radius - NODE_WIDTH / 2,
                CENTER_Y + math.sin(angle) * radius - NODE_HEIGHT / 2,
            )

    return [node.moved_to(*positions[node.id]) for node in nodes]
