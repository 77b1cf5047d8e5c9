"""Shared layout geometry and result types.

All strategies place nodes by their top-left corner and size every
node with the same fixed footprint.
"""

from dataclasses import dataclass, field

from topomap.model.topology import Edge, Node

NODE_WIDTH = 180
NODE_HEIGHT = 80

# Distance from the plane origin to the first row/column
MARGIN = 100


@dataclass
class LayoutResult:
    """Positioned nodes plus the edge set to draw with them."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)


def known_edges(nodes: list[Node], edges: list[Edge]) -> list[Edge]:
    """Edges whose endpoints both exist; dangling edges are dropped."""
    ids = {node.id for node in nodes}
    return [edge for edge in edges if edge.source in ids and edge.target in ids]


def place(node: Node, center_x: float, center_y: float) -> Node:
    """Copy of a node whose footprint is centered on a point."""
    return node.moved_to(center_x - NODE_WIDTH / 2, center_y - NODE_HEIGHT / 2)
