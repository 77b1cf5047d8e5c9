"""Grid layout: row-major cells sized by the node footprint."""

import math

from topomap.layout.base import MARGIN, NODE_HEIGHT, NODE_WIDTH
from topomap.model.topology import Node

CELL_PADDING_X = 80
CELL_PADDING_Y = 60


def grid_layout(nodes: list[Node], columns: int = 0) -> list[Node]:
    """Place nodes row by row.

    Args:
        nodes: Nodes to place, in reading order
        columns: Column count; 0 picks ceil(sqrt(len(nodes)))
    """
    if not nodes:
        return []

    cols = columns or math.ceil(math.sqrt(len(nodes)))
    cell_width = NODE_WIDTH + CELL_PADDING_X
    cell_height = NODE_HEIGHT + CELL_PADDING_Y

    placed = []
    for index, node in enumerate(nodes):
        row, col = divmod(index, cols)
        placed.append(node.moved_to(MARGIN + col * cell_width, MARGIN + row * cell_height))
    return placed
