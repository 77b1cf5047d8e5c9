"""Address-tree layout.

Draws the CIDR containment forest as a tidy top-down tree:

1. build the hierarchy and merge its edges into the edge list;
2. give every node a leaf-width (number of leaves below it, at least 1);
3. hand each node a horizontal span of ``leaf_width * LEAF_SPACING``;
4. center leaves in their span and parents midway between their first
   and last child.

Nodes with no place in the forest go in one extra row at the bottom.
The tree is walked with explicit stacks and orderings so very deep
hierarchies do not hit the recursion limit.
"""

import logging

from topomap.hierarchy.builder import build_hierarchy
from topomap.hierarchy.reconcile import reconcile_edges
from topomap.layout.base import MARGIN, NODE_HEIGHT, NODE_WIDTH, LayoutResult, place
from topomap.model.addressing import node_block
from topomap.model.topology import Edge, Node

logger = logging.getLogger(__name__)

LEAF_SPACING = NODE_WIDTH + 40
LEVEL_HEIGHT = NODE_HEIGHT + 120

# Sort prefix for CIDR nodes whose block does not parse
_NO_PREFIX = 33


def _prefix_of(nodes: list[Node]) -> dict[str, int]:
    prefixes: dict[str, int] = {}
    for node in nodes:
        if node.is_block:
            block = node_block(node)
            prefixes[node.id] = block.prefix if block is not None else _NO_PREFIX
    return prefixes


def address_tree_layout(nodes: list[Node], edges: list[Edge]) -> LayoutResult:
    """Lay out the containment forest.

    Returns:
        LayoutResult with positioned copies of ``nodes`` (input order)
        and the edge list merged with freshly inferred containment edges
    """
    hierarchy = build_hierarchy(nodes)
    merged = reconcile_edges(hierarchy.edges, edges)
    if not nodes:
        return LayoutResult(nodes=[], edges=merged)

    by_id = {node.id: node for node in nodes}
    prefixes = _prefix_of(nodes)

    def root_key(node: Node) -> tuple[int, int]:
        return (0, prefixes[node.id]) if node.is_block else (1, 0)

    def child_key(node: Node) -> tuple[int, int, str]:
        return (*root_key(node), node.label)

    children = {
        parent: sorted((by_id[c] for c in kids), key=child_key)
        for parent, kids in hierarchy.children_of().items()
    }
    roots = sorted(
        (n for n in nodes if n.id in children and n.id not in hierarchy.parent_of),
        key=root_key,
    )

    # Pre-order walk: parents always come before their children
    order: list[str] = []
    depth: dict[str, int] = {}
    stack = [(root.id, 0) for root in reversed(roots)]
    while stack:
        node_id, level = stack.pop()
        order.append(node_id)
        depth[node_id] = level
        for child in reversed(children.get(node_id, [])):
            stack.append((child.id, level + 1))

    # Leaf-widths, bottom-up
    width: dict[str, int] = {}
    for node_id in reversed(order):
        width[node_id] = max(1, sum(width[c.id] for c in children.get(node_id, [])))

    # Span starts, top-down
    start: dict[str, float] = {}
    cursor = float(MARGIN)
    for root in roots:
        start[root.id] = cursor
        cursor += width[root.id] * LEAF_SPACING
    for node_id in order:
        offset = start[node_id]
        for child in children.get(node_id, []):
            start[child.id] = offset
            offset += width[child.id] * LEAF_SPACING

    # Centers, bottom-up
    center: dict[str, float] = {}
    for node_id in reversed(order):
        kids = children.get(node_id)
        if kids:
            center[node_id] = (center[kids[0].id] + center[kids[-1].id]) / 2
        else:
            center[node_id] = start[node_id] + width[node_id] * LEAF_SPACING / 2

    positions: dict[str, Node] = {}
    for node_id in order:
        y = MARGIN + depth[node_id] * LEVEL_HEIGHT + NODE_HEIGHT / 2
        positions[node_id] = place(by_id[node_id], center[node_id], y)

    orphans = [node for node in nodes if node.id not in depth]
    orphan_row = max(depth.values()) + 1 if depth else 0
    orphan_y = MARGIN + orphan_row * LEVEL_HEIGHT + NODE_HEIGHT / 2
    for index, node in enumerate(orphans):
        x = MARGIN + index * LEAF_SPACING + LEAF_SPACING / 2
        positions[node.id] = place(node, x, orphan_y)

    logger.debug(
        "Address tree: %d roots, %d placed, %d orphans",
        len(roots),
        len(order),
        len(orphans),
    )
    return LayoutResult(nodes=[positions[node.id] for node in nodes], edges=merged)
