"""CIDR containment hierarchy builder.

Infers "contains" edges from address arithmetic alone:

    host address -> most specific CIDR -> larger CIDR -> ... -> root block

Every node gets at most one parent, the containing block with the
longest prefix, mirroring longest-prefix-match routing. The hierarchy
is rebuilt from scratch on each call and never persisted.
"""

import logging
from dataclasses import dataclass, field

from topomap.model.addressing import (
    CIDRBlock,
    address_in_block,
    block_contains,
    node_addresses,
    node_block,
    parse_address,
)
from topomap.model.topology import Edge, EdgeData, EdgeKind, Node, NodeType

logger = logging.getLogger(__name__)

CONTAINS_LABEL = "contains"


@dataclass
class Hierarchy:
    """Inferred containment forest.

    ``parent_of`` maps child node id to parent node id; ``edges`` holds
    one inferred edge per entry, in generation order.
    """

    edges: list[Edge] = field(default_factory=list)
    parent_of: dict[str, str] = field(default_factory=dict)

    def children_of(self) -> dict[str, list[str]]:
        """Invert ``parent_of`` into parent -> children (generation order)."""
        children: dict[str, list[str]] = {}
        for child, parent in self.parent_of.items():
            children.setdefault(parent, []).append(child)
        return children


def contains_edge(edge_id: str, parent_id: str, child_id: str) -> Edge:
    """Build an inferred containment edge."""
    return Edge(
        id=edge_id,
        source=parent_id,
        target=child_id,
        data=EdgeData(label=CONTAINS_LABEL, kind=EdgeKind.CONTAINS.value, inferred=True),
    )


def find_best_block(
    address: int,
    blocks: list[tuple[Node, CIDRBlock]],
) -> Node | None:
    """Most specific block node containing an address.

    Ties on prefix length go to the block encountered first.
    """
    best: Node | None = None
    best_prefix = -1
    for node, block in blocks:
        if block.prefix > best_prefix and address_in_block(address, block):
            best = node
            best_prefix = block.prefix
    return best


def find_parent_block(
    child: CIDRBlock,
    blocks: list[tuple[Node, CIDRBlock]],
    exclude_id: str,
) -> Node | None:
    """Most specific block node strictly containing another block."""
    best: Node | None = None
    best_prefix = -1
    for node, block in blocks:
        if node.id == exclude_id:
            continue
        if block.prefix > best_prefix and block_contains(child, block):
            best = node
            best_prefix = block.prefix
    return best


def build_hierarchy(nodes: list[Node]) -> Hierarchy:
    """Infer the containment forest for a set of nodes.

    CIDR nodes without a parseable block, and other nodes without a
    valid address, are simply left out of the forest.

    Example:
        hierarchy = build_hierarchy(nodes)
        hierarchy.parent_of   # {"subnet-a": "site-block", "web-1": "subnet-a"}
    """
    hierarchy = Hierarchy()

    blocks: list[tuple[Node, CIDRBlock]] = []
    hosts: list[Node] = []
    for node in nodes:
        if node.type == NodeType.CIDR:
            block = node_block(node)
            if block is not None:
                blocks.append((node, block))
        else:
            hosts.append(node)

    # Block-to-block: smaller blocks hang off the tightest enclosing block
    for node, block in blocks:
        parent = find_parent_block(block, blocks, node.id)
        if parent is not None:
            hierarchy.parent_of[node.id] = parent.id
            hierarchy.edges.append(
                contains_edge(f"auto-cidr-{node.id}-{parent.id}", parent.id, node.id)
            )

    # Host-to-block: only the first address picks the parent
    for node in hosts:
        addresses = node_addresses(node)
        if not addresses:
            continue
        parent = find_best_block(parse_address(addresses[0]), blocks)
        if parent is not None:
            hierarchy.parent_of[node.id] = parent.id
            hierarchy.edges.append(
                contains_edge(f"auto-ip-{node.id}-{parent.id}", parent.id, node.id)
            )

    logger.debug(
        "Built hierarchy: %d blocks, %d hosts, %d parent assignments",
        len(blocks),
        len(hosts),
        len(hierarchy.parent_of),
    )
    return hierarchy
