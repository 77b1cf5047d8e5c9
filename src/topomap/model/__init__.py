"""Topology model components."""

from topomap.model.addressing import (
    CIDRBlock,
    address_in_block,
    block_contains,
    extract_address,
    format_address,
    is_address,
    is_block,
    node_addresses,
    node_block,
    parse_address,
    parse_address_list,
    parse_block,
)
from topomap.model.inventory import (
    AddressValidation,
    NetworkStats,
    graph_stats,
    network_stats,
    validate_node_addresses,
)
from topomap.model.loader import DocumentLoader, TopologyDocument
from topomap.model.topology import (
    Edge,
    EdgeData,
    EdgeKind,
    Node,
    NodeData,
    NodeType,
    Position,
    create_edge,
    create_node,
)

__all__ = [
    "AddressValidation",
    "CIDRBlock",
    "DocumentLoader",
    "Edge",
    "EdgeData",
    "EdgeKind",
    "NetworkStats",
    "Node",
    "NodeData",
    "NodeType",
    "Position",
    "TopologyDocument",
    "address_in_block",
    "block_contains",
    "create_edge",
    "create_node",
    "extract_address",
    "format_address",
    "graph_stats",
    "is_address",
    "is_block",
    "network_stats",
    "node_addresses",
    "node_block",
    "parse_address",
    "parse_address_list",
    "parse_block",
    "validate_node_addresses",
]
