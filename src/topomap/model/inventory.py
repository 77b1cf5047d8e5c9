"""Inventory statistics and address validation for diagram nodes."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from topomap.model.addressing import (
    is_address,
    is_block,
    node_addresses,
    split_address_tokens,
)
from topomap.model.topology import Edge, Node, NodeType


@dataclass
class NetworkStats:
    """Asset counts for a set of nodes."""

    total_nodes: int = 0
    cidr_count: int = 0
    server_count: int = 0
    pc_count: int = 0
    device_count: int = 0
    total_ips: int = 0


@dataclass
class AddressValidation:
    """Result of checking a node's free-text address field."""

    valid: bool
    addresses: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def network_stats(nodes: list[Node]) -> NetworkStats:
    """Count nodes by asset type and total addresses."""
    by_type = Counter(node.type for node in nodes)
    return NetworkStats(
        total_nodes=len(nodes),
        cidr_count=by_type[NodeType.CIDR],
        server_count=by_type[NodeType.SERVER],
        pc_count=by_type[NodeType.PERSONAL_COMPUTER],
        device_count=by_type[NodeType.NETWORK_DEVICE],
        total_ips=sum(len(node_addresses(node)) for node in nodes),
    )


def graph_stats(nodes: list[Node], edges: list[Edge]) -> dict[str, Any]:
    """Totals plus a per-type breakdown, keyed by type value."""
    nodes_by_type: dict[str, int] = {}
    for node in nodes:
        nodes_by_type[node.type.value] = nodes_by_type.get(node.type.value, 0) + 1
    return {
        "total_nodes": len(nodes),
        "total_edges": len(edges),
        "nodes_by_type": nodes_by_type,
    }


def validate_node_addresses(node: Node) -> AddressValidation:
    """Check every token of a non-block node's address field.

    CIDR nodes are validated as a whole block instead, since their
    address field is not a host list.
    """
    raw = node.data.ip_or_cidr or ""
    if node.type == NodeType.CIDR:
        if raw and not is_block(raw):
            return AddressValidation(valid=False, errors=[f"Invalid CIDR: {raw}"])
        return AddressValidation(valid=True)

    errors: list[str] = []
    addresses: list[str] = []
    for token in split_address_tokens(raw):
        if is_address(token):
            addresses.append(token)
        else:
            errors.append(f"Invalid IP: {token}")

    return AddressValidation(valid=not errors, addresses=addresses, errors=errors)
