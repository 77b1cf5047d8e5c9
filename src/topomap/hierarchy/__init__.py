"""CIDR hierarchy inference and edge reconciliation."""

from topomap.hierarchy.builder import (
    Hierarchy,
    build_hierarchy,
    contains_edge,
    find_best_block,
    find_parent_block,
)
from topomap.hierarchy.reconcile import generate_inferred_edges, reconcile_edges

__all__ = [
    "Hierarchy",
    "build_hierarchy",
    "contains_edge",
    "find_best_block",
    "find_parent_block",
    "generate_inferred_edges",
    "reconcile_edges",
]
