"""Merge inferred containment edges with user-authored edges."""

import logging

from topomap.hierarchy.builder import build_hierarchy
from topomap.model.topology import Edge, Node

logger = logging.getLogger(__name__)


def reconcile_edges(
    inferred: list[Edge],
    existing: list[Edge],
    *,
    replace_inferred: bool = True,
    keep_manual: bool = True,
) -> list[Edge]:
    """Combine freshly inferred edges with the current edge list.

    Previously inferred edges are dropped (they are always regenerated,
    never patched). User-authored edges are kept verbatim and in order.
    A new inferred edge is added only if no kept edge already joins the
    same two nodes, in either direction.

    Args:
        inferred: Edges from the latest hierarchy build
        existing: Current edge list
        replace_inferred: Drop existing inferred edges first
        keep_manual: Keep user-authored edges at all

    Returns:
        Kept edges followed by the added inferred edges
    """
    if not keep_manual:
        kept: list[Edge] = []
    elif replace_inferred:
        kept = [edge for edge in existing if not edge.inferred]
    else:
        kept = list(existing)

    seen = {edge.endpoint_key for edge in kept}
    merged = list(kept)
    added = 0
    for edge in inferred:
        if edge.endpoint_key in seen:
            continue
        merged.append(edge)
        seen.add(edge.endpoint_key)
        added += 1

    logger.debug(
        "Reconciled edges: kept %d of %d, added %d of %d inferred",
        len(kept),
        len(existing),
        added,
        len(inferred),
    )
    return merged


def generate_inferred_edges(
    nodes: list[Node],
    existing: list[Edge],
    *,
    replace_inferred: bool = True,
    keep_manual: bool = True,
) -> list[Edge]:
    """Rebuild the hierarchy and merge its edges into ``existing``."""
    hierarchy = build_hierarchy(nodes)
    return reconcile_edges(
        hierarchy.edges,
        existing,
        replace_inferred=replace_inferred,
        keep_manual=keep_manual,
    )
