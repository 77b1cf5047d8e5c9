"""Layered (rank-based) layout.

Ranks nodes by longest path from the sources of the edge graph and
draws each rank as one row (top-to-bottom) or one column
(left-to-right). Cycles are broken by dropping one edge per cycle
before ranking.
"""

import logging

import networkx as nx

from topomap.errors import LayoutError
from topomap.layout.base import MARGIN, NODE_HEIGHT, NODE_WIDTH, known_edges
from topomap.model.topology import Edge, Node

logger = logging.getLogger(__name__)

NODE_SEP = 80
RANK_SEP = 120

DIRECTIONS = ("TB", "LR")


def _break_cycles(graph: nx.DiGraph) -> None:
    """Remove edges until the graph is acyclic."""
    while True:
        try:
            cycle = nx.find_cycle(graph)
        except nx.NetworkXNoCycle:
            return
        src, dst = cycle[-1][:2]
        logger.debug("Breaking cycle at edge %s -> %s", src, dst)
        graph.remove_edge(src, dst)


def assign_ranks(nodes: list[Node], edges: list[Edge]) -> dict[str, int]:
    """Longest-path rank of every node; unconnected nodes get rank 0."""
    graph = nx.DiGraph()
    graph.add_nodes_from(node.id for node in nodes)
    for edge in known_edges(nodes, edges):
        if edge.source != edge.target:
            graph.add_edge(edge.source, edge.target)

    _break_cycles(graph)

    ranks = {node_id: 0 for node_id in graph.nodes}
    for node_id in nx.topological_sort(graph):
        for successor in graph.successors(node_id):
            ranks[successor] = max(ranks[successor], ranks[node_id] + 1)
    return ranks


def layered_layout(
    nodes: list[Node],
    edges: list[Edge],
    direction: str = "TB",
) -> list[Node]:
    """Place nodes in ranks.

    Args:
        nodes: Nodes to place
        edges: Edges defining the ranking
        direction: "TB" (ranks are rows) or "LR" (ranks are columns)

    Returns:
        Positioned copies of ``nodes`` in input order

    Raises:
        LayoutError: If ``direction`` is not "TB" or "LR"
    """
    if direction not in DIRECTIONS:
        raise LayoutError(
            f"Unknown layout direction: {direction}",
            {"direction": direction, "allowed": list(DIRECTIONS)},
        )
    if not nodes:
        return []

    ranks = assign_ranks(nodes, edges)

    by_rank: dict[int, list[Node]] = {}
    for node in nodes:
        by_rank.setdefault(ranks[node.id], []).append(node)

    # Extent of a node along the in-rank axis, and across ranks
    along = NODE_WIDTH if direction == "TB" else NODE_HEIGHT
    across = NODE_HEIGHT if direction == "TB" else NODE_WIDTH

    def extent(count: int) -> float:
        return count * along + (count - 1) * NODE_SEP

    widest = max(extent(len(group)) for group in by_rank.values())

    positions: dict[str, tuple[float, float]] = {}
    for rank, group in by_rank.items():
        offset = MARGIN + (widest - extent(len(group))) / 2
        rank_pos = MARGIN + rank * (across + RANK_SEP)
        for index, node in enumerate(group):
            in_rank_pos = offset + index * (along + NODE_SEP)
            if direction == "TB":
                positions[node.id] = (in_rank_pos, rank_pos)
            else:
                positions[node.id] = (rank_pos, in_rank_pos)

    return [node.moved_to(*positions[node.id]) for node in nodes]
