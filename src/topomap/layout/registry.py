"""Layout registry and dispatcher.

Maps a layout name to a strategy. Every registered strategy takes
``(nodes, edges, **params)`` and returns a LayoutResult, so callers
can treat them uniformly; only the address tree adds edges.
"""

import logging
from enum import Enum
from typing import Any, Callable

from topomap.errors import LayoutError
from topomap.layout.base import LayoutResult, known_edges
from topomap.layout.force import force_directed_layout
from topomap.layout.grid import grid_layout
from topomap.layout.layered import layered_layout
from topomap.layout.radial import radial_layout
from topomap.layout.tree import address_tree_layout
from topomap.model.topology import Edge, Node

logger = logging.getLogger(__name__)

LayoutFunc = Callable[..., LayoutResult]


class LayoutType(str, Enum):
    """Built-in layout names."""

    HIERARCHICAL_TB = "hierarchical-tb"
    HIERARCHICAL_LR = "hierarchical-lr"
    FORCE_DIRECTED = "force-directed"
    GRID = "grid"
    RADIAL = "radial"
    CIDR_TREE = "cidr-tree"


LAYOUT_LABELS = {
    LayoutType.HIERARCHICAL_TB: "Hierarchical (Top-Bottom)",
    LayoutType.HIERARCHICAL_LR: "Hierarchical (Left-Right)",
    LayoutType.FORCE_DIRECTED: "Force Directed",
    LayoutType.GRID: "Grid",
    LayoutType.RADIAL: "Radial",
    LayoutType.CIDR_TREE: "CIDR Tree",
}


def _hierarchical_tb(nodes: list[Node], edges: list[Edge], **_: Any) -> LayoutResult:
    return LayoutResult(nodes=layered_layout(nodes, edges, "TB"), edges=list(edges))


def _hierarchical_lr(nodes: list[Node], edges: list[Edge], **_: Any) -> LayoutResult:
    return LayoutResult(nodes=layered_layout(nodes, edges, "LR"), edges=list(edges))


def _force_directed(
    nodes: list[Node],
    edges: list[Edge],
    iterations: int | None = None,
    **_: Any,
) -> LayoutResult:
    return LayoutResult(
        nodes=force_directed_layout(nodes, edges, iterations=iterations),
        edges=list(edges),
    )


def _grid(nodes: list[Node], edges: list[Edge], columns: int = 0, **_: Any) -> LayoutResult:
    return LayoutResult(nodes=grid_layout(nodes, columns=columns), edges=list(edges))


def _radial(nodes: list[Node], edges: list[Edge], **_: Any) -> LayoutResult:
    return LayoutResult(nodes=radial_layout(nodes, edges), edges=list(edges))


def _cidr_tree(nodes: list[Node], edges: list[Edge], **_: Any) -> LayoutResult:
    return address_tree_layout(nodes, edges)


class LayoutRegistry:
    """Registry of available layout strategies."""

    _layouts: dict[str, LayoutFunc] = {
        LayoutType.HIERARCHICAL_TB.value: _hierarchical_tb,
        LayoutType.HIERARCHICAL_LR.value: _hierarchical_lr,
        LayoutType.FORCE_DIRECTED.value: _force_directed,
        LayoutType.GRID.value: _grid,
        LayoutType.RADIAL.value: _radial,
        LayoutType.CIDR_TREE.value: _cidr_tree,
    }

    @classmethod
    def get(cls, layout_type: str) -> LayoutFunc | None:
        """Get the strategy for a layout name."""
        return cls._layouts.get(layout_type)

    @classmethod
    def list_types(cls) -> list[str]:
        """List available layout names."""
        return list(cls._layouts.keys())

    @classmethod
    def register(cls, layout_type: str, func: LayoutFunc) -> None:
        """Register a new layout strategy."""
        cls._layouts[layout_type] = func


def apply_layout(
    nodes: list[Node],
    edges: list[Edge],
    layout_type: str | LayoutType,
    **params: Any,
) -> LayoutResult:
    """Apply a named layout.

    An unknown layout name is not an error: the nodes and edges come
    back unchanged. Otherwise edges whose endpoints are not among the
    nodes are left out of the result.

    Args:
        nodes: Nodes to place
        edges: Current edges
        layout_type: Layout name (see LayoutType)
        **params: Strategy options (``iterations``, ``columns``)

    Raises:
        LayoutError: If nodes or edges are not sequences
    """
    for name, value in (("nodes", nodes), ("edges", edges)):
        if not isinstance(value, (list, tuple)):
            raise LayoutError(
                f"Expected a list of {name}, got {type(value).__name__}",
                {"argument": name},
            )

    key = layout_type.value if isinstance(layout_type, LayoutType) else layout_type
    func = LayoutRegistry.get(key)
    if func is None:
        logger.warning("Unknown layout type %r, leaving positions unchanged", layout_type)
        return LayoutResult(nodes=list(nodes), edges=list(edges))

    logger.info("Applying %s layout to %d nodes, %d edges", key, len(nodes), len(edges))
    result = func(list(nodes), list(edges), **params)
    result.edges = known_edges(result.nodes, result.edges)
    return result
