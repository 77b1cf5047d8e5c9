"""Layout strategies and dispatcher."""

from topomap.layout.base import NODE_HEIGHT, NODE_WIDTH, LayoutResult
from topomap.layout.force import ForceConfig, force_directed_layout
from topomap.layout.grid import grid_layout
from topomap.layout.layered import layered_layout
from topomap.layout.radial import pick_center, radial_layout
from topomap.layout.registry import LAYOUT_LABELS, LayoutRegistry, LayoutType, apply_layout
from topomap.layout.tree import address_tree_layout

__all__ = [
    "LAYOUT_LABELS",
    "NODE_HEIGHT",
    "NODE_WIDTH",
    "ForceConfig",
    "LayoutRegistry",
    "LayoutResult",
    "LayoutType",
    "address_tree_layout",
    "apply_layout",
    "force_directed_layout",
    "grid_layout",
    "layered_layout",
    "pick_center",
    "radial_layout",
]
