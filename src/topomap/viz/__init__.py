"""Terminal visualization components."""

from topomap.viz.hierarchy import HierarchyView, stats_table

__all__ = ["HierarchyView", "stats_table"]
