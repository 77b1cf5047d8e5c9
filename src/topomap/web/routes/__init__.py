"""API route modules."""

from topomap.web.routes import hierarchy, layout

__all__ = ["hierarchy", "layout"]
