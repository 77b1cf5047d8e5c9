"""HTTP API for the diagram editor."""

from topomap.web.app import create_app

__all__ = ["create_app"]
