"""Topomap: network asset topology layout and CIDR hierarchy inference."""

__version__ = "0.1.0"
