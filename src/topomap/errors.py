"""Exception hierarchy for Topomap.

All exceptions inherit from TopomapError for consistent handling.
The layout engine itself degrades gracefully on bad addresses; these
exceptions are raised at the boundary (documents, configuration,
malformed call arguments).
"""

from typing import Any


class TopomapError(Exception):
    """Base exception for all Topomap errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# Document Errors
class DocumentError(TopomapError):
    """Base exception for topology document errors."""


class DocumentLoadError(DocumentError):
    """Failed to read or decode a topology document."""


class DocumentValidationError(DocumentError):
    """Topology document failed validation."""


# Layout Errors
class LayoutError(TopomapError):
    """Layout was called with arguments it cannot work with."""


# Configuration Errors
class ConfigError(TopomapError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Configuration failed validation."""
