"""Topology document loader.

Reads and writes the editor's interchange document (JSON, or YAML by
file suffix) and validates it into Node/Edge models with Pydantic.
The layout engine never touches files; this module is what the CLI
uses to feed it.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from topomap.errors import DocumentLoadError, DocumentValidationError
from topomap.model.topology import Edge, Node

logger = logging.getLogger(__name__)

DOCUMENT_VERSION = "1.0"
YAML_SUFFIXES = {".yaml", ".yml"}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class TopologyDocument(BaseModel):
    """Root model of an exported diagram."""

    version: str = Field(default=DOCUMENT_VERSION, description="Document format version")
    timestamp: str = Field(default_factory=_now_iso, description="ISO-8601 export time")
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)


class DocumentLoader:
    """Loads and validates topology documents.

    Example:
        loader = DocumentLoader()
        document = loader.load("diagram.json")
        loader.save(document, "diagram-out.json")
    """

    def load(self, path: Path | str) -> TopologyDocument:
        """Load a document from a JSON or YAML file.

        Raises:
            DocumentLoadError: If the file cannot be read or decoded
            DocumentValidationError: If the document data is invalid
        """
        path = Path(path)
        if not path.exists():
            raise DocumentLoadError(
                f"Document file not found: {path}",
                {"path": str(path)},
            )

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise DocumentLoadError(
                f"Cannot read document file: {e}",
                {"path": str(path)},
            ) from e

        return self.loads(text, yaml_format=path.suffix.lower() in YAML_SUFFIXES)

    def loads(self, text: str, yaml_format: bool = False) -> TopologyDocument:
        """Load a document from a string."""
        data = self._decode(text, yaml_format)
        return self._validate(data)

    def dump(self, document: TopologyDocument, yaml_format: bool = False) -> str:
        """Serialize a document using the editor's field names."""
        data = document.model_dump(mode="json", by_alias=True)
        if yaml_format:
            return yaml.safe_dump(data, sort_keys=False)
        return json.dumps(data, indent=2)

    def save(self, document: TopologyDocument, path: Path | str) -> None:
        """Write a document, picking the format from the file suffix.

        Raises:
            DocumentLoadError: If the file cannot be written
        """
        path = Path(path)
        text = self.dump(document, yaml_format=path.suffix.lower() in YAML_SUFFIXES)
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise DocumentLoadError(
                f"Cannot write document file: {e}",
                {"path": str(path)},
            ) from e
        logger.info("Wrote %d nodes and %d edges to %s",
                    len(document.nodes), len(document.edges), path)

    def _decode(self, text: str, yaml_format: bool) -> dict[str, Any]:
        """Decode raw text into a mapping."""
        try:
            data = yaml.safe_load(text) if yaml_format else json.loads(text)
        except yaml.YAMLError as e:
            raise DocumentLoadError(f"Invalid YAML in document: {e}") from e
        except json.JSONDecodeError as e:
            raise DocumentLoadError(f"Invalid JSON in document: {e}") from e

        if not isinstance(data, dict):
            raise DocumentLoadError("Document must contain a mapping")

        return data

    def _validate(self, data: dict[str, Any]) -> TopologyDocument:
        """Validate raw data against the document schema."""
        for key in ("nodes", "edges"):
            if not isinstance(data.get(key), list):
                raise DocumentValidationError(f"Invalid document: missing {key} array")

        try:
            document = TopologyDocument.model_validate(data)
        except ValidationError as e:
            raise DocumentValidationError(
                f"Document validation failed: {e.error_count()} errors",
                {"errors": e.errors(include_url=False)},
            ) from e

        seen: set[str] = set()
        for node in document.nodes:
            if node.id in seen:
                raise DocumentValidationError(
                    f"Duplicate node id: {node.id}",
                    {"node": node.id},
                )
            seen.add(node.id)

        logger.debug("Loaded %d nodes and %d edges", len(document.nodes), len(document.edges))
        return document
