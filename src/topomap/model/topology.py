"""Topology diagram data models.

Pydantic models for the two arrays the layout engine consumes
and produces:
- Nodes (CIDR blocks, servers, PCs, network devices)
- Edges (user-authored or inferred relationships between nodes)

Field aliases match the interchange document written by the diagram
editor (``ip``, ``subType``, ``type``, ``auto``). Keys the models
do not declare (editor handles, sizes, custom data) are kept as extras
and written back unchanged.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NodeType(str, Enum):
    """Kind of asset a node represents."""

    CIDR = "cidr"
    SERVER = "server"
    PERSONAL_COMPUTER = "pc"
    NETWORK_DEVICE = "device"


class EdgeKind(str, Enum):
    """Relationship carried by an edge."""

    DEFAULT = "default"
    CONNECTS = "connects"
    CONTAINS = "contains"
    DEPENDS_ON = "depends_on"


class Position(BaseModel):
    """Top-left corner of a node on the drawing plane."""

    x: float = 0.0
    y: float = 0.0


class NodeData(BaseModel):
    """Descriptive payload of a node."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    label: str = ""
    description: str = ""
    ip_or_cidr: str | None = Field(
        default=None,
        alias="ip",
        description="Single address, address list or CIDR block (free text)",
    )
    ips: list[str] = Field(default_factory=list, description="Additional addresses")
    sub_type: str | None = Field(default=None, alias="subType")
    tags: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Tag values keyed by category",
    )
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("label", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return "" if v is None else v


class Node(BaseModel):
    """A diagram node.

    Identity is ``id``. Layout strategies only ever replace ``position``.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, description="Unique node identifier")
    type: NodeType = Field(..., description="Asset kind")
    position: Position = Field(default_factory=Position)
    data: NodeData = Field(default_factory=NodeData)

    @property
    def label(self) -> str:
        """Display label, falling back to the id."""
        return self.data.label or self.id

    @property
    def is_block(self) -> bool:
        return self.type == NodeType.CIDR

    def moved_to(self, x: float, y: float) -> "Node":
        """Copy of this node at a new position."""
        return self.model_copy(update={"position": Position(x=x, y=y)})


class EdgeData(BaseModel):
    """Descriptive payload of an edge."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    label: str = ""
    kind: str = Field(default=EdgeKind.DEFAULT.value, alias="type")
    inferred: bool = Field(
        default=False,
        alias="auto",
        description="Produced by hierarchy inference; regenerated on every build",
    )

    @field_validator("label", mode="before")
    @classmethod
    def coerce_label(cls, v: Any) -> str:
        return "" if v is None else v

    @field_validator("kind", mode="before")
    @classmethod
    def coerce_kind(cls, v: Any) -> str:
        if isinstance(v, EdgeKind):
            return v.value
        return v or EdgeKind.DEFAULT.value


class Edge(BaseModel):
    """A relationship between two nodes.

    Direction is kept for drawing, but two edges with the same endpoints
    in either order are duplicates of each other.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, description="Unique edge identifier")
    source: str = Field(..., description="Source node id")
    target: str = Field(..., description="Target node id")
    data: EdgeData = Field(default_factory=EdgeData)

    @property
    def endpoint_key(self) -> frozenset[str]:
        """Unordered endpoint pair."""
        return frozenset((self.source, self.target))

    @property
    def inferred(self) -> bool:
        return self.data.inferred


def create_node(node_id: str, node_type: NodeType | str, **data: Any) -> Node:
    """Build a node the way the editor does, with empty defaults.

    ``position`` may be passed as a mapping or a Position; everything
    else goes into ``data``.
    """
    position = data.pop("position", None) or Position()
    if isinstance(position, dict):
        position = Position(**position)
    return Node(
        id=node_id,
        type=NodeType(node_type),
        position=position,
        data=NodeData(**data),
    )


def create_edge(source: str, target: str, **data: Any) -> Edge:
    """Build a user-authored edge with id ``edge-<source>-<target>``."""
    edge_id = data.pop("id", None) or f"edge-{source}-{target}"
    return Edge(id=edge_id, source=source, target=target, data=EdgeData(**data))
