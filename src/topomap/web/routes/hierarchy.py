"""Hierarchy and inventory routes."""

from dataclasses import asdict

from fastapi import APIRouter
from pydantic import BaseModel, Field

from topomap.hierarchy import build_hierarchy, reconcile_edges
from topomap.model.inventory import network_stats, validate_node_addresses
from topomap.model.topology import Edge, Node

router = APIRouter()


class GraphRequest(BaseModel):
    """Current diagram contents."""

    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)


@router.post("/hierarchy")
async def hierarchy(request: GraphRequest):
    """Infer containment edges and merge them into the edge list."""
    result = build_hierarchy(request.nodes)
    merged = reconcile_edges(result.edges, request.edges)
    return {
        "parent_of": result.parent_of,
        "edges": [e.model_dump(mode="json", by_alias=True) for e in merged],
    }


@router.post("/stats")
async def stats(request: GraphRequest):
    """Asset counts and per-node address validation."""
    validation = {
        node.id: asdict(validate_node_addresses(node)) for node in request.nodes
    }
    return {
        "stats": asdict(network_stats(request.nodes)),
        "total_edges": len(request.edges),
        "validation": validation,
    }
