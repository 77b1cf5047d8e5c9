"""Layout routes."""

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from topomap.layout import LAYOUT_LABELS, LayoutRegistry, apply_layout
from topomap.model.topology import Edge, Node
from topomap.web.deps import limiter

router = APIRouter()


class LayoutRequest(BaseModel):
    """Nodes and edges to lay out, plus strategy options."""

    layout: str = Field(..., description="Layout name, e.g. 'cidr-tree'")
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
    iterations: int | None = Field(default=None, ge=1, le=10000)
    columns: int = Field(default=0, ge=0)


@router.get("/layouts")
async def list_layouts():
    """Available layout names with display labels."""
    labels = {t.value: label for t, label in LAYOUT_LABELS.items()}
    return [
        {"name": name, "label": labels.get(name, name)}
        for name in LayoutRegistry.list_types()
    ]


@router.post("/layout")
@limiter.limit("60/minute")
async def layout(request: Request, payload: LayoutRequest):
    """Apply a layout.

    Unknown layout names return the input unchanged.
    """
    params = {"columns": payload.columns}
    if payload.iterations is not None:
        params["iterations"] = payload.iterations

    result = apply_layout(payload.nodes, payload.edges, payload.layout, **params)
    return {
        "layout": payload.layout,
        "applied": payload.layout in LayoutRegistry.list_types(),
        "nodes": [n.model_dump(mode="json", by_alias=True) for n in result.nodes],
        "edges": [e.model_dump(mode="json", by_alias=True) for e in result.edges],
    }
