"""Response models for the graph snapshot API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GraphNode(BaseModel):
    # Source node properties are spread alongside the fixed fields
    model_config = ConfigDict(extra="allow")

    id: str
    label: str
    group: str = "Node"
    title: str | None = None


class GraphEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    from_: str = Field(alias="from")
    to: str
    type: str
    label: str


class SnapshotLimits(BaseModel):
    nodeLimit: int
    rowLimit: int


class GraphSnapshot(BaseModel):
    generatedAt: str
    limits: SnapshotLimits
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
