"""
Graph View Models
=================

Flattened node/edge view model consumed by the visualization client.

Version: 0.1.0
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GraphNode(BaseModel):
    """A node as the client sees it."""

    id: str = Field(..., description="Store element id, stringified")
    labels: list[str] = Field(default_factory=list)
    properties: dict[str, Any] = Field(default_factory=dict)


class GraphEdge(BaseModel):
    """A directed, typed edge between two node ids."""

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(..., alias="from")
    to: str
    label: str = Field(..., description="Relationship type")


class GraphView(BaseModel):
    """Deduplicated nodes plus every matched edge."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
