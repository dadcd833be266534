"""
Shared Models
=============

Pydantic models shared across Graph Gateway components.

Models:
- Graph view models (GraphNode, GraphEdge, GraphView)
- Response envelopes (ErrorResponse, HealthResponse)
"""

from shared.models.common import ErrorResponse, HealthResponse
from shared.models.graph import GraphEdge, GraphNode, GraphView


__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "GraphEdge",
    "GraphNode",
    "GraphView",
]
