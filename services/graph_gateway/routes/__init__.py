"""
Graph Gateway Routes
====================

API route handlers for the Graph Gateway Service.

Routes:
- graph: graph operations (labels, full, byLabel, search, expand)
"""

from services.graph_gateway.routes import graph


__all__ = ["graph"]
