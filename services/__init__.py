"""
Graph Gateway Services
======================

Services:
- graph_gateway: property-graph queries flattened into a node/edge view
"""

__all__ = [
    "graph_gateway",
]
