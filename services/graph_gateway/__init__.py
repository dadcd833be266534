"""
Graph Gateway Service
=====================

Turns pattern queries against a Neo4j property graph into the flattened
node/edge view used by the graph-visualization client.

Features:
- Label listing and label-filtered node fetch
- Full-graph load
- Case-insensitive name search
- Neighbour expansion
- Node deduplication across matched triples (first representation wins)

Port: 4000
"""

__version__ = "0.1.0"
