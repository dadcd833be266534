"""
Database Module
===============

Async client for the property-graph store.

Usage:
    from shared.database import Neo4jClient

    client = Neo4jClient(settings.neo4j)
    async with client.session() as session:
        records = await session.run("CALL db.labels()")
    await client.close()
"""

from shared.database.neo4j import GraphSession, Neo4jClient


__all__ = [
    "GraphSession",
    "Neo4jClient",
]
