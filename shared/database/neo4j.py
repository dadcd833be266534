"""
Neo4j Client
============

Async Neo4j driver handle for the Graph Gateway.

The client is constructed explicitly at startup and injected where it is
needed; it owns the driver (and therefore the connection pool) and hands
out one scoped session per request.

Version: 0.1.0
"""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncSession, Record

from shared.config import Neo4jSettings
from shared.logging import get_logger

logger = get_logger(__name__)


class GraphSession:
    """
    One store session, scoped to a single request.

    Wraps the driver session so callers only see ``run``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def run(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
    ) -> list[Record]:
        """
        Execute a Cypher query and read every record in order.

        Args:
            query: Cypher query string
            parameters: Bound query parameters

        Returns:
            Records in the order the store returned them
        """
        result = await self._session.run(query, parameters or {})
        return [record async for record in result]


class Neo4jClient:
    """
    Async Neo4j client wrapper.

    Manages driver lifecycle and per-request sessions.
    """

    def __init__(self, config: Neo4jSettings) -> None:
        self._config = config
        self._driver: AsyncDriver | None = None

    @property
    def database(self) -> str:
        """Return the configured database name."""
        return self._config.database

    @property
    def driver(self) -> AsyncDriver:
        """Get or create the async driver."""
        if self._driver is None:
            self._driver = AsyncGraphDatabase.driver(
                self._config.uri,
                auth=(
                    self._config.user,
                    self._config.password.get_secret_value(),
                ),
                max_connection_pool_size=self._config.max_connection_pool_size,
                connection_acquisition_timeout=self._config.connection_acquisition_timeout,
            )
            logger.info(
                "neo4j_driver_created",
                uri=self._config.uri,
                database=self.database,
            )
        return self._driver

    async def close(self) -> None:
        """Close the driver and release all connections."""
        if self._driver is not None:
            await self._driver.close()
            self._driver = None
            logger.info("neo4j_driver_closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[GraphSession, None]:
        """
        Acquire a session for the duration of the block.

        The underlying driver session is closed when the block exits,
        whether it completes or raises.

        Usage:
            async with client.session() as session:
                records = await session.run("MATCH (n) RETURN n LIMIT 10")
        """
        async with self.driver.session(database=self.database) as session:
            yield GraphSession(session)

    async def health_check(self) -> dict[str, Any]:
        """
        Check database health.

        Returns:
            dict with status and server info
        """
        try:
            start = time.perf_counter()
            async with self.session() as session:
                await session.run("RETURN 1 AS n")
            latency_ms = (time.perf_counter() - start) * 1000

            server_info = await self.driver.get_server_info()

            return {
                "status": "healthy",
                "latency_ms": round(latency_ms, 2),
                "server_version": server_info.agent,
                "protocol_version": str(server_info.protocol_version),
            }
        except Exception as e:
            logger.error("neo4j_health_check_failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e),
            }
