"""
Query Dispatcher
================

Routes one request to one graph operation.

Per request:
1. only GET is accepted
2. the operation name is resolved
3. parameters are validated (no store access on failure)
4. one session is acquired, one query is run, the response is built
5. the session is released on every exit path

The dispatcher knows nothing about HTTP; any host (ASGI app, serverless
handler, CLI) passes in the method, operation name and parameters and
renders the result or the raised ``GatewayError``.

Version: 0.1.0
"""

import time
from collections.abc import Mapping
from typing import Any

from neo4j.exceptions import AuthError, DriverError, Neo4jError
from pydantic import BaseModel

from services.graph_gateway.errors import ConnectionFailure, MethodNotAllowed, QueryFailure
from services.graph_gateway.operations import OperationResult, resolve_operation
from services.graph_gateway.store import GraphStoreClient
from shared.logging import get_logger
from shared.models.graph import GraphView


logger = get_logger(__name__)

ALLOWED_METHODS = frozenset({"GET"})


def serialize_result(result: OperationResult) -> Any:
    """Render an operation result as JSON-ready data."""
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True)
    return [
        item.model_dump(mode="json", by_alias=True) if isinstance(item, BaseModel) else item
        for item in result
    ]


def _result_counts(result: OperationResult) -> dict[str, int]:
    if isinstance(result, GraphView):
        return {"nodes": len(result.nodes), "edges": len(result.edges)}
    return {"items": len(result)}


class QueryDispatcher:
    """
    Dispatches graph operations against an injected store client.

    The client is constructed once at startup; sessions are opened per
    dispatch and never held across requests.
    """

    def __init__(self, client: GraphStoreClient) -> None:
        self._client = client

    async def dispatch(
        self,
        method: str,
        operation_name: str | None,
        params: Mapping[str, str | None],
    ) -> OperationResult:
        """
        Run one operation.

        Args:
            method: Request method; only GET is accepted
            operation_name: Operation name or legacy alias
            params: Request parameters (label, query, nodeId)

        Returns:
            Label list, node list or GraphView depending on the operation

        Raises:
            MethodNotAllowed: For any method other than GET
            UnknownOperation: If the operation name is not supported
            MissingParameter: If a required parameter is absent or empty
            InvalidParameter: If the label fails the allow-list
            ConnectionFailure: If the store is unreachable
            QueryFailure: If the store fails the query
        """
        if method.upper() not in ALLOWED_METHODS:
            raise MethodNotAllowed(method.upper())

        operation = resolve_operation(operation_name)
        prepared = operation.prepare(params)

        start = time.perf_counter()
        try:
            async with self._client.session() as session:
                records = await session.run(prepared.text, prepared.parameters)
                result = operation.shape(records)
        except AuthError as e:
            logger.error(
                "store_auth_failed",
                operation=operation.name,
                error=str(e),
            )
            raise ConnectionFailure(detail=getattr(e, "code", None)) from e
        except Neo4jError as e:
            logger.error(
                "store_query_failed",
                operation=operation.name,
                error=str(e),
                error_code=getattr(e, "code", None),
            )
            raise QueryFailure(detail=getattr(e, "code", None)) from e
        except DriverError as e:
            logger.error(
                "store_connection_failed",
                operation=operation.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ConnectionFailure(detail=type(e).__name__) from e

        logger.info(
            "graph_operation_completed",
            operation=operation.name,
            records=len(records),
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            **_result_counts(result),
        )
        return result
