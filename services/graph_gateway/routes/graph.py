"""
Graph Operations Routes
=======================

HTTP encodings of the graph operations.

The operation can be named by query parameter or by path segment:

    GET /graph?op=search&query=ali
    GET /graph/search?query=ali
    GET /graph/byLabel/Person
    GET /graph/expand/4:b7e0...:12

Every route accepts any method and lets the dispatcher reject non-GET
requests, so the 405 carries the same error body as every other failure.

Version: 0.1.0
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from services.graph_gateway.dispatcher import QueryDispatcher, serialize_result
from shared.logging import get_logger


logger = get_logger(__name__)

router = APIRouter()

ROUTE_METHODS = ["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"]

OPERATION_PARAMS = ("label", "query", "nodeId")


def get_dispatcher(request: Request) -> QueryDispatcher:
    """Dispatcher bound to the store client created at startup."""
    return request.app.state.dispatcher


def collect_params(request: Request, **overrides: str) -> dict[str, str | None]:
    """Operation parameters from the query string, with path values taking precedence."""
    params: dict[str, str | None] = {
        name: request.query_params.get(name) for name in OPERATION_PARAMS
    }
    params.update(overrides)
    return params


async def _run(
    request: Request,
    dispatcher: QueryDispatcher,
    operation: str | None,
    **overrides: str,
) -> JSONResponse:
    result = await dispatcher.dispatch(
        request.method,
        operation,
        collect_params(request, **overrides),
    )
    return JSONResponse(content=serialize_result(result))


@router.api_route("", methods=ROUTE_METHODS)
async def graph_operation(
    request: Request,
    dispatcher: QueryDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """
    Run the operation named by ``op`` (or the legacy ``action``).

    Query parameters: op, label, query, nodeId.
    """
    operation = request.query_params.get("op") or request.query_params.get("action")
    return await _run(request, dispatcher, operation)


@router.api_route("/byLabel/{label}", methods=ROUTE_METHODS)
@router.api_route("/nodesByLabel/{label}", methods=ROUTE_METHODS)
async def nodes_by_label(
    label: str,
    request: Request,
    dispatcher: QueryDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Nodes carrying the label in the path."""
    return await _run(request, dispatcher, "byLabel", label=label)


@router.api_route("/expand/{node_id}", methods=ROUTE_METHODS)
async def expand_node(
    node_id: str,
    request: Request,
    dispatcher: QueryDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Neighbourhood of the node in the path."""
    return await _run(request, dispatcher, "expand", nodeId=node_id)


@router.api_route("/{operation}", methods=ROUTE_METHODS)
async def graph_operation_by_path(
    operation: str,
    request: Request,
    dispatcher: QueryDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Run the operation named by the path segment."""
    return await _run(request, dispatcher, operation)
