"""
Graph Gateway Service - Main Application
========================================

FastAPI application exposing property-graph queries as a flattened
node/edge view for the visualization client.

Version: 0.1.0
"""

import time
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

from services.graph_gateway import __version__
from services.graph_gateway.dispatcher import QueryDispatcher
from services.graph_gateway.errors import GatewayError, MethodNotAllowed, StoreError
from services.graph_gateway.routes import graph
from services.graph_gateway.store import GraphStoreClient
from shared.config import Settings, settings
from shared.database.neo4j import Neo4jClient
from shared.logging import bind_context, clear_context, get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse

SERVICE_NAME = "graph-gateway"

# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name=SERVICE_NAME,
    version=__version__,
)

logger = get_logger(__name__)


def _error_body(
    message: str,
    error_code: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return ErrorResponse(
        error=message,
        error_code=error_code,
        details=details,
    ).model_dump(mode="json")


def _bind_store(app: FastAPI, client: GraphStoreClient) -> None:
    app.state.store_client = client
    app.state.dispatcher = QueryDispatcher(client)


def create_app(
    store_client: GraphStoreClient | None = None,
    config: Settings = settings,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        store_client: Store client to serve from. When omitted, a Neo4jClient
            is built from configuration at startup and closed at shutdown.
        config: Application settings
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan manager."""
        logger.info(
            "graph_gateway_starting",
            environment=config.environment.value,
            port=config.ports.graph_gateway,
        )

        owned_client: Neo4jClient | None = None
        if store_client is None:
            try:
                owned_client = Neo4jClient(config.neo4j)
                _bind_store(app, owned_client)
                logger.info("neo4j_client_ready", uri=config.neo4j.uri)
            except Exception as e:
                logger.error("startup_failed", error=str(e))
                raise

        yield

        logger.info("graph_gateway_shutting_down")
        if owned_client is not None:
            await owned_client.close()

    app = FastAPI(
        title="Graph Gateway Service",
        description="Property-graph queries flattened into a node/edge view",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    if store_client is not None:
        _bind_store(app, store_client)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.origins_list,
        allow_credentials=config.cors.allow_credentials,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Bind request id, method and path to every log line of the request."""
        clear_context()
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        bind_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        start = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response

    # ========================================================================
    # Health Check Endpoints
    # ========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request) -> HealthResponse:
        """
        Service health check.

        Returns health status of the service and the graph store.
        """
        components: dict[str, dict[str, Any]] = {}

        client = getattr(request.app.state, "store_client", None)
        check = getattr(client, "health_check", None)
        if check is not None:
            components["neo4j"] = await check()
        else:
            components["neo4j"] = {"status": "unknown"}

        health = HealthResponse(
            service=SERVICE_NAME,
            version=__version__,
            components=components,
        )
        if not health.is_healthy:
            health.status = "degraded"
        return health

    index_file = config.static_dir / "index.html" if config.static_dir else None

    @app.get("/", tags=["Health"], response_model=None)
    async def root() -> dict[str, str] | FileResponse:
        """Serve the visualization client if configured, else a service banner."""
        if index_file is not None and index_file.is_file():
            return FileResponse(index_file)
        return {
            "service": "Graph Gateway Service",
            "version": __version__,
            "graph": "/graph",
        }

    # ========================================================================
    # Include Routers
    # ========================================================================

    app.include_router(
        graph.router,
        prefix="/graph",
        tags=["Graph Operations"],
    )

    # Path used by the original visualization client
    app.include_router(
        graph.router,
        prefix="/api/graph",
        tags=["Graph Operations"],
        include_in_schema=False,
    )

    if config.static_dir is not None:
        app.mount(
            "/static",
            StaticFiles(directory=config.static_dir),
            name="static",
        )

    # ========================================================================
    # Error Handlers
    # ========================================================================

    @app.exception_handler(GatewayError)
    async def gateway_exception_handler(request: Request, exc: GatewayError) -> JSONResponse:
        """Render gateway errors with their status code."""
        if isinstance(exc, StoreError):
            logger.error(
                "graph_store_error",
                error_code=exc.error_code,
                detail=exc.detail,
                path=request.url.path,
            )
        else:
            logger.warning(
                "graph_client_error",
                error_code=exc.error_code,
                error=exc.message,
                path=request.url.path,
            )

        headers = {"Allow": "GET"} if isinstance(exc, MethodNotAllowed) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.error_code, exc.to_details()),
            headers=headers,
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle HTTP exceptions."""
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), "http_error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal server error", "internal_error"),
        )

    return app


app = create_app()


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.graph_gateway.main:app",
        host="0.0.0.0",
        port=settings.ports.graph_gateway,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
