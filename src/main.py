"""FastAPI application factory with lifespan events."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from src.api.dependencies import set_neo4j_conn, set_snapshot_service
from src.api.router import api_router
from src.config import get_settings
from src.graph_db.connection import Neo4jConnection
from src.services.graph_service import GraphSnapshotService
from src.services.snapshot_cache import SnapshotCache
from src.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the shared connection and cache; close the driver on shutdown."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    missing = settings.missing_credentials()
    if missing:
        logger.warning("neo4j_credentials_missing", missing=missing)

    # Driver is created lazily on the first query
    neo4j_conn = Neo4jConnection(settings)
    set_neo4j_conn(neo4j_conn)
    set_snapshot_service(GraphSnapshotService(neo4j_conn, SnapshotCache(), settings))

    logger.info(
        "app_started",
        policy=settings.TRAVERSAL_POLICY.value,
        node_limit=settings.NODE_LIMIT,
        row_limit=settings.ROW_LIMIT,
        cache_seconds=settings.CACHE_SECONDS,
    )
    yield

    await neo4j_conn.close()
    set_snapshot_service(None)
    set_neo4j_conn(None)
    logger.info("app_stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    application = FastAPI(
        title="Graph Snapshot",
        description="Cached, bounded Neo4j graph snapshots for graph visualization",
        version="0.1.0",
        lifespan=lifespan,
    )

    application.include_router(api_router)

    @application.middleware("http")
    async def request_id_middleware(request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc)},
            headers={"Access-Control-Allow-Origin": "*"},
        )

    return application


app = create_app()
