"""Graph snapshot endpoint for browser-side graph visualization."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from src.api.dependencies import get_snapshot_service
from src.api.v1.schemas.graph import ErrorResponse, GraphSnapshot
from src.services.graph_service import GraphSnapshotService
from src.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["graph"])

CORS_ORIGIN = {"Access-Control-Allow-Origin": "*"}
CORS_PREFLIGHT = {
    **CORS_ORIGIN,
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
}
REJECTED_METHODS = ["POST", "PUT", "PATCH", "DELETE", "HEAD", "TRACE", "CONNECT"]


@router.get(
    "/graph",
    response_model=GraphSnapshot,
    responses={500: {"model": ErrorResponse}},
)
async def get_graph(
    service: GraphSnapshotService = Depends(get_snapshot_service),
) -> Response:
    """Bounded snapshot of the whole graph as vis-network nodes and edges."""
    try:
        payload = await service.get_snapshot()
        return JSONResponse(
            content=payload,
            headers={"Cache-Control": service.cache_control, **CORS_ORIGIN},
        )
    except Exception as exc:
        logger.error("graph_snapshot_failed", error=str(exc), error_type=type(exc).__name__)
        return JSONResponse(status_code=500, content={"error": str(exc)}, headers=CORS_ORIGIN)


@router.options("/graph", status_code=204)
async def preflight_graph() -> Response:
    return Response(status_code=204, headers=CORS_PREFLIGHT)


@router.api_route("/graph", methods=REJECTED_METHODS, include_in_schema=False)
async def reject_graph_method() -> Response:
    return PlainTextResponse("Method Not Allowed", status_code=405)
