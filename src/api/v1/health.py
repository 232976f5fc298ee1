"""Liveness and readiness probes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.api.dependencies import get_neo4j, get_snapshot_service
from src.graph_db.connection import Neo4jConnection
from src.services.graph_service import GraphSnapshotService
from src.utils.exceptions import ConfigurationError

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(
    service: GraphSnapshotService = Depends(get_snapshot_service),
) -> dict:
    return {"status": "healthy", "snapshot_age_seconds": service.snapshot_age()}


@router.get("/ready")
async def ready(neo4j: Neo4jConnection = Depends(get_neo4j)) -> dict:
    try:
        ok = await neo4j.health_check()
    except ConfigurationError as exc:
        return {"status": "not_configured", "error": str(exc)}
    except Exception as exc:
        return {"status": "not_ready", "error": str(exc)}
    return {"status": "ready" if ok else "degraded", "neo4j": ok}
