"""Shared FastAPI dependency injection."""

from __future__ import annotations

from src.graph_db.connection import Neo4jConnection
from src.services.graph_service import GraphSnapshotService

_neo4j_conn: Neo4jConnection | None = None
_snapshot_service: GraphSnapshotService | None = None


def set_neo4j_conn(conn: Neo4jConnection | None) -> None:
    global _neo4j_conn
    _neo4j_conn = conn


def set_snapshot_service(service: GraphSnapshotService | None) -> None:
    global _snapshot_service
    _snapshot_service = service


def get_neo4j() -> Neo4jConnection:
    if _neo4j_conn is None:
        raise RuntimeError("Neo4j not initialized")
    return _neo4j_conn


def get_snapshot_service() -> GraphSnapshotService:
    if _snapshot_service is None:
        raise RuntimeError("Graph snapshot service not initialized")
    return _snapshot_service
