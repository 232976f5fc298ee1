"""Fetch, reshape and cache bounded graph snapshots."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from neo4j.exceptions import DriverError, Neo4jError

from src.config import Settings
from src.graph_db.connection import Neo4jConnection
from src.graph_db.mapping import GraphAccumulator
from src.graph_db.queries import SNAPSHOT_QUERIES
from src.services.snapshot_cache import SnapshotCache
from src.utils.exceptions import GraphDBError
from src.utils.logging import get_logger

logger = get_logger(__name__)


def _utc_now_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class GraphSnapshotService:
    """Serves the graph snapshot, querying Neo4j only when the cache is stale."""

    def __init__(
        self,
        neo4j_conn: Neo4jConnection,
        cache: SnapshotCache,
        settings: Settings,
    ) -> None:
        self._conn = neo4j_conn
        self._cache = cache
        self._settings = settings

    @property
    def ttl_seconds(self) -> int:
        return self._settings.CACHE_SECONDS

    @property
    def cache_control(self) -> str:
        return f"public, max-age={self.ttl_seconds}"

    @property
    def limits(self) -> dict[str, int]:
        return {
            "nodeLimit": self._settings.NODE_LIMIT,
            "rowLimit": self._settings.ROW_LIMIT,
        }

    def snapshot_age(self) -> float | None:
        """Seconds since the cached snapshot was stored, None before the first one."""
        return self._cache.age()

    async def get_snapshot(self) -> dict[str, Any]:
        cached = self._cache.get(self.ttl_seconds)
        if cached is not None:
            logger.debug("snapshot_cache_hit")
            return cached

        async with self._cache.refresh_lock:
            # Another request may have refreshed while we waited
            cached = self._cache.get(self.ttl_seconds)
            if cached is not None:
                logger.debug("snapshot_cache_hit_after_wait")
                return cached

            payload = await self.build_snapshot()
            self._cache.store(payload)
            return payload

    async def build_snapshot(self) -> dict[str, Any]:
        """Run the configured traversal and reshape the rows, bypassing the cache."""
        policy = self._settings.TRAVERSAL_POLICY
        limits = self.limits
        try:
            records = await self._conn.execute_read(SNAPSHOT_QUERIES[policy], **limits)
        except (Neo4jError, DriverError) as exc:
            logger.error("snapshot_query_failed", policy=policy.value, error=str(exc))
            raise GraphDBError(str(exc)) from exc

        graph = GraphAccumulator(tooltips=self._settings.TOOLTIPS_ENABLED)
        for record in records:
            graph.add_record(record)

        orphans = graph.prune_orphan_edges()
        if orphans:
            logger.warning(
                "snapshot_orphan_edges_dropped",
                policy=policy.value,
                count=len(orphans),
            )

        logger.info(
            "snapshot_refreshed",
            policy=policy.value,
            rows=len(records),
            nodes=len(graph.nodes),
            edges=len(graph.edges),
        )
        payload = {
            "generatedAt": _utc_now_iso(),
            "limits": limits,
            "nodes": list(graph.nodes.values()),
            "edges": list(graph.edges.values()),
        }
        # Unrenderable payloads must fail here, before they reach the cache
        json.dumps(payload, allow_nan=False)
        return payload
