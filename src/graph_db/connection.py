"""Async Neo4j driver management with lazy initialization and health checks."""

from __future__ import annotations

from neo4j import AsyncDriver, AsyncGraphDatabase, Record

from src.config import Settings
from src.graph_db.queries import HEALTH_CHECK
from src.utils.exceptions import ConfigurationError
from src.utils.logging import get_logger

logger = get_logger(__name__)


class Neo4jConnection:
    """Owns the process-wide async Neo4j driver.

    The driver is created on first use and shared by every request until
    close() is called at shutdown. Each query gets its own session, which is
    released whether the query succeeds or fails.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._driver: AsyncDriver | None = None

    @property
    def driver(self) -> AsyncDriver:
        if self._driver is None:
            missing = self._settings.missing_credentials()
            if missing:
                raise ConfigurationError(f"Missing {'/'.join(missing)} env vars")
            self._driver = AsyncGraphDatabase.driver(
                self._settings.NEO4J_URI,
                auth=(self._settings.NEO4J_USER, self._settings.NEO4J_PASSWORD),
            )
            logger.info(
                "neo4j_driver_created",
                uri=self._settings.NEO4J_URI,
                database=self._settings.NEO4J_DATABASE,
            )
        return self._driver

    async def close(self) -> None:
        if self._driver:
            await self._driver.close()
            self._driver = None
            logger.info("neo4j_disconnected")

    async def health_check(self) -> bool:
        records = await self.execute_read(HEALTH_CHECK)
        return bool(records) and records[0]["ok"] == 1

    async def execute_read(self, query: str, **params: object) -> list[Record]:
        async with self.driver.session(database=self._settings.NEO4J_DATABASE) as session:
            result = await session.run(query, params)
            return [record async for record in result]
