"""Shared test fixtures."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest


class FakeNode:
    """Stand-in for neo4j.graph.Node.

    Like the driver's Node, it is falsy when it has no properties.
    """

    def __init__(self, element_id: str, labels: tuple[str, ...] = (), **props: Any) -> None:
        self.element_id = element_id
        self.labels = frozenset(labels)
        self._props = props

    def items(self):
        return self._props.items()

    def __len__(self) -> int:
        return len(self._props)


class FakeRelationship:
    """Stand-in for neo4j.graph.Relationship."""

    def __init__(self, element_id: str, rel_type: str, start: FakeNode, end: FakeNode, **props: Any) -> None:
        self.element_id = element_id
        self.type = rel_type
        self.start_node = start
        self.end_node = end
        self._props = props

    def items(self):
        return self._props.items()

    def __len__(self) -> int:
        return len(self._props)


@pytest.fixture(autouse=True)
def _env_setup(monkeypatch):
    """Set connection environment variables for tests."""
    monkeypatch.setenv("NEO4J_URI", "bolt://localhost:7687")
    monkeypatch.setenv("NEO4J_USER", "neo4j")
    monkeypatch.setenv("NEO4J_PASSWORD", "test")
    monkeypatch.setenv("NEO4J_DATABASE", "neo4j")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    for name in ("NODE_LIMIT", "ROW_LIMIT", "CACHE_SECONDS", "TRAVERSAL_POLICY", "TOOLTIPS_ENABLED", "NEO4J_USERNAME"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def no_credentials(monkeypatch):
    for name in ("NEO4J_URI", "NEO4J_USER", "NEO4J_USERNAME", "NEO4J_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    from src.config import Settings

    return Settings(_env_file=None)


@pytest.fixture
def make_node():
    return FakeNode


@pytest.fixture
def make_rel():
    return FakeRelationship


@pytest.fixture
def sample_graph() -> dict[str, Any]:
    """Two connected nodes A -> B and an isolated node C."""
    a = FakeNode("4:db:0", ("Person",), name="Ada Lovelace")
    b = FakeNode("4:db:1", ("Paper",), title="Notes on the Analytical Engine by Ada Lovelace")
    c = FakeNode("4:db:2", ("Person",), name="Charles Babbage")
    r = FakeRelationship("5:db:0", "WROTE", a, b)
    return {"a": a, "b": b, "c": c, "r": r}


@pytest.fixture
def mock_neo4j():
    conn = AsyncMock()
    conn.execute_read = AsyncMock(return_value=[])
    conn.health_check = AsyncMock(return_value=True)
    conn.close = AsyncMock()
    return conn
