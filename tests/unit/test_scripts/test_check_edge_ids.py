"""Unit tests for the edge id diagnostic script."""

from __future__ import annotations

import sys
from unittest.mock import AsyncMock, patch

import pytest

from scripts import check_edge_ids
from src.graph_db.mapping import find_orphan_edges


def test_collect_matches_endpoints(sample_graph, capsys):
    a, b, r = sample_graph["a"], sample_graph["b"], sample_graph["r"]
    records = [{"n": b, "r": None}, {"n": a, "r": r}]

    nodes, edges, warnings = check_edge_ids.collect(records)

    assert set(nodes) == {a.element_id, b.element_id}
    assert list(edges) == [r.element_id]
    assert warnings == []
    assert f"Edge: {a.element_id} -[WROTE]-> {b.element_id}" in capsys.readouterr().out


def test_collect_warns_for_unseen_endpoint(make_rel, sample_graph):
    a, c = sample_graph["a"], sample_graph["c"]
    records = [{"n": a, "r": make_rel("5:db:3", "KNEW", a, c)}]

    nodes, edges, warnings = check_edge_ids.collect(records)

    assert warnings == [f"To node {c.element_id} not in nodes map"]
    assert len(find_orphan_edges(nodes, edges.values())) == 1


@pytest.mark.asyncio
async def test_main_exit_codes(mock_neo4j, make_rel, sample_graph, monkeypatch):
    a, b, c = sample_graph["a"], sample_graph["b"], sample_graph["c"]
    monkeypatch.setattr(sys, "argv", ["check_edge_ids.py", "--node-limit", "2"])

    with patch.object(check_edge_ids, "Neo4jConnection", return_value=mock_neo4j), \
         patch.object(check_edge_ids, "setup_logging"):
        mock_neo4j.execute_read = AsyncMock(return_value=[
            {"n": a, "r": sample_graph["r"]},
            {"n": b, "r": None},
        ])
        assert await check_edge_ids.main() == 0

        mock_neo4j.execute_read = AsyncMock(return_value=[
            {"n": a, "r": make_rel("5:db:3", "KNEW", a, c)},
        ])
        assert await check_edge_ids.main() == 1

    _, kwargs = mock_neo4j.execute_read.call_args
    assert kwargs == {"nodeLimit": 2, "rowLimit": 10}
    assert mock_neo4j.close.await_count == 2
