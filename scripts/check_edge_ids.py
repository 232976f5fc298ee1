"""Verify that relationship endpoint ids match the node ids returned with them.

Usage:
  python -m scripts.check_edge_ids
  python -m scripts.check_edge_ids --node-limit 50 --row-limit 200

Reads the NEO4J_* variables (or .env) like the API does. Exits 1 when any edge
references a node that is missing from the result set.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, Iterable

from neo4j.exceptions import DriverError, Neo4jError

from src.config import get_settings
from src.graph_db.connection import Neo4jConnection
from src.graph_db.mapping import find_orphan_edges, node_group, node_label_text, rel_to_vis
from src.graph_db.queries import DIAGNOSTIC_QUERY
from src.utils.exceptions import GraphSnapshotError
from src.utils.logging import setup_logging


def collect(records: Iterable[Any]) -> tuple[dict[str, dict], dict[str, dict], list[str]]:
    """Build node/edge maps in row order and the warnings seen along the way.

    An endpoint is only reported as missing if no earlier row returned it.
    """
    nodes: dict[str, dict] = {}
    edges: dict[str, dict] = {}
    warnings: list[str] = []

    for record in records:
        node = record.get("n")
        if node is not None:
            group = node_group(node)
            node_id = str(node.element_id)
            nodes[node_id] = {"group": group, "label": node_label_text(dict(node.items()), group)}
            print(f"Node: {node_id} ({group}) - \"{nodes[node_id]['label']}\"")

        rel = record.get("r")
        if rel is not None:
            edge = rel_to_vis(rel)
            edges[edge["id"]] = edge
            print(f"  Edge: {edge['from']} -[{edge['type']}]-> {edge['to']}")
            for end in ("from", "to"):
                if edge[end] not in nodes:
                    message = f"{end.capitalize()} node {edge[end]} not in nodes map"
                    warnings.append(message)
                    print(f"  [WARN] {message}")

    return nodes, edges, warnings


async def main() -> int:
    parser = argparse.ArgumentParser(description="Check edge endpoint ids against returned nodes")
    parser.add_argument("--node-limit", type=int, default=5, help="Nodes to select (default: 5)")
    parser.add_argument("--row-limit", type=int, default=10, help="Rows to return (default: 10)")
    args = parser.parse_args()

    setup_logging(log_level="WARNING", log_format="console")
    conn = Neo4jConnection(get_settings())

    try:
        records = await conn.execute_read(
            DIAGNOSTIC_QUERY, nodeLimit=args.node_limit, rowLimit=args.row_limit
        )
    except (GraphSnapshotError, Neo4jError, DriverError) as exc:
        print(f"[FAIL] {exc}", file=sys.stderr)
        return 1
    finally:
        await conn.close()

    print("\n=== Testing ID Conversions ===\n")
    nodes, edges, _ = collect(records)
    orphans = find_orphan_edges(nodes, edges.values())

    print("\n=== Summary ===")
    print(f"Total nodes: {len(nodes)}")
    print(f"Total edges: {len(edges)}")
    for edge in orphans:
        print(f"Orphan edge: {edge['from']} -[{edge['type']}]-> {edge['to']}")

    if orphans:
        print(f"\n[FAIL] Found {len(orphans)} orphan edges (nodes not in result set)")
        return 1
    print("\n[OK] All edges connect to valid nodes")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
