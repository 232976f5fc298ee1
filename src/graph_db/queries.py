"""Parameterized Cypher templates for bounded graph snapshots."""

from __future__ import annotations

from enum import Enum


class TraversalPolicy(str, Enum):
    """How the snapshot query picks nodes and relationships."""

    LIMIT_THEN_EXPAND = "limit-then-expand"
    DIRECT_EXPAND = "direct-expand"
    CONNECTED_ONLY = "connected-only"


# Up to $nodeLimit nodes, then only relationships whose far end is also selected.
# Isolated nodes are included.
LIMIT_THEN_EXPAND = """
MATCH (n)
WITH n LIMIT $nodeLimit
WITH collect(n) AS nodes
UNWIND nodes AS n
OPTIONAL MATCH (n)-[r]-(m)
WHERE m IN nodes
RETURN n, r
LIMIT $rowLimit
"""

# Up to $nodeLimit nodes with every relationship they touch. The far endpoint
# may fall outside the selection, so edges must be checked against the node set.
DIRECT_EXPAND = """
MATCH (n)
WITH n LIMIT $nodeLimit
OPTIONAL MATCH (n)-[r]-(m)
RETURN n, r
LIMIT $rowLimit
"""

# Up to $nodeLimit nodes that have at least one relationship, joined only to
# each other. Isolated nodes never appear.
CONNECTED_ONLY = """
MATCH (n)
WHERE EXISTS { (n)--() }
WITH n LIMIT $nodeLimit
WITH collect(n) AS nodes
UNWIND nodes AS n
MATCH (n)-[r]-(m)
WHERE m IN nodes
RETURN n, r, m
LIMIT $rowLimit
"""

SNAPSHOT_QUERIES: dict[TraversalPolicy, str] = {
    TraversalPolicy.LIMIT_THEN_EXPAND: LIMIT_THEN_EXPAND,
    TraversalPolicy.DIRECT_EXPAND: DIRECT_EXPAND,
    TraversalPolicy.CONNECTED_ONLY: CONNECTED_ONLY,
}

DIAGNOSTIC_QUERY = """
MATCH (n)
WITH n LIMIT $nodeLimit
OPTIONAL MATCH (n)-[r]->()
RETURN n, r
LIMIT $rowLimit
"""

HEALTH_CHECK = "RETURN 1 AS ok"
