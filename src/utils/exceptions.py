"""Custom exception hierarchy for the graph snapshot service."""

from __future__ import annotations


class GraphSnapshotError(Exception):
    """Base exception for all graph snapshot errors."""


class ConfigurationError(GraphSnapshotError):
    """Required Neo4j connection settings are missing."""


class GraphDBError(GraphSnapshotError):
    """Neo4j session, transport or query failure."""
