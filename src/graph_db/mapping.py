"""Reshape Neo4j records into vis-network style node and edge dicts."""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from neo4j.spatial import Point
from neo4j.time import Date, DateTime, Duration, Time

from src.utils.text_processing import format_count, format_date, wrap_label

_NEO4J_SCALARS = (DateTime, Date, Time, Duration, Point)

DEFAULT_GROUP = "Node"
LABEL_PROPERTIES = ("title", "name", "id")
RESERVED_NODE_KEYS = frozenset({"id", "label", "group"})

_DATE_PROPERTIES = ("published_at", "publish_date", "publishedAt", "date")
_URL_PROPERTIES = ("url", "link")
_METRICS = ("impressions", "reach", "reactions", "comments")
_METRIC_WINDOWS = (("_7d", " (7d)"), ("_1d", " (1d)"), ("", ""))


def _sanitize_neo4j_value(value: Any) -> Any:
    """Convert Neo4j property values to JSON-serializable ones.

    Temporal and spatial types become strings, NaN and infinities become None
    and byte arrays become lists of ints.
    """
    if isinstance(value, _NEO4J_SCALARS):
        return str(value)
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, dict):
        return {k: _sanitize_neo4j_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize_neo4j_value(v) for v in value]
    return value


def _present(value: Any) -> bool:
    return value is not None and value != ""


def _first_present(props: Mapping[str, Any], keys: Iterable[str]) -> tuple[str, Any] | None:
    for key in keys:
        value = props.get(key)
        if _present(value):
            return key, value
    return None


def node_group(node: Any) -> str:
    # Driver labels are an unordered frozenset; sort for a stable group
    labels = sorted(node.labels or ())
    return labels[0] if labels else DEFAULT_GROUP


def node_label_text(props: Mapping[str, Any], group: str) -> str:
    found = _first_present(props, LABEL_PROPERTIES)
    return str(found[1]) if found else group


def _metric_line(props: Mapping[str, Any], metric: str) -> str | None:
    for suffix, window in _METRIC_WINDOWS:
        value = props.get(f"{metric}{suffix}")
        if _present(value):
            return f"{metric.capitalize()}{window}: {format_count(value)}"
    return None


def build_tooltip(label: str, group: str, props: Mapping[str, Any]) -> str:
    """Plain-text hover tooltip for a node.

    Starts with the label and group, then whichever of description,
    category/track, platform/series, publish date, URL and engagement metrics
    the node carries. Engagement values prefer 7-day windows over 1-day ones
    over unwindowed totals.
    """
    lines = [label, f"Type: {group}"]

    if _present(props.get("description")):
        lines.append(str(props["description"]))

    for key in ("category", "track", "platform", "series"):
        if _present(props.get(key)):
            lines.append(f"{key.capitalize()}: {props[key]}")

    published = _first_present(props, _DATE_PROPERTIES)
    if published:
        lines.append(f"Published: {format_date(published[1])}")

    url = _first_present(props, _URL_PROPERTIES)
    if url:
        lines.append(f"URL: {url[1]}")

    for metric in _METRICS:
        line = _metric_line(props, metric)
        if line:
            lines.append(line)

    return "\n".join(lines)


def node_to_vis(node: Any, tooltips: bool = True) -> dict[str, Any]:
    props = {k: _sanitize_neo4j_value(v) for k, v in node.items()}
    group = node_group(node)
    text = node_label_text(props, group)

    vis: dict[str, Any] = {"id": str(node.element_id), "label": wrap_label(text), "group": group}
    for key, value in props.items():
        if key not in RESERVED_NODE_KEYS:
            vis[key] = value
    if tooltips:
        vis["title"] = build_tooltip(text, group, props)
    return vis


def rel_to_vis(rel: Any) -> dict[str, Any]:
    return {
        "id": str(rel.element_id),
        "from": str(rel.start_node.element_id),
        "to": str(rel.end_node.element_id),
        "type": rel.type,
        "label": rel.type,
    }


def find_orphan_edges(
    nodes: Mapping[str, dict[str, Any]],
    edges: Iterable[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Edges whose ``from`` or ``to`` is not a key of ``nodes``."""
    return [e for e in edges if e["from"] not in nodes or e["to"] not in nodes]


class GraphAccumulator:
    """Deduplicating node and edge maps fed one record at a time.

    Keys are element ids; insertion order is first-seen order and a repeated
    id overwrites the earlier value in place.
    """

    def __init__(self, tooltips: bool = True) -> None:
        self._tooltips = tooltips
        self.nodes: dict[str, dict[str, Any]] = {}
        self.edges: dict[str, dict[str, Any]] = {}

    def add_node(self, node: Any) -> None:
        vis = node_to_vis(node, tooltips=self._tooltips)
        self.nodes[vis["id"]] = vis

    def add_relationship(self, rel: Any) -> None:
        vis = rel_to_vis(rel)
        self.edges[vis["id"]] = vis

    def add_record(self, record: Any) -> None:
        # Absent OPTIONAL MATCH columns come back as None
        for key in ("n", "m"):
            node = record.get(key)
            if node is not None:
                self.add_node(node)
        rel = record.get("r")
        if rel is not None:
            self.add_relationship(rel)

    def prune_orphan_edges(self) -> list[dict[str, Any]]:
        orphans = find_orphan_edges(self.nodes, self.edges.values())
        for edge in orphans:
            del self.edges[edge["id"]]
        return orphans
