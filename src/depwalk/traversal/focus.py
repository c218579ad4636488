"""Helpers around focus-mode views: breadcrumbs, child counts, payload checks."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

from ..graph.model import Graph
from .engine import DEFAULT_MAX_FANOUT, LENSES


@dataclass(slots=True, frozen=True)
class Crumb:
    """One step of the focus-mode breadcrumb trail."""

    root: str
    depth: int
    lens: str
    label: str


@dataclass(slots=True, frozen=True)
class ChildrenInfo:
    count: int
    has_more: bool
    display_count: int


def format_crumb(root: str, depth: int, lens: str) -> Crumb:
    """Breadcrumb for ``root``; the label is the basename without its extension."""
    label = posixpath.splitext(posixpath.basename(root))[0]
    return Crumb(root=root, depth=depth, lens=lens, label=label)


def validate_root_node(graph: Graph, root_id: str) -> bool:
    return root_id in graph


def count_children(
    forward: Mapping[str, Sequence[str]],
    reverse: Mapping[str, Sequence[str]],
    node_id: str,
    lens: str = "children",
) -> int:
    """Adjacency size of ``node_id`` in the lens direction (parallel edges included)."""
    if lens not in LENSES:
        raise ValueError(f"Unknown lens: {lens!r}")
    lookup = forward if LENSES[lens] == "forward" else reverse
    return len(lookup.get(node_id, ()))


def children_info(
    forward: Mapping[str, Sequence[str]],
    reverse: Mapping[str, Sequence[str]],
    node_id: str,
    lens: str = "children",
    max_fanout: int = DEFAULT_MAX_FANOUT,
) -> ChildrenInfo:
    """How many neighbours a focus view will show for ``node_id`` and whether some are hidden."""
    count = count_children(forward, reverse, node_id, lens)
    return ChildrenInfo(
        count=count,
        has_more=count > max_fanout,
        display_count=min(count, max_fanout),
    )


def validate_graph_data(payload: Any) -> Tuple[bool, Optional[str]]:
    """Check a graph payload received as plain data (``{"nodes": [...], "edges": [...]}``).

    Returns ``(True, None)`` when usable, otherwise ``(False, reason)``.
    """
    if not isinstance(payload, Mapping):
        return False, "Graph data is not an object"
    nodes = payload.get("nodes")
    edges = payload.get("edges")
    if not isinstance(nodes, list):
        return False, "Graph nodes is not an array"
    if not isinstance(edges, list):
        return False, "Graph edges is not an array"
    for node in nodes:
        if not isinstance(node, Mapping) or not isinstance(node.get("id"), str) or not node["id"]:
            return False, "Node missing valid id property"
    for edge in edges:
        if not isinstance(edge, Mapping):
            return False, "Edge missing valid source/target properties"
        source, target = edge.get("source"), edge.get("target")
        if not isinstance(source, str) or not isinstance(target, str) or not source or not target:
            return False, "Edge missing valid source/target properties"
    return True, None
