"""Bounded breadth-first exploration over adjacency maps.

Impact analysis, focus mode, and context discovery all run the same
:func:`explore` primitive and differ only in their :class:`TraversalPolicy`:

=================  ===============  =========  =======  ============
policy             directions       depth      fan-out  edges kept
=================  ===============  =========  =======  ============
impact             forward          unbounded  none     no
focus (children)   forward          bounded    capped   yes
focus (parents)    reverse          bounded    capped   yes
context            forward+reverse  bounded    none     no
=================  ===============  =========  =======  ============

Every walk tracks visitation in a set keyed on node id, so cycles terminate.
Ids missing from the adjacency maps behave like nodes without neighbours.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from ..graph.adjacency import degree
from .ranking import DEFAULT_RESULT_CAP, Discovery, rank_related

logger = logging.getLogger(__name__)

AdjacencyLookup = Mapping[str, Sequence[str]]

LENSES = {"children": "forward", "parents": "reverse"}
DEFAULT_MAX_FANOUT = 100
DEFAULT_CONTEXT_DEPTH = 1
FOCUS_WARN_MS = 50.0


@dataclass(slots=True, frozen=True)
class TraversalPolicy:
    """How far and in which directions :func:`explore` walks.

    Attributes
    ----------
    directions:
        ``"forward"`` follows declared dependencies, ``"reverse"`` follows
        importers. Both may be given; forward neighbours come first.
    max_depth:
        Nodes at this depth are recorded but not expanded. ``None`` walks
        until the frontier is empty.
    max_fanout:
        Only the first ``max_fanout`` neighbours of each node are considered.
        The rest are dropped silently.
    record_edges:
        Collect ``source->target`` ids of every traversed edge, oriented as
        declared regardless of the walk direction.
    """

    directions: Tuple[str, ...] = ("forward",)
    max_depth: Optional[int] = None
    max_fanout: Optional[int] = None
    record_edges: bool = False

    def __post_init__(self) -> None:
        if not self.directions:
            raise ValueError("TraversalPolicy needs at least one direction")
        for direction in self.directions:
            if direction not in ("forward", "reverse"):
                raise ValueError(f"Unknown direction: {direction!r}")


@dataclass(slots=True)
class TraversalStats:
    nodes_visited: int = 0
    edges_traversed: int = 0
    max_depth: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "nodesVisited": self.nodes_visited,
            "edgesTraversed": self.edges_traversed,
            "maxDepth": self.max_depth,
        }


@dataclass(slots=True)
class Exploration:
    """Raw output of :func:`explore`.

    ``order`` starts with the seed and lists every other node in discovery
    order. ``depths`` holds the depth each node was first reached at.
    """

    order: List[str] = field(default_factory=list)
    depths: Dict[str, int] = field(default_factory=dict)
    edges: List[str] = field(default_factory=list)
    stats: TraversalStats = field(default_factory=TraversalStats)


def explore(
    seed: str,
    forward: AdjacencyLookup,
    reverse: AdjacencyLookup,
    policy: TraversalPolicy,
) -> Exploration:
    """Breadth-first walk from ``seed`` under ``policy``."""
    visited: Set[str] = {seed}
    result = Exploration(order=[seed], depths={seed: 0})
    seen_edges: Set[str] = set()
    queue: Deque[Tuple[str, int]] = deque([(seed, 0)])
    stats = result.stats

    while queue:
        node_id, depth = queue.popleft()
        stats.max_depth = max(stats.max_depth, depth)
        if policy.max_depth is not None and depth >= policy.max_depth:
            continue

        candidates: List[Tuple[str, bool]] = []
        for direction in policy.directions:
            lookup = forward if direction == "forward" else reverse
            is_forward = direction == "forward"
            candidates.extend((neighbor, is_forward) for neighbor in lookup.get(node_id, ()))
        if policy.max_fanout is not None:
            candidates = candidates[: policy.max_fanout]

        for neighbor, is_forward in candidates:
            stats.edges_traversed += 1
            if policy.record_edges:
                edge_id = f"{node_id}->{neighbor}" if is_forward else f"{neighbor}->{node_id}"
                if edge_id not in seen_edges:
                    seen_edges.add(edge_id)
                    result.edges.append(edge_id)
            if neighbor in visited:
                continue
            visited.add(neighbor)
            result.order.append(neighbor)
            result.depths[neighbor] = depth + 1
            queue.append((neighbor, depth + 1))

    stats.nodes_visited = len(visited)
    return result


@dataclass(slots=True)
class ImpactResult:
    source: str
    affected: List[str] = field(default_factory=list)
    stats: TraversalStats = field(default_factory=TraversalStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceFile": self.source,
            "affectedFiles": list(self.affected),
            "traversalStats": self.stats.to_dict(),
        }


def traverse_impact(
    seed_id: str,
    forward: AdjacencyLookup,
    file_exists: Callable[[str], bool] | None = None,
) -> ImpactResult:
    """Everything transitively reachable from ``seed_id`` along declared dependencies.

    The walk follows forward adjacency (the seed's own imports, then theirs).
    The seed is always listed first. A seed that is not in the graph yields
    ``[seed_id]`` when ``file_exists(seed_id)`` says the file is on disk, and
    an empty result otherwise.
    """
    if seed_id not in forward:
        if file_exists is not None and file_exists(seed_id):
            logger.info("%s exists on disk but is not in the dependency graph", seed_id)
            return ImpactResult(
                source=seed_id,
                affected=[seed_id],
                stats=TraversalStats(nodes_visited=1, edges_traversed=0, max_depth=0),
            )
        logger.info("%s not found in dependency graph or on disk", seed_id)
        return ImpactResult(source=seed_id)

    walk = explore(seed_id, forward, {}, TraversalPolicy(directions=("forward",)))
    return ImpactResult(source=seed_id, affected=walk.order, stats=walk.stats)


@dataclass(slots=True)
class FocusResult:
    root: str
    visible_nodes: Set[str] = field(default_factory=set)
    visible_edges: Set[str] = field(default_factory=set)
    elapsed_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "visibleNodes": sorted(self.visible_nodes),
            "visibleEdges": sorted(self.visible_edges),
            "elapsedMs": round(self.elapsed_ms, 3),
        }


def traverse_focus(
    root_id: str,
    forward: AdjacencyLookup,
    reverse: AdjacencyLookup,
    depth: int,
    lens: str = "children",
    max_fanout: int = DEFAULT_MAX_FANOUT,
    warn_ms: float = FOCUS_WARN_MS,
) -> FocusResult:
    """Nodes and edges within ``depth`` hops of ``root_id`` in one direction.

    ``lens="children"`` walks what the root imports, ``lens="parents"`` walks
    its importers. Only the first ``max_fanout`` neighbours of each node are
    expanded. A walk slower than ``warn_ms`` logs a warning but still returns
    the full result.
    """
    if lens not in LENSES:
        raise ValueError(f"Unknown lens: {lens!r} (expected 'children' or 'parents')")

    started = time.perf_counter()
    policy = TraversalPolicy(
        directions=(LENSES[lens],),
        max_depth=depth,
        max_fanout=max_fanout,
        record_edges=True,
    )
    walk = explore(root_id, forward, reverse, policy)
    elapsed_ms = (time.perf_counter() - started) * 1000.0

    result = FocusResult(
        root=root_id,
        visible_nodes=set(walk.order),
        visible_edges=set(walk.edges),
        elapsed_ms=elapsed_ms,
    )
    if elapsed_ms > warn_ms:
        logger.warning(
            "Focus traversal from %r took %.2fms (threshold: %.0fms) for %d nodes",
            root_id,
            elapsed_ms,
            warn_ms,
            len(result.visible_nodes),
        )
    return result


@dataclass(slots=True)
class ContextResult:
    seed: Optional[str]
    related: List[str] = field(default_factory=list)
    ranked: List[Discovery] = field(default_factory=list)
    stats: TraversalStats = field(default_factory=TraversalStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "related": list(self.related),
            "details": [
                {"id": item.id, "depth": item.depth, "degree": item.degree}
                for item in self.ranked
            ],
            "traversalStats": self.stats.to_dict(),
        }


def traverse_context(
    seed_id: str,
    forward: AdjacencyLookup,
    reverse: AdjacencyLookup,
    depth: int = DEFAULT_CONTEXT_DEPTH,
    result_cap: int = DEFAULT_RESULT_CAP,
) -> ContextResult:
    """Files related to ``seed_id`` through imports in either direction.

    The walk always runs to ``depth``; ranking happens afterwards. Each
    discovered node carries its depth and its degree (forward plus reverse
    adjacency size), and the list is ordered by depth, then degree
    (descending), then discovery order before being cut to ``result_cap``.
    """
    walk = explore(
        seed_id,
        forward,
        reverse,
        TraversalPolicy(directions=("forward", "reverse"), max_depth=depth),
    )
    discoveries = [
        Discovery(id=node_id, depth=walk.depths[node_id], degree=degree(forward, reverse, node_id))
        for node_id in walk.order[1:]
    ]
    ranked = rank_related(discoveries, result_cap)
    return ContextResult(
        seed=seed_id,
        related=[item.id for item in ranked],
        ranked=ranked,
        stats=walk.stats,
    )
