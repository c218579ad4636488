"""Forward and reverse adjacency derived from a graph snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .model import Graph

AdjacencyMap = Dict[str, List[str]]

DIRECTIONS = ("forward", "reverse", "both")


@dataclass(slots=True)
class Adjacency:
    """Adjacency lists for one snapshot.

    Both mappings hold an entry for every node id, so isolated nodes map to
    empty lists. Lists are not deduplicated: parallel edges show up twice.
    """

    forward: AdjacencyMap = field(default_factory=dict)
    reverse: AdjacencyMap = field(default_factory=dict)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.forward


def build_adjacency(graph: Graph) -> Adjacency:
    """Index ``graph`` into forward (importer -> imported) and reverse lists."""
    forward: AdjacencyMap = {node.id: [] for node in graph.nodes}
    reverse: AdjacencyMap = {node.id: [] for node in graph.nodes}

    for edge in graph.edges:
        forward.setdefault(edge.source, []).append(edge.target)
        reverse.setdefault(edge.target, []).append(edge.source)
        # Keep both maps keyed on the same id universe.
        forward.setdefault(edge.target, [])
        reverse.setdefault(edge.source, [])

    return Adjacency(forward=forward, reverse=reverse)


def degree(forward: AdjacencyMap, reverse: AdjacencyMap, node_id: str) -> int:
    """Number of adjacency entries in both directions; parallel edges count twice."""
    return len(forward.get(node_id, ())) + len(reverse.get(node_id, ()))


def neighbors(
    forward: AdjacencyMap,
    reverse: AdjacencyMap,
    node_id: str,
    direction: str = "forward",
) -> List[str]:
    """Neighbours of ``node_id`` in ``direction``; unknown ids have none.

    ``both`` concatenates forward then reverse neighbours.
    """
    if direction == "forward":
        return list(forward.get(node_id, ()))
    if direction == "reverse":
        return list(reverse.get(node_id, ()))
    if direction == "both":
        return list(forward.get(node_id, ())) + list(reverse.get(node_id, ()))
    raise ValueError(f"Unknown direction: {direction!r}")
