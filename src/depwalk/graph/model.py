"""Graph representations used by depwalk."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

EDGE_KINDS = ("import", "require", "dynamic", "unknown")
NODE_KINDS = ("ts", "js", "tsx", "jsx", "json", "other")


@dataclass(slots=True, frozen=True)
class Node:
    """A file (or aggregated directory) in the dependency graph."""

    id: str
    label: str
    path: str
    kind: str = "other"
    group: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "label": self.label, "path": self.path, "kind": self.kind}
        if self.group is not None:
            data["group"] = self.group
        return data


@dataclass(slots=True, frozen=True)
class Edge:
    """A declared dependency from ``source`` (importer) to ``target`` (imported)."""

    id: str
    source: str
    target: str
    kind: str = "unknown"

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "source": self.source, "target": self.target, "kind": self.kind}


@dataclass(slots=True, frozen=True)
class GraphMeta:
    generated_at: str
    node_count: int
    edge_count: int
    size_capped: bool = False
    performance_optimized: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generatedAt": self.generated_at,
            "nodeCount": self.node_count,
            "edgeCount": self.edge_count,
            "sizeCapped": self.size_capped,
            "performanceOptimized": self.performance_optimized,
        }


@dataclass(slots=True)
class Graph:
    """One immutable snapshot of the project's file-level dependencies.

    Builders create graphs; nothing in the traversal or resolution code
    mutates them afterwards.
    """

    nodes: List[Node]
    edges: List[Edge]
    meta: GraphMeta
    _index: Dict[str, Node] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._index = {node.id: node for node in self.nodes}

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._index.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "meta": self.meta.to_dict(),
        }
