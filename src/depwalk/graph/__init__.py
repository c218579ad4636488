"""Graph model, builders, and adjacency indexing."""

from .adjacency import Adjacency, build_adjacency, degree, neighbors
from .builder import (
    aggregate_module_path,
    build_aggregate_graph,
    build_graph,
    classify_dependency,
    file_kind,
    normalize_id,
)
from .model import Edge, Graph, GraphMeta, Node

__all__ = [
    "Adjacency",
    "Edge",
    "Graph",
    "GraphMeta",
    "Node",
    "aggregate_module_path",
    "build_adjacency",
    "build_aggregate_graph",
    "build_graph",
    "classify_dependency",
    "degree",
    "file_kind",
    "neighbors",
    "normalize_id",
]
