"""depwalk package.

Fuzzy seed resolution and bounded breadth-first traversal over a project's
file-level dependency graph: impact analysis, focus-mode subgraphs, and
topic context discovery.
"""

from .config import DEFAULT_CONFIG, EngineConfig, load_config
from .errors import ConfigError, DepwalkError, MalformedScanError, ScanReadError
from .graph import Adjacency, Edge, Graph, GraphMeta, Node, build_adjacency, build_aggregate_graph, build_graph
from .resolve import resolve_seed
from .session import GraphSession
from .traversal import traverse_context, traverse_focus, traverse_impact

__all__ = [
    "Adjacency",
    "ConfigError",
    "DEFAULT_CONFIG",
    "DepwalkError",
    "Edge",
    "EngineConfig",
    "Graph",
    "GraphMeta",
    "GraphSession",
    "MalformedScanError",
    "Node",
    "ScanReadError",
    "build_adjacency",
    "build_aggregate_graph",
    "build_graph",
    "load_config",
    "resolve_seed",
    "traverse_context",
    "traverse_focus",
    "traverse_impact",
]
