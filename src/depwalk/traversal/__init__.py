"""Traversal policies (impact, focus, context) over one shared BFS primitive."""

from .engine import (
    ContextResult,
    Exploration,
    FocusResult,
    ImpactResult,
    TraversalPolicy,
    TraversalStats,
    explore,
    traverse_context,
    traverse_focus,
    traverse_impact,
)
from .focus import ChildrenInfo, Crumb, children_info, count_children, format_crumb, validate_graph_data, validate_root_node
from .ranking import Discovery, rank_related

__all__ = [
    "ChildrenInfo",
    "ContextResult",
    "Crumb",
    "Discovery",
    "Exploration",
    "FocusResult",
    "ImpactResult",
    "TraversalPolicy",
    "TraversalStats",
    "children_info",
    "count_children",
    "explore",
    "format_crumb",
    "rank_related",
    "traverse_context",
    "traverse_focus",
    "traverse_impact",
    "validate_graph_data",
    "validate_root_node",
]
