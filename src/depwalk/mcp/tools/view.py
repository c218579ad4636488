"""Focus-view and graph summary tools for the MCP server."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict

from ...session import GraphSession
from ...traversal.focus import children_info, format_crumb
from .args import optional_int, require_text

if TYPE_CHECKING:
    from ..server import DepwalkServer


def focus_view(session: GraphSession, args: Dict[str, Any]) -> str:
    """Bounded subgraph around a node, in the children or parents direction.

    Parameters
    ----------
    session:
        Current graph session
    args:
        Tool arguments containing 'root' and optional 'depth', 'lens',
        'max_fanout'

    Returns
    -------
    JSON string with visible nodes/edges, the breadcrumb and child counts
    """
    root = require_text(args, "root")
    if root not in session.graph:
        return json.dumps({"error": f"Node '{root}' is not in the dependency graph"}, indent=2)

    lens = args.get("lens", "children")
    depth = optional_int(args, "depth")
    max_fanout = optional_int(args, "max_fanout")
    result = session.focus(root, depth=depth, lens=lens, max_fanout=max_fanout)

    effective_depth = session.config.focus_depth if depth is None else depth
    effective_fanout = session.config.max_fanout if max_fanout is None else max_fanout
    crumb = format_crumb(root, effective_depth, lens)
    info = children_info(
        session.adjacency.forward,
        session.adjacency.reverse,
        root,
        lens,
        effective_fanout,
    )
    payload = result.to_dict()
    payload["crumb"] = {"root": crumb.root, "depth": crumb.depth, "lens": crumb.lens, "label": crumb.label}
    payload["children"] = {"count": info.count, "hasMore": info.has_more, "displayCount": info.display_count}
    return json.dumps(payload, indent=2)


def graph_summary(session: GraphSession, args: Dict[str, Any]) -> str:
    """Node/edge counts and kind breakdown for the loaded graph."""
    return json.dumps(session.summary(), indent=2)


def register_tools(server: DepwalkServer) -> None:
    """Register view tools with the MCP server.

    Parameters
    ----------
    server:
        MCP server instance
    """
    server.register_tool(
        name="focus_view",
        description="Get the bounded subgraph around a node for focus-mode rendering",
        input_schema={
            "type": "object",
            "properties": {
                "root": {"type": "string", "description": "Node id to focus on"},
                "depth": {"type": "integer", "description": "Hops to show (default: 1)"},
                "lens": {
                    "type": "string",
                    "enum": ["children", "parents"],
                    "description": "children = imports, parents = importers",
                },
                "max_fanout": {"type": "integer", "description": "Neighbours per node (default: 100)"},
            },
            "required": ["root"],
        },
        handler=focus_view,
    )

    server.register_tool(
        name="graph_summary",
        description="Summarize the loaded dependency graph",
        input_schema={"type": "object", "properties": {}},
        handler=graph_summary,
    )
