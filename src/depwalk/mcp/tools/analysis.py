"""Resolution, impact analysis, and related-context tools for the MCP server."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict

from ...session import GraphSession
from .args import optional_int, require_text

if TYPE_CHECKING:
    from ..server import DepwalkServer


def resolve_seed_tool(session: GraphSession, args: Dict[str, Any]) -> str:
    """Resolve a guessed path or topic to a graph node id.

    Parameters
    ----------
    session:
        Current graph session
    args:
        Tool arguments containing 'query' and optional 'topic'

    Returns
    -------
    JSON string with the resolved id (``null`` when nothing matched)
    """
    query = require_text(args, "query")
    is_topic = bool(args.get("topic", False))
    node_id = session.resolve(query, is_topic=is_topic)
    return json.dumps({"query": query, "topic": is_topic, "resolved": node_id}, indent=2)


def impact_analysis(session: GraphSession, args: Dict[str, Any]) -> str:
    """Files reachable from a source file along its declared dependencies.

    Parameters
    ----------
    session:
        Current graph session
    args:
        Tool arguments containing 'file_path' (workspace-relative)

    Returns
    -------
    JSON string with ``sourceFile``, ``affectedFiles`` and ``traversalStats``
    """
    file_path = require_text(args, "file_path")
    return json.dumps(session.impact(file_path).to_dict(), indent=2)


def related_context(session: GraphSession, args: Dict[str, Any]) -> str:
    """Ranked files related to a topic or a file.

    Parameters
    ----------
    session:
        Current graph session
    args:
        Tool arguments containing 'query' and optional 'is_path', 'depth',
        'limit'

    Returns
    -------
    JSON string with the resolved seed and ranked related files
    """
    query = require_text(args, "query")
    result = session.context(
        query,
        is_topic=not bool(args.get("is_path", False)),
        depth=optional_int(args, "depth"),
        result_cap=optional_int(args, "limit"),
    )
    return json.dumps(result.to_dict(), indent=2)


def register_tools(server: DepwalkServer) -> None:
    """Register analysis tools with the MCP server.

    Parameters
    ----------
    server:
        MCP server instance
    """
    server.register_tool(
        name="resolve_seed",
        description="Resolve an imprecise file path or a topic to a dependency graph node",
        input_schema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Guessed path or free-text topic"},
                "topic": {"type": "boolean", "description": "Treat the query as a topic (default: false)"},
            },
            "required": ["query"],
        },
        handler=resolve_seed_tool,
    )

    server.register_tool(
        name="impact_analysis",
        description="Analyze the dependency impact of changing a source file",
        input_schema={
            "type": "object",
            "properties": {
                "file_path": {
                    "type": "string",
                    "description": "Path to the source file to analyze (workspace-relative)",
                },
            },
            "required": ["file_path"],
        },
        handler=impact_analysis,
    )

    server.register_tool(
        name="related_context",
        description="Find files related to a topic or file through imports in either direction",
        input_schema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Topic (or file path with is_path)"},
                "is_path": {"type": "boolean", "description": "Resolve the query as a file path"},
                "depth": {"type": "integer", "description": "Hops to explore (default: 1)"},
                "limit": {"type": "integer", "description": "Maximum files returned (default: 30)"},
            },
            "required": ["query"],
        },
        handler=related_context,
    )
