"""MCP server exposing depwalk's graph queries as tools."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from ..config import EngineConfig
from ..errors import DepwalkError
from ..session import GraphSession

logger = logging.getLogger(__name__)

ToolHandler = Callable[[GraphSession, Dict[str, Any]], str]


class DepwalkServer:
    """MCP server answering impact, focus, and context questions over one scan file."""

    def __init__(self, scan_path: Path, config: EngineConfig | None = None):
        self.scan_path = scan_path
        self.config = config or EngineConfig()
        self.server = Server("depwalk")
        self.session: GraphSession | None = None
        self.tools: Dict[str, ToolHandler] = {}
        self.tool_metadata: Dict[str, tuple[str, Dict]] = {}

        # Register handlers once at initialization
        self._setup_handlers()

    def _get_session(self) -> GraphSession:
        """Get or build the graph session for the scan file."""
        if self.session is None:
            self.session = GraphSession.from_scan_file(self.scan_path, config=self.config)
            logger.info(
                "Loaded graph with %d nodes and %d edges from %s",
                self.session.graph.meta.node_count,
                self.session.graph.meta.edge_count,
                self.scan_path,
            )
        return self.session

    def dispatch(self, name: str, arguments: Dict[str, Any]) -> str:
        """Run tool ``name`` and return its JSON text.

        Failures inside the tool come back as an ``{"error": ...}`` payload so
        one bad request does not take the server down.
        """
        if name not in self.tools:
            raise ValueError(f"Unknown tool: {name}")

        handler = self.tools[name]
        try:
            return handler(self._get_session(), arguments or {})
        except (DepwalkError, ValueError, TypeError) as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            return json.dumps({"error": str(exc)}, indent=2)

    def _setup_handlers(self) -> None:
        """Set up MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            """List available tools."""
            return [
                types.Tool(
                    name=tool_name,
                    description=desc,
                    inputSchema=schema,
                )
                for tool_name, (desc, schema) in self.tool_metadata.items()
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
            """Handle tool invocation."""
            return [types.TextContent(type="text", text=self.dispatch(name, arguments))]

    def register_tool(
        self,
        name: str,
        description: str,
        input_schema: Dict[str, Any],
        handler: ToolHandler,
    ) -> None:
        """Register an MCP tool.

        Parameters
        ----------
        name:
            Tool name
        description:
            Tool description
        input_schema:
            JSON schema for tool inputs
        handler:
            Function called with the current session and the tool arguments
        """
        self.tools[name] = handler
        self.tool_metadata[name] = (description, input_schema)

    async def run(self) -> None:
        """Run the MCP server with stdio transport."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def create_server(scan_path: Path, config: EngineConfig | None = None) -> DepwalkServer:
    """Create and configure an MCP server instance.

    Parameters
    ----------
    scan_path:
        Scanner output the graph is built from
    config:
        Engine configuration

    Returns
    -------
    Configured DepwalkServer instance
    """
    server = DepwalkServer(scan_path, config)

    from .tools import analysis, view

    # Resolution, impact analysis, related context
    analysis.register_tools(server)

    # Focus views and graph summaries
    view.register_tools(server)

    return server
