"""MCP tool server for depwalk."""

from .server import DepwalkServer, create_server

__all__ = ["DepwalkServer", "create_server"]
