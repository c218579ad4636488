"""Logging setup shared by the command line and the MCP server."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s  %(name)-28s  %(levelname)-7s  %(message)s"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure root logging for an entry point.

    Args:
        level: Log level name (e.g. ``"INFO"``, ``"DEBUG"``). Unknown names
            fall back to ``WARNING``.

    Returns:
        The ``depwalk`` package logger.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
    )
    return logging.getLogger("depwalk")
