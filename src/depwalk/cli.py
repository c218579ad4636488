"""Command line access to depwalk's dependency graph queries."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Iterable

from .config import EngineConfig, load_config
from .errors import DepwalkError
from .graph.builder import AGGREGATION_LEVELS, build_aggregate_graph
from .log import setup_logging
from .scan import load_scan
from .session import GraphSession


def _resolve_config(args: argparse.Namespace) -> EngineConfig:
    config = load_config(args.config)
    return config.with_overrides(
        workspace_root=getattr(args, "workspace", None),
        log_level=args.log_level,
    )


def _load_session(args: argparse.Namespace, config: EngineConfig) -> GraphSession:
    return GraphSession.from_scan_file(args.scan, config.workspace_root, config)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def _graph(args: argparse.Namespace, config: EngineConfig) -> None:
    if args.aggregate:
        scan = load_scan(args.scan)
        root = config.workspace_root or scan.workspace_root
        graph = build_aggregate_graph(
            scan.modules,
            root,
            node_cap=config.node_cap,
            level=args.level,
            generated_at=scan.generated_at,
        )
    else:
        graph = _load_session(args, config).graph

    if args.json:
        _print_json(graph.to_dict())
        return

    meta = graph.meta
    print("Dependency graph:")
    print(f"  Nodes        : {meta.node_count}")
    print(f"  Edges        : {meta.edge_count}")
    print(f"  Generated at : {meta.generated_at}")
    if meta.size_capped:
        print(f"  Size capped  : yes (node cap {config.node_cap})")
    if meta.performance_optimized:
        print("  Large graph  : rendering may take a moment")


def _resolve(args: argparse.Namespace, config: EngineConfig) -> None:
    session = _load_session(args, config)
    _print_json({"query": args.query, "topic": args.topic, "resolved": session.resolve(args.query, args.topic)})


def _impact(args: argparse.Namespace, config: EngineConfig) -> None:
    session = _load_session(args, config)
    _print_json(session.impact(args.file).to_dict())


def _focus(args: argparse.Namespace, config: EngineConfig) -> None:
    session = _load_session(args, config)
    if args.root not in session.graph:
        raise DepwalkError(f"Node '{args.root}' is not in the dependency graph")
    result = session.focus(args.root, depth=args.depth, lens=args.lens, max_fanout=args.max_fanout)
    _print_json(result.to_dict())


def _context(args: argparse.Namespace, config: EngineConfig) -> None:
    session = _load_session(args, config)
    result = session.context(args.query, is_topic=not args.path, depth=args.depth, result_cap=args.limit)
    _print_json(result.to_dict())


def _serve_mcp(args: argparse.Namespace, config: EngineConfig) -> None:
    """Start the MCP server."""
    from .mcp.server import create_server

    print("Starting depwalk MCP server...", file=sys.stderr)
    print(f"Scan file: {args.scan}", file=sys.stderr)
    print("Server running on stdio. Use Ctrl+C to stop.", file=sys.stderr)

    server = create_server(args.scan, config)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        print("\nShutting down server...", file=sys.stderr)


def _add_scan_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--scan", type=Path, required=True, help="Dependency scanner JSON output")
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Workspace root node ids are relative to (defaults to the scan's workspaceRoot)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="depwalk", description=__doc__)
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    graph_parser = subparsers.add_parser("graph", help="Build the graph and print a summary")
    _add_scan_arguments(graph_parser)
    graph_parser.add_argument(
        "--aggregate",
        action="store_true",
        help="Build the size-capped rendering graph instead of the full one",
    )
    graph_parser.add_argument(
        "--level",
        choices=AGGREGATION_LEVELS,
        help="Aggregation level for --aggregate (default: chosen from module count)",
    )
    graph_parser.add_argument("--json", action="store_true", help="Dump the graph as JSON")
    graph_parser.set_defaults(func=_graph)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a guessed path or topic to a node id")
    _add_scan_arguments(resolve_parser)
    resolve_parser.add_argument("query", help="Guessed path or topic")
    resolve_parser.add_argument("--topic", action="store_true", help="Treat the query as a topic")
    resolve_parser.set_defaults(func=_resolve)

    impact_parser = subparsers.add_parser("impact", help="Files reachable from a file's dependencies")
    _add_scan_arguments(impact_parser)
    impact_parser.add_argument("file", help="Workspace-relative file path (may be imprecise)")
    impact_parser.set_defaults(func=_impact)

    focus_parser = subparsers.add_parser("focus", help="Bounded subgraph around a node")
    _add_scan_arguments(focus_parser)
    focus_parser.add_argument("root", help="Node id to focus on")
    focus_parser.add_argument("--depth", type=int, help="Hops to show")
    focus_parser.add_argument("--lens", choices=("children", "parents"), default="children")
    focus_parser.add_argument("--max-fanout", type=int, help="Neighbours considered per node")
    focus_parser.set_defaults(func=_focus)

    context_parser = subparsers.add_parser("context", help="Ranked files related to a topic")
    _add_scan_arguments(context_parser)
    context_parser.add_argument("query", help="Topic, or a file path with --path")
    context_parser.add_argument("--path", action="store_true", help="Resolve the query as a file path")
    context_parser.add_argument("--depth", type=int, help="Hops to explore")
    context_parser.add_argument("--limit", type=int, help="Maximum files returned")
    context_parser.set_defaults(func=_context)

    serve_parser = subparsers.add_parser("serve", help="Start the MCP server")
    _add_scan_arguments(serve_parser)
    serve_parser.set_defaults(func=_serve_mcp)

    return parser


def main(argv: Iterable[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        config = _resolve_config(args)
        setup_logging(config.log_level)
        args.func(args, config)
    except DepwalkError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
