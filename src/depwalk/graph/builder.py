"""Turn raw scanner module records into :class:`~depwalk.graph.model.Graph` snapshots.

Two builders live here and they are intentionally separate:

* :func:`build_graph` keeps every node and edge. Impact analysis and context
  discovery depend on the graph being complete.
* :func:`build_aggregate_graph` is for rendering. It may collapse files into
  directories, drops self-edges and duplicate pairs, and stops adding nodes
  once a size cap is reached.
"""

from __future__ import annotations

import logging
import os
import posixpath
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..errors import MalformedScanError
from .model import Edge, Graph, GraphMeta, Node

logger = logging.getLogger(__name__)

DEFAULT_NODE_CAP = 300
AGGREGATE_DIRECTORY_THRESHOLD = 500
AGGREGATION_LEVELS = ("file", "directory", "package")

_SCRIPT_EXTENSION = re.compile(r"\.(ts|tsx|js|jsx|mjs|cjs|vue|svelte)$")
_FILE_KINDS = {".ts": "ts", ".js": "js", ".tsx": "tsx", ".jsx": "jsx", ".json": "json"}


def normalize_id(raw: str, workspace_root: str | Path | None = None) -> str:
    """Return the workspace-relative, forward-slash form of ``raw``.

    Paths under ``workspace_root`` are made relative to it. Anything else is
    only slash-normalized; rejecting paths outside the workspace is the
    caller's job.
    """
    text = raw.replace("\\", "/")
    if workspace_root is not None:
        root = str(workspace_root).replace("\\", "/").rstrip("/")
        if root and (text == root or text.startswith(root + "/")):
            text = text[len(root):].lstrip("/")
    while text.startswith("./"):
        text = text[2:]
    if not text:
        return ""
    return posixpath.normpath(text)


def classify_dependency(types: Any) -> str:
    """Map scanner dependency types onto an edge kind."""
    if not isinstance(types, (list, tuple)):
        return "unknown"
    if "esm" in types or "es6" in types:
        return "import"
    if "cjs" in types or "commonjs" in types:
        return "require"
    if "dynamic" in types:
        return "dynamic"
    return "unknown"


def file_kind(path: str) -> str:
    """Classify a file by extension (``ts``, ``js``, ``tsx``, ``jsx``, ``json``, ``other``)."""
    return _FILE_KINDS.get(posixpath.splitext(path)[1].lower(), "other")


def should_optimize_for_performance(node_count: int, edge_count: int) -> bool:
    return node_count > 500 or edge_count > 1000


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _absolute_path(node_id: str, workspace_root: str | Path | None) -> str:
    if workspace_root is None:
        return node_id
    return os.path.normpath(os.path.join(str(workspace_root), node_id))


def _require_records(raw_modules: Any) -> Sequence[Any]:
    if not isinstance(raw_modules, (list, tuple)):
        raise MalformedScanError(
            f"Expected a list of module records, got {type(raw_modules).__name__}"
        )
    return raw_modules


def _text_field(record: Any, key: str) -> Optional[str]:
    if not isinstance(record, Mapping):
        return None
    value = record.get(key)
    if not isinstance(value, str) or not value:
        return None
    return value


def _dependencies(record: Mapping[str, Any]) -> Iterable[Any]:
    deps = record.get("dependencies")
    if not isinstance(deps, (list, tuple)):
        return ()
    return deps


def _dependency_types(dep: Mapping[str, Any]) -> Any:
    if "dependencyTypes" in dep:
        return dep["dependencyTypes"]
    return dep.get("types")


class _EdgeIds:
    """Deterministic edge ids: ``a->b``, then ``a->b-1``, ``a->b-2`` for repeats."""

    def __init__(self) -> None:
        self._seen: Dict[str, int] = {}

    def next(self, source: str, target: str) -> str:
        base = f"{source}->{target}"
        if base not in self._seen:
            self._seen[base] = 0
            return base
        self._seen[base] += 1
        return f"{base}-{self._seen[base]}"


def build_graph(
    raw_modules: Any,
    workspace_root: str | Path | None = None,
    generated_at: str | None = None,
) -> Graph:
    """Build the full-fidelity graph used by traversal features.

    Every module and dependency becomes a node, parallel edges are kept with
    numbered ids, and self-edges are kept. Records without ``source`` and
    dependencies without ``resolved`` are skipped.

    Raises
    ------
    MalformedScanError
        If ``raw_modules`` is not a list of records.
    """
    records = _require_records(raw_modules)
    nodes: List[Node] = []
    known: set[str] = set()
    edges: List[Edge] = []
    edge_ids = _EdgeIds()
    skipped = 0

    def add_node(node_id: str) -> None:
        if node_id in known:
            return
        known.add(node_id)
        nodes.append(
            Node(
                id=node_id,
                label=posixpath.basename(node_id),
                path=_absolute_path(node_id, workspace_root),
                kind=file_kind(node_id),
            )
        )

    for record in records:
        source = _text_field(record, "source")
        source_id = normalize_id(source, workspace_root) if source else ""
        if not source_id:
            skipped += 1
            continue
        add_node(source_id)

        for dep in _dependencies(record):
            resolved = _text_field(dep, "resolved")
            target_id = normalize_id(resolved, workspace_root) if resolved else ""
            if not target_id:
                skipped += 1
                continue
            add_node(target_id)
            edges.append(
                Edge(
                    id=edge_ids.next(source_id, target_id),
                    source=source_id,
                    target=target_id,
                    kind=classify_dependency(_dependency_types(dep)),
                )
            )

    if skipped:
        logger.debug("Skipped %d malformed module/dependency records", skipped)

    meta = GraphMeta(
        generated_at=generated_at or _now_iso(),
        node_count=len(nodes),
        edge_count=len(edges),
        size_capped=False,
        performance_optimized=should_optimize_for_performance(len(nodes), len(edges)),
    )
    return Graph(nodes=nodes, edges=edges, meta=meta)


def determine_aggregation_level(module_count: int) -> str:
    """Pick file-level ids for small projects and directory ids for large ones."""
    if module_count > AGGREGATE_DIRECTORY_THRESHOLD:
        return "directory"
    return "file"


def aggregate_module_path(node_id: str, level: str) -> str:
    """Collapse a node id to the requested aggregation level.

    Script extensions are dropped at every level so ``a.ts`` and ``a.js``
    render as a single module.
    """
    clean = node_id.replace("\\", "/")
    while clean.startswith("./"):
        clean = clean[2:]
    clean = _SCRIPT_EXTENSION.sub("", clean)

    if level == "file":
        return clean

    parts = clean.split("/")
    if level == "package":
        if parts[0] == "packages" and len(parts) >= 2:
            return f"packages/{parts[1]}"
        if len(parts) > 1:
            return parts[0]
        return clean
    if level == "directory":
        if len(parts) > 1:
            return "/".join(parts[:-1])
        return clean
    raise ValueError(f"Unknown aggregation level: {level!r}")


def module_group(node_id: str) -> str:
    """Coarse styling group for an aggregated node."""
    if "test" in node_id or "spec" in node_id:
        return "test"
    if "node_modules" in node_id:
        return "external"
    if node_id.startswith("packages/"):
        parts = node_id.split("/")
        if len(parts) >= 2:
            return parts[1]
    if node_id.startswith("src/"):
        return "source"
    return "other"


def build_aggregate_graph(
    raw_modules: Any,
    workspace_root: str | Path | None = None,
    node_cap: int = DEFAULT_NODE_CAP,
    level: str | None = None,
    generated_at: str | None = None,
) -> Graph:
    """Build the size-capped graph used for rendering.

    Ids are aggregated to ``level`` (chosen from the module count when not
    given) and self-edges and repeated pairs are dropped. Once ``node_cap``
    nodes exist no new node is created: edges to such nodes are dropped and
    processing stops after the current module. Hitting the cap marks
    ``meta.size_capped``; it never fails the build.

    Raises
    ------
    MalformedScanError
        If ``raw_modules`` is not a list of records.
    """
    records = _require_records(raw_modules)
    if level is None:
        level = determine_aggregation_level(len(records))
    if level not in AGGREGATION_LEVELS:
        raise ValueError(f"Unknown aggregation level: {level!r}")

    nodes: Dict[str, Node] = {}
    edges: Dict[str, Edge] = {}
    size_capped = False

    def add_node(node_id: str, raw_id: str) -> bool:
        nonlocal size_capped
        if node_id in nodes:
            return True
        if len(nodes) >= node_cap:
            size_capped = True
            return False
        nodes[node_id] = Node(
            id=node_id,
            label=node_id,
            path=_absolute_path(node_id, workspace_root),
            kind=file_kind(raw_id) if level == "file" else "other",
            group=module_group(node_id),
        )
        return True

    for record in records:
        source = _text_field(record, "source")
        raw_source = normalize_id(source, workspace_root) if source else ""
        if not raw_source:
            continue
        from_id = aggregate_module_path(raw_source, level)
        if not add_node(from_id, raw_source):
            logger.warning("Node cap of %d reached, stopping graph aggregation", node_cap)
            break

        for dep in _dependencies(record):
            resolved = _text_field(dep, "resolved")
            raw_target = normalize_id(resolved, workspace_root) if resolved else ""
            if not raw_target:
                continue
            to_id = aggregate_module_path(raw_target, level)
            if from_id == to_id:
                continue
            if not add_node(to_id, raw_target):
                continue
            edge_id = f"{from_id}->{to_id}"
            if edge_id not in edges:
                edges[edge_id] = Edge(
                    id=edge_id,
                    source=from_id,
                    target=to_id,
                    kind=classify_dependency(_dependency_types(dep)),
                )

        if size_capped:
            logger.warning("Node cap of %d reached, stopping graph aggregation", node_cap)
            break

    node_list = list(nodes.values())
    edge_list = list(edges.values())
    meta = GraphMeta(
        generated_at=generated_at or _now_iso(),
        node_count=len(node_list),
        edge_count=len(edge_list),
        size_capped=size_capped,
        performance_optimized=should_optimize_for_performance(len(node_list), len(edge_list)),
    )
    return Graph(nodes=node_list, edges=edge_list, meta=meta)
