"""An explicit graph snapshot owned by the host application.

A :class:`GraphSession` bundles one full-fidelity graph with its adjacency
maps. Callers build a new session after every rescan and pass it where it is
needed; nothing in depwalk keeps a hidden copy.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import EngineConfig
from .graph.adjacency import Adjacency, build_adjacency
from .graph.builder import build_graph, normalize_id
from .graph.model import Graph
from .resolve import resolve_seed
from .scan import load_scan
from .traversal.engine import (
    ContextResult,
    FocusResult,
    ImpactResult,
    traverse_context,
    traverse_focus,
    traverse_impact,
)


@dataclass(slots=True)
class GraphSession:
    graph: Graph
    adjacency: Adjacency
    workspace_root: Optional[Path] = None
    config: EngineConfig = field(default_factory=EngineConfig)

    @classmethod
    def from_graph(
        cls,
        graph: Graph,
        workspace_root: Optional[Path] = None,
        config: Optional[EngineConfig] = None,
    ) -> "GraphSession":
        return cls(
            graph=graph,
            adjacency=build_adjacency(graph),
            workspace_root=workspace_root,
            config=config or EngineConfig(),
        )

    @classmethod
    def from_modules(
        cls,
        modules: Any,
        workspace_root: Optional[Path] = None,
        generated_at: Optional[str] = None,
        config: Optional[EngineConfig] = None,
    ) -> "GraphSession":
        """Build a session straight from scanner module records."""
        graph = build_graph(modules, workspace_root, generated_at=generated_at)
        return cls.from_graph(graph, workspace_root, config)

    @classmethod
    def from_scan_file(
        cls,
        path: Path,
        workspace_root: Optional[Path] = None,
        config: Optional[EngineConfig] = None,
    ) -> "GraphSession":
        """Load a scan file and build a session from it.

        The workspace root is taken from the argument, then the configuration,
        then the scan envelope's ``workspaceRoot``.
        """
        config = config or EngineConfig()
        scan = load_scan(path)
        root = workspace_root or config.workspace_root
        if root is None and scan.workspace_root:
            root = Path(scan.workspace_root)
        return cls.from_modules(scan.modules, root, scan.generated_at, config)

    @property
    def known_ids(self) -> List[str]:
        return self.graph.node_ids()

    def file_exists(self, node_id: str) -> bool:
        """Whether ``node_id`` is a regular file under the workspace root."""
        if self.workspace_root is None:
            return False
        return (self.workspace_root / node_id).is_file()

    def resolve(self, query: str, is_topic: bool = False) -> Optional[str]:
        return resolve_seed(query, self.known_ids, is_topic)

    def impact(self, file_path: str) -> ImpactResult:
        """Impact analysis for a possibly imprecise file path."""
        normalized = normalize_id(file_path.strip(), self.workspace_root)
        seed = self.resolve(normalized) or normalized
        return traverse_impact(seed, self.adjacency.forward, self.file_exists)

    def focus(
        self,
        root_id: str,
        depth: Optional[int] = None,
        lens: str = "children",
        max_fanout: Optional[int] = None,
    ) -> FocusResult:
        return traverse_focus(
            root_id,
            self.adjacency.forward,
            self.adjacency.reverse,
            depth=self.config.focus_depth if depth is None else depth,
            lens=lens,
            max_fanout=self.config.max_fanout if max_fanout is None else max_fanout,
            warn_ms=self.config.focus_warn_ms,
        )

    def context(
        self,
        query: str,
        is_topic: bool = True,
        depth: Optional[int] = None,
        result_cap: Optional[int] = None,
    ) -> ContextResult:
        """Related files for a topic (or a path with ``is_topic=False``).

        An unresolvable query gives an empty result with ``seed=None``.
        """
        seed = self.resolve(query, is_topic=is_topic)
        if seed is None:
            return ContextResult(seed=None)
        return traverse_context(
            seed,
            self.adjacency.forward,
            self.adjacency.reverse,
            depth=self.config.context_depth if depth is None else depth,
            result_cap=self.config.context_result_cap if result_cap is None else result_cap,
        )

    def summary(self) -> Dict[str, Any]:
        node_kinds = Counter(node.kind for node in self.graph.nodes)
        edge_kinds = Counter(edge.kind for edge in self.graph.edges)
        isolated = sum(
            1
            for node_id, targets in self.adjacency.forward.items()
            if not targets and not self.adjacency.reverse.get(node_id)
        )
        return {
            **self.graph.meta.to_dict(),
            "workspaceRoot": str(self.workspace_root) if self.workspace_root else None,
            "nodeKinds": dict(node_kinds),
            "edgeKinds": dict(edge_kinds),
            "isolatedNodes": isolated,
        }
