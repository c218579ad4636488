from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import pytest

from depwalk.graph import Adjacency, build_adjacency, build_graph


def modules_from_edges(edges: Sequence[Tuple[str, str]], isolated: Sequence[str] = ()) -> List[Dict]:
    """Scanner-style module records for a list of ``(source, target)`` pairs."""
    records: Dict[str, Dict] = {}
    for source, target in edges:
        records.setdefault(source, {"source": source, "dependencies": []})
        records[source]["dependencies"].append({"resolved": target, "dependencyTypes": ["esm"]})
        records.setdefault(target, {"source": target, "dependencies": []})
    for node_id in isolated:
        records.setdefault(node_id, {"source": node_id, "dependencies": []})
    return list(records.values())


def adjacency_from_edges(edges: Sequence[Tuple[str, str]], isolated: Sequence[str] = ()) -> Adjacency:
    return build_adjacency(build_graph(modules_from_edges(edges, isolated)))


@pytest.fixture
def workspace(tmp_path) -> Path:
    """A small project on disk plus a wrapped scanner report describing it."""
    root = tmp_path / "project"
    for relative in ("src/App.ts", "src/auth/login.ts", "src/db/connection.ts", "src/util.ts", "README.md"):
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("// fixture\n", encoding="utf-8")

    def module(relative: str, deps: Sequence[str]) -> Dict:
        return {
            "source": str(root / relative),
            "dependencies": [
                {"resolved": str(root / dep), "dependencyTypes": ["esm"]} for dep in deps
            ],
        }

    payload = {
        "version": 1,
        "generatedAt": "2024-01-01T00:00:00+00:00",
        "workspaceRoot": str(root),
        "depcruise": {
            "modules": [
                module("src/App.ts", ["src/auth/login.ts", "src/util.ts"]),
                module("src/auth/login.ts", ["src/db/connection.ts"]),
                module("src/db/connection.ts", ["src/util.ts"]),
                module("src/util.ts", []),
            ]
        },
    }
    scan_path = tmp_path / "deps.json"
    scan_path.write_text(json.dumps(payload), encoding="utf-8")
    return scan_path
