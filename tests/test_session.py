from __future__ import annotations

from depwalk.config import EngineConfig
from depwalk.session import GraphSession

from conftest import modules_from_edges


def test_session_from_scan_file_uses_envelope_root(workspace) -> None:
    session = GraphSession.from_scan_file(workspace)

    assert session.workspace_root == workspace.parent / "project"
    assert set(session.known_ids) == {
        "src/App.ts",
        "src/auth/login.ts",
        "src/util.ts",
        "src/db/connection.ts",
    }
    assert session.graph.meta.generated_at == "2024-01-01T00:00:00+00:00"


def test_session_root_argument_wins(workspace, tmp_path) -> None:
    config = EngineConfig(workspace_root=tmp_path / "from-config")

    from_config = GraphSession.from_scan_file(workspace, config=config)
    from_argument = GraphSession.from_scan_file(workspace, tmp_path / "explicit", config)

    assert from_config.workspace_root == tmp_path / "from-config"
    assert from_argument.workspace_root == tmp_path / "explicit"


def test_impact_resolves_imprecise_paths(workspace) -> None:
    session = GraphSession.from_scan_file(workspace)

    result = session.impact("App.js")

    assert result.source == "src/App.ts"
    assert result.affected == [
        "src/App.ts",
        "src/auth/login.ts",
        "src/util.ts",
        "src/db/connection.ts",
    ]


def test_impact_accepts_absolute_paths(workspace) -> None:
    session = GraphSession.from_scan_file(workspace)

    result = session.impact(str(workspace.parent / "project" / "src" / "util.ts"))

    assert result.affected == ["src/util.ts"]


def test_impact_of_file_outside_graph(workspace) -> None:
    session = GraphSession.from_scan_file(workspace)

    on_disk = session.impact("README.md")
    missing = session.impact("src/missing.ts")

    assert on_disk.affected == ["README.md"]
    assert on_disk.stats.nodes_visited == 1
    assert missing.affected == []


def test_file_exists_needs_a_workspace_root() -> None:
    session = GraphSession.from_modules(modules_from_edges([("a.ts", "b.ts")]))

    assert session.file_exists("a.ts") is False
    assert session.impact("c.ts").affected == []


def test_context_for_topic(workspace) -> None:
    session = GraphSession.from_scan_file(workspace)

    result = session.context("auth")

    assert result.seed == "src/auth/login.ts"
    assert result.related == ["src/db/connection.ts", "src/App.ts"]


def test_context_for_unknown_topic(workspace) -> None:
    session = GraphSession.from_scan_file(workspace)

    result = session.context("billing")

    assert result.seed is None
    assert result.to_dict()["related"] == []


def test_context_uses_configured_cap(workspace) -> None:
    session = GraphSession.from_scan_file(workspace, config=EngineConfig(context_result_cap=1))

    assert session.context("auth").related == ["src/db/connection.ts"]
    assert session.context("auth", result_cap=5).related == ["src/db/connection.ts", "src/App.ts"]


def test_focus_uses_configured_defaults(workspace) -> None:
    session = GraphSession.from_scan_file(workspace, config=EngineConfig(focus_depth=2))

    result = session.focus("src/App.ts")

    assert result.visible_nodes == {
        "src/App.ts",
        "src/auth/login.ts",
        "src/util.ts",
        "src/db/connection.ts",
    }
    assert session.focus("src/App.ts", depth=1).visible_nodes == {
        "src/App.ts",
        "src/auth/login.ts",
        "src/util.ts",
    }


def test_summary(workspace) -> None:
    session = GraphSession.from_scan_file(workspace)

    summary = session.summary()

    assert summary["nodeCount"] == 4
    assert summary["edgeCount"] == 4
    assert summary["nodeKinds"] == {"ts": 4}
    assert summary["edgeKinds"] == {"import": 4}
    assert summary["isolatedNodes"] == 0
    assert summary["workspaceRoot"] == str(workspace.parent / "project")
