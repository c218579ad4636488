from __future__ import annotations

import json

import pytest

from depwalk.cli import main


def _run(capsys, *argv: str):
    main(list(argv))
    return json.loads(capsys.readouterr().out)


def test_graph_summary(workspace, capsys) -> None:
    main(["graph", "--scan", str(workspace)])

    out = capsys.readouterr().out
    assert "Nodes        : 4" in out
    assert "Edges        : 4" in out


def test_graph_json(workspace, capsys) -> None:
    data = _run(capsys, "graph", "--scan", str(workspace), "--json")

    assert len(data["nodes"]) == 4
    assert data["meta"]["edgeCount"] == 4


def test_aggregate_graph_by_directory(workspace, capsys) -> None:
    data = _run(capsys, "graph", "--scan", str(workspace), "--aggregate", "--level", "directory", "--json")

    assert {node["id"] for node in data["nodes"]} == {"src", "src/auth", "src/db"}
    assert {edge["id"] for edge in data["edges"]} == {"src->src/auth", "src/auth->src/db", "src/db->src"}


def test_resolve(workspace, capsys) -> None:
    data = _run(capsys, "resolve", "--scan", str(workspace), "App.js")

    assert data["resolved"] == "src/App.ts"


def test_resolve_topic(workspace, capsys) -> None:
    data = _run(capsys, "resolve", "--scan", str(workspace), "--topic", "db connection")

    assert data["resolved"] == "src/db/connection.ts"


def test_impact(workspace, capsys) -> None:
    data = _run(capsys, "impact", "--scan", str(workspace), "src/auth/login.ts")

    assert data["sourceFile"] == "src/auth/login.ts"
    assert data["affectedFiles"] == ["src/auth/login.ts", "src/db/connection.ts", "src/util.ts"]


def test_focus(workspace, capsys) -> None:
    data = _run(capsys, "focus", "--scan", str(workspace), "src/util.ts", "--lens", "parents")

    assert data["visibleNodes"] == ["src/App.ts", "src/db/connection.ts", "src/util.ts"]
    assert data["visibleEdges"] == ["src/App.ts->src/util.ts", "src/db/connection.ts->src/util.ts"]


def test_focus_reads_config_file(workspace, tmp_path, capsys) -> None:
    config_path = tmp_path / "depwalk.yaml"
    config_path.write_text("max_fanout: 1\n", encoding="utf-8")

    data = _run(capsys, "--config", str(config_path), "focus", "--scan", str(workspace), "src/App.ts")

    assert data["visibleNodes"] == ["src/App.ts", "src/auth/login.ts"]


def test_focus_unknown_root_exits_with_error(workspace, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["focus", "--scan", str(workspace), "src/nope.ts"])

    assert excinfo.value.code == 1
    assert "Error: Node 'src/nope.ts'" in capsys.readouterr().err


def test_context(workspace, capsys) -> None:
    data = _run(capsys, "context", "--scan", str(workspace), "auth", "--limit", "1")

    assert data["seed"] == "src/auth/login.ts"
    assert data["related"] == ["src/db/connection.ts"]


def test_context_by_path(workspace, capsys) -> None:
    data = _run(capsys, "context", "--scan", str(workspace), "--path", "util.js", "--depth", "1")

    assert data["seed"] == "src/util.ts"
    assert set(data["related"]) == {"src/App.ts", "src/db/connection.ts"}


def test_missing_scan_file(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["impact", "--scan", str(tmp_path / "missing.json"), "a.ts"])

    assert excinfo.value.code == 1
    assert "Error: Could not read dependency data" in capsys.readouterr().err


def test_invalid_config_file(workspace, tmp_path, capsys) -> None:
    config_path = tmp_path / "depwalk.yaml"
    config_path.write_text("unknown_setting: 1\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(config_path), "graph", "--scan", str(workspace)])

    assert excinfo.value.code == 1
    assert "Unknown configuration keys" in capsys.readouterr().err
