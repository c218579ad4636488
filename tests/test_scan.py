from __future__ import annotations

import json
import logging

import pytest

from depwalk import scan
from depwalk.errors import MalformedScanError, ScanReadError
from depwalk.scan import extract_modules, load_scan

MODULES = [{"source": "a.ts", "dependencies": [{"resolved": "b.ts"}]}]


def test_extract_modules_from_envelope() -> None:
    result = extract_modules(
        {
            "version": 1,
            "generatedAt": "2024-01-01T00:00:00Z",
            "workspaceRoot": "/work/repo",
            "depcruise": {"modules": MODULES},
        }
    )

    assert result.modules == MODULES
    assert result.generated_at == "2024-01-01T00:00:00Z"
    assert result.workspace_root == "/work/repo"


def test_extract_modules_from_bare_report_and_list() -> None:
    assert extract_modules({"modules": MODULES}).modules == MODULES
    assert extract_modules(MODULES).modules == MODULES
    assert extract_modules(MODULES).workspace_root is None


def test_extract_modules_without_module_list() -> None:
    with pytest.raises(MalformedScanError):
        extract_modules({"depcruise": {"summary": {}}})
    with pytest.raises(MalformedScanError):
        extract_modules("modules")


def test_load_scan_reads_file(tmp_path) -> None:
    path = tmp_path / "deps.json"
    path.write_text(json.dumps({"depcruise": {"modules": MODULES}}), encoding="utf-8")

    assert load_scan(path).modules == MODULES


def test_load_scan_missing_file(tmp_path) -> None:
    with pytest.raises(ScanReadError):
        load_scan(tmp_path / "missing.json")


def test_load_scan_invalid_json(tmp_path) -> None:
    path = tmp_path / "deps.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(MalformedScanError):
        load_scan(path)


def test_load_scan_notes_large_files(tmp_path, monkeypatch, caplog) -> None:
    path = tmp_path / "deps.json"
    path.write_text(json.dumps(MODULES), encoding="utf-8")
    monkeypatch.setattr(scan, "LARGE_SCAN_BYTES", 10)

    with caplog.at_level(logging.INFO, logger="depwalk.scan"):
        load_scan(path)

    assert "very large" in caplog.text
