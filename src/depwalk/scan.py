"""Read dependency-scanner output from disk.

The scanner writes JSON in one of three shapes, all accepted here:

* the wrapped envelope ``{"version", "generatedAt", "workspaceRoot",
  "depcruise": {"modules": [...]}}``
* the scanner's bare report ``{"modules": [...]}``
* a bare list of module records
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import MalformedScanError, ScanReadError

logger = logging.getLogger(__name__)

LARGE_SCAN_BYTES = 5 * 1024 * 1024


@dataclass(slots=True)
class ScanResult:
    modules: List[Any] = field(default_factory=list)
    generated_at: Optional[str] = None
    workspace_root: Optional[str] = None


def extract_modules(payload: Any) -> ScanResult:
    """Pull the module record list (and envelope metadata) out of a parsed payload.

    Raises
    ------
    MalformedScanError
        When no module list can be found.
    """
    if isinstance(payload, list):
        return ScanResult(modules=payload)
    if not isinstance(payload, dict):
        raise MalformedScanError(f"Scan payload must be an object or list, got {type(payload).__name__}")

    generated_at = payload.get("generatedAt")
    workspace_root = payload.get("workspaceRoot")
    report: Dict[str, Any] = payload.get("depcruise") if isinstance(payload.get("depcruise"), dict) else payload
    modules = report.get("modules")
    if not isinstance(modules, list):
        raise MalformedScanError("Scan payload has no 'modules' list")

    return ScanResult(
        modules=modules,
        generated_at=generated_at if isinstance(generated_at, str) else None,
        workspace_root=workspace_root if isinstance(workspace_root, str) else None,
    )


def load_scan(path: Path) -> ScanResult:
    """Load and unwrap a scan file.

    Raises
    ------
    ScanReadError
        The file is missing or unreadable.
    MalformedScanError
        The file is not valid JSON or holds no module list.
    """
    try:
        size = path.stat().st_size
        if size > LARGE_SCAN_BYTES:
            logger.info(
                "Dependency file is very large (%.1fMB); building the graph may take a moment",
                size / (1024 * 1024),
            )
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScanReadError(f"Could not read dependency data from {path}: {exc}") from exc

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedScanError(f"Could not parse dependency data in {path}: {exc}") from exc

    result = extract_modules(payload)
    logger.debug("Loaded %d module records from %s", len(result.modules), path)
    return result
