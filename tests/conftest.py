"""Shared pytest fixtures for throwaway repositories and scan reports."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeAlias

import pytest

FindingFactory: TypeAlias = Callable[..., dict[str, Any]]
ReportWriter: TypeAlias = Callable[..., Path]


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Return an empty repository root containing a ``.git`` marker."""
    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    return root.resolve()


@pytest.fixture
def make_finding() -> FindingFactory:
    """Return a factory for report finding payloads with eligible defaults."""

    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "findingId": "f-1",
            "ruleId": "secret.generic_api_key",
            "severity": "block",
            "confidence": 0.95,
            "filePath": "src/config.js",
            "lineNumber": 1,
            "codeSnippet": 'const API_KEY = "sk-12345";',
            "explanation": "Hard-coded API key",
        }
        payload.update(overrides)
        return {key: value for key, value in payload.items() if value is not None}

    return _make


@pytest.fixture
def write_report(repo_root: Path) -> ReportWriter:
    """Return a helper that persists a report under ``.codeproof/reports``."""

    def _write(findings: list[dict[str, Any]] | None, *, name: str = "report-1.json", **metadata: Any) -> Path:
        reports_dir = repo_root / ".codeproof" / "reports"
        reports_dir.mkdir(parents=True, exist_ok=True)
        body: dict[str, Any] = {} if findings is None else {"findings": findings}
        document = {"projectId": "proj-1", **metadata, "report": body}
        path = reports_dir / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_source(repo_root: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes a source file relative to the repository root."""

    def _write(relative: str, content: str) -> Path:
        path = repo_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write
