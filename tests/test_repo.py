"""Tests for repository root discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from codeproof.exceptions import ConfigError
from codeproof.repo import find_repository_root


def test_finds_root_from_nested_directory(repo_root: Path) -> None:
    nested = repo_root / "src" / "pkg"
    nested.mkdir(parents=True)

    assert find_repository_root(nested) == repo_root


def test_finds_root_from_file(repo_root: Path) -> None:
    source = repo_root / "app.js"
    source.write_text("", encoding="utf-8")

    assert find_repository_root(source) == repo_root


def test_git_file_marker_counts(tmp_path: Path) -> None:
    worktree = tmp_path / "worktree"
    worktree.mkdir()
    (worktree / ".git").write_text("gitdir: /elsewhere\n", encoding="utf-8")

    assert find_repository_root(worktree) == worktree.resolve()


def test_outside_repository_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    lonely = tmp_path / "lonely"
    lonely.mkdir()
    monkeypatch.setattr(Path, "exists", lambda self: False)

    with pytest.raises(ConfigError, match="--root"):
        find_repository_root(lonely)
