"""Tests for verified line-scoped secret substitution."""

from __future__ import annotations

import os
import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from codeproof.exceptions import ExtractionFailure, FileReadError, StaleLine
from codeproof.remediation.rewriter import (
    capture_secret,
    read_source_lines,
    replace_secret_in_file,
    snippet_matches,
)

SOURCE = 'import x from "y";\nconst API_KEY = "sk-12345";\nexport default API_KEY;\n'


def test_replace_rewrites_only_the_literal(repo_root: Path, write_source: Callable[[str, str], Path]) -> None:
    path = write_source("src/config.js", SOURCE)

    result = replace_secret_in_file(
        path=path,
        line_number=2,
        env_key="CODEPROOF_SECRET_1",
        expected_snippet='const API_KEY = "sk-12345";',
        expected_value="sk-12345",
    )

    assert result.updated
    assert result.secret_value == "sk-12345"
    assert result.reference == "process.env.CODEPROOF_SECRET_1"
    assert path.read_text(encoding="utf-8") == (
        'import x from "y";\nconst API_KEY = process.env.CODEPROOF_SECRET_1;\nexport default API_KEY;\n'
    )


def test_replace_uses_reference_template(repo_root: Path, write_source: Callable[[str, str], Path]) -> None:
    path = write_source("app/settings.py", "DEBUG = True\nSECRET = 'django-insecure'\n")

    replace_secret_in_file(
        path=path,
        line_number=2,
        env_key="CODEPROOF_SECRET_4",
        expected_snippet="SECRET = 'django-insecure'",
        expected_value="django-insecure",
        reference_template='os.environ["{key}"]',
    )

    assert path.read_text(encoding="utf-8") == 'DEBUG = True\nSECRET = os.environ["CODEPROOF_SECRET_4"]\n'


def test_replace_preserves_crlf_and_missing_final_newline(
    repo_root: Path,
    write_source: Callable[[str, str], Path],
) -> None:
    path = write_source("a.yml", "name: app\r\ntoken: abc123")

    replace_secret_in_file(
        path=path,
        line_number=2,
        env_key="K_1",
        expected_snippet="token: abc123",
        expected_value="abc123",
        reference_template="${key}",
    )

    assert path.read_bytes() == b"name: app\r\ntoken: ${K_1}"


@pytest.mark.parametrize(
    ("line_number", "snippet", "value", "message"),
    [
        pytest.param(9, 'const API_KEY = "sk-12345";', "sk-12345", "no longer exists", id="line-gone"),
        pytest.param(2, 'const API_KEY = "sk-OLD";', "sk-12345", "snippet", id="snippet-changed"),
        pytest.param(2, 'const API_KEY = "sk-12345";', "sk-other", "differs", id="value-changed"),
        pytest.param(1, 'import x from "y";', "y", "no longer present", id="no-assignment"),
        pytest.param(
            2,
            'export const API_KEY = "sk-12345"; // rotated',
            "sk-12345",
            "snippet",
            id="line-inside-longer-snippet",
        ),
        pytest.param(
            2,
            '// keys\nconst API_KEY = "sk-OLD";\nexport default API_KEY;',
            "sk-12345",
            "snippet",
            id="context-snippet-line-changed",
        ),
    ],
)
def test_replace_stale_line_leaves_file_untouched(
    repo_root: Path,
    write_source: Callable[[str, str], Path],
    line_number: int,
    snippet: str,
    value: str,
    message: str,
) -> None:
    path = write_source("src/config.js", SOURCE)
    before = path.read_bytes()

    with pytest.raises(StaleLine, match=message):
        replace_secret_in_file(
            path=path,
            line_number=line_number,
            env_key="CODEPROOF_SECRET_1",
            expected_snippet=snippet,
            expected_value=value,
        )

    assert path.read_bytes() == before


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_replace_preserves_permission_bits(repo_root: Path, write_source: Callable[[str, str], Path]) -> None:
    path = write_source("deploy.sh", "TOKEN=abc\n")
    path.chmod(0o750)

    replace_secret_in_file(
        path=path,
        line_number=1,
        env_key="K_1",
        expected_snippet="TOKEN=abc",
        expected_value="abc",
        reference_template="${key}",
    )

    assert stat.S_IMODE(path.stat().st_mode) == 0o750
    assert path.read_text(encoding="utf-8") == "TOKEN=${K_1}\n"


def test_capture_secret_reads_current_line(repo_root: Path, write_source: Callable[[str, str], Path]) -> None:
    path = write_source("src/config.js", SOURCE)

    assert capture_secret(path, 2) == "sk-12345"


def test_capture_secret_without_assignment_fails(repo_root: Path, write_source: Callable[[str, str], Path]) -> None:
    path = write_source("src/config.js", SOURCE)

    with pytest.raises(ExtractionFailure):
        capture_secret(path, 3)


def test_read_source_lines_missing_file(repo_root: Path) -> None:
    with pytest.raises(FileReadError, match="unable to read file"):
        read_source_lines(repo_root / "nope.js")


def test_read_source_lines_rejects_binary(repo_root: Path) -> None:
    path = repo_root / "blob.bin"
    path.write_bytes(b"\xff\xfe\x00KEY=1")

    with pytest.raises(FileReadError):
        read_source_lines(path)


def test_snippet_matches_normalizes_whitespace() -> None:
    assert snippet_matches('  const KEY   =  "a";', 'const KEY = "a";')
    assert snippet_matches('KEY = "a"', '// config\nKEY = "a"\n// end')
    assert not snippet_matches('KEY = "b"', 'KEY = "a"')
    assert not snippet_matches("", 'KEY = "a"')
    assert not snippet_matches("password: hunter2", "db_password: hunter2-prod-xyz")
    assert not snippet_matches('KEY = "a"', 'export KEY = "a" // prod')
    assert snippet_matches('KEY = "sk-live-1"', 'KEY = "sk-****"')


@pytest.mark.parametrize(
    ("content", "snippet", "value"),
    [
        pytest.param("password: hunter2\n", "db_password: hunter2-prod-xyz", "hunter2", id="different-key-and-value"),
        pytest.param("token: abc123\n", "token: abc", "abc123", id="recorded-value-differs"),
    ],
)
def test_replace_refuses_line_that_differs_from_recorded_finding(
    repo_root: Path,
    write_source: Callable[[str, str], Path],
    content: str,
    snippet: str,
    value: str,
) -> None:
    path = write_source("config/db.yml", content)

    with pytest.raises(StaleLine):
        replace_secret_in_file(
            path=path,
            line_number=1,
            env_key="K1",
            expected_snippet=snippet,
            expected_value=value,
            reference_template="${key}",
        )

    assert path.read_text(encoding="utf-8") == content


def test_replace_rewrites_value_not_type_annotation(
    repo_root: Path, write_source: Callable[[str, str], Path]
) -> None:
    path = write_source("src/client.ts", 'const apiKey: string = "sk-live-abc";\n')

    result = replace_secret_in_file(
        path=path,
        line_number=1,
        env_key="CODEPROOF_SECRET_1",
        expected_snippet='const apiKey: string = "sk-live-abc";',
        expected_value="sk-live-abc",
    )

    assert result.secret_value == "sk-live-abc"
    assert path.read_text(encoding="utf-8") == "const apiKey: string = process.env.CODEPROOF_SECRET_1;\n"


@pytest.mark.parametrize(
    "snippet",
    [
        pytest.param('const API_KEY = "sk-****";', id="masked-snippet"),
        pytest.param('import x from "y";\nconst API_KEY = "sk-12345";\nexport default API_KEY;', id="context-snippet"),
    ],
)
def test_replace_accepts_masked_or_context_snippets(
    repo_root: Path, write_source: Callable[[str, str], Path], snippet: str
) -> None:
    path = write_source("src/config.js", SOURCE)

    result = replace_secret_in_file(
        path=path,
        line_number=2,
        env_key="CODEPROOF_SECRET_1",
        expected_snippet=snippet,
        expected_value="sk-12345",
    )

    assert result.new_line == "const API_KEY = process.env.CODEPROOF_SECRET_1;"
