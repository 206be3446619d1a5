"""Locate and validate persisted scan reports."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from codeproof.exceptions import ReportMalformed, ReportMissing
from codeproof.io import load_json_file
from codeproof.model import Finding, Report

logger = logging.getLogger(__name__)


def find_latest_report(reports_dir: Path) -> Path:
    """Return the newest ``*.json`` report, by mtime then name."""
    if not reports_dir.is_dir():
        raise ReportMissing(f"No reports directory at {reports_dir}. Run a scan first.")

    candidates: list[tuple[int, str, Path]] = []
    for path in reports_dir.glob("*.json"):
        if not path.is_file():
            continue
        try:
            mtime_ns = path.stat().st_mtime_ns
        except OSError as exc:
            logger.warning("Skipping unreadable report %s: %s", path, exc)
            continue
        candidates.append((mtime_ns, path.name, path))

    if not candidates:
        raise ReportMissing(f"No reports found in {reports_dir}. Run a scan first.")
    return max(candidates)[2]


def load_latest_report(reports_dir: Path) -> Report:
    """Load the most recent report for a repository."""
    return load_report(find_latest_report(reports_dir))


def load_report(path: Path) -> Report:
    """Parse a report file into a validated ``Report``.

    The whole report is rejected when its structure is wrong: there is no
    partial loading of individual findings.
    """
    if not path.is_file():
        raise ReportMissing(f"Report file not found: {path}")

    try:
        document = load_json_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ReportMalformed(f"Unable to read report {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ReportMalformed(f"Report {path} is not valid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise ReportMalformed(f"Report {path} must be a JSON object")

    body = document.get("report")
    if not isinstance(body, dict):
        raise ReportMalformed(f"Report {path} has no 'report' object")

    raw_findings = body.get("findings")
    if not isinstance(raw_findings, list):
        raise ReportMalformed(f"Report {path} has no findings array")

    findings = tuple(Finding.from_dict(raw, index) for index, raw in enumerate(raw_findings))
    metadata = {key: value for key, value in document.items() if key != "report"}
    logger.debug("Loaded %d findings from %s", len(findings), path)
    return Report(path=path, findings=findings, metadata=metadata)
