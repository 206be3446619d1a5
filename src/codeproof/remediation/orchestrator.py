"""End-to-end secret remediation run.

``run_move_secret`` sequences the stages under a confirmation gate:

    LOAD_REPORT -> FILTER -> CONFIRM -> PROCESS_ITEMS -> PERSIST_ENTRIES -> SUMMARIZE

It never terminates the process. Early exits come back as a
``RemediationSummary`` with a non-``completed`` status and the CLI maps
statuses to exit codes. Nothing is written before the gate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from codeproof.config import CodeproofConfig
from codeproof.constants.remediation import CONFIRM_QUESTION, ENV_WRITE_LOCATION
from codeproof.exceptions import EnvWriteFailure, RemediationError, ReportMissing
from codeproof.model import EligibleFinding, EnvEntry, RemediationResult, RemediationSummary, Report
from codeproof.remediation.backup import backup_file_once
from codeproof.remediation.context import RemediationContext
from codeproof.remediation.eligibility import EligibilityResult, filter_eligible
from codeproof.remediation.env_store import KeyAllocator, append_env_entries, ensure_env_file, read_env_keys
from codeproof.remediation.report_loader import load_latest_report, load_report
from codeproof.remediation.rewriter import capture_secret, replace_secret_in_file
from codeproof.types import RunStatus
from codeproof.utils import display_path

logger = logging.getLogger(__name__)

ConfirmFn: TypeAlias = Callable[[str], bool]


def run_move_secret(
    root: Path,
    *,
    config: CodeproofConfig,
    confirm: ConfirmFn,
    assume_yes: bool = False,
    report_path: Path | None = None,
) -> RemediationSummary:
    """Move eligible hard-coded secrets from ``root`` into its env store.

    Raises ``ReportMalformed`` when the report has the wrong shape; every
    per-finding failure is collected into the summary instead.
    """
    root = root.resolve()
    backup_root = config.backup_path(root)
    env_path = config.env_path(root)

    if not config.secret_remediation:
        logger.info("Secret remediation is disabled in configuration.")
        return RemediationSummary(status="disabled")

    try:
        report = load_report(report_path) if report_path is not None else load_latest_report(config.reports_path(root))
    except ReportMissing as exc:
        logger.warning("%s", exc)
        return RemediationSummary(status="no_report")

    selection = filter_eligible(
        report.findings,
        root=root,
        excluded_dirs=config.exclude_dirs,
        protected_paths=(env_path.resolve(),),
    )
    if not selection.eligible:
        logger.info("No eligible high-confidence secrets to move.")
        return _early_summary("nothing_eligible", report, selection)

    _log_preview(selection.eligible, root)
    if not assume_yes and not confirm(CONFIRM_QUESTION):
        logger.info("No changes made.")
        return _early_summary("declined", report, selection)

    try:
        ensure_env_file(env_path)
        existing_keys = read_env_keys(env_path)
    except (EnvWriteFailure, OSError, UnicodeDecodeError) as exc:
        # Key uniqueness depends on the existing key set; process nothing.
        logger.error("Unable to prepare env store %s: %s", env_path, exc)
        context = RemediationContext(root=root, backup_root=backup_root, keys=KeyAllocator(config.env_key_prefix))
        context.record_error(ENV_WRITE_LOCATION, f"unable to prepare {env_path.name}: {exc}")
        return _build_summary(context, report, selection, env_path, processed=0)

    context = RemediationContext(
        root=root,
        backup_root=backup_root,
        keys=KeyAllocator(config.env_key_prefix, existing_keys),
    )

    for item in selection.eligible:
        _process_finding(item, context, config)

    if context.entries:
        try:
            append_env_entries(env_path, context.entries)
        except RemediationError as exc:
            logger.warning("%s", exc)
            context.record_error(ENV_WRITE_LOCATION, str(exc))

    return _build_summary(context, report, selection, env_path)


def _process_finding(item: EligibleFinding, context: RemediationContext, config: CodeproofConfig) -> None:
    """Backup, capture and rewrite a single finding, recording the outcome."""
    path = item.absolute_path
    location = f"{display_path(path, context.root)}:{item.line_number}"

    try:
        backup_file_once(path, context)
        expected_value = capture_secret(path, item.line_number)
        env_key = context.keys.peek()
        result = replace_secret_in_file(
            path=path,
            line_number=item.line_number,
            env_key=env_key,
            expected_snippet=item.code_snippet,
            expected_value=expected_value,
            reference_template=config.reference_template_for(path),
        )
    except RemediationError as exc:
        logger.debug("Failed %s: %s", location, exc)
        context.record_error(location, str(exc))
        return

    context.record_move(path, EnvEntry(key=env_key, value=result.secret_value), location)
    logger.info("Updated %s -> %s (key %s)", location, result.reference, env_key)


def _log_preview(eligible: tuple[EligibleFinding, ...], root: Path) -> None:
    logger.info("Eligible secrets preview:")
    for item in eligible:
        logger.info("- %s:%d", display_path(item.absolute_path, root), item.line_number)
    logger.info("Secrets to move: %d", len(eligible))


def _skip_results(selection: EligibilityResult) -> tuple[RemediationResult, ...]:
    return tuple(
        RemediationResult(kind="skipped", location=rejection.finding.location, reason=rejection.reason)
        for rejection in selection.skipped_secrets
    )


def _early_summary(status: RunStatus, report: Report, selection: EligibilityResult) -> RemediationSummary:
    return RemediationSummary(status=status, results=_skip_results(selection), report_path=report.path)


def _build_summary(
    context: RemediationContext,
    report: Report,
    selection: EligibilityResult,
    env_path: Path,
    *,
    processed: int | None = None,
) -> RemediationSummary:
    return RemediationSummary(
        status="completed",
        processed=len(selection.eligible) if processed is None else processed,
        moved=context.moved_count,
        files_modified=tuple(context.modified_files),
        backup_root=context.backup_root,
        env_path=env_path,
        backups=tuple(context.backups),
        results=(*context.results, *_skip_results(selection)),
        report_path=report.path,
    )
