"""CLI entrypoint for Codeproof."""

from __future__ import annotations

import argparse
import functools
import logging
import sys
from pathlib import Path

from codeproof import __version__
from codeproof.cli.prompt import prompt_yes_no
from codeproof.config import load_config
from codeproof.constants.branding import CLI_DESCRIPTION
from codeproof.exceptions import CodeproofError, ConfigError, ReportMalformed
from codeproof.remediation import run_move_secret
from codeproof.reporting import SummaryReporter
from codeproof.repo import find_repository_root


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="codeproof",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    move = subparsers.add_parser(
        "move-secret",
        help="Move hard-coded secrets from the latest scan report into the env file",
    )
    move.add_argument(
        "-r",
        "--root",
        type=Path,
        default=None,
        help="Repository root (default: nearest directory containing .git)",
    )
    move.add_argument("-c", "--config", type=Path, help="Explicit config file")
    move.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Report file to use instead of the latest one in the reports directory",
    )
    move.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Skip the confirmation prompt (non-interactive use)",
    )
    move.add_argument(
        "--fail-on-errors",
        action="store_true",
        help="Exit with status 1 when any finding could not be moved",
    )
    move.add_argument("--no-color", action="store_true", help="Disable colored output")
    move.add_argument("-v", "--verbose", action="store_true", help="Show skipped findings and diagnostics")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    if args.command != "move-secret":
        parser.error(f"Unsupported command: {args.command}")

    return _handle_move_secret(args)


def _handle_move_secret(args: argparse.Namespace) -> int:
    """Run the secret remediation pipeline and print its summary."""
    try:
        root = args.root.resolve() if args.root is not None else find_repository_root(Path.cwd())
        if not root.is_dir():
            raise ConfigError(f"Repository root does not exist or is not a directory: {root}")
        config = load_config(root, args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    verbose = args.verbose or config.verbose
    if config.verbose and not args.verbose:
        logging.getLogger("codeproof").setLevel(logging.DEBUG)

    try:
        summary = run_move_secret(
            root,
            config=config,
            confirm=functools.partial(prompt_yes_no, read=input),
            assume_yes=args.yes,
            report_path=args.report.resolve() if args.report is not None else None,
        )
    except ReportMalformed as exc:
        print(f"Invalid report: {exc}", file=sys.stderr)
        return 1
    except CodeproofError as exc:
        print(f"Remediation error: {exc}", file=sys.stderr)
        return 1

    use_color = not args.no_color and sys.stdout.isatty()
    rendered = SummaryReporter(summary, root=root, color=use_color, verbose=verbose).render()
    if rendered:
        print(rendered)

    if args.fail_on_errors and summary.has_errors:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
