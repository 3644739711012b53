"""Command-line interface implementation for the triage tooling."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence, TextIO

from ..adapters import PresetDialogs, ProgressFile
from ..config import TriageConfig, load_config
from ..errors import TriageError
from ..logging_config import setup_logging
from ..models import Bucket
from ..session import TriageHost
from ..store import TriageStore
from ..view import TriageView, build_view, render_table
from .stdio import line_writer, serve

logger = logging.getLogger(__name__)

BUCKET_CHOICES = [bucket.value for bucket in Bucket]


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="semgrep-triage", description="Triage Semgrep findings into issues and false positives"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML settings file. Defaults to .semgrep-triage.yaml when present.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level for messages written to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    open_parser = subparsers.add_parser(
        "open", help="Open a Semgrep results file and start a triage session on stdin/stdout."
    )
    open_parser.add_argument("results", type=Path, help="Semgrep JSON output containing a 'results' array.")
    _add_progress_argument(open_parser)

    empty_parser = subparsers.add_parser(
        "empty", help="Start an empty triage session, e.g. to resume saved progress."
    )
    _add_progress_argument(empty_parser)

    show_parser = subparsers.add_parser("show", help="Display a saved triage progress file.")
    show_parser.add_argument("progress", type=Path, help="Path to the triage progress JSON file.")
    show_parser.add_argument(
        "--bucket",
        dest="buckets",
        action="append",
        choices=BUCKET_CHOICES,
        default=None,
        help="Only show the given bucket. May be repeated.",
    )
    show_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format.",
    )

    move_parser = subparsers.add_parser("move", help="Move one finding between buckets of a progress file.")
    move_parser.add_argument("progress", type=Path, help="Path to the triage progress JSON file.")
    move_parser.add_argument("id", help="Identifier of the finding, e.g. item-3.")
    move_parser.add_argument("--from", dest="source", required=True, choices=BUCKET_CHOICES)
    move_parser.add_argument("--to", dest="target", required=True, choices=BUCKET_CHOICES)

    return parser


def _add_progress_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--progress",
        type=Path,
        default=None,
        help="Progress file used when the display surface saves or loads without a path.",
    )


# ----------------------------------------------------------------------
def view_to_dict(view: TriageView, buckets: Sequence[Bucket] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"counts": {}, "buckets": {}}
    for bucket_view in view.buckets:
        if buckets is not None and bucket_view.bucket not in buckets:
            continue
        key = bucket_view.bucket.value
        payload["counts"][key] = bucket_view.count
        payload["buckets"][key] = [
            {
                "id": row.finding.id,
                "check_id": row.finding.check_id,
                "message": row.finding.message,
                "severity": row.finding.severity.value,
                "path": row.finding.path,
                "line": row.finding.start.line,
                "col": row.finding.start.col,
                "lines": row.finding.lines,
                "actions": [action.value for action in row.actions],
            }
            for row in bucket_view.rows
        ]
    return payload


def _load_store(path: Path, config: TriageConfig) -> TriageStore:
    store = TriageStore(strict=config.strict_progress)
    store.deserialize(ProgressFile(path).read())
    return store


def _handle_session(args: argparse.Namespace, config: TriageConfig, stdin: TextIO, stdout: TextIO) -> int:
    progress = args.progress.resolve() if args.progress else None
    dialogs = PresetDialogs(save_path=progress, open_path=progress)
    host = TriageHost(line_writer(stdout), config=config, dialogs=dialogs)

    try:
        if args.command == "open":
            host.open_results(args.results)
        else:
            host.open_empty()
    except TriageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        serve(host, stdin)
    finally:
        host.dispose()
    return 0


def _handle_show(args: argparse.Namespace, config: TriageConfig) -> int:
    try:
        store = _load_store(args.progress, config)
    except TriageError as exc:
        print(f"Error: {exc}")
        return 2

    view = build_view(store.state)
    buckets = [Bucket(name) for name in args.buckets] if args.buckets else None
    if args.format == "json":
        print(json.dumps(view_to_dict(view, buckets=buckets), indent=2))
    else:
        print(render_table(view, buckets=buckets))
    return 0


def _handle_move(args: argparse.Namespace, config: TriageConfig) -> int:
    progress = ProgressFile(args.progress)
    try:
        store = _load_store(args.progress, config)
        source_ids = [record.get("id") for record in store.state.bucket(Bucket(args.source))]
        if args.id not in source_ids:
            print(f"No finding {args.id} in {args.source}; nothing changed.")
            return 0
        store.move(args.id, args.source, args.target)
        progress.write(store.serialize())
    except TriageError as exc:
        print(f"Error: {exc}")
        return 2

    print(f"Moved {args.id} from {args.source} to {args.target}.")
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except TriageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    setup_logging(args.log_level or config.log_level)
    logger.debug("Using configuration %s", config)

    if args.command in ("open", "empty"):
        return _handle_session(args, config, stdin or sys.stdin, stdout or sys.stdout)
    if args.command == "show":
        return _handle_show(args, config)
    if args.command == "move":
        return _handle_move(args, config)

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
