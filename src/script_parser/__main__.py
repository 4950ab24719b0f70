"""Entry point for ``python -m script_parser``.

Parses a transcript and either renders it as CSV or searches it.  Uses
stdlib :mod:`argparse` for argument parsing.

Subcommands:
    csv    -- Write the parsed script as CSV.
    search -- Print the first turn matching a query.

Pattern options given on the command line override the ``SCRIPT_*``
environment settings.

Exit codes:
    0 -- Completed successfully (including a search with no match).
    1 -- An error occurred (file not found, unreadable, bad pattern).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import dataclasses
import re
import sys
from pathlib import Path

from script_parser.config import ConfigError, Settings, load_settings
from script_parser.exceptions import TranscriptReadError
from script_parser.log import get_logger, setup_logging
from script_parser.matching import (
    Comparator,
    Simplifier,
    alphabet_only,
    compose_simplifiers,
    create_fuzzy_comparator,
    create_search_function,
    create_wildcard_comparator,
    exact_match,
    ignore_case,
    subset_match,
)
from script_parser.models.script import NON_SPEAKER, Script
from script_parser.parser import load_transcript_file
from script_parser.render import write_csv

logger = get_logger(__name__)

_SEARCH_MODES = ("exact", "subset", "wildcard", "fuzzy")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "transcript_file",
        type=str,
        help="Path to the transcript file.",
    )
    parser.add_argument("--prefix", default=None, help="Pattern before the speaker name.")
    parser.add_argument("--speaker", default=None, help="Pattern matching the speaker name.")
    parser.add_argument(
        "--postfix",
        default=None,
        help="Pattern between the speaker name and the dialogue.",
    )
    parser.add_argument(
        "--multi-line",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=(
            "Merge lines that do not start a turn into the previous turn "
            "(default: SCRIPT_MULTI_LINE)."
        ),
    )
    parser.add_argument(
        "--non-dialogue",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Pattern for lines that interrupt a multi-line turn (repeatable).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="script-parser",
        description="Split a transcript into speaker turns and search them.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- "csv" subcommand ---------------------------------------------
    csv_parser = subparsers.add_parser("csv", help="Write the parsed script as CSV.")
    _add_common_arguments(csv_parser)
    csv_parser.add_argument(
        "--split-lines",
        action="store_true",
        default=False,
        help="Write one row per physical line of a multi-line turn.",
    )
    csv_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="File to write to (default: stdout).",
    )

    # --- "search" subcommand ------------------------------------------
    search_parser = subparsers.add_parser("search", help="Print the first turn matching a query.")
    _add_common_arguments(search_parser)
    search_parser.add_argument("query", help="Text to look for.")
    search_parser.add_argument(
        "--mode",
        choices=_SEARCH_MODES,
        default="subset",
        help="How the query is compared with each turn (default: subset).",
    )
    search_parser.add_argument(
        "--ignore-case",
        action="store_true",
        default=False,
        help="Compare case-insensitively.",
    )
    search_parser.add_argument(
        "--alpha-only",
        action="store_true",
        default=False,
        help="Compare letters only, ignoring spaces, digits and punctuation.",
    )
    search_parser.add_argument(
        "--wildcard",
        default=None,
        help="Wildcard marker pattern for --mode wildcard (default: SCRIPT_WILDCARD).",
    )
    search_parser.add_argument(
        "--threshold",
        type=float,
        default=90.0,
        help="Minimum score (0-100) for --mode fuzzy (default: 90).",
    )

    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return *settings* with any pattern options from *args* applied."""
    overrides: dict[str, object] = {}
    for name in ("prefix", "speaker", "postfix", "multi_line", "wildcard"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    if args.non_dialogue is not None:
        overrides["non_dialogue"] = tuple(args.non_dialogue)
    return dataclasses.replace(settings, **overrides)  # type: ignore[arg-type]


def _load_script(args: argparse.Namespace, settings: Settings) -> Script | None:
    """Parse the transcript named in *args*, printing errors to stderr."""
    try:
        patterns = settings.dialogue_patterns()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None

    transcript_path = Path(args.transcript_file)
    if transcript_path.exists() and not transcript_path.is_file():
        print(f"Error: Not a file: {transcript_path}", file=sys.stderr)
        return None

    try:
        return load_transcript_file(transcript_path, patterns)
    except (FileNotFoundError, PermissionError, TranscriptReadError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _handle_csv(args: argparse.Namespace, settings: Settings) -> int:
    """Execute the ``csv`` subcommand."""
    script = _load_script(args, settings)
    if script is None:
        return 1

    if args.output is None:
        write_csv(script, sys.stdout, split_at_newline=args.split_lines)
        return 0

    try:
        with open(args.output, "w", encoding="utf-8", newline="") as f:
            write_csv(script, f, split_at_newline=args.split_lines)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.info("Wrote %d turns to %s", len(script.turns), args.output)
    return 0


def _handle_search(args: argparse.Namespace, settings: Settings) -> int:
    """Execute the ``search`` subcommand.

    Outside wildcard mode the query goes through the same simplifiers as
    the dialogue.  Wildcard queries are only uppercased for
    ``--ignore-case``; ``--alpha-only`` would strip the markers.
    """
    script = _load_script(args, settings)
    if script is None:
        return 1

    simplifiers: list[Simplifier] = []
    if args.ignore_case:
        simplifiers.append(ignore_case)
    if args.alpha_only:
        simplifiers.append(alphabet_only)

    query = args.query
    comparator: Comparator
    if args.mode == "wildcard":
        try:
            comparator = create_wildcard_comparator(settings.wildcard)
        except re.error as exc:
            print(f"Error: Invalid wildcard pattern {settings.wildcard!r}: {exc}", file=sys.stderr)
            return 1
        if args.ignore_case:
            query = ignore_case(query)
    else:
        query = compose_simplifiers(simplifiers)(query)
        if args.mode == "exact":
            comparator = exact_match
        elif args.mode == "subset":
            comparator = subset_match
        else:
            try:
                comparator = create_fuzzy_comparator(args.threshold)
            except ValueError as exc:
                print(f"Error: {exc}", file=sys.stderr)
                return 1

    search = create_search_function(script, comparator, *simplifiers)
    found, turn = search(query)
    if not found or turn is None:
        print("No match found.")
        return 0

    speaker = turn.speaker if turn.speaker != NON_SPEAKER else "-"
    print(f"[{turn.first_line_number}] {speaker}: {turn.text}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the script-parser CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = _apply_overrides(load_settings(), args)
        setup_logging("DEBUG" if args.verbose else settings.log_level)
    except (ConfigError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "csv":
        return _handle_csv(args, settings)
    return _handle_search(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
