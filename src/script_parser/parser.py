"""Transcript parser that splits raw lines into speaker turns.

Each line either starts a new turn or, with multi-line turns enabled,
continues the pending one::

    ALICE: I was thinking        -> Turn("ALICE", [0, 1], "I was thinking\\nwe could go")
    we could go
    BOB: Sure.                   -> Turn("BOB", [2], "Sure.")

Lines that do not start a turn and cannot be merged become unattributed
turns with speaker :data:`~script_parser.models.NON_SPEAKER`.
"""

from __future__ import annotations

import io
from collections.abc import Iterable
from pathlib import Path

from script_parser.exceptions import TranscriptReadError
from script_parser.log import get_logger
from script_parser.models.script import NON_SPEAKER, RawLine, Script, build_script
from script_parser.patterns import DialoguePatterns

logger = get_logger(__name__)


def parse_lines(lines: Iterable[str], patterns: DialoguePatterns) -> list[RawLine]:
    """Classify *lines* and group them into raw turns.

    Args:
        lines: Transcript lines without line terminators.
        patterns: Compiled dialogue patterns.

    Returns:
        Raw turns in input order.  Every input line index appears in
        exactly one turn.
    """
    raw_lines: list[RawLine] = []
    pending: RawLine | None = None

    for line_number, line in enumerate(lines):
        match = patterns.turn_start.match(line)

        if match:
            if pending is not None:
                raw_lines.append(pending)
            pending = RawLine(
                speaker=match.group(1),
                text=match.group(2),
                line_numbers=[line_number],
            )
        elif pending is None or not patterns.multi_line or patterns.is_non_dialogue(line):
            if pending is not None:
                raw_lines.append(pending)
            pending = RawLine(speaker=NON_SPEAKER, text=line, line_numbers=[line_number])
        else:
            pending.text += "\n" + line
            pending.line_numbers.append(line_number)

    if pending is not None:
        raw_lines.append(pending)

    return raw_lines


def _read_lines(source: Iterable[str | bytes], progress: list[int]) -> Iterable[str]:
    """Yield lines from *source* with ``\\n`` / ``\\r\\n`` stripped.

    Byte lines are decoded as UTF-8 one at a time, so a decode error is
    raised only once every earlier line has been parsed.
    """
    for raw in source:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        line = raw[:-1] if raw.endswith("\n") else raw
        if line.endswith("\r"):
            line = line[:-1]
        yield line
        progress[0] += 1


def load_transcript(
    source: Iterable[str | bytes],
    patterns: DialoguePatterns,
    name: str = "<stream>",
) -> Script:
    """Parse a transcript from a text stream or an iterable of lines.

    Args:
        source: An open text or binary file, :class:`io.StringIO` or any
            iterable of lines.  Byte lines are decoded as UTF-8 and
            trailing line terminators are removed.
        patterns: Compiled dialogue patterns.
        name: Label for the source, used in log and error messages.

    Returns:
        The parsed :class:`~script_parser.models.Script`.

    Raises:
        TranscriptReadError: If reading *source* fails part way through.
            No partial script is returned.
    """
    # Index of the last line handed to the parser, -1 before the first.
    progress = [-1]
    try:
        raw_lines = parse_lines(_read_lines(source, progress), patterns)
    except (OSError, UnicodeDecodeError) as exc:
        raise TranscriptReadError(
            f"Unable to read the entire transcript {name} (stopped after line {progress[0]}): {exc}",
            last_line=progress[0],
        ) from exc

    script = build_script(raw_lines)
    logger.debug(
        "Parsed %d lines into %d turns (%d speakers) from %s",
        progress[0] + 1,
        len(script.turns),
        len(script.speakers),
        name,
    )
    return script


def parse_transcript(text: str, patterns: DialoguePatterns) -> Script:
    """Parse an in-memory transcript string.

    Lines are split on ``\\n`` only; a trailing newline does not add an
    empty final line.
    """
    return load_transcript(io.StringIO(text), patterns, name="<string>")


def load_transcript_file(file_path: str | Path, patterns: DialoguePatterns) -> Script:
    """Parse the UTF-8 transcript file at *file_path*.

    Only ``\\n`` ends a line; a lone ``\\r`` stays part of the line text.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        TranscriptReadError: If the file cannot be read to the end.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Transcript file not found: {path}")

    with path.open("rb") as f:
        return load_transcript(f, patterns, name=str(path))
