"""CSV rendering of a parsed script.

Each row carries the turn's position in the script (``Dialogue ID``), the
zero-based source line the turn starts on, the speaker and the dialogue.
"""

from __future__ import annotations

import csv
from typing import TextIO

from script_parser.models.script import Script

CSV_HEADER = ["Dialogue ID", "Line Number", "Speaker", "Dialogue"]


def _physical_lines(text: str) -> list[str]:
    # A trailing newline does not start another line; "" has no lines.
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def script_to_rows(script: Script, split_at_newline: bool = False) -> list[list[str]]:
    """Return the header row followed by one row per turn.

    With *split_at_newline*, a multi-line turn produces one row per line,
    each repeating the turn's id and first line number.
    """
    rows = [list(CSV_HEADER)]
    for dialogue_id, turn in enumerate(script.turns):
        chunks = _physical_lines(turn.text) if split_at_newline else [turn.text]
        for chunk in chunks:
            rows.append([str(dialogue_id), str(turn.first_line_number), turn.speaker, chunk])
    return rows


def write_csv(script: Script, stream: TextIO, split_at_newline: bool = False) -> None:
    """Write *script* to *stream* as CSV."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerows(script_to_rows(script, split_at_newline))
