"""Tests for CSV rendering."""

from __future__ import annotations

import io

from script_parser.models.script import NON_SPEAKER, RawLine, build_script
from script_parser.render import CSV_HEADER, script_to_rows, write_csv


def _sample_script():
    return build_script(
        [
            RawLine(speaker="ALICE", text="hi\nthere", line_numbers=[0, 1]),
            RawLine(speaker=NON_SPEAKER, text="(beat)", line_numbers=[2]),
            RawLine(speaker="BOB", text="yo, hey", line_numbers=[3]),
        ]
    )


class TestScriptToRows:
    """Row layout."""

    def test_one_row_per_turn(self) -> None:
        rows = script_to_rows(_sample_script())

        assert rows == [
            CSV_HEADER,
            ["0", "0", "ALICE", "hi\nthere"],
            ["1", "2", "", "(beat)"],
            ["2", "3", "BOB", "yo, hey"],
        ]

    def test_split_at_newline(self) -> None:
        rows = script_to_rows(_sample_script(), split_at_newline=True)

        assert rows[1:3] == [["0", "0", "ALICE", "hi"], ["0", "0", "ALICE", "there"]]
        assert len(rows) == 5

    def test_split_drops_empty_dialogue(self) -> None:
        script = build_script([RawLine(speaker="ALICE", text="", line_numbers=[0])])

        assert script_to_rows(script, split_at_newline=True) == [CSV_HEADER]
        assert script_to_rows(script) == [CSV_HEADER, ["0", "0", "ALICE", ""]]

    def test_header_not_shared(self) -> None:
        rows = script_to_rows(_sample_script())
        rows[0].append("extra")

        assert CSV_HEADER == ["Dialogue ID", "Line Number", "Speaker", "Dialogue"]


class TestWriteCsv:
    """CSV serialisation."""

    def test_quotes_commas_and_newlines(self) -> None:
        out = io.StringIO()

        write_csv(_sample_script(), out)

        assert out.getvalue() == (
            "Dialogue ID,Line Number,Speaker,Dialogue\n"
            '0,0,ALICE,"hi\nthere"\n'
            "1,2,,(beat)\n"
            '2,3,BOB,"yo, hey"\n'
        )

    def test_split_lines(self) -> None:
        out = io.StringIO()

        write_csv(_sample_script(), out, split_at_newline=True)

        assert out.getvalue().splitlines()[1:3] == ["0,0,ALICE,hi", "0,0,ALICE,there"]
