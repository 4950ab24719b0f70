"""Tests for the script data models."""

from __future__ import annotations

import dataclasses

import pytest

from script_parser.models.script import NON_SPEAKER, RawLine, Turn, build_script


def _raw(speaker: str, text: str, *line_numbers: int) -> RawLine:
    return RawLine(speaker=speaker, text=text, line_numbers=list(line_numbers))


class TestTurn:
    """Tests for the Turn dataclass."""

    def test_first_line_number(self) -> None:
        turn = Turn(speaker="ALICE", line_numbers=(3, 4, 7), text="a\nb\nc")

        assert turn.first_line_number == 3

    def test_equality(self) -> None:
        t1 = Turn(speaker="ALICE", line_numbers=(0,), text="hi")
        t2 = Turn(speaker="ALICE", line_numbers=(0,), text="hi")

        assert t1 == t2

    def test_frozen(self) -> None:
        turn = Turn(speaker="ALICE", line_numbers=(0,), text="hi")

        with pytest.raises(dataclasses.FrozenInstanceError):
            turn.text = "bye"  # type: ignore[misc]


class TestBuildScript:
    """build_script groups raw lines into a Script."""

    def test_turns_in_input_order(self) -> None:
        script = build_script([_raw("ALICE", "hi", 0), _raw("BOB", "yo", 1), _raw("ALICE", "bye", 2)])

        assert [t.text for t in script.turns] == ["hi", "yo", "bye"]

    def test_speakers_first_appearance_order(self) -> None:
        script = build_script(
            [_raw("BOB", "a", 0), _raw("ALICE", "b", 1), _raw("BOB", "c", 2), _raw(NON_SPEAKER, "d", 3)]
        )

        assert script.speakers == ("BOB", "ALICE", NON_SPEAKER)

    def test_turns_by_speaker_is_subsequence(self) -> None:
        script = build_script([_raw("ALICE", "hi", 0), _raw("BOB", "yo", 1), _raw("ALICE", "bye", 2)])

        assert [t.text for t in script.turns_by_speaker["ALICE"]] == ["hi", "bye"]
        assert [t.text for t in script.turns_by_speaker["BOB"]] == ["yo"]
        for speaker, turns in script.turns_by_speaker.items():
            assert list(turns) == [t for t in script.turns if t.speaker == speaker]

    def test_line_numbers_become_tuples(self) -> None:
        script = build_script([_raw("ALICE", "a\nb", 0, 1)])

        assert script.turns[0].line_numbers == (0, 1)

    def test_empty(self) -> None:
        script = build_script([])

        assert script.turns == ()
        assert script.speakers == ()
        assert dict(script.turns_by_speaker) == {}


class TestScriptImmutability:
    """A built script cannot be changed through its public attributes."""

    def test_attributes_frozen(self) -> None:
        script = build_script([_raw("ALICE", "hi", 0)])

        with pytest.raises(dataclasses.FrozenInstanceError):
            script.turns = ()  # type: ignore[misc]

    def test_mapping_read_only(self) -> None:
        script = build_script([_raw("ALICE", "hi", 0)])

        with pytest.raises(TypeError):
            script.turns_by_speaker["BOB"] = ()  # type: ignore[index]

    def test_raw_line_changes_do_not_leak(self) -> None:
        raw = _raw("ALICE", "hi", 0)
        script = build_script([raw])

        raw.line_numbers.append(5)
        raw.text = "changed"

        assert script.turns[0].line_numbers == (0,)
        assert script.turns[0].text == "hi"
