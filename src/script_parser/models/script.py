"""Script data models: raw parser records, turns and the assembled script.

:class:`Turn` and :class:`Script` are frozen once built.  A script holds
tuples and a read-only mapping, so it can be shared between readers
without copying.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Speaker of a turn that no start-of-turn match attributed to anyone.
NON_SPEAKER = ""


@dataclass
class RawLine:
    """A turn as the parser accumulates it.

    Attributes:
        speaker: Captured speaker, or :data:`NON_SPEAKER`.
        text: Dialogue text; continuation lines are joined with ``\\n``.
        line_numbers: Zero-based source line indexes, ascending.
    """

    speaker: str
    text: str
    line_numbers: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Turn:
    """One block of dialogue, possibly spanning several source lines.

    Attributes:
        speaker: Speaker name, or :data:`NON_SPEAKER` for unattributed text.
        line_numbers: Zero-based source line indexes, ascending and
            non-empty.
        text: Dialogue text, which may contain embedded ``\\n``.
    """

    speaker: str
    line_numbers: tuple[int, ...]
    text: str

    @property
    def first_line_number(self) -> int:
        return self.line_numbers[0]


@dataclass(frozen=True)
class Script:
    """A parsed transcript.

    Attributes:
        speakers: Distinct speakers in order of first appearance.
        turns_by_speaker: Read-only mapping of speaker to that speaker's
            turns, in transcript order.
        turns: Every turn in transcript order.
    """

    speakers: tuple[str, ...] = ()
    turns_by_speaker: Mapping[str, tuple[Turn, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    turns: tuple[Turn, ...] = ()


def build_script(raw_lines: Iterable[RawLine]) -> Script:
    """Assemble a :class:`Script` from parser records, keeping their order."""
    turns: list[Turn] = []
    grouped: dict[str, list[Turn]] = {}

    for raw in raw_lines:
        turn = Turn(speaker=raw.speaker, line_numbers=tuple(raw.line_numbers), text=raw.text)
        turns.append(turn)
        grouped.setdefault(turn.speaker, []).append(turn)

    # dict insertion order is first-appearance order
    return Script(
        speakers=tuple(grouped),
        turns_by_speaker=MappingProxyType({k: tuple(v) for k, v in grouped.items()}),
        turns=tuple(turns),
    )
