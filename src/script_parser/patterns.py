"""Dialogue pattern configuration for the transcript parser.

The start-of-turn pattern is assembled from three caller-supplied
fragments in the form::

    ^{prefix}(?P<Speaker>{speaker}){postfix}(?P<Line>.*)

The parser reads the speaker from group 1 and the first line of dialogue
from group 2, so the fragments themselves must not add capturing groups.
Use ``(?:...)`` for grouping inside a fragment.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from script_parser.exceptions import PatternConfigError


@dataclass(frozen=True)
class DialoguePatterns:
    """Compiled patterns consumed by the parser.

    Attributes:
        turn_start: Start-of-turn pattern with exactly two capturing groups,
            speaker then dialogue.
        multi_line: When ``True``, lines that do not start a turn are
            merged into the previous turn.
        non_dialogue: Patterns for lines that must never be merged into a
            previous turn.  Only consulted when *multi_line* is on.  They are
            used as-is, so anchor them with ``^`` and ``$`` to avoid
            splitting a turn on a partial match.
    """

    turn_start: re.Pattern[str]
    multi_line: bool = False
    non_dialogue: tuple[re.Pattern[str], ...] = ()

    def is_non_dialogue(self, line: str) -> bool:
        """Return ``True`` if *line* matches any non-dialogue pattern."""
        return any(pattern.search(line) for pattern in self.non_dialogue)


def _compile_fragment(fragment: str) -> re.Pattern[str]:
    try:
        compiled = re.compile(fragment)
    except re.error as exc:
        raise PatternConfigError(
            f"Pattern fragment did not compile: {fragment!r} ({exc})", pattern=fragment
        ) from exc
    if compiled.groups:
        raise PatternConfigError(
            f"Pattern fragments should not have capture groups: {fragment!r}", pattern=fragment
        )
    return compiled


def build_dialogue_patterns(
    prefix: str = "",
    speaker: str = r"\w+",
    postfix: str = ": ",
    multi_line: bool = False,
    non_dialogue: Iterable[str | re.Pattern[str]] = (),
) -> DialoguePatterns:
    """Build and validate the patterns for a transcript format.

    Args:
        prefix: Text expected before the speaker name.
        speaker: Pattern matching the speaker name.
        postfix: Text separating the speaker from the dialogue.
        multi_line: Merge following lines into the current turn until the
            next start-of-turn line.
        non_dialogue: Patterns (strings or compiled) for lines that
            interrupt a multi-line turn.

    Returns:
        A :class:`DialoguePatterns` ready for the parser.

    Raises:
        PatternConfigError: If a fragment does not compile or contains a
            capturing group, or if the combined pattern does not compile.
    """
    for fragment in (prefix, speaker, postfix):
        _compile_fragment(fragment)

    full = f"^{prefix}(?P<Speaker>{speaker}){postfix}(?P<Line>.*)"
    try:
        turn_start = re.compile(full)
    except re.error as exc:
        raise PatternConfigError(
            f"Full pattern did not compile: {full!r} ({exc})", pattern=full
        ) from exc

    compiled_non_dialogue: list[re.Pattern[str]] = []
    for pattern in non_dialogue:
        if isinstance(pattern, re.Pattern):
            compiled_non_dialogue.append(pattern)
            continue
        try:
            compiled_non_dialogue.append(re.compile(pattern))
        except re.error as exc:
            raise PatternConfigError(
                f"Non-dialogue pattern did not compile: {pattern!r} ({exc})", pattern=pattern
            ) from exc

    return DialoguePatterns(
        turn_start=turn_start,
        multi_line=multi_line,
        non_dialogue=tuple(compiled_non_dialogue),
    )
