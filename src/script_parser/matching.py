"""String simplifiers, comparators and search functions over a script.

A search function is built from one comparator and any number of
simplifiers::

    search = create_search_function(script, subset_match, ignore_case, alphabet_only)
    found, turn = search("HOWAREYOU")

Simplifiers are applied to every turn's dialogue once, when the search
function is built.  The query is passed to the comparator unchanged, so
callers simplify it themselves if the comparator expects that.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from rapidfuzz import fuzz

from script_parser.models.script import Script, Turn

Simplifier = Callable[[str], str]
Comparator = Callable[[str, str], bool]
SearchFunction = Callable[[str], tuple[bool, Turn | None]]


# ---------------------------------------------------------------------------
# Simplifiers
# ---------------------------------------------------------------------------


def compose_simplifiers(simplifiers: Sequence[Simplifier]) -> Simplifier:
    """Compose *simplifiers* right to left.

    ``compose_simplifiers([f, g, h])(x) == f(g(h(x)))``.  An empty sequence
    gives the identity function.
    """
    chain = tuple(reversed(simplifiers))

    def simplify(text: str) -> str:
        for simplifier in chain:
            text = simplifier(text)
        return text

    return simplify


def skip_if_char(skip: Callable[[str], bool]) -> Simplifier:
    """Return a simplifier that drops every character for which *skip* is true."""

    def simplify(text: str) -> str:
        return "".join(ch for ch in text if not skip(ch))

    return simplify


def _is_ascii_letter(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z"


alphabet_only: Simplifier = skip_if_char(lambda ch: not _is_ascii_letter(ch))
"""Keep only the ASCII letters of a string."""

ignore_case: Simplifier = str.upper
"""Uppercase a string so comparisons ignore case."""


# ---------------------------------------------------------------------------
# Comparators
# ---------------------------------------------------------------------------


def exact_match(candidate: str, target: str) -> bool:
    """Match when the simplified dialogue equals the query."""
    return candidate == target


def subset_match(candidate: str, target: str) -> bool:
    """Match when the query appears anywhere in the simplified dialogue."""
    return target in candidate


def _wildcard_phrases(wildcard: re.Pattern[str], target: str) -> list[str] | None:
    """Split *target* on wildcard matches.

    Returns ``None`` when *target* has no wildcard at all.  Literal stretches
    of one character or less are dropped.
    """
    phrases: list[str] = []
    start = 0
    found = False
    for match in wildcard.finditer(target):
        found = True
        phrase = target[start : match.start()]
        if len(phrase) > 1:
            phrases.append(phrase)
        start = match.end()

    if not found:
        return None

    tail = target[start:]
    if len(tail) > 1:
        phrases.append(tail)
    return phrases


def create_wildcard_comparator(wildcard: str | re.Pattern[str]) -> Comparator:
    """Build a comparator that treats *wildcard* matches in the query as gaps.

    The literal phrases between wildcards must appear in the dialogue in
    order, without overlapping, each found at its leftmost position after
    the previous one.  A wildcard gap always consumes at least one
    character.  A query with no wildcard falls back to
    :func:`subset_match`; a query that is only wildcards matches anything.

    Example with ``wildcard=r"\\*+"``: ``"hello * world"`` matches
    ``"hello big wide world indeed"`` but not ``"world hello"``.
    """
    pattern = re.compile(wildcard) if isinstance(wildcard, str) else wildcard

    def compare(candidate: str, target: str) -> bool:
        phrases = _wildcard_phrases(pattern, target)
        if phrases is None:
            return subset_match(candidate, target)
        if not phrases:
            return True

        last = len(phrases) - 1
        for i, phrase in enumerate(phrases):
            index = candidate.find(phrase)
            if index < 0:
                return False
            if i == last:
                return True
            end = index + len(phrase)
            if len(candidate) <= end:
                # Nothing left for the remaining phrases.
                return False
            candidate = candidate[end + 1 :]

        raise AssertionError("wildcard comparator fell through a non-empty phrase list")

    return compare


def create_fuzzy_comparator(
    threshold: float = 90.0,
    scorer: Callable[..., float] = fuzz.partial_ratio,
) -> Comparator:
    """Build a comparator that accepts near matches.

    Args:
        threshold: Minimum score (0-100) for a match.
        scorer: A :mod:`rapidfuzz.fuzz` scorer called as
            ``scorer(target, candidate)``.  The default,
            :func:`~rapidfuzz.fuzz.partial_ratio`, scores the best aligned
            substring, so it behaves like a typo-tolerant subset match.
    """
    if not 0 <= threshold <= 100:
        raise ValueError(f"threshold must be between 0 and 100, got {threshold!r}")

    def compare(candidate: str, target: str) -> bool:
        return scorer(target, candidate) >= threshold

    return compare


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def create_search_function(
    script: Script,
    comparator: Comparator,
    *simplifiers: Simplifier,
) -> SearchFunction:
    """Build a reusable search over the turns of *script*.

    Args:
        script: The script to search.
        comparator: Called as ``comparator(simplified_dialogue, query)``.
        *simplifiers: Applied right to left to each turn's dialogue.

    Returns:
        A function mapping a query to ``(True, turn)`` for the first
        matching turn in transcript order, or ``(False, None)``.
    """
    simplify = compose_simplifiers(simplifiers)
    snapshot = tuple((turn, simplify(turn.text)) for turn in script.turns)

    def search(query: str) -> tuple[bool, Turn | None]:
        for turn, simplified in snapshot:
            if comparator(simplified, query):
                return True, turn
        return False, None

    return search
