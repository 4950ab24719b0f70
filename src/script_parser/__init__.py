"""script-parser: speaker-attributed transcripts.

Splits line-oriented transcripts (screenplays, chat logs) into speaker
turns and builds configurable searches over the parsed dialogue.
"""

from __future__ import annotations

from script_parser.exceptions import PatternConfigError, TranscriptReadError
from script_parser.matching import (
    alphabet_only,
    compose_simplifiers,
    create_fuzzy_comparator,
    create_search_function,
    create_wildcard_comparator,
    exact_match,
    ignore_case,
    skip_if_char,
    subset_match,
)
from script_parser.models.script import NON_SPEAKER, RawLine, Script, Turn, build_script
from script_parser.parser import load_transcript, load_transcript_file, parse_lines, parse_transcript
from script_parser.patterns import DialoguePatterns, build_dialogue_patterns
from script_parser.render import script_to_rows, write_csv

__version__ = "0.1.0"

__all__ = [
    "NON_SPEAKER",
    "DialoguePatterns",
    "PatternConfigError",
    "RawLine",
    "Script",
    "TranscriptReadError",
    "Turn",
    "alphabet_only",
    "build_dialogue_patterns",
    "build_script",
    "compose_simplifiers",
    "create_fuzzy_comparator",
    "create_search_function",
    "create_wildcard_comparator",
    "exact_match",
    "ignore_case",
    "load_transcript",
    "load_transcript_file",
    "parse_lines",
    "parse_transcript",
    "script_to_rows",
    "skip_if_char",
    "subset_match",
    "write_csv",
]
