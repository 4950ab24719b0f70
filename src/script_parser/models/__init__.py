"""Data models for script-parser."""

from __future__ import annotations

from script_parser.models.script import NON_SPEAKER, RawLine, Script, Turn, build_script

__all__ = [
    "NON_SPEAKER",
    "RawLine",
    "Script",
    "Turn",
    "build_script",
]
