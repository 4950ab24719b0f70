"""Custom exceptions for script-parser.

Both exceptions are fatal for the operation that raised them: a transcript
parsed with a broken pattern or from a half-read source is never returned.
"""

from __future__ import annotations


class PatternConfigError(ValueError):
    """Raised when a dialogue pattern cannot be built.

    This covers fragments that fail to compile, fragments that contain
    capturing groups, and a combined start-of-turn pattern that fails to
    compile.  It is raised while configuring, before any line is parsed.

    Attributes:
        pattern: The offending pattern text.
    """

    def __init__(self, message: str, pattern: str = "") -> None:
        super().__init__(message)
        self.pattern = pattern


class TranscriptReadError(Exception):
    """Raised when the transcript source fails part way through reading.

    Attributes:
        last_line: Zero-based index of the last line that was processed
            successfully, or ``-1`` if the source failed before the first
            line.
    """

    def __init__(self, message: str, last_line: int = -1) -> None:
        super().__init__(message)
        self.last_line = last_line
