"""Configuration loading for script-parser.

Reads the transcript format from environment variables (with .env support
via python-dotenv).  Every setting has a default, so an empty environment
parses ``NAME: dialogue`` transcripts one line per turn.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from script_parser.exceptions import PatternConfigError
from script_parser.patterns import DialoguePatterns, build_dialogue_patterns

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        prefix: Pattern fragment before the speaker (``SCRIPT_PREFIX``).
        speaker: Pattern fragment for the speaker (``SCRIPT_SPEAKER``).
        postfix: Pattern fragment between speaker and dialogue
            (``SCRIPT_POSTFIX``).
        multi_line: Merge continuation lines into turns
            (``SCRIPT_MULTI_LINE``).
        non_dialogue: Patterns that interrupt multi-line turns
            (``SCRIPT_NON_DIALOGUE``, a JSON array of strings).
        wildcard: Wildcard marker used by wildcard searches
            (``SCRIPT_WILDCARD``).
        log_level: Logging level (``LOG_LEVEL``, default ``"INFO"``).
    """

    prefix: str = ""
    speaker: str = r"\w+"
    postfix: str = ": "
    multi_line: bool = False
    non_dialogue: tuple[str, ...] = ()
    wildcard: str = r"\*+"
    log_level: str = "INFO"

    def dialogue_patterns(self) -> DialoguePatterns:
        """Compile these settings into parser patterns.

        Raises:
            ConfigError: If any configured pattern is invalid.
        """
        try:
            return build_dialogue_patterns(
                prefix=self.prefix,
                speaker=self.speaker,
                postfix=self.postfix,
                multi_line=self.multi_line,
                non_dialogue=self.non_dialogue,
            )
        except PatternConfigError as exc:
            raise ConfigError(str(exc)) from exc


def _parse_bool(env_var: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{env_var} must be a boolean, got {raw!r}")


def _parse_pattern_list(env_var: str, raw: str) -> tuple[str, ...]:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{env_var} must be a JSON array of strings: {exc}") from exc
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{env_var} must be a JSON array of strings, got {raw!r}")
    return tuple(value)


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the working
    directory is picked up automatically.  Unset or empty variables keep
    their defaults.  Pattern fragments are kept verbatim because leading
    or trailing spaces can be significant.

    Raises:
        ConfigError: If a boolean or pattern-list variable cannot be parsed.
    """
    load_dotenv()

    values: dict[str, object] = {}

    for env_var, field_name in (
        ("SCRIPT_PREFIX", "prefix"),
        ("SCRIPT_SPEAKER", "speaker"),
        ("SCRIPT_POSTFIX", "postfix"),
        ("SCRIPT_WILDCARD", "wildcard"),
    ):
        raw = os.environ.get(env_var)
        if raw:
            values[field_name] = raw

    multi_line = os.environ.get("SCRIPT_MULTI_LINE", "").strip()
    if multi_line:
        values["multi_line"] = _parse_bool("SCRIPT_MULTI_LINE", multi_line)

    non_dialogue = os.environ.get("SCRIPT_NON_DIALOGUE", "").strip()
    if non_dialogue:
        values["non_dialogue"] = _parse_pattern_list("SCRIPT_NON_DIALOGUE", non_dialogue)

    log_level = os.environ.get("LOG_LEVEL", "").strip()
    if log_level:
        values["log_level"] = log_level

    return Settings(**values)  # type: ignore[arg-type]
