"""Shared fixtures for script-parser tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from script_parser.patterns import DialoguePatterns, build_dialogue_patterns

_ENV_VARS = (
    "SCRIPT_PREFIX",
    "SCRIPT_SPEAKER",
    "SCRIPT_POSTFIX",
    "SCRIPT_MULTI_LINE",
    "SCRIPT_NON_DIALOGUE",
    "SCRIPT_WILDCARD",
    "LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all script-parser environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("script_parser.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def colon_patterns() -> DialoguePatterns:
    """``NAME: dialogue`` lines, one line per turn."""
    return build_dialogue_patterns(speaker=r"\w+", postfix=": ")


@pytest.fixture()
def multi_line_patterns() -> DialoguePatterns:
    """``NAME: dialogue`` lines with continuation lines merged."""
    return build_dialogue_patterns(speaker=r"\w+", postfix=": ", multi_line=True)


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
