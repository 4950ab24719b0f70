"""Tests for script-parser package structure and imports."""

from __future__ import annotations

import re
import subprocess
import sys


def test_package_is_importable() -> None:
    """``import script_parser`` must succeed without errors."""
    import script_parser  # noqa: F401


def test_package_version_is_semver() -> None:
    import script_parser

    assert re.match(r"^\d+\.\d+\.\d+$", script_parser.__version__)


def test_public_names_exported() -> None:
    """Everything in ``__all__`` resolves."""
    import script_parser

    for name in script_parser.__all__:
        assert hasattr(script_parser, name), name


def test_end_to_end_from_package_root() -> None:
    """Parse and search using only top-level imports."""
    from script_parser import (
        build_dialogue_patterns,
        create_search_function,
        ignore_case,
        parse_transcript,
        subset_match,
    )

    patterns = build_dialogue_patterns(multi_line=True)
    script = parse_transcript("ALICE: hi\nthere\nBOB: hello\n", patterns)
    search = create_search_function(script, subset_match, ignore_case)

    found, turn = search("THERE")

    assert found
    assert turn is not None
    assert turn.speaker == "ALICE"
    assert turn.line_numbers == (0, 1)


def test_main_module_exists() -> None:
    """``python -m script_parser`` must run and exit cleanly."""
    result = subprocess.run(
        [sys.executable, "-m", "script_parser"],
        capture_output=True,
        text=True,
        timeout=10,
    )
    assert result.returncode == 0
    assert "Traceback" not in result.stderr
