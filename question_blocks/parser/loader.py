"""Script loading for the question block parser.

The generation service hands scripts over either as plain text (one line per
entry) or inside a template payload shaped ``{"questions": {"questions": [...]}}``.
This module normalises both into the raw line list the parser consumes.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

_TEXT_SUFFIXES = (".txt", ".md", ".markdown", "")
_JSON_SUFFIXES = (".json",)


class ScriptFormatError(ValueError):
    """Raised when a script payload does not contain a list of lines."""


def split_script_text(text: str) -> list[str]:
    """Split raw script text into lines, keeping blank lines in place.

    A trailing line break does not produce an extra empty line, so the last
    element is the real outro line.
    """
    return text.splitlines()


def extract_script_lines(payload: Any) -> list[str]:
    """Pull the script line list out of a decoded payload.

    Accepted shapes::

        ["Intro", "1. What ...", "Outro"]
        {"questions": ["Intro", ...]}
        {"questions": {"questions": ["Intro", ...]}}

    Raises:
        ScriptFormatError: If no line list can be found.
    """
    candidate = payload
    for _ in range(2):
        if isinstance(candidate, dict) and "questions" in candidate:
            candidate = candidate["questions"]
    if not isinstance(candidate, list):
        raise ScriptFormatError(
            "Expected a list of script lines or a mapping with a 'questions' list, "
            f"got {type(candidate).__name__}"
        )
    return [item if isinstance(item, str) else str(item) for item in candidate]


async def read_script(path: str | Path) -> list[str]:
    """Read a script file asynchronously using asyncio.to_thread.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file type is not supported.
        ScriptFormatError: If a JSON file is invalid or has no line list.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Script file not found: {path}")
    suffix = file_path.suffix.lower()
    if suffix not in _TEXT_SUFFIXES + _JSON_SUFFIXES:
        raise ValueError(f"Expected a text, markdown or JSON script, got: {file_path.suffix}")

    raw = await asyncio.to_thread(file_path.read_text, "utf-8")
    if suffix in _JSON_SUFFIXES:
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ScriptFormatError(f"Invalid JSON in {file_path}: {exc}") from exc
        return extract_script_lines(payload)
    return split_script_text(raw)
