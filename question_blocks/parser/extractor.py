"""Core question block parser.

Turns the loosely structured line sequence produced by the question generation
service into ordered ``QuestionRecord`` pairs of main question and follow-up.
The scan is a single left-to-right pass of ``step`` over the lines; every
transition returns a fresh ``ScanState`` so intermediate states can be
inspected directly. Finalized records leave the state as soon as they are
emitted, so the pass stays linear in the number of lines.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from ..config import DEFAULT_FOLLOW_UP_SENTINEL, ParserConfig
from .loader import read_script
from .matchers import (
    FOLLOW_UP_MATCHER,
    classify_line,
    clean_question_text,
    has_explicit_question_marker,
)
from .models import (
    LineKind,
    ParseResult,
    PartialRecord,
    QuestionRecord,
    ScanState,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _working_slice(lines: Sequence[str], drop_framing: bool) -> list[str]:
    """Drop the intro and outro framing lines."""
    if not drop_framing:
        return list(lines)
    return list(lines[1:-1])


def _note(state: ScanState, message: str) -> ScanState:
    logger.debug("Ambiguity: %s", message)
    return replace(state, notes=state.notes + (message,))


def _clear_outputs(state: ScanState) -> ScanState:
    """Forget what the previous transition emitted."""
    if state.emitted is None and not state.notes:
        return state
    return replace(state, emitted=None, notes=())


def _close(state: ScanState, sentinel: str) -> ScanState:
    """Finalize the in-progress record if it has a main question.

    A partial record without a main question is left in place; whatever it
    collected carries over to the next question.
    """
    if not state.in_progress.has_main:
        return state
    record = state.in_progress.finalize(sentinel)
    logger.debug("Finalized question: %r", record.main_question)
    return replace(state, in_progress=PartialRecord(), emitted=record)


# ---------------------------------------------------------------------------
# Scan
# ---------------------------------------------------------------------------

def step(
    state: ScanState,
    line: str,
    sentinel: str = DEFAULT_FOLLOW_UP_SENTINEL,
) -> ScanState:
    """Apply one script line to *state* and return the next state.

    The returned state's ``emitted`` holds the record this line finalized, if
    any, and ``notes`` the ambiguities it raised.
    """
    state = _clear_outputs(state)
    kind = classify_line(line)
    if kind is LineKind.DIVIDER:
        return state

    if kind is LineKind.HEADER:
        state = _close(state, sentinel)
        return replace(state, inside_question_body=False)

    starts_question = kind is LineKind.QUESTION_START
    if starts_question:
        state = _close(state, sentinel)
        state = replace(state, inside_question_body=True)

    if state.inside_question_body or has_explicit_question_marker(line):
        if not state.in_progress.has_main:
            text = clean_question_text(line)
            if text:
                state = replace(state, in_progress=replace(state.in_progress, main_question=text))
            elif starts_question:
                state = _note(state, f"Question line has no text after cleaning: {line.strip()!r}")

    follow_up = FOLLOW_UP_MATCHER.match(line)
    if follow_up.matched:
        logger.debug("Follow-up (%s form): %r", follow_up.form, follow_up.text)
        if starts_question:
            state = _note(
                state,
                f"Follow-up attached to the question starting on the same line: {line.strip()!r}",
            )
        elif not state.in_progress.has_main:
            state = _note(state, f"Follow-up appears before any main question: {line.strip()!r}")
        if not follow_up.text:
            state = _note(state, f"Follow-up label has no text: {line.strip()!r}")
        state = replace(
            state,
            in_progress=replace(state.in_progress, follow_up_question=follow_up.text),
        )

    return state


def finish(state: ScanState, sentinel: str = DEFAULT_FOLLOW_UP_SENTINEL) -> ScanState:
    """Finalize whatever record is still in progress at end of input."""
    return replace(_close(_clear_outputs(state), sentinel), inside_question_body=False)


def _scan(
    lines: Sequence[str], config: ParserConfig
) -> tuple[list[QuestionRecord], list[str], int]:
    working = _working_slice(lines, config.drop_framing_lines)
    sentinel = config.follow_up_sentinel
    records: list[QuestionRecord] = []
    ambiguities: list[str] = []

    def collect(state: ScanState) -> ScanState:
        if state.emitted is not None:
            records.append(state.emitted)
        ambiguities.extend(state.notes)
        return state

    state = ScanState()
    for line in working:
        state = collect(step(state, line, sentinel))
    collect(finish(state, sentinel))
    return records, ambiguities, len(working)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_questions(
    lines: Sequence[str],
    config: ParserConfig | None = None,
) -> list[QuestionRecord]:
    """Extract ordered question records from a generated interview script.

    The first and last lines are framing text and are discarded before the
    scan. The function is total: unrecognised, empty or malformed input yields
    an empty or partial list, never an error.

    Args:
        lines: Raw script lines, including the intro and outro lines.
        config: Optional parser configuration; defaults to ``ParserConfig()``.

    Returns:
        Question records in the order their main questions appeared.
    """
    records, _, _ = _scan(lines, config or ParserConfig())
    return records


def parse_script(
    lines: Sequence[str],
    config: ParserConfig | None = None,
) -> ParseResult:
    """Parse script lines and report ambiguities alongside the records."""
    records, ambiguities, scanned = _scan(lines, config or ParserConfig())
    return ParseResult(
        records=records,
        ambiguities=ambiguities,
        lines_scanned=scanned,
    )


async def parse_script_file(
    path: str | Path,
    config: ParserConfig | None = None,
) -> ParseResult:
    """Read a script file (text or JSON template payload) and parse it.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file type is unsupported or the payload is malformed.
    """
    lines = await read_script(path)
    result = parse_script(lines, config)
    logger.debug(
        "Parsed %d question(s) from %s (%d line(s) scanned)",
        result.count, path, result.lines_scanned,
    )
    return result
