"""Pydantic v2 models for the question block parser.

Defines the records handed to the rendering layer, the parse result, and the
immutable scan state threaded through the single-pass line scan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_FOLLOW_UP_SENTINEL


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class LineKind(str, Enum):
    """Classification of a single script line."""
    NONE = "none"
    DIVIDER = "divider"
    HEADER = "header"
    QUESTION_START = "question_start"


# ---------------------------------------------------------------------------
# Output Models
# ---------------------------------------------------------------------------

class QuestionRecord(BaseModel):
    """A main interview question paired with its follow-up."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    main_question: str = Field(
        ..., min_length=1, alias="mainQuestion", description="Primary question text"
    )
    follow_up_question: str = Field(
        ...,
        min_length=1,
        alias="followUpQuestion",
        description="Extracted follow-up prompt or the sentinel text",
    )

    def to_payload(self) -> dict[str, str]:
        """Return the camelCase mapping consumed by the rendering layer."""
        return self.model_dump(by_alias=True)


class ParseResult(BaseModel):
    """Complete result of parsing a generated interview script."""
    records: list[QuestionRecord] = Field(
        default_factory=list, description="Question records in input order"
    )
    ambiguities: list[str] = Field(
        default_factory=list,
        description="Lines whose interpretation may need confirmation",
    )
    lines_scanned: int = Field(
        default=0, ge=0, description="Number of lines after dropping framing text"
    )

    @property
    def count(self) -> int:
        return len(self.records)

    def get(self, position: int) -> Optional[QuestionRecord]:
        """Return the record at a 1-based *position*, or ``None`` if out of range."""
        if position < 1 or position > len(self.records):
            return None
        return self.records[position - 1]

    def to_payload(self) -> list[dict[str, Any]]:
        return [record.to_payload() for record in self.records]


# ---------------------------------------------------------------------------
# Scan State
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LineMatch:
    """Typed result of running a matcher against one line."""
    kind: LineKind = LineKind.NONE
    text: Optional[str] = None
    form: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.kind is not LineKind.NONE or self.text is not None


NO_MATCH = LineMatch()


@dataclass(frozen=True)
class PartialRecord:
    """The in-progress record accumulated while scanning."""
    main_question: Optional[str] = None
    follow_up_question: Optional[str] = None

    @property
    def has_main(self) -> bool:
        return bool(self.main_question)

    def finalize(self, sentinel: str = DEFAULT_FOLLOW_UP_SENTINEL) -> QuestionRecord:
        """Build the output record, substituting *sentinel* for a missing follow-up.

        Raises:
            ValueError: If no main question was captured.
        """
        if not self.main_question:
            raise ValueError("Cannot finalize a record without a main question")
        return QuestionRecord(
            main_question=self.main_question,
            follow_up_question=self.follow_up_question or sentinel,
        )


@dataclass(frozen=True)
class ScanState:
    """Scan state threaded through the fold over script lines.

    ``emitted`` and ``notes`` only hold what the most recent transition
    produced; the caller collects them after every step.
    """
    in_progress: PartialRecord = field(default_factory=PartialRecord)
    inside_question_body: bool = False
    emitted: Optional[QuestionRecord] = None
    notes: tuple[str, ...] = ()
