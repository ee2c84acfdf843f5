"""Line matchers for generated interview scripts.

Each matcher inspects a single raw line and returns a ``LineMatch``. The
precedence between them is applied by ``classify_line`` and by the scan in
``extractor``; the matchers themselves carry no state and are safe to share.
"""

from __future__ import annotations

import re

from .models import NO_MATCH, LineKind, LineMatch


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_DIVIDERS = frozenset({"", "-", "---"})

_CATEGORY_LABELS = [
    "Technical",
    "Behavioral",
    "Situational",
    "Problem-solving",
    "Competency-based",
    "Cultural Fit",
]

_HEADING_PATTERN = re.compile(r"^#{1,6}(?:\s|$)")
_CATEGORY_HEADER_PATTERN = re.compile(
    r"^(?:" + "|".join(re.escape(label) for label in _CATEGORY_LABELS) + r")"
    r"(?:\s+Questions?)?\s*:?$",
    re.IGNORECASE,
)

_QUESTION_OPENERS = [
    "Q:",
    "Question:",
    "Tell me about",
    "Can you",
    "What",
    "How",
    "Describe",
    "Explain",
    "Imagine",
    "Suppose",
]
_QUESTION_START_PATTERN = re.compile(
    r"^(?:\d+\.)?\s*\*?\*?(?:"
    + "|".join(re.escape(opener) for opener in _QUESTION_OPENERS)
    + r")",
    re.IGNORECASE,
)

_NUMBERED_BOLD_LABEL_PATTERN = re.compile(r"^\d+\.\s*\*\*.*?\*\*:")
_EXPLICIT_MARKERS = ("**Q:**", "**Question:**")

# Cleaning steps for main question text, applied in this order.
_NUMBER_PREFIX_PATTERN = re.compile(r"^\d+\.\s*")
_Q_LABEL_PATTERN = re.compile(r"\*\*Q:\*\*\s*", re.IGNORECASE)
_QUESTION_LABEL_PATTERN = re.compile(r"\*\*Question:\*\*\s*", re.IGNORECASE)
_BULLET_PREFIX_PATTERN = re.compile(r"^[-*]\s+")
_BOLD_MARKER_PATTERN = re.compile(r"\*\*")

# Order matters: the first pattern that matches wins.
FOLLOW_UP_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("bold", re.compile(r"\*\*Follow-up:\*\*\s*(.*)", re.IGNORECASE)),
    ("italic", re.compile(r"\*Follow-up:\*\s*(.*)", re.IGNORECASE)),
    ("plain", re.compile(r"Follow-up:\s*(.*)", re.IGNORECASE)),
    ("bullet_bold", re.compile(r"- \*\*Follow-up\*\*:\s*(.*)", re.IGNORECASE)),
    ("bold_question", re.compile(r"\*\*Follow-up Question:\*\*\s*(.*)", re.IGNORECASE)),
]


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------

class DividerMatcher:
    """Blank lines and ``-`` / ``---`` separators."""

    def match(self, line: str) -> LineMatch:
        if line.strip() in _DIVIDERS:
            return LineMatch(kind=LineKind.DIVIDER)
        return NO_MATCH


class HeaderMatcher:
    """Markdown headings and bare question-category labels."""

    def match(self, line: str) -> LineMatch:
        stripped = line.strip()
        if _HEADING_PATTERN.match(stripped) or _CATEGORY_HEADER_PATTERN.match(stripped):
            return LineMatch(kind=LineKind.HEADER)
        return NO_MATCH


class QuestionStartMatcher:
    """Lines that open a new question, optionally numbered and bolded."""

    def match(self, line: str) -> LineMatch:
        if _QUESTION_START_PATTERN.match(line.strip()):
            return LineMatch(kind=LineKind.QUESTION_START)
        return NO_MATCH


class FollowUpMatcher:
    """Follow-up labels anywhere in a line.

    Sub-patterns are tried in ``FOLLOW_UP_PATTERNS`` order; the trailing text of
    the first match is returned trimmed (possibly empty), tagged with the
    name of the form that matched.
    """

    def __init__(self, patterns: list[tuple[str, re.Pattern[str]]] | None = None) -> None:
        self.patterns = patterns if patterns is not None else FOLLOW_UP_PATTERNS

    def match(self, line: str) -> LineMatch:
        for name, pattern in self.patterns:
            found = pattern.search(line)
            if found:
                return LineMatch(text=found.group(1).strip(), form=name)
        return NO_MATCH


DIVIDER_MATCHER = DividerMatcher()
HEADER_MATCHER = HeaderMatcher()
QUESTION_START_MATCHER = QuestionStartMatcher()
FOLLOW_UP_MATCHER = FollowUpMatcher()

# Precedence for structural classification: divider, header, question start.
_STRUCTURAL_MATCHERS = (DIVIDER_MATCHER, HEADER_MATCHER, QUESTION_START_MATCHER)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def classify_line(line: str) -> LineKind:
    """Return the structural kind of *line* using divider > header > question start."""
    for matcher in _STRUCTURAL_MATCHERS:
        result = matcher.match(line)
        if result.kind is not LineKind.NONE:
            return result.kind
    return LineKind.NONE


def has_explicit_question_marker(line: str) -> bool:
    """Check for ``**Q:**`` / ``**Question:**`` or a ``1. **Label**:`` prefix."""
    if any(marker in line for marker in _EXPLICIT_MARKERS):
        return True
    return bool(_NUMBERED_BOLD_LABEL_PATTERN.match(line.strip()))


def clean_question_text(line: str) -> str:
    """Strip numbering, question labels, bullets and bold markers from *line*.

    Examples::

        clean_question_text("1. **Tell me about a conflict.**") -> "Tell me about a conflict."
        clean_question_text("**Q:** What motivates you?")       -> "What motivates you?"
    """
    text = line.strip()
    text = _NUMBER_PREFIX_PATTERN.sub("", text)
    text = _Q_LABEL_PATTERN.sub("", text, count=1)
    text = _QUESTION_LABEL_PATTERN.sub("", text, count=1)
    text = _BULLET_PREFIX_PATTERN.sub("", text)
    text = _BOLD_MARKER_PATTERN.sub("", text)
    return text.strip()
