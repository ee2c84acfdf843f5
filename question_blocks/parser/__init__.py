"""Question block parser.

Extracts ordered (main question, follow-up question) pairs from the loosely
structured scripts produced by the interview question generator.

Usage::

    from question_blocks.parser import parse_questions, parse_script_file

    records = parse_questions(lines)
    print(records[0].main_question, records[0].follow_up_question)

    result = await parse_script_file("path/to/script.json")
    print(result.records)
    print(result.ambiguities)
"""

from question_blocks.parser.models import (
    ParseResult,
    QuestionRecord,
)
from question_blocks.parser.loader import ScriptFormatError
from question_blocks.parser.extractor import (
    parse_questions,
    parse_script,
    parse_script_file,
)

__all__ = [
    "parse_questions",
    "parse_script",
    "parse_script_file",
    "QuestionRecord",
    "ParseResult",
    "ScriptFormatError",
]
