"""Command line front end for the question block parser.

Reads a generated interview script (plain text or a JSON template payload),
parses it into question/follow-up pairs and renders them as a Rich table or a
JSON payload for the rendering layer.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from pydantic import ValidationError
from rich.markup import escape

from .config import ParserConfig
from .parser import ParseResult, parse_script_file
from .utils import (
    configure_logging,
    console,
    print_error,
    print_questions_table,
    print_success,
    print_warning,
    save_json,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for ``question-blocks``."""
    parser = argparse.ArgumentParser(
        prog="question-blocks",
        description="Extract main and follow-up questions from a generated interview script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  question-blocks script.txt\n"
            "  question-blocks template.json --format json\n"
            "  question-blocks script.md -o questions.json --keep-framing\n"
            "  question-blocks script.txt --sentinel \"(none)\" --save-config qb.json\n"
            "  question-blocks script.txt --config qb.json\n"
        ),
    )
    parser.add_argument(
        "script",
        help="Path to the script file (.txt, .md, .markdown or .json template payload)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Also write the parsed questions as JSON to this file",
    )
    parser.add_argument(
        "--format",
        choices=["table", "json"],
        default=None,
        help="Console output format (default: table, or QB_OUTPUT_FORMAT)",
    )
    parser.add_argument(
        "--keep-framing",
        action="store_true",
        help="Scan the first and last line too instead of treating them as intro/outro",
    )
    parser.add_argument(
        "--sentinel",
        default=None,
        help="Follow-up text for questions without one",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Load settings from a saved JSON configuration instead of QB_* variables",
    )
    parser.add_argument(
        "--save-config",
        default=None,
        help="Write the effective configuration as JSON to this file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every finalized question and ambiguity",
    )
    return parser


def _resolve_config(args: argparse.Namespace) -> ParserConfig:
    if args.config:
        config = ParserConfig.load(Path(args.config))
    else:
        config = ParserConfig.from_env()
    overrides: dict[str, object] = {}
    if args.format:
        overrides["output_format"] = args.format
    if args.keep_framing:
        overrides["drop_framing_lines"] = False
    if args.sentinel is not None:
        overrides["follow_up_sentinel"] = args.sentinel
    if overrides:
        config = ParserConfig.model_validate({**config.model_dump(), **overrides})
    return config


async def run(script: Path, config: ParserConfig, output: Path | None = None) -> ParseResult:
    """Parse *script* and render the result according to *config*."""
    result = await parse_script_file(script, config)

    if config.output_format == "json":
        console.print_json(data=result.to_payload())
    else:
        print_questions_table(result.records, title=f"Interview Questions ({script.name})")

    for note in result.ambiguities:
        print_warning(f"Ambiguous: {escape(note)}")

    if output is not None:
        await save_json(result.to_payload(), output)
        print_success(f"Wrote {result.count} question(s) to {escape(str(output))}")

    return result


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``question-blocks`` and ``python -m question_blocks.cli``.

    Returns:
        Process exit code. ``0`` on success, ``1`` for unreadable or malformed
        input and invalid configuration.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = _resolve_config(args)
    except FileNotFoundError as exc:
        print_error(f"Error: configuration file not found: {escape(str(exc))}")
        return 1
    except (ValidationError, ValueError) as exc:
        print_error(f"Error: invalid configuration: {escape(str(exc))}")
        return 1

    if args.save_config:
        saved = config.save(Path(args.save_config))
        logger.debug("Saved configuration to %s", saved)

    output = Path(args.output) if args.output else None
    try:
        asyncio.run(run(Path(args.script), config, output))
    except FileNotFoundError as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1
    except ValueError as exc:
        logger.debug("Failed to load %s", args.script, exc_info=True)
        print_error(f"Error: {escape(str(exc))}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
