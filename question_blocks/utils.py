"""Shared utility functions for the question block parser.

Provides JSON I/O, Rich-based console reporting, and logging setup for the
command line front end.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .parser.models import QuestionRecord

console = Console()

# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically. The write itself runs in a
    thread-pool executor to avoid blocking the event loop.

    Args:
        data: Serialisable data (dict or list).
        path: Destination file path.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False)

    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, file_path.write_text, content, "utf-8")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Route ``question_blocks`` log records through a Rich handler.

    Repeated calls replace the handler instead of stacking a new one.
    """
    logger = logging.getLogger("question_blocks")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=console, show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_questions_table(records: Iterable[QuestionRecord], title: str = "Interview Questions") -> None:
    """Print parsed questions as a numbered three-column table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", no_wrap=True, justify="right")
    table.add_column("Question")
    table.add_column("Follow-up")

    for index, record in enumerate(records, start=1):
        table.add_row(str(index), escape(record.main_question), escape(record.follow_up_question))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
