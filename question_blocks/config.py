"""Question block parser configuration.

Typed configuration for the parser and the command line front end. Settings use
a Pydantic v2 model so they are validated at construction time and can be
serialised to/from JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

DEFAULT_FOLLOW_UP_SENTINEL = "No follow-up question provided."

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of {sorted(_TRUE_VALUES | _FALSE_VALUES)}, got {value!r}")


class ParserConfig(BaseModel):
    """Settings for parsing generated interview scripts.

    The defaults reproduce the parser's documented behaviour: framing lines are
    dropped and questions without a follow-up receive the standard sentinel.
    """

    follow_up_sentinel: str = Field(
        default=DEFAULT_FOLLOW_UP_SENTINEL,
        min_length=1,
        description="Follow-up text used when a question has none",
    )
    drop_framing_lines: bool = Field(
        default=True,
        description="Discard the first and last line (intro/outro) before scanning",
    )
    output_format: Literal["table", "json"] = Field(
        default="table", description="How the CLI renders parsed questions"
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ParserConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Build a ``ParserConfig`` from environment variables.

        Recognised variables (all optional):
            QB_FOLLOW_UP_SENTINEL, QB_DROP_FRAMING_LINES, QB_OUTPUT_FORMAT.

        Raises:
            ValueError: If ``QB_DROP_FRAMING_LINES`` is not a boolean word.
            pydantic.ValidationError: If a value fails validation.
        """
        kwargs: dict[str, Any] = {}
        if "QB_FOLLOW_UP_SENTINEL" in os.environ:
            kwargs["follow_up_sentinel"] = os.environ["QB_FOLLOW_UP_SENTINEL"]
        if os.environ.get("QB_DROP_FRAMING_LINES"):
            kwargs["drop_framing_lines"] = _parse_bool(
                "QB_DROP_FRAMING_LINES", os.environ["QB_DROP_FRAMING_LINES"]
            )
        if os.environ.get("QB_OUTPUT_FORMAT"):
            kwargs["output_format"] = os.environ["QB_OUTPUT_FORMAT"].strip().lower()
        return cls(**kwargs)
