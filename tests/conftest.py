"""Shared pytest fixtures for the question block parser test suite.

Provides reusable fixtures for:
- Sample generated scripts (plain text and JSON template payload)
- Pre-split script lines
- A clean environment for configuration tests
"""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Sample scripts
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_script() -> Path:
    """Path to the sample plain-text interview script."""
    path = FIXTURES_DIR / "sample-script.txt"
    assert path.exists(), f"Sample script fixture not found at {path}"
    return path


@pytest.fixture
def sample_template() -> Path:
    """Path to the sample JSON template payload."""
    path = FIXTURES_DIR / "sample-template.json"
    assert path.exists(), f"Sample template fixture not found at {path}"
    return path


@pytest.fixture
def sample_script_lines(sample_script: Path) -> list[str]:
    """Lines of the sample plain-text script, framing lines included."""
    return sample_script.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def two_question_script() -> list[str]:
    """Minimal script with two numbered questions, the first with a follow-up."""
    return [
        "Intro",
        "1. How do you handle pressure?",
        "Follow-up: Give an example.",
        "2. Describe a failure.",
        "Outro",
    ]


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every QB_* variable so configuration starts from defaults."""
    for name in ("QB_FOLLOW_UP_SENTINEL", "QB_DROP_FRAMING_LINES", "QB_OUTPUT_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
