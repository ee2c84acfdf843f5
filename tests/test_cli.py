"""Tests for the command line front end (question_blocks.cli).

Tests cover:
- Argument parsing and defaults
- Configuration resolution from env, a saved config file and flags
- End-to-end runs for table and JSON output
- Writing the JSON payload to --output
- Exit codes for missing, unsupported and malformed input
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from question_blocks.cli import _resolve_config, build_parser, main, run
from question_blocks.config import ParserConfig


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


class TestBuildParser:
    @pytest.mark.unit
    def test_defaults(self):
        args = build_parser().parse_args(["script.txt"])
        assert args.script == "script.txt"
        assert args.output is None
        assert args.format is None
        assert args.keep_framing is False
        assert args.sentinel is None
        assert args.config is None
        assert args.save_config is None
        assert args.verbose is False

    @pytest.mark.unit
    def test_rejects_unknown_format(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["script.txt", "--format", "xml"])
        assert exc_info.value.code == 2

    @pytest.mark.unit
    def test_resolve_config_from_flags(self, clean_env):
        args = build_parser().parse_args(
            ["s.txt", "--format", "json", "--keep-framing", "--sentinel", "none"]
        )
        config = _resolve_config(args)
        assert config == ParserConfig(
            output_format="json", drop_framing_lines=False, follow_up_sentinel="none"
        )

    @pytest.mark.unit
    def test_config_file_replaces_env(self, clean_env, tmp_path: Path):
        path = ParserConfig(drop_framing_lines=False).save(tmp_path / "qb.json")
        clean_env.setenv("QB_OUTPUT_FORMAT", "json")
        args = build_parser().parse_args(["s.txt", "--config", str(path), "--sentinel", "x"])
        config = _resolve_config(args)
        assert config == ParserConfig(drop_framing_lines=False, follow_up_sentinel="x")

    @pytest.mark.unit
    def test_flags_override_env(self, clean_env):
        clean_env.setenv("QB_OUTPUT_FORMAT", "json")
        clean_env.setenv("QB_FOLLOW_UP_SENTINEL", "from env")
        args = build_parser().parse_args(["s.txt", "--format", "table"])
        config = _resolve_config(args)
        assert config.output_format == "table"
        assert config.follow_up_sentinel == "from env"


# ---------------------------------------------------------------------------
# run (async)
# ---------------------------------------------------------------------------


class TestRun:
    @pytest.mark.integration
    async def test_writes_output(self, sample_template: Path, tmp_path: Path):
        output = tmp_path / "out" / "questions.json"
        result = await run(sample_template, ParserConfig(output_format="json"), output)
        assert result.count == 2
        assert json.loads(output.read_text(encoding="utf-8")) == result.to_payload()


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    @pytest.mark.integration
    def test_table_output(self, sample_script: Path, clean_env, capsys):
        assert main([str(sample_script)]) == 0
        out = capsys.readouterr().out
        assert "Interview Questions" in out
        assert "Follow-up" in out

    @pytest.mark.integration
    def test_json_output(self, sample_template: Path, clean_env, capsys):
        assert main([str(sample_template), "--format", "json"]) == 0
        out = capsys.readouterr().out
        payload = json.loads(out)
        assert payload[0] == {
            "mainQuestion": "Tell me about a conflict you resolved.",
            "followUpQuestion": "How did it end?",
        }
        assert payload[1]["followUpQuestion"] == "No follow-up question provided."

    @pytest.mark.integration
    def test_output_file(self, sample_script: Path, tmp_path: Path, clean_env):
        output = tmp_path / "questions.json"
        assert main([str(sample_script), "-o", str(output)]) == 0
        assert len(json.loads(output.read_text(encoding="utf-8"))) == 5

    @pytest.mark.integration
    def test_ambiguities_reported(self, tmp_path: Path, clean_env, capsys):
        script = tmp_path / "script.txt"
        script.write_text("Intro\n1. What now? Follow-up: Why?\nOutro\n", encoding="utf-8")
        assert main([str(script)]) == 0
        assert "Ambiguous" in capsys.readouterr().out

    @pytest.mark.integration
    def test_missing_file(self, clean_env, capsys):
        assert main(["/does/not/exist.txt"]) == 1
        assert "not found" in capsys.readouterr().out

    @pytest.mark.integration
    def test_unsupported_suffix(self, tmp_path: Path, clean_env, capsys):
        script = tmp_path / "script.pdf"
        script.write_text("x", encoding="utf-8")
        assert main([str(script)]) == 1
        assert "Error" in capsys.readouterr().out

    @pytest.mark.integration
    def test_malformed_json(self, tmp_path: Path, clean_env):
        script = tmp_path / "script.json"
        script.write_text('{"questions": 7}', encoding="utf-8")
        assert main([str(script)]) == 1

    @pytest.mark.integration
    def test_save_config_then_reuse(self, sample_template: Path, tmp_path: Path, clean_env, capsys):
        saved = tmp_path / "qb.json"
        argv = [str(sample_template), "--format", "json", "--sentinel", "(none)", "--save-config", str(saved)]
        assert main(argv) == 0
        assert ParserConfig.load(saved) == ParserConfig(output_format="json", follow_up_sentinel="(none)")
        capsys.readouterr()

        assert main([str(sample_template), "--config", str(saved)]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload[1]["followUpQuestion"] == "(none)"

    @pytest.mark.integration
    def test_missing_config_file(self, sample_script: Path, tmp_path: Path, clean_env, capsys):
        assert main([str(sample_script), "--config", str(tmp_path / "absent.json")]) == 1
        assert "configuration file not found" in capsys.readouterr().out

    @pytest.mark.integration
    def test_invalid_config_file(self, sample_script: Path, tmp_path: Path, clean_env, capsys):
        bad = tmp_path / "qb.json"
        bad.write_text('{"output_format": "xml"}', encoding="utf-8")
        assert main([str(sample_script), "--config", str(bad)]) == 1
        assert "invalid configuration" in capsys.readouterr().out

    @pytest.mark.integration
    def test_invalid_env_config(self, sample_script: Path, clean_env, capsys):
        clean_env.setenv("QB_OUTPUT_FORMAT", "yaml")
        assert main([str(sample_script)]) == 1
        assert "invalid configuration" in capsys.readouterr().out
