"""
Tests for question_companion.adapters.cli — typer commands driven through
CliRunner, with the interactive prompts patched out.
"""
import json
import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from question_companion.adapters.cli.app import _parse_overrides, _split_keywords, app
from question_companion.config.logger import get_logger
from question_companion.config.settings import get_config
from question_companion.infra.clipboard import MemoryClipboard

runner = CliRunner()


class TestSummarize:
    def test_json_view(self):
        result = runner.invoke(app, [
            "summarize",
            "--question", "Why is latency high?",
            "--keyword", "backend",
            "--keyword", "people",
            "--json",
        ])
        assert result.exit_code == 0, result.output
        view = json.loads(result.output)
        assert view["progress"] == 25
        assert view["keywords"] == ["backend", "people"]
        assert view["summary"].splitlines()[0] == "🧠 Question: Why is latency high?"
        assert view["summary"].splitlines()[-1] == "🏷️ Keywords: backend, people"
        assert len(view["recommended_prompts"]) == 4

    def test_repeated_keyword_toggles_off(self):
        result = runner.invoke(app, [
            "summarize", "--keyword", "backend", "--keyword", "backend", "--json",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["keywords"] == []

    def test_plain_output(self):
        result = runner.invoke(app, ["summarize", "--question", "X"])
        assert result.exit_code == 0, result.output
        assert "Context score: 25%" in result.output
        assert "Question: X" in result.output

    def test_all_set_message(self):
        # A filled question always adds its two follow-ups, so only the
        # other three fields can clear the prompt list
        result = runner.invoke(app, [
            "summarize", "-b", "b", "-g", "g", "-k", "c",
        ])
        assert result.exit_code == 0, result.output
        assert "You're all set!" in result.output

    def test_copy(self):
        clipboard = MemoryClipboard()
        with patch("question_companion.pipeline.service.get_clipboard", return_value=clipboard):
            result = runner.invoke(app, ["summarize", "--question", "X", "--copy"])
        assert result.exit_code == 0, result.output
        assert "Copied!" in result.output
        assert clipboard.last.startswith("🧠 Question: X")

    def test_copy_failure_exits_nonzero(self):
        clipboard = MemoryClipboard(available=False)
        with patch("question_companion.pipeline.service.get_clipboard", return_value=clipboard):
            result = runner.invoke(app, ["summarize", "--question", "X", "--copy"])
        assert result.exit_code == 1
        assert "Could not copy" in result.output


class TestGlobalOptions:
    def test_set_override(self):
        result = runner.invoke(app, ["--set", "copy.reset_delay_ms=50", "steps"])
        assert result.exit_code == 0, result.output
        assert get_config().copy_action.reset_delay_ms == 50

    def test_logging_override_reaches_existing_loggers(self):
        log = get_logger("question_companion.pipeline.copy_action")
        result = runner.invoke(app, ["--set", "logging.level=DEBUG", "steps"])
        assert result.exit_code == 0, result.output
        assert log.logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in log.logger.handlers)

    def test_logging_file_from_config_file(self, tmp_path):
        log_path = tmp_path / "logs" / "companion.log"
        path = tmp_path / "custom.yaml"
        path.write_text(f"logging:\n  level: WARNING\n  file: {log_path.as_posix()}\n")
        result = runner.invoke(app, ["--config", str(path), "steps"])
        assert result.exit_code == 0, result.output

        log = get_logger("question_companion.pipeline.copy_action")
        assert log.logger.level == logging.WARNING
        assert any(isinstance(h, RotatingFileHandler) for h in log.logger.handlers)
        assert log_path.parent.is_dir()

    def test_bad_override_exits(self):
        result = runner.invoke(app, ["--set", "copy.nope=1", "steps"])
        assert result.exit_code == 1
        assert "Invalid override" in result.output

    def test_malformed_override_exits(self):
        result = runner.invoke(app, ["--set", "copy.reset_delay_ms", "steps"])
        assert result.exit_code == 1

    def test_config_file(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("keywords:\n  catalog: [design, ops]\nlogging:\n  file: null\n")
        result = runner.invoke(app, ["--config", str(path), "steps"])
        assert result.exit_code == 0, result.output
        assert "design, ops" in result.output


class TestSteps:
    def test_lists_steps_and_keywords(self):
        result = runner.invoke(app, ["steps"])
        assert result.exit_code == 0, result.output
        assert "Step 1: Your Question" in result.output
        assert "Step 4: Constraints" in result.output
        assert "frontend" in result.output


class TestAskWizard:
    def test_wizard_fills_fields_and_copies(self):
        clipboard = MemoryClipboard()
        answers = [
            "Why is our p99 latency high?",
            "Started after the cache migration last week.",
            "Pick a fix this sprint",
            "No new infra",
            "backend, Product, backend",
        ]
        with patch("question_companion.adapters.cli.app._ask", new=AsyncMock(side_effect=answers)), \
             patch("question_companion.pipeline.service.get_clipboard", return_value=clipboard):
            result = runner.invoke(app, ["ask", "--copy"])

        assert result.exit_code == 0, result.output
        assert "Copied!" in result.output
        assert "What would solving this unlock" in result.output
        lines = clipboard.last.splitlines()
        assert lines[0] == "🧠 Question: Why is our p99 latency high?"
        assert lines[3] == "⏱️ Constraints: No new infra"
        assert lines[4] == "🏷️ Keywords: backend, product"

    def test_wizard_without_copy(self):
        clipboard = MemoryClipboard()
        with patch("question_companion.adapters.cli.app._ask", new=AsyncMock(side_effect=["", "", "", "", ""])), \
             patch("question_companion.pipeline.service.get_clipboard", return_value=clipboard):
            result = runner.invoke(app, ["ask", "--no-copy"])

        assert result.exit_code == 0, result.output
        assert clipboard.history == []
        assert "Reflective prompts" in result.output

    def test_wizard_copy_failure_warns(self):
        with patch("question_companion.adapters.cli.app._ask", new=AsyncMock(side_effect=["q", "", "", "", ""])), \
             patch("question_companion.pipeline.service.get_clipboard",
                   return_value=MemoryClipboard(available=False)):
            result = runner.invoke(app, ["ask", "--copy"])

        assert result.exit_code == 0, result.output
        assert "Could not copy" in result.output


class TestHelpers:
    def test_split_keywords(self):
        assert _split_keywords(" Frontend, ,people,frontend ") == ["frontend", "people"]
        assert _split_keywords("") == []

    def test_parse_overrides(self):
        assert _parse_overrides(["a.b=1", "c.d = x=y"]) == {"a.b": "1", "c.d": "x=y"}
