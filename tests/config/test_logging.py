"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from reactive_model.config.logging import (
    configure_logging,
    configure_logging_from,
    installed_handlers,
)
from reactive_model.config.models import LoggingConfig


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("reactive_model")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("reactive_model").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("reactive_model").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("reactive_model.test")
        log.warning("hello world", key="val")
        # Smoke test — verify no exception; format depends on terminal

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("reactive_model.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "reactive_model.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("reactive_model.plugins.manager").debug("Registered plugin: probe")

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Registered plugin: probe"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "reactive_model.plugins.manager"

    def test_edit_lifecycle_logged(self, capfd: pytest.CaptureFixture[str], scorecard) -> None:
        configure_logging(verbose=True, log_json=True)
        scorecard.begin_edit()
        scorecard.end_edit()

        lines = [json.loads(line) for line in capfd.readouterr().err.strip().splitlines()]
        events = [line["event"] for line in lines]
        assert "edit.begin" in events
        assert "edit.end" in events
        begin = next(line for line in lines if line["event"] == "edit.begin")
        assert begin["model"] == "Scorecard"

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("pluggy").debug("hook noise")

        captured = capfd.readouterr()
        assert captured.err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(installed_handlers()) == 1

    def test_application_handlers_kept(self) -> None:
        app_handler = logging.NullHandler()
        logging.getLogger().addHandler(app_handler)
        configure_logging(verbose=False, log_json=False)
        configure_logging(verbose=False, log_json=True)
        assert app_handler in logging.getLogger().handlers

    def test_custom_stream(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        logging.getLogger("reactive_model.test").info("to buffer")
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "to buffer"

    def test_from_config_section(self) -> None:
        configure_logging_from(LoggingConfig(verbose=True))
        assert logging.getLogger("reactive_model").level == logging.DEBUG
