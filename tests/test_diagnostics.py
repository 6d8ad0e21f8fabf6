"""Tests for the injected diagnostics sink and log setup."""

from __future__ import annotations

import logging
from pathlib import Path

from themeforge.diagnostics import ROOT_LOGGER_NAME, Diagnostics, RecordingDiagnostics, configure_logging


def test_diagnostics_logs_under_component_logger(caplog):
    logger = logging.getLogger("themeforge-test")
    diagnostics = Diagnostics(logger)
    with caplog.at_level(logging.DEBUG, logger="themeforge-test"):
        diagnostics.warning("ThemeRegistry", "register_theme", "Duplicate", {"theme_id": "t1"})

    record = caplog.records[-1]
    assert record.name == "themeforge-test.ThemeRegistry"
    assert record.levelno == logging.WARNING
    assert record.operation == "register_theme"
    assert record.context == {"theme_id": "t1"}
    assert "theme_id='t1'" in record.getMessage()


def test_recording_diagnostics_captures_events():
    diagnostics = RecordingDiagnostics()
    diagnostics.info("Theme", "clone", "Cloning theme", {"theme_id": "t1"})
    diagnostics.debug("ThemePropertyResolver", "resolve_color", "Resolving")

    assert diagnostics.operations() == ["clone", "resolve_color"]
    assert diagnostics.operations("Theme") == ["clone"]
    assert diagnostics.events[0].context == {"theme_id": "t1"}
    diagnostics.clear()
    assert diagnostics.events == []


def test_configure_logging_is_idempotent(tmp_path: Path):
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    saved_propagate = logger.propagate
    for handler in saved_handlers:
        logger.removeHandler(handler)
    try:
        first = configure_logging(tmp_path / "logs", "debug")
        second = configure_logging(tmp_path / "logs")
        assert first is second
        assert len(first.handlers) == 1
        assert first.level == logging.INFO

        Diagnostics().info("ThemeService", "activate_theme", "Activated theme")
        first.handlers[0].flush()
        assert "activate_theme" in (tmp_path / "logs" / "themeforge.log").read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            logger.addHandler(handler)
        logger.setLevel(saved_level)
        logger.propagate = saved_propagate
