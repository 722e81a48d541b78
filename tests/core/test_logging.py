"""Tests for structlog configuration."""

import logging

import pytest


class TestGetLogger:
    def test_events_reach_stdlib_logging(self, caplog: pytest.LogCaptureFixture) -> None:
        from tablefilter.core.logging import get_logger

        logger = get_logger("tablefilter.test")

        with caplog.at_level(logging.INFO, logger="tablefilter.test"):
            logger.info("Something happened", rows=3)

        assert "Something happened" in caplog.text
        assert caplog.records[0].name == "tablefilter.test"

    def test_debug_suppressed_by_stdlib_level(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        from tablefilter.core.logging import get_logger

        logger = get_logger("tablefilter.quiet")

        with caplog.at_level(logging.WARNING, logger="tablefilter.quiet"):
            logger.debug("Not shown")

        assert "Not shown" not in caplog.text


class TestConfigureLogging:
    def test_sets_root_level(self) -> None:
        import structlog

        from tablefilter.core.config import LoggingSettings
        from tablefilter.core.logging import configure_logging

        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging(LoggingSettings(level="debug"))
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)
            structlog.reset_defaults()

    def test_json_output(self, caplog: pytest.LogCaptureFixture) -> None:
        import structlog

        from tablefilter.core.config import LoggingSettings
        from tablefilter.core.logging import configure_logging, get_logger

        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging(LoggingSettings(level="INFO", json_output=True))
            with caplog.at_level(logging.INFO, logger="tablefilter.json"):
                get_logger("tablefilter.json").info("evt", groups=2)
        finally:
            root.setLevel(previous)
            structlog.reset_defaults()

        assert '"event": "evt"' in caplog.text
        assert '"groups": 2' in caplog.text
