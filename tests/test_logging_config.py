# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import unittest
from unittest.mock import patch

from src.config.logging_config import ComponentFilter, setup_logging
from src.config.settings import Settings


def _handlers() -> list[logging.Handler]:
    return logging.getLogger("weather_store").handlers


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Start every test with a bare weather_store logger."""
        logger = logging.getLogger("weather_store")
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    def test_log_file_created_in_logs_dir(self) -> None:
        log_path = setup_logging()
        self.assertTrue(log_path.exists())
        self.assertEqual(log_path.parent.name, "logs")
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_file_and_console_levels(self) -> None:
        """File captures DEBUG; the console only WARNING and up."""
        setup_logging()
        file_levels = [
            h.level for h in _handlers()
            if isinstance(h, logging.FileHandler)
        ]
        console_levels = [
            h.level for h in _handlers()
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(file_levels, [logging.DEBUG])
        self.assertEqual(console_levels, [logging.WARNING])

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        setup_logging()
        count_before = len(_handlers())
        setup_logging()
        self.assertEqual(len(_handlers()), count_before)

    @patch.object(Settings, "CONSOLE_LOG_LEVEL", "INFO")
    def test_console_level_from_settings(self) -> None:
        setup_logging()
        console_levels = [
            h.level for h in _handlers()
            if not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(console_levels, [logging.INFO])

    @patch.object(Settings, "CONSOLE_LOG_LEVEL", "LOUD")
    def test_unknown_console_level_falls_back(self) -> None:
        setup_logging()
        console_levels = [
            h.level for h in _handlers()
            if not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(console_levels, [logging.WARNING])

    def test_records_tagged_with_component(self) -> None:
        tagger = ComponentFilter()
        record = logging.LogRecord(
            "weather_store.currency", logging.WARNING, __file__, 1,
            "rate lookup failed", None, None,
        )
        tagger.filter(record)
        self.assertEqual(getattr(record, "component"), "currency")

    def test_child_loggers_reach_run_file(self) -> None:
        """Provider loggers write into the per-run file."""
        log_path = setup_logging()
        logging.getLogger("weather_store.weather").info(
            "fan added for the run log"
        )
        for handler in _handlers():
            handler.flush()
        text = log_path.read_text(encoding="utf-8")
        self.assertIn("fan added for the run log", text)
        self.assertIn("| weather ", text)


if __name__ == "__main__":
    unittest.main()
