# src/config/logging_config.py

"""Per-run logging for weather_store.

Every launch writes ``logs/run_YYYYmmdd_HHMMSS.log`` at DEBUG.  The console
only shows ``Settings.CONSOLE_LOG_LEVEL`` and up (WARNING by default), which
is where degraded currency and news fetches surface during a CLI run.

Each record is tagged with its storefront component (``weather``,
``currency``, ``news``, ``cart``, ``store``, ...), taken from the last part
of the ``weather_store.*`` logger name, so console lines read
``[currency] Currency lookup USD/GBP failed, using rate 1``.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

_ROOT = "weather_store"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(component)-12s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(levelname)s [%(component)s] %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ComponentFilter(logging.Filter):
    """Set ``record.component`` from the ``weather_store.<component>`` name."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == _ROOT:
            record.component = "app"
        else:
            record.component = record.name.rsplit(".", 1)[-1]
        return True


def _console_level() -> int:
    level = logging.getLevelName(Settings.CONSOLE_LOG_LEVEL)
    return level if isinstance(level, int) else logging.WARNING


def setup_logging() -> Path:
    """Attach the per-run file and console handlers to ``weather_store``.

    Returns:
        The :class:`~pathlib.Path` to this run's log file.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    root_logger = logging.getLogger(_ROOT)
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, TUI restarts) keep the first handlers
    if root_logger.handlers:
        return log_file

    component_filter = ComponentFilter()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.addFilter(component_filter)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(_console_level())
    console_handler.addFilter(component_filter)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)

    return log_file
