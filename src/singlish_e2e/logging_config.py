"""
Logging configuration for the translator test harness.

Console logging on stdout (level colored on a TTY, plain in CI logs) with an
optional per-session log file.
"""

import logging
import sys
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ScenarioResult


CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(message)s"

_RESET = '\033[0m'
_LEVEL_COLORS = {
    logging.DEBUG: '\033[96m',
    logging.INFO: '\033[92m',
    logging.WARNING: '\033[93m',
    logging.ERROR: '\033[91m',
    logging.CRITICAL: '\033[1;91m',
}


class LevelColorFormatter(logging.Formatter):
    """Colors the level name; the rest of the line stays plain."""

    def format(self, record):
        color = _LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        # Other handlers share the record
        original = record.levelname
        record.levelname = f"{color}{original:8s}{_RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(
    level: str = "INFO",
    use_colors: bool = True,
    log_to_file: bool = False,
    log_file: Optional[str] = None
) -> None:
    """
    Replace the root handlers with a stdout handler and an optional file.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_colors: Color level names when stdout is a terminal
        log_to_file: Also log to ``log_file``
        log_file: Path to log file (if log_to_file is True)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    formatter_class = LevelColorFormatter if use_colors and sys.stdout.isatty() else logging.Formatter
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter_class(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    root_logger.addHandler(console_handler)

    if log_to_file and log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        root_logger.addHandler(file_handler)


def log_harness_action(
    action: str,
    details: str,
    success: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log a harness step as ``✓ action | details`` (INFO) or ``✗ ...`` (ERROR).

    Args:
        action: Step name (e.g., 'navigate', 'locate', 'inject', 'observe')
        details: Details about the step
        success: Whether the step succeeded
        logger: Logger instance (uses root if None)
    """
    logger = logger or logging.getLogger()
    status = "✓" if success else "✗"
    level = logging.INFO if success else logging.ERROR
    logger.log(level, f"{status} {action:10s} | {details}")


def log_scenario_status(
    result: "ScenarioResult",
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log the diagnostic block for a compared scenario.

    Emitted for passing and failing comparisons alike; the author's
    should_pass intent is shown next to the real outcome.
    """
    logger = logger or logging.getLogger()
    level = logging.INFO if result.matched else logging.WARNING
    logger.log(level, result.status_line)
    logger.log(level, f"  Expected: {result.scenario.expected}")
    logger.log(level, f"  Actual:   {result.actual}")
    logger.log(level, f"  Match: {'YES' if result.matched else 'NO'}")
