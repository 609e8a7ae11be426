
import logging
import sys
import os
from logging.handlers import RotatingFileHandler

from .config import get_app_config


LOG_FILE = "planner.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 5
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class CustomFormatter(logging.Formatter):
    """Console formatter that colours records by level."""

    LINE = "%(asctime)s - %(name)s - %(levelname)s - %(message)s (%(filename)s:%(lineno)d)"
    RESET = "\x1b[0m"

    # Rejections log at INFO, skipped catalog entries at WARNING, commits at DEBUG
    COLORS = {
        logging.DEBUG: "\x1b[38;20m",
        logging.INFO: "\x1b[34;20m",
        logging.WARNING: "\x1b[33;20m",
    }

    def format(self, record):
        color = self.COLORS.get(record.levelno)
        fmt = f"{color}{self.LINE}{self.RESET}" if color else self.LINE
        return logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S").format(record)


def get_logs_dir() -> str:
    """Configured log directory, defaulting to logs/ beside the package."""
    configured = get_app_config().log_dir
    return configured or os.path.join(os.path.dirname(__file__), "logs")


def setup_logger(name: str = "dayplanner", level: int = None) -> logging.Logger:
    """Configures and returns a logger instance"""

    logger = logging.getLogger(name)
    if level is None:
        level = logging.getLevelName(get_app_config().log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    # Already configured by an earlier call
    if logger.handlers:
        return logger

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(CustomFormatter())
    logger.addHandler(console)

    logs_dir = get_logs_dir()
    os.makedirs(logs_dir, exist_ok=True)
    planner_log = RotatingFileHandler(
        os.path.join(logs_dir, LOG_FILE),
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8"
    )
    planner_log.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(planner_log)

    return logger

# Global logger instance
logger = setup_logger()
