# recipe_ranker/utils/logger.py
"""
Logging utilities for the recipe ranking engine.

Engine modules get child loggers of "recipe_ranker" via get_logger();
applications call setup_logging() once to attach handlers.
"""
import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Optional


ROOT_LOGGER_NAME = "recipe_ranker"


def setup_logging(log_level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Set up engine logging with console and optional rotating file output.

    Args:
        log_level: Log level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path; parent directory is created

    Returns:
        Configured root engine logger
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Clear any existing handlers so repeated setup doesn't duplicate output
    logger.handlers.clear()

    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(pathname)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized - Level: %s, File: %s", log_level, log_file)
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for an engine module.

    Args:
        name: Module name (usually __name__); the package prefix is not repeated

    Returns:
        Logger instance under the "recipe_ranker" hierarchy
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


class ContextLogger:
    """Context manager for logging operations with timing"""

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.INFO):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.log(self.level, "Starting: %s", self.operation)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.perf_counter() - self.start_time

        if exc_type is None:
            self.logger.log(self.level, "Completed: %s (%.3fs)", self.operation, duration)
        else:
            self.logger.error("Failed: %s (%.3fs) - %s", self.operation, duration, exc_val)
        # Never suppress the exception
        return False
