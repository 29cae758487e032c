"""Logging utilities for PostFlow."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    level: int | str = logging.INFO,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure logging with Rich handler for console output."""
    logger = logging.getLogger("postflow")
    logger.setLevel(logging.DEBUG if log_file else level)

    # Remove existing handlers
    logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=True,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "postflow") -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


class LogContext:
    """Context manager for logging with extra context."""

    def __init__(self, logger: logging.Logger, context: str):
        self.logger = logger
        self.context = context

    def __enter__(self):
        self.logger.info(f"Starting: {self.context}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.logger.error(f"Failed: {self.context} - {exc_val}")
        else:
            self.logger.info(f"Completed: {self.context}")
        return False
