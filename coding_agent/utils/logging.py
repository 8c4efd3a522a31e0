"""Logging configuration."""

import logging
import os
import sys

from pydantic import BaseModel

VERBOSITY_LEVELS = ("WARNING", "INFO", "DEBUG")


class LogConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_verbosity(cls, verbose: int) -> "LogConfig":
        """Map a repeated -v count to a level: none for WARNING, -v for INFO, -vv or more for DEBUG."""
        return cls(level=VERBOSITY_LEVELS[min(max(verbose, 0), len(VERBOSITY_LEVELS) - 1)])


def setup_logging(config: LogConfig | None = None) -> None:
    """Set up logging configuration for the CLI.

    Logs go to stderr; stdout carries the agent's answer.
    """
    if config is None:
        config = LogConfig()

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
        datefmt=config.date_format,
        stream=sys.stderr,
        force=True,  # Override any existing configuration
    )

    # Set specific log levels for third-party libraries
    logging.getLogger("anthropic").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Get a logger for a specific module.

    Args:
        name: Module name (typically __name__)
        level: Explicit level; defaults to the LOG_LEVEL env var, then NOTSET

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    log_level = level or os.getenv("LOG_LEVEL")
    if log_level:
        logger.setLevel(log_level.upper())

    return logger
