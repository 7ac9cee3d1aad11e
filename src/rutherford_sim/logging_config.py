# MIT License (see LICENSE)
"""
Logging setup for applications embedding the engine.

Library modules only create loggers under the `rutherford_sim` namespace;
handlers are attached here, by the CLI or by the host application.
"""
from __future__ import annotations
import logging
import sys

LOGGER_NAME = "rutherford_sim"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """
    Configure the `rutherford_sim` logger.

    Args:
        level: Logging level (e.g. logging.DEBUG).
        log_file: Optional path to also write logs to.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-running setup replaces handlers instead of duplicating output.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized")
    return logger
