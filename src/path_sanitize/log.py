"""Logging configuration for path-sanitize."""

import logging
import sys

LOGGER_NAME = "path-sanitize"

# Library callers get a silent logger until they (or the CLI) configure one.
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: str | None = None,
) -> logging.Logger:
    """Configure console (and optional file) logging for the CLI."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)-5s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)  # Console handler keeps its own level

    return logger


def get_logger() -> logging.Logger:
    """Get the package logger without touching its configuration."""
    return logging.getLogger(LOGGER_NAME)
