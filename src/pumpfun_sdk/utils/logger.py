"""
Logging for the pump.fun SDK.

Modules log through children of the ``pumpfun_sdk`` logger. Handlers are
attached to that parent only, so each record is written once and one call
changes the level for the whole package.
"""

import logging
import sys

PACKAGE_LOGGER = "pumpfun_sdk"

_formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _package_logger() -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(_formatter)
        logger.addHandler(console_handler)
        logger.setLevel(logging.INFO)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get the logger for a module, typically called with __name__."""
    _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """Set the level for every SDK logger.

    Raises:
        ValueError: If a level name is not known to logging
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    _package_logger().setLevel(level)


def setup_file_logging(filename: str = "pumpfun_sdk.log", level: int = logging.INFO) -> None:
    """Also write SDK logs to a file."""
    file_handler = logging.FileHandler(filename)
    file_handler.setLevel(level)
    file_handler.setFormatter(_formatter)
    _package_logger().addHandler(file_handler)
