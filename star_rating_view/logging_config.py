"""Central logging configuration for the star rating view.

This module configures a console logger by default and, when the config
directory is writable, also writes logs to a file next to the style presets.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path


_LOGGER_NAME_PREFIX = "star_rating"
_DEFAULT_LEVEL = logging.INFO


def _get_log_file_path() -> Path:
    """Return the path to the star rating log file.

    The file lives in the same config directory ``store`` uses for style
    presets. If that directory cannot be resolved, the log goes to a dotfile
    in the user's home directory.
    """

    from . import store

    try:
        return store.config_dir() / "star-rating.log"
    except OSError:
        return Path.home() / ".star-rating.log"


def _resolve_level(level: int | None) -> int:
    if level is not None:
        return int(level)
    level_name = os.getenv("STAR_RATING_LOG_LEVEL")
    if level_name:
        return int(getattr(logging, level_name.upper(), _DEFAULT_LEVEL))
    return _DEFAULT_LEVEL


def configure_logging(level: int | None = None, *, log_to_file: bool = True) -> None:
    """Configure the root star rating logger.

    Idempotent: calling it again only adjusts the level and never adds
    duplicate handlers.
    """

    resolved_level = _resolve_level(level)

    logger = logging.getLogger(_LOGGER_NAME_PREFIX)
    if logger.handlers:
        logger.setLevel(resolved_level)
        for handler in logger.handlers:
            handler.setLevel(resolved_level)
        return

    logger.setLevel(resolved_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler (stderr)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if not log_to_file:
        return

    try:
        log_file = _get_log_file_path()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        logger.warning("File logging disabled: %s", exc)
        return
    file_handler.setLevel(resolved_level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a child logger for the given module name.

    Example::

        from .logging_config import get_logger
        logger = get_logger(__name__)
    """

    if name is None:
        return logging.getLogger(_LOGGER_NAME_PREFIX)
    return logging.getLogger(f"{_LOGGER_NAME_PREFIX}.{name}")
