"""Project-wide logging setup.

- Console logging to stderr, optional rotating UTF-8 log file.
- Idempotent: calling setup_logging() repeatedly won't duplicate handlers.

Usage:
    from stag.logging_config import setup_logging
    setup_logging()

Environment overrides:
    STAG_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR
    STAG_LOG_FILE=path/to/file.log
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import get_settings

_FILE_HANDLER_NAME = "stag_file"
_CONSOLE_HANDLER_NAME = "stag_console"


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level

    level_str = (level or "").strip().upper()
    if not level_str:
        return logging.INFO

    return logging._nameToLevel.get(level_str, logging.INFO)


def setup_logging(
    *,
    level: str | int | None = None,
    log_file: str | None = None,
    enable_console: bool = True,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Configure the root logger.

    Explicit arguments win over environment settings.
    Returns the root logger.
    """
    settings = get_settings()
    level = level if level is not None else settings.log_level
    log_file = log_file or settings.log_file

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)  # let handlers filter

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)-8s %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    existing_by_name = {getattr(h, "name", ""): h for h in root.handlers}

    if log_file:
        log_path = Path(log_file)
        if not log_path.is_absolute():
            log_path = Path.cwd() / log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = existing_by_name.get(_FILE_HANDLER_NAME)
        if file_handler is None:
            file_handler = RotatingFileHandler(
                str(log_path),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.name = _FILE_HANDLER_NAME
            root.addHandler(file_handler)

        file_handler.setFormatter(fmt)
        file_handler.setLevel(_parse_level(level))

    if enable_console:
        console_handler = existing_by_name.get(_CONSOLE_HANDLER_NAME)
        if console_handler is None:
            console_handler = logging.StreamHandler()
            console_handler.name = _CONSOLE_HANDLER_NAME
            root.addHandler(console_handler)

        console_handler.setFormatter(fmt)
        console_handler.setLevel(_parse_level(level))

    logging.getLogger(__name__).debug(
        "Logging initialized | level=%s file=%s console=%s",
        level,
        log_file,
        enable_console,
    )

    return root
