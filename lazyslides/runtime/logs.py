"""Logging setup for the viewer process.

``configure_logging`` is idempotent: it tags the handlers it installs on the
root logger and only ever replaces its own, leaving foreign handlers (for
example pytest's capture handler) untouched.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "lazyslides"
LOG_FILENAME = "lazyslides.log"

_HANDLER_TAG_ATTR = "_lazyslides_handler"
_CONSOLE_TAG_ATTR = "_lazyslides_console"

LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """Logging options: level, stderr output, and an optional rotating file."""

    level: str = "WARNING"
    console: bool = True
    log_file: Path | None = None
    max_bytes: int = 1024 * 1024
    backup_count: int = 2
    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"


def default_log_path() -> Path:
    """Return the per-user log file location."""
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def parse_level(level: str) -> int:
    """Map a level name to its ``logging`` constant, defaulting to WARNING."""
    return LEVELS.get(str(level).strip().upper(), logging.WARNING)


def _is_ours(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _remove_our_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        if _is_ours(handler):
            root.removeHandler(handler)
            handler.close()


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """Install stderr and optional file handlers on the root logger.

    A second call is a no-op unless ``force`` is set.
    """
    root = logging.getLogger()
    if any(_is_ours(handler) for handler in root.handlers) and not force:
        return root
    _remove_our_handlers(root)

    level = parse_level(cfg.level)
    root.setLevel(level)

    handlers: list[logging.Handler] = []
    if cfg.console:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter(cfg.console_fmt))
        setattr(stream_handler, _CONSOLE_TAG_ATTR, True)
        handlers.append(stream_handler)

    if cfg.log_file is not None:
        try:
            cfg.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                cfg.log_file,
                maxBytes=cfg.max_bytes,
                backupCount=cfg.backup_count,
                encoding="utf-8",
            )
        except OSError as exc:
            root.warning("Cannot open log file %s (%s)", cfg.log_file, exc)
        else:
            file_handler.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
            handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        setattr(handler, _HANDLER_TAG_ATTR, True)
        root.addHandler(handler)
    return root


@contextlib.contextmanager
def console_logging_suspended():
    """Detach the stderr handlers installed by ``configure_logging`` for the block.

    File handlers keep receiving records. A ``NullHandler`` stands in while
    the block runs so ``logging.lastResort`` never writes to stderr either.
    The detached handlers are re-attached on exit, even when the block raises.
    """
    root = logging.getLogger()
    detached = [
        handler
        for handler in root.handlers
        if _is_ours(handler) and getattr(handler, _CONSOLE_TAG_ATTR, False)
    ]
    placeholder = logging.NullHandler()
    root.addHandler(placeholder)
    for handler in detached:
        root.removeHandler(handler)
    try:
        yield
    finally:
        root.removeHandler(placeholder)
        for handler in detached:
            root.addHandler(handler)


__all__ = [
    "LoggingConfig",
    "configure_logging",
    "console_logging_suspended",
    "default_log_path",
    "parse_level",
]
