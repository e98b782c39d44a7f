"""Logging helpers for sizekit.

Records emitted while a metadata field is being captured carry a
``capture`` attribute naming the field and the version being probed,
e.g. ``pic_information/thumb_tiny``. Handlers installed by
:func:`setup_logging` print it in brackets.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator

_LOGGER_NAME = "sizekit"
_NO_CAPTURE = "-"

_capture_label: ContextVar[str] = ContextVar("sizekit_capture", default=_NO_CAPTURE)


def current_capture() -> str:
    """Label of the capture in progress, or ``"-"`` outside of one."""
    return _capture_label.get()


@contextmanager
def capture_context(part: str) -> Iterator[str]:
    """Append ``part`` to the capture label for the duration of the block."""
    current = _capture_label.get()
    label = part if current == _NO_CAPTURE else f"{current}/{part}"
    token = _capture_label.set(label)
    try:
        yield label
    finally:
        _capture_label.reset(token)


class CaptureContextFilter(logging.Filter):
    """Stamp each record with the current capture label."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "capture"):
            record.capture = current_capture()
        return True


def _log_level() -> int:
    level_name = os.environ.get("SIZEKIT_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _log_path() -> Path:
    configured = os.environ.get("SIZEKIT_LOG_PATH")
    if configured:
        return Path(configured).expanduser()
    return Path(tempfile.gettempdir()) / "sizekit.log"


def _tagged(logger: logging.Logger, key: str) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, "sizekit_handler", None) == key]


def _install(logger: logging.Logger, key: str, handler: logging.Handler, fmt: str) -> None:
    handler.sizekit_handler = key
    handler.addFilter(CaptureContextFilter())
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def setup_logging(level: int | None = None, console: bool = True) -> Path:
    """Attach file and console handlers to the ``sizekit`` logger.

    Used by the command line tool. Host applications normally attach their
    own handlers instead; records still propagate to the root logger.
    Calling this again only updates levels.

    Args:
        level: Logging level (defaults to SIZEKIT_LOG_LEVEL env var or INFO).
        console: Whether to also log to stderr.

    Returns:
        Path to the log file.
    """
    log_level = level if level is not None else _log_level()
    sk_logger = logging.getLogger(_LOGGER_NAME)
    sk_logger.setLevel(log_level)

    log_path = _log_path()
    if not _tagged(sk_logger, "file"):
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _install(
            sk_logger,
            "file",
            RotatingFileHandler(log_path, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"),
            "%(asctime)s - %(levelname)s - %(name)s - [%(capture)s] %(message)s",
        )
        sk_logger.info("Logging to %s", log_path)

    if console and not _tagged(sk_logger, "console"):
        _install(
            sk_logger,
            "console",
            logging.StreamHandler(),
            "%(levelname)s: [%(capture)s] %(message)s",
        )
    elif not console:
        for h in _tagged(sk_logger, "console"):
            sk_logger.removeHandler(h)

    for h in _tagged(sk_logger, "console"):
        h.setLevel(log_level)

    return log_path
