# === FILE: butler/logger.py ===
"""Logging setup for **Butler**.

All modules log to the ``"Butler"`` logger::

    from butler.logger import logger
    logger.info("Crawl started")

Records carry a ``worker`` field with the name of the asyncio task that
emitted them (``butler-worker-0``, ``butler-worker-1``, ...), or ``main``
outside a task, so interleaved output of concurrent workers stays readable.
The CLI calls :func:`init_logging`; tests and embedders may use
:func:`configure` directly.
"""
from __future__ import annotations

import asyncio
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(worker)-16s | %(message)s"
LOGGER_NAME: Final[str] = "Butler"
MAIN_WORKER: Final[str] = "main"

_LevelT = Union[int, str]


class WorkerNameFilter(logging.Filter):
    """Attach ``record.worker``: the running asyncio task name, or ``main``."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            task = asyncio.current_task()
        except RuntimeError:  # no running loop
            task = None
        record.worker = task.get_name() if task is not None else MAIN_WORKER
        return True


def _with_format(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(WorkerNameFilter())
    return handler


def _stdout_handler(fmt: str) -> logging.Handler:
    return _with_format(logging.StreamHandler(sys.stdout), fmt)


def _file_handler(file: Path | str, fmt: str) -> logging.Handler:
    # 5 MiB per file, three backups
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    return _with_format(handler, fmt)


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the ``Butler`` logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Optional path of a rotating logfile; console output is always on.
    log_format
        Format string; ``%(worker)s`` is available besides the standard fields.
    replace_handlers
        *True*: close and drop current handlers first.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    lg.addHandler(_stdout_handler(log_format))
    if log_file is not None:
        lg.addHandler(_file_handler(log_file, log_format))

    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Used by the CLI before every command."""
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT", "WorkerNameFilter"]
