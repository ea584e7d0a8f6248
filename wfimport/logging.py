"""Logging setup shared by the wfimport library and CLI.

Library modules log through children of the ``wfimport`` logger: walkers emit
progress at INFO, skipped entries at DEBUG and isolated per-entry failures at
WARNING. The CLI installs the handlers; importing the library alone installs
none.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "wfimport"
_CONSOLE_FORMAT = "[wfimport] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``wfimport`` or a child logger such as ``wfimport.archive``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route wfimport records to stderr and, optionally, to ``log_file``.

    ``verbose`` adds the per-entry DEBUG records. ``quiet`` limits stderr to
    skipped-entry warnings and worse, so piped JSON output stays readable;
    the log file still receives everything the logger emits. Calling this
    again replaces the handlers installed by the previous call.
    """
    record_level = logging.DEBUG if verbose else logging.INFO
    console_level = logging.WARNING if quiet else record_level

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(record_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_with_format(logging.StreamHandler(), console_level, _CONSOLE_FORMAT))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _with_format(logging.FileHandler(log_file, encoding="utf-8"), record_level, _FILE_FORMAT)
        )
    return logger


def _with_format(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


__all__ = ["configure_logging", "get_logger"]
