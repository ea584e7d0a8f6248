"""Bulk import of every matching file directly inside a directory."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List, Optional, Pattern, Tuple

from .errors import EmptyDirectoryError, ImportErrors, ImportFailure, InvalidPatternError, IOFailure
from .logging import get_logger
from .models import PostRecord
from .parser import from_file

logger = get_logger("directory")

_MATCH_ALL = "."


def from_directory(
    path: str | Path, pattern: Optional[str] = None
) -> Tuple[List[PostRecord], Optional[ImportErrors]]:
    """Parse every file in ``path`` whose name matches ``pattern``.

    Subdirectories are skipped, not recursed. Files that fail to parse are left
    out of the returned list and reported in the returned ``ImportErrors``,
    which is ``None`` when every file parsed.
    """
    matcher = _compile(pattern)
    directory = Path(path)
    try:
        with os.scandir(directory) as scan:
            entries = list(scan)
    except OSError as exc:
        raise IOFailure(str(path), exc.strerror or str(exc)) from exc

    if not entries:
        raise EmptyDirectoryError(str(path))

    logger.debug("Scanning %d entries in %s", len(entries), directory)
    errors = ImportErrors()
    posts: List[PostRecord] = []
    for entry in entries:
        if _is_dir(entry):
            logger.debug("Skipping directory %s", entry.path)
            continue
        if not matcher.search(entry.name):
            continue
        try:
            post = from_file(directory / entry.name)
        except ImportFailure as exc:
            logger.warning("Skipping %s: %s", entry.path, exc)
            errors.append(entry.path, exc)
            continue
        posts.append(post)

    logger.info("Imported %d posts from %s", len(posts), directory)
    return posts, (errors or None)


def from_directory_match(
    path: str | Path, pattern: str
) -> Tuple[List[PostRecord], Optional[ImportErrors]]:
    """Like ``from_directory`` with a required filename regular expression."""
    return from_directory(path, pattern)


def _compile(pattern: Optional[str]) -> Pattern[str]:
    source = pattern or _MATCH_ALL
    try:
        return re.compile(source)
    except re.error as exc:
        raise InvalidPatternError(source, str(exc)) from exc


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


__all__ = ["from_directory", "from_directory_match"]
