"""Import posts from zip archives, flat or grouped into collections."""

from __future__ import annotations

import zipfile
import zlib
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

from .errors import ArchiveOpenError, EmptyContentError, ImportErrors, IOFailure
from .logging import get_logger
from .models import DRAFTS_KEY, CollectionMap, PostRecord
from .selectors import AnyFileSelector, Selector, as_selector

logger = get_logger("archive")


@dataclass
class ArchiveEntry:
    """A single member of an open zip archive."""

    archive: zipfile.ZipFile
    info: zipfile.ZipInfo

    @property
    def name(self) -> str:
        return self.info.filename

    @property
    def is_dir(self) -> bool:
        return self.info.is_dir()

    @property
    def size(self) -> int:
        return self.info.file_size

    @property
    def modified(self) -> datetime:
        return datetime(*self.info.date_time)

    @property
    def directory(self) -> str:
        """Path of the enclosing directory, empty for top-level entries."""
        return self.name.rpartition("/")[0]

    @property
    def depth(self) -> int:
        directory = self.directory
        return directory.count("/") + 1 if directory else 0

    @property
    def collection(self) -> str:
        """Bucket name: the innermost enclosing directory, or the drafts key."""
        directory = self.directory
        if not directory:
            return DRAFTS_KEY
        return directory.rpartition("/")[2]

    def read(self) -> bytes:
        try:
            return self.archive.read(self.info)
        except (
            OSError,
            EOFError,
            NotImplementedError,
            RuntimeError,
            ValueError,
            zipfile.BadZipFile,
            zlib.error,
        ) as exc:
            raise IOFailure(self.name, str(exc)) from exc


def from_zip(
    archive: str | Path,
    selector: Optional[Selector] = None,
    *,
    errors: Optional[ImportErrors] = None,
) -> Optional[List[PostRecord]]:
    """Return the posts ``selector`` produces from every entry of ``archive``.

    Returns ``None`` when no entry produced a post. Without an ``errors``
    accumulator the first failing entry aborts the walk; with one, failures
    are recorded there and the walk continues.
    """
    chosen = as_selector(selector if selector is not None else AnyFileSelector())
    posts: List[PostRecord] = []
    with _open_archive(archive) as handle:
        for entry in _entries(handle):
            post = _select(chosen, entry, errors)
            if post is not None:
                posts.append(post)

    logger.info("Imported %d posts from %s", len(posts), archive)
    return posts or None


def from_zip_dirs(
    archive: str | Path,
    selector: Optional[Selector] = None,
    *,
    errors: Optional[ImportErrors] = None,
) -> CollectionMap:
    """Return posts from ``archive`` keyed by collection.

    Top-level entries are drafts; nested entries belong to the collection named
    after their innermost enclosing directory. The drafts key is always present.
    """
    chosen = as_selector(selector if selector is not None else AnyFileSelector())
    collections: CollectionMap = {DRAFTS_KEY: []}
    with _open_archive(archive) as handle:
        for entry in _entries(handle):
            bucket = collections.setdefault(entry.collection, [])
            post = _select(chosen, entry, errors)
            if post is not None:
                bucket.append(post)

    logger.info(
        "Imported %d posts in %d collections from %s",
        sum(len(posts) for posts in collections.values()),
        len(collections),
        archive,
    )
    return collections


@contextmanager
def _open_archive(archive: str | Path) -> Iterator[zipfile.ZipFile]:
    try:
        handle = zipfile.ZipFile(archive)
    except zipfile.BadZipFile as exc:
        raise ArchiveOpenError(str(archive), str(exc)) from exc
    except OSError as exc:
        raise IOFailure(str(archive), exc.strerror or str(exc)) from exc
    with handle:
        yield handle


def _entries(handle: zipfile.ZipFile) -> Iterator[ArchiveEntry]:
    for info in handle.infolist():
        yield ArchiveEntry(archive=handle, info=info)


def _select(
    selector: Selector, entry: ArchiveEntry, errors: Optional[ImportErrors]
) -> Optional[PostRecord]:
    try:
        return selector.select(entry)
    except EmptyContentError:
        logger.debug("Skipping empty entry %s", entry.name)
        return None
    except Exception as exc:
        if errors is None:
            raise
        logger.warning("Skipping %s: %s", entry.name, exc)
        errors.append(entry.name, exc)
        return None


__all__ = ["ArchiveEntry", "from_zip", "from_zip_dirs"]
