"""Error kinds raised while importing posts and the aggregate used by bulk walks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence


class ImportFailure(RuntimeError):
    """Base class for every failure raised by wfimport."""


class EmptyContentError(ImportFailure):
    """Raised when a source has no bytes at all."""

    def __init__(self, message: str = "file is empty") -> None:
        super().__init__(message)


class NotTextError(ImportFailure):
    """Raised when the sniffed content type is not text/*."""

    def __init__(self, content_type: str) -> None:
        super().__init__(f"invalid content type: {content_type}")
        self.content_type = content_type


class EmptyDirectoryError(ImportFailure):
    """Raised when a directory has no entries to import."""

    def __init__(self, path: str) -> None:
        super().__init__(f"directory is empty: {path}")
        self.path = path


class InvalidPatternError(ImportFailure):
    """Raised when a filename filter does not compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern


class IOFailure(ImportFailure):
    """Raised when reading, listing or opening a source fails.

    The originating ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path


class ArchiveOpenError(IOFailure):
    """Raised when a file exists but is not a readable zip container."""


@dataclass
class ImportErrorEntry:
    """A single isolated failure: the source that failed and why."""

    source: str
    cause: Exception

    def __str__(self) -> str:
        return f"{self.source}: {self.cause}"


class ImportErrors:
    """Ordered accumulator of per-source failures collected during a walk."""

    def __init__(self, entries: Optional[Sequence[ImportErrorEntry]] = None) -> None:
        self._entries: List[ImportErrorEntry] = list(entries or [])

    def append(self, source: str, cause: Exception) -> None:
        self._entries.append(ImportErrorEntry(source=source, cause=cause))

    def is_empty(self) -> bool:
        return not self._entries

    def sources(self) -> List[str]:
        return [entry.source for entry in self._entries]

    def causes(self) -> List[Exception]:
        return [entry.cause for entry in self._entries]

    def format(self) -> str:
        """Render the failures as a multi-line report, one failure per line."""
        count = len(self._entries)
        if count == 0:
            return "no errors"
        noun = "error" if count == 1 else "errors"
        lines = [f"{count} {noun} occurred:"]
        lines.extend(f"\t* {entry}" for entry in self._entries)
        return "\n".join(lines)

    def raise_if_any(self) -> None:
        if self._entries:
            raise ImportErrorGroup(self)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ImportErrorEntry]:
        return iter(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"ImportErrors({self._entries!r})"

    def __str__(self) -> str:
        return self.format()


class ImportErrorGroup(ImportFailure):
    """Raised by ``ImportErrors.raise_if_any`` to surface every collected failure."""

    def __init__(self, errors: ImportErrors) -> None:
        super().__init__(errors.format())
        self.errors = errors


__all__ = [
    "ArchiveOpenError",
    "EmptyContentError",
    "EmptyDirectoryError",
    "IOFailure",
    "ImportErrorEntry",
    "ImportErrorGroup",
    "ImportErrors",
    "ImportFailure",
    "InvalidPatternError",
    "NotTextError",
]
