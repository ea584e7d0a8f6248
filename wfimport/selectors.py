"""Selectors decide which archive entries become posts and how.

A selector returns a ``PostRecord`` for an entry it accepts and ``None`` for
one it ignores. Raising ``EmptyContentError`` also means "skip"; any other
exception is a failure of the entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional, Protocol

from .filenames import TEXT_SUFFIX
from .models import PostRecord
from .parser import from_zip_entry

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .archive import ArchiveEntry


class Selector(Protocol):
    """Protocol implemented by archive entry selectors."""

    def select(self, entry: "ArchiveEntry") -> Optional[PostRecord]:
        """Return a post for ``entry`` or ``None`` to leave it out."""


@dataclass
class AnyFileSelector:
    """Accepts every file entry, at any depth of the archive."""

    decompose: bool = True

    def select(self, entry: "ArchiveEntry") -> Optional[PostRecord]:
        if entry.is_dir:
            return None
        return from_zip_entry(entry, decompose=self.decompose)


@dataclass
class TopLevelSelector:
    """Accepts file entries that sit at the root of the archive."""

    decompose: bool = True

    def select(self, entry: "ArchiveEntry") -> Optional[PostRecord]:
        if entry.is_dir or entry.depth > 0:
            return None
        return from_zip_entry(entry, decompose=self.decompose)


@dataclass
class TextFileSelector:
    """Accepts ``.txt`` file entries only."""

    decompose: bool = True

    def select(self, entry: "ArchiveEntry") -> Optional[PostRecord]:
        if entry.is_dir or not entry.name.endswith(TEXT_SUFFIX):
            return None
        return from_zip_entry(entry, decompose=self.decompose)


@dataclass
class FunctionSelector:
    """Adapts a plain ``entry -> PostRecord | None`` callable to the protocol."""

    func: Callable[["ArchiveEntry"], Optional[PostRecord]]

    def select(self, entry: "ArchiveEntry") -> Optional[PostRecord]:
        return self.func(entry)


_BUILTIN_SELECTORS: Dict[str, Callable[[], Selector]] = {
    "any": AnyFileSelector,
    "text": TextFileSelector,
    "top-level": TopLevelSelector,
}


def selector_names() -> list[str]:
    return list(_BUILTIN_SELECTORS)


def get_selector(name: str) -> Selector:
    """Instantiate a built-in selector by name."""
    try:
        factory = _BUILTIN_SELECTORS[name.lower()]
    except KeyError:
        known = ", ".join(_BUILTIN_SELECTORS)
        raise ValueError(f"Unknown selector '{name}' (expected one of: {known})") from None
    return factory()


def as_selector(obj: object) -> Selector:
    """Coerce a selector instance or a plain callable into a ``Selector``."""
    if callable(getattr(obj, "select", None)):
        return obj  # type: ignore[return-value]
    if callable(obj):
        return FunctionSelector(obj)  # type: ignore[arg-type]
    raise TypeError("Selector must provide select(entry) or be callable")


__all__ = [
    "AnyFileSelector",
    "FunctionSelector",
    "Selector",
    "TextFileSelector",
    "TopLevelSelector",
    "as_selector",
    "get_selector",
    "selector_names",
]
