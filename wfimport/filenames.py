"""Positional decomposition of archive entry names into post identifiers."""

from __future__ import annotations

TEXT_SUFFIX = ".txt"


def filename_parts(filename: str) -> tuple[str, str, str]:
    """Return ``(id, slug, collection)`` for an entry name like ``coll/slug_id.txt``.

    Only the presence of ``/`` and ``_`` drives the split: the collection is the
    first path segment and the slug is the part before the first underscore.
    """
    collection = ""
    slug = ""
    if filename.endswith(TEXT_SUFFIX):
        filename = filename[: -len(TEXT_SUFFIX)]

    segments = filename.split("/")
    if len(segments) > 1:
        collection = segments[0]
        filename = segments[1]

    segments = filename.split("_")
    if len(segments) > 1:
        slug = segments[0]
        filename = segments[1]

    return filename, slug, collection


__all__ = ["filename_parts", "TEXT_SUFFIX"]
