"""Turn a single file or archive entry into a post record."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from .classifier import charset_of, classify
from .errors import EmptyContentError, IOFailure
from .filenames import filename_parts
from .logging import get_logger
from .models import PostRecord, RawSource
from .titles import extract_title

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .archive import ArchiveEntry

logger = get_logger("parser")


def parse_source(source: RawSource, *, decompose: bool = False) -> PostRecord:
    """Classify, decode and split ``source`` into a post record.

    Classification failures propagate unchanged. When ``decompose`` is set the
    origin path also yields the post id, slug and collection.
    """
    post = _post_from_bytes(source.content)
    post.created = source.modified
    post.source = source.origin
    if decompose:
        post.id, post.slug, post.collection = filename_parts(source.origin)
    return post


def from_bytes(content: bytes) -> PostRecord:
    """Parse raw bytes without any source metadata."""
    return _post_from_bytes(content)


def from_file(path: str | Path) -> PostRecord:
    """Read ``path`` and parse it, using its modification time as creation time."""
    file_path = Path(path)
    try:
        content = file_path.read_bytes()
        stat = file_path.stat()
    except OSError as exc:
        raise IOFailure(str(path), exc.strerror or str(exc)) from exc

    modified = datetime.fromtimestamp(stat.st_mtime, tz=UTC)
    logger.debug("Parsing %s (%d bytes)", file_path, len(content))
    return parse_source(RawSource(content=content, origin=str(file_path), modified=modified))


def from_zip_entry(entry: "ArchiveEntry", *, decompose: bool = True) -> PostRecord:
    """Read an archive entry and parse it, using the entry's stored timestamp."""
    content = entry.read()
    logger.debug("Parsing archive entry %s (%d bytes)", entry.name, len(content))
    return parse_source(
        RawSource(content=content, origin=entry.name, modified=entry.modified),
        decompose=decompose,
    )


def decode_text(content: bytes, content_type: str) -> str:
    """Decode classified bytes, honouring the sniffed charset and dropping any BOM."""
    charset = charset_of(content_type) or "utf-8"
    codec = "utf-16" if charset.startswith("utf-16") else "utf-8-sig"
    return content.decode(codec, errors="replace")


def _post_from_bytes(content: bytes) -> PostRecord:
    content_type = classify(content)
    title, body = extract_title(decode_text(content, content_type))
    if not body:
        raise EmptyContentError("post has a title but no body")
    return PostRecord(title=title, body=body)


__all__ = ["decode_text", "from_bytes", "from_file", "from_zip_entry", "parse_source"]
