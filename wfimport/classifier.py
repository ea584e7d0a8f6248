"""Content sniffing that decides whether raw bytes are importable text.

The rules follow the WHATWG MIME sniffing algorithm as implemented by common
HTTP stacks: markup and byte-order-mark checks first, then a table of binary
signatures, then a scan for binary control bytes in the sniffed prefix.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from .errors import EmptyContentError, NotTextError

SNIFF_LENGTH = 512

TEXT_PLAIN = "text/plain; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

_WHITESPACE = frozenset(b"\t\n\x0c\r ")
_TAG_TERMINATORS = frozenset(b" >")
# Bytes that never appear in plain text: C0 controls except TAB, LF, FF, CR and ESC.
_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


class _Signature(ABC):
    content_type: str

    @abstractmethod
    def match(self, data: bytes, first_non_ws: int) -> Optional[str]:
        """Return the content type when ``data`` carries this signature."""


@dataclass(frozen=True)
class _ExactSignature(_Signature):
    prefix: bytes
    content_type: str

    def match(self, data: bytes, first_non_ws: int) -> Optional[str]:
        return self.content_type if data.startswith(self.prefix) else None


@dataclass(frozen=True)
class _MaskedSignature(_Signature):
    mask: bytes
    pattern: bytes
    content_type: str
    skip_whitespace: bool = False

    def match(self, data: bytes, first_non_ws: int) -> Optional[str]:
        if self.skip_whitespace:
            data = data[first_non_ws:]
        if len(data) < len(self.pattern):
            return None
        for index, expected in enumerate(self.pattern):
            if data[index] & self.mask[index] != expected:
                return None
        return self.content_type


@dataclass(frozen=True)
class _HTMLSignature(_Signature):
    tag: bytes
    content_type: str = "text/html; charset=utf-8"

    def match(self, data: bytes, first_non_ws: int) -> Optional[str]:
        data = data[first_non_ws:]
        if len(data) < len(self.tag) + 1:
            return None
        for index, expected in enumerate(self.tag):
            actual = data[index]
            if 0x41 <= expected <= 0x5A:
                actual &= 0xDF
            if actual != expected:
                return None
        if data[len(self.tag)] not in _TAG_TERMINATORS:
            return None
        return self.content_type


class _MP4Signature(_Signature):
    content_type = "video/mp4"

    def match(self, data: bytes, first_non_ws: int) -> Optional[str]:
        if len(data) < 12:
            return None
        box_size = int.from_bytes(data[:4], "big")
        if len(data) < box_size or box_size % 4 != 0:
            return None
        if data[4:8] != b"ftyp":
            return None
        for start in range(8, box_size, 4):
            if start == 12:
                continue
            if data[start : start + 3] == b"mp4":
                return self.content_type
        return None


class _TextSignature(_Signature):
    content_type = TEXT_PLAIN

    def match(self, data: bytes, first_non_ws: int) -> Optional[str]:
        for byte in data[first_non_ws:]:
            if byte in _BINARY_BYTES:
                return None
        return self.content_type


def _masked(mask: bytes, pattern: bytes, content_type: str, *, skip_whitespace: bool = False) -> _MaskedSignature:
    return _MaskedSignature(mask=mask, pattern=pattern, content_type=content_type, skip_whitespace=skip_whitespace)


_HTML_TAGS = (
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
)

_RIFF_MASK = b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff"

_SIGNATURES: Sequence[_Signature] = (
    *(_HTMLSignature(tag) for tag in _HTML_TAGS),
    _masked(b"\xff\xff\xff\xff\xff", b"<?xml", "text/xml; charset=utf-8", skip_whitespace=True),
    _ExactSignature(b"%PDF-", "application/pdf"),
    _ExactSignature(b"%!PS-Adobe-", "application/postscript"),
    # Byte order marks.
    _masked(b"\xff\xff\x00\x00", b"\xfe\xff\x00\x00", "text/plain; charset=utf-16be"),
    _masked(b"\xff\xff\x00\x00", b"\xff\xfe\x00\x00", "text/plain; charset=utf-16le"),
    _masked(b"\xff\xff\xff\x00", b"\xef\xbb\xbf\x00", "text/plain; charset=utf-8"),
    # Images.
    _ExactSignature(b"\x00\x00\x01\x00", "image/x-icon"),
    _ExactSignature(b"\x00\x00\x02\x00", "image/x-icon"),
    _ExactSignature(b"BM", "image/bmp"),
    _ExactSignature(b"GIF87a", "image/gif"),
    _ExactSignature(b"GIF89a", "image/gif"),
    _masked(
        b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff\xff\xff",
        b"RIFF\x00\x00\x00\x00WEBPVP",
        "image/webp",
    ),
    _ExactSignature(b"\x89PNG\r\n\x1a\n", "image/png"),
    _ExactSignature(b"\xff\xd8\xff", "image/jpeg"),
    # Audio and video.
    _masked(_RIFF_MASK, b"FORM\x00\x00\x00\x00AIFF", "audio/aiff"),
    _masked(b"\xff\xff\xff", b"ID3", "audio/mpeg"),
    _masked(b"\xff\xff\xff\xff\xff", b"OggS\x00", "application/ogg"),
    _masked(b"\xff" * 8, b"MThd\x00\x00\x00\x06", "audio/midi"),
    _masked(_RIFF_MASK, b"RIFF\x00\x00\x00\x00AVI ", "video/avi"),
    _masked(_RIFF_MASK, b"RIFF\x00\x00\x00\x00WAVE", "audio/wave"),
    _MP4Signature(),
    _ExactSignature(b"\x1a\x45\xdf\xa3", "video/webm"),
    # Fonts.
    _masked(
        b"\x00" * 34 + b"\xff\xff",
        b"\x00" * 34 + b"LP",
        "application/vnd.ms-fontobject",
    ),
    _ExactSignature(b"\x00\x01\x00\x00", "font/ttf"),
    _ExactSignature(b"OTTO", "font/otf"),
    _ExactSignature(b"ttcf", "font/collection"),
    _ExactSignature(b"wOFF", "font/woff"),
    _ExactSignature(b"wOF2", "font/woff2"),
    # Archives.
    _ExactSignature(b"\x1f\x8b\x08", "application/x-gzip"),
    _ExactSignature(b"PK\x03\x04", "application/zip"),
    _ExactSignature(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    _ExactSignature(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    _ExactSignature(b"7z\xbc\xaf\x27\x1c", "application/x-7z-compressed"),
    _ExactSignature(b"\x00asm", "application/wasm"),
    _TextSignature(),
)


def detect_content_type(content: bytes) -> str:
    """Return the sniffed MIME type of ``content``; never raises."""
    data = content[:SNIFF_LENGTH]
    first_non_ws = 0
    while first_non_ws < len(data) and data[first_non_ws] in _WHITESPACE:
        first_non_ws += 1
    for signature in _SIGNATURES:
        content_type = signature.match(data, first_non_ws)
        if content_type:
            return content_type
    return OCTET_STREAM


def classify(content: bytes) -> str:
    """Validate that ``content`` is importable text and return its MIME type."""
    if len(content) == 0:
        raise EmptyContentError()
    content_type = detect_content_type(content)
    if not content_type.startswith("text/"):
        raise NotTextError(content_type)
    return content_type


def charset_of(content_type: str) -> Optional[str]:
    """Extract the ``charset`` parameter from a MIME type, if present."""
    for param in content_type.split(";")[1:]:
        key, _, value = param.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip().lower()
    return None


__all__ = ["classify", "charset_of", "detect_content_type", "OCTET_STREAM", "SNIFF_LENGTH", "TEXT_PLAIN"]
