"""Split post text into a title taken from a leading level-1 heading and a body."""

from __future__ import annotations

TITLE_MARKER = "# "
_BODY_LEADING = " \t\n\r"


def extract_title(content: str) -> tuple[str, str]:
    """Return ``(title, body)`` for ``content``.

    A title is only recognised when the text starts with ``"# "`` and the
    heading line is terminated by a newline. Otherwise the title is empty and
    the body is the text unchanged.
    """
    if content.startswith(TITLE_MARKER):
        eol = content.find("\n")
        if eol != -1:
            return content[len(TITLE_MARKER) : eol], content[eol:].lstrip(_BODY_LEADING)
    return "", content


__all__ = ["extract_title", "TITLE_MARKER"]
