"""Content-based MIME type detection for attachments."""

from __future__ import annotations

import mimetypes

import filetype  # type: ignore[import-untyped]

EMPTY_MIME_TYPE = "application/x-empty"
TEXT_MIME_TYPE = "text/plain"
BINARY_MIME_TYPE = "application/octet-stream"

# Non-``text/*`` types whose content is still plain UTF-8 text
TEXTUAL_MIME_TYPES = frozenset(
    {"application/json", "application/xml", "application/javascript", "image/svg+xml"}
)


def _textual_type_for(name: str | None) -> str | None:
    if not name:
        return None
    guessed, _ = mimetypes.guess_type(name, strict=False)
    if guessed and (guessed.startswith("text/") or guessed in TEXTUAL_MIME_TYPES):
        return guessed
    return None


def detect_mime_type(data: bytes, name: str | None = None) -> str:
    """Guess the MIME type of *data* from its leading bytes.

    Known binary formats are recognised by magic number via ``filetype``.
    Anything else that decodes as UTF-8 is text: its subtype comes from
    the extension of *name* (``report.csv`` is ``text/csv``) and defaults
    to ``text/plain``.  Content that is neither is an opaque byte stream.

    The name never overrides the content, so a text file called
    ``photo.png`` is still ``text/plain``.

    Args:
        data: The full attachment content.
        name: The attachment's file name, if known.

    Returns:
        A MIME type string such as ``image/png`` or ``text/csv``.
    """
    if not data:
        return EMPTY_MIME_TYPE

    mime: str | None = filetype.guess_mime(data)
    if mime:
        return mime

    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return BINARY_MIME_TYPE
    return _textual_type_for(name) or TEXT_MIME_TYPE
