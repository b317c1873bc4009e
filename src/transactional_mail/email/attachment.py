"""Base64-encoded file attachment for a transactional email.

Attachments are immutable once built.  Use ``from_file_path`` for files
on disk or ``from_stream`` for any seekable readable object already
opened by the caller.
"""

from __future__ import annotations

import base64
import binascii
from pathlib import Path
from typing import IO, AnyStr

import structlog
from pydantic import BaseModel, ConfigDict

from transactional_mail.domain.errors import AttachmentReadError
from transactional_mail.email.mime import detect_mime_type

logger = structlog.get_logger()


class EmailAttachment(BaseModel):
    """A named, typed, base64-encoded attachment.

    Attributes:
        name: File name presented to the recipient.
        type: MIME type detected from the content.
        content: Base64 encoding of the full file content.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    content: str

    @classmethod
    def from_file_path(cls, path: str | Path) -> EmailAttachment:
        """Build an attachment from a file on disk.

        Args:
            path: Path to the file.  Its final segment becomes the name.

        Returns:
            An ``EmailAttachment`` holding the full file content.

        Raises:
            AttachmentReadError: If the file cannot be opened or read.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise AttachmentReadError(f"Unable to read file {path}: {exc}") from exc

        return cls._from_bytes(data, path.name)

    @classmethod
    def from_stream(cls, stream: IO[AnyStr], file_name: str) -> EmailAttachment:
        """Build an attachment from an open stream.

        The stream is rewound to its start and read to exhaustion.  The
        caller keeps ownership of the stream and remains responsible for
        closing it.  Text streams are encoded as UTF-8.

        Args:
            stream: A seekable, readable binary or text stream.
            file_name: Name to give the attachment.

        Returns:
            An ``EmailAttachment`` holding everything read from the stream.

        Raises:
            AttachmentReadError: If the stream cannot be rewound or read.
        """
        try:
            stream.seek(0)
            raw = stream.read()
        except (OSError, ValueError) as exc:
            # io.UnsupportedOperation and reads on closed files land here
            raise AttachmentReadError(f"Unable to read stream: {exc}") from exc

        data = raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)
        return cls._from_bytes(data, file_name)

    @classmethod
    def _from_bytes(cls, data: bytes, name: str) -> EmailAttachment:
        mime = detect_mime_type(data, name)
        logger.debug("attachment_loaded", name=name, type=mime, size=len(data))
        return cls(
            name=name,
            type=mime,
            content=base64.b64encode(data).decode("ascii"),
        )

    def decode(self) -> bytes:
        """Return the raw bytes behind ``content``.

        Raises:
            ValueError: If ``content`` is not valid base64.
        """
        try:
            return base64.b64decode(self.content, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"Attachment {self.name!r} has invalid base64 content") from exc

    @property
    def size(self) -> int:
        """Size of the decoded content in bytes."""
        return len(self.decode())
