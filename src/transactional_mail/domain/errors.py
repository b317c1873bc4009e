"""Exception classes for the transactional mail client.

Input validation on the data model (address syntax, subject length,
region, endpoint URL) is enforced by pydantic and surfaces as
``pydantic.ValidationError``.  The classes below cover everything else.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from transactional_mail.results import ErrorEnvelope


class TransactionalMailError(Exception):
    """Base class for all errors raised by the transactional mail client."""


class MissingFieldError(TransactionalMailError, ValueError):
    """Raised by ``send`` when an email lacks a required field.

    Attributes:
        field: Name of the missing field on the wire record.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class AttachmentReadError(TransactionalMailError, OSError):
    """Raised when an attachment source file or stream cannot be read."""


class TransportError(TransactionalMailError):
    """Raised when the HTTP exchange fails below the protocol level.

    Covers DNS resolution, connection, TLS, timeout and reset failures.
    No HTTP status exists in that case, so ``code`` is always 0.

    Attributes:
        message: The underlying transport error message.
        errno: The operating-system error number, or 0 when unavailable.
    """

    code = 0

    def __init__(self, message: str, errno: int = 0) -> None:
        self.message = message
        self.errno = errno
        super().__init__(message)


class RemoteError(TransactionalMailError):
    """Raised when the caller unwraps an ``ErrorEnvelope``.

    Attributes:
        envelope: The error envelope returned by the service.
    """

    def __init__(self, envelope: ErrorEnvelope) -> None:
        self.envelope = envelope
        super().__init__(f"HTTP {envelope.code}: {envelope.message}")

    @property
    def code(self) -> int:
        return self.envelope.code

    @property
    def detail(self) -> str:
        return self.envelope.detail


class ConfigurationError(TransactionalMailError):
    """Raised when required credentials are missing in production mode."""
