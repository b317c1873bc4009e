"""Domain layer: enumerations, wire constants, and exception classes."""

from transactional_mail.domain.errors import (
    AttachmentReadError,
    ConfigurationError,
    MissingFieldError,
    RemoteError,
    TransactionalMailError,
    TransportError,
)
from transactional_mail.domain.types import (
    DEFAULT_ENDPOINT_BASE,
    DEFAULT_REGION,
    SUBJECT_MAX_LENGTH,
    EmailStatus,
    Region,
)

__all__ = [
    "DEFAULT_ENDPOINT_BASE",
    "DEFAULT_REGION",
    "SUBJECT_MAX_LENGTH",
    "AttachmentReadError",
    "ConfigurationError",
    "EmailStatus",
    "MissingFieldError",
    "Region",
    "RemoteError",
    "TransactionalMailError",
    "TransportError",
]
