"""Client library for the Scaleway transactional email API."""

from transactional_mail.client import ClientConfig, TransactionalClient
from transactional_mail.domain.errors import (
    AttachmentReadError,
    ConfigurationError,
    MissingFieldError,
    RemoteError,
    TransactionalMailError,
    TransportError,
)
from transactional_mail.domain.types import EmailStatus, Region
from transactional_mail.email import (
    EmailAttachment,
    EmailHeader,
    EmailRecipient,
    TransactionalEmail,
)
from transactional_mail.results import (
    EmailTry,
    ErrorEnvelope,
    SendOutcome,
    TransactionalResult,
    TransactionalResultEmail,
)

__all__ = [
    "AttachmentReadError",
    "ClientConfig",
    "ConfigurationError",
    "EmailAttachment",
    "EmailHeader",
    "EmailRecipient",
    "EmailStatus",
    "EmailTry",
    "ErrorEnvelope",
    "MissingFieldError",
    "Region",
    "RemoteError",
    "SendOutcome",
    "TransactionalClient",
    "TransactionalEmail",
    "TransactionalMailError",
    "TransactionalResult",
    "TransactionalResultEmail",
    "TransportError",
]
