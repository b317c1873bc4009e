"""Outgoing email model: recipients, headers, attachments and the builder."""

from transactional_mail.email.attachment import EmailAttachment
from transactional_mail.email.header import EmailHeader
from transactional_mail.email.message import TransactionalEmail
from transactional_mail.email.mime import detect_mime_type
from transactional_mail.email.recipient import EmailRecipient

__all__ = [
    "EmailAttachment",
    "EmailHeader",
    "EmailRecipient",
    "TransactionalEmail",
    "detect_mime_type",
]
