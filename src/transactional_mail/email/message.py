"""Builder for an outgoing transactional email.

``TransactionalEmail`` aggregates sender, recipients, subject, bodies,
attachments and custom headers.  Recipients, attachments and headers are
kept unique by their natural key (address, file name, header key): adding
an entry whose key already exists replaces the earlier entry in place, so
the original insertion order is preserved.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from transactional_mail.domain.types import SUBJECT_MAX_LENGTH
from transactional_mail.email.attachment import EmailAttachment
from transactional_mail.email.header import EmailHeader
from transactional_mail.email.recipient import EmailRecipient

T = TypeVar("T")


def _upsert(items: list[T], item: T, key: Callable[[T], str]) -> None:
    """Replace the entry sharing *item*'s key, or append *item*."""
    item_key = key(item)
    for index, existing in enumerate(items):
        if key(existing) == item_key:
            items[index] = item
            return
    items.append(item)


class TransactionalEmail(BaseModel):
    """An email waiting to be sent through ``TransactionalClient.send``.

    The ``project_id`` is fixed at creation.  The sender is exposed as
    ``from_`` in Python and serialized as ``from`` on the wire.  Field
    assignments are validated, so an over-long subject fails at the point
    it is set.
    """

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    project_id: str = Field(frozen=True)
    from_: EmailRecipient | None = Field(default=None, alias="from")
    to: list[EmailRecipient] = Field(default_factory=list)
    subject: str = Field(default="", max_length=SUBJECT_MAX_LENGTH)
    text: str = ""
    html: str = ""
    attachments: list[EmailAttachment] = Field(default_factory=list)
    additional_headers: list[EmailHeader] = Field(default_factory=list)

    # -- Sender ----------------------------------------------------------------

    def set_from(self, sender: EmailRecipient | str, name: str | None = None) -> None:
        """Set the sender.

        Args:
            sender: An ``EmailRecipient``, or an address string.
            name: Display name, used only when *sender* is a string.

        Raises:
            pydantic.ValidationError: If *sender* is not a valid address.
        """
        if isinstance(sender, str):
            sender = EmailRecipient(email=sender, name=name)
        self.from_ = sender

    # -- Recipients ------------------------------------------------------------

    def add_recipient(self, recipient: EmailRecipient) -> None:
        """Add a recipient, replacing any existing one with the same address."""
        _upsert(self.to, recipient, lambda r: r.email)

    def add_to(self, email: str, name: str | None = None) -> None:
        """Add a recipient by address and optional display name.

        Raises:
            pydantic.ValidationError: If *email* is not a valid address.
        """
        self.add_recipient(EmailRecipient(email=email, name=name))

    @property
    def recipients(self) -> tuple[EmailRecipient, ...]:
        """Snapshot of the ``to`` list."""
        return tuple(self.to)

    # -- Content ---------------------------------------------------------------

    def set_subject(self, subject: str) -> None:
        """Set the subject.

        Raises:
            pydantic.ValidationError: If *subject* exceeds 255 characters.
        """
        self.subject = subject

    def set_text(self, text: str) -> None:
        self.text = text

    def set_html(self, html: str) -> None:
        self.html = html

    # -- Attachments -----------------------------------------------------------

    def add_attachment(self, attachment: EmailAttachment) -> None:
        """Add an attachment, replacing any existing one with the same name."""
        _upsert(self.attachments, attachment, lambda a: a.name)

    @property
    def files(self) -> tuple[EmailAttachment, ...]:
        """Snapshot of the attachment list."""
        return tuple(self.attachments)

    # -- Headers ---------------------------------------------------------------

    def add_header(self, name: str, value: str) -> None:
        """Add a custom header, or update the value of an existing one."""
        for header in self.additional_headers:
            if header.key == name:
                header.value = value
                return
        self.additional_headers.append(EmailHeader(key=name, value=value))

    @property
    def headers(self) -> tuple[EmailHeader, ...]:
        """Snapshot of the custom header list."""
        return tuple(self.additional_headers)

    # -- Serialization ---------------------------------------------------------

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready request body.

        Every field is present, including empty strings, empty lists and
        a ``None`` sender.
        """
        return self.model_dump(mode="json", by_alias=True)
