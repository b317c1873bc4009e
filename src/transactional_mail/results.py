"""Response models for ``TransactionalClient.send``.

A send produces exactly one of two outcomes, grouped in the
``SendOutcome`` union:

- ``TransactionalResult`` when the service accepted the email (HTTP 200
  or 201), holding one ``TransactionalResultEmail`` per recipient.
- ``ErrorEnvelope`` for any other HTTP status.

Both expose ``ok`` and ``unwrap()`` so callers can either branch with
``match``/``isinstance`` or opt into exceptions.  Response bodies are
parsed leniently: every field is optional and unknown keys are dropped.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from transactional_mail.domain.errors import RemoteError
from transactional_mail.domain.types import EmailStatus


class _ResponseRecord(BaseModel):
    """Base for records decoded from a success response.

    The email is already accepted when these are parsed, so a field the
    service sends in an unexpected shape falls back to its default instead
    of failing the whole result.  Numeric identifiers are kept as strings.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @field_validator("*", mode="wrap")
    @classmethod
    def default_when_unparseable(
        cls, v: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        try:
            return handler(v)
        except ValidationError:
            return cls.model_fields[str(info.field_name)].get_default(call_default_factory=True)


class EmailTry(_ResponseRecord):
    """One delivery attempt reported in ``last_tries``."""

    rank: int | None = None
    at: datetime | None = None
    code: int | None = None
    message: str | None = None


class TransactionalResultEmail(_ResponseRecord):
    """Per-recipient record returned by the service for an accepted email.

    ``status`` is an ``EmailStatus`` when the service reports a known
    value and the raw string otherwise.
    """

    id: str | None = None
    message_id: str | None = None
    project_id: str | None = None
    mail_from: str | None = None
    rcpt_to: str | None = None
    rcpt_type: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    status: EmailStatus | str | None = Field(default=None, union_mode="left_to_right")
    status_details: str | None = None
    try_count: int | None = None
    last_tries: list[EmailTry] = Field(default_factory=list)


class TransactionalResult(BaseModel):
    """Success outcome of a send: the emails the service accepted."""

    model_config = ConfigDict(extra="ignore")

    emails: list[TransactionalResultEmail] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return True

    @classmethod
    def from_response(cls, payload: Any) -> TransactionalResult:
        """Build a result from a decoded JSON response body.

        Only ``emails`` is read; anything else in *payload* is ignored.
        A payload that is not a JSON object yields an empty result, and
        entries of ``emails`` that are not objects are skipped.
        """
        if not isinstance(payload, dict):
            return cls()
        emails = payload.get("emails")
        if not isinstance(emails, list):
            return cls()
        return cls.model_validate({"emails": [e for e in emails if isinstance(e, dict)]})

    def unwrap(self) -> TransactionalResult:
        return self


class ErrorEnvelope(BaseModel):
    """Failure outcome of a send: a non-2xx HTTP response.

    Attributes:
        code: The HTTP status code.
        message: The service's error message, or the HTTP reason phrase.
        errno: Transport error number; always 0 for HTTP-level failures.
        detail: The raw response body.
    """

    model_config = ConfigDict(frozen=True)

    code: int
    message: str
    errno: int = 0
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> TransactionalResult:
        """Raise this envelope as a ``RemoteError``."""
        raise RemoteError(self)


SendOutcome = TransactionalResult | ErrorEnvelope
