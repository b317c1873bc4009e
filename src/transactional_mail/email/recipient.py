"""Email address plus optional display name."""

from __future__ import annotations

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, field_validator


class EmailRecipient(BaseModel):
    """A sender or recipient of a transactional email.

    The address is syntax-checked on construction and again on every
    assignment.  No DNS lookup is made, and the stored value is exactly
    the string that was supplied.  Addresses under the reserved ``test``
    domain are accepted for staging setups. Other special-use domains
    such as ``local`` or ``localhost`` are rejected.
    """

    model_config = ConfigDict(validate_assignment=True)

    email: str
    name: str | None = None

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str) -> str:
        """Reject strings that are not well-formed email addresses."""
        try:
            validate_email(v, check_deliverability=False, test_environment=True)
        except EmailNotValidError as exc:
            raise ValueError(f"Invalid email address: {exc}") from exc
        return v

    def __str__(self) -> str:
        if self.name:
            return f"{self.name} <{self.email}>"
        return self.email
