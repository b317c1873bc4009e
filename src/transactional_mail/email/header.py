"""Custom mail header carried alongside a transactional email."""

from pydantic import BaseModel


class EmailHeader(BaseModel):
    """A single ``key: value`` mail header.

    The key identifies the header within an email; the value may be
    replaced when the same key is added again.
    """

    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}: {self.value}"
