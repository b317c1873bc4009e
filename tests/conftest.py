"""Shared pytest fixtures for the transactional mail test suite."""

import pytest

from transactional_mail.client import TransactionalClient
from transactional_mail.email.message import TransactionalEmail

PROJECT_ID = "11111111-2222-3333-4444-555555555555"
ACCESS_KEY = "SCWXXXXXXXXXXXXXXXXX"
ACCESS_SECRET = "secret-token"


@pytest.fixture
def client() -> TransactionalClient:
    """A client in the default region with no transport configured."""
    return TransactionalClient(PROJECT_ID, ACCESS_KEY, ACCESS_SECRET)


@pytest.fixture
def complete_email(client: TransactionalClient) -> TransactionalEmail:
    """An email with every field ``send`` requires."""
    email = client.create_email()
    email.set_from("a@example.com", "Alice")
    email.add_to("b@example.com", "Bob")
    email.set_subject("Hi")
    email.set_text("hello")
    return email
