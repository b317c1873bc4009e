"""Tests for the TransactionalEmail builder."""

from __future__ import annotations

import io

import pytest
from pydantic import ValidationError

from transactional_mail.email.attachment import EmailAttachment
from transactional_mail.email.message import TransactionalEmail
from transactional_mail.email.recipient import EmailRecipient

PROJECT_ID = "proj-123"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_email() -> TransactionalEmail:
    return TransactionalEmail(project_id=PROJECT_ID)


def _attachment(name: str, data: bytes) -> EmailAttachment:
    return EmailAttachment.from_stream(io.BytesIO(data), name)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_empty_fields(self):
        email = _make_email()
        assert email.project_id == PROJECT_ID
        assert email.from_ is None
        assert email.to == []
        assert email.subject == ""
        assert email.text == ""
        assert email.html == ""
        assert email.attachments == []
        assert email.additional_headers == []

    def test_project_id_is_frozen(self):
        email = _make_email()
        with pytest.raises(ValidationError):
            email.project_id = "other"


# ---------------------------------------------------------------------------
# Sender
# ---------------------------------------------------------------------------


class TestSetFrom:
    def test_from_recipient(self):
        email = _make_email()
        sender = EmailRecipient(email="a@example.com", name="Alice")
        email.set_from(sender)
        assert email.from_ == sender

    def test_from_address_and_name(self):
        email = _make_email()
        email.set_from("a@example.com", "Alice")
        assert email.from_ is not None
        assert email.from_.email == "a@example.com"
        assert email.from_.name == "Alice"

    def test_invalid_address_propagates(self):
        email = _make_email()
        with pytest.raises(ValidationError):
            email.set_from("not-an-email", "Nobody")
        assert email.from_ is None


# ---------------------------------------------------------------------------
# Recipients
# ---------------------------------------------------------------------------


class TestRecipients:
    def test_append_in_order(self):
        email = _make_email()
        email.add_to("a@example.com", "A")
        email.add_to("b@example.com", "B")
        assert [r.email for r in email.to] == ["a@example.com", "b@example.com"]

    def test_same_address_replaced_in_place(self):
        email = _make_email()
        email.add_to("a@example.com", "First")
        email.add_to("b@example.com", "B")
        email.add_to("a@example.com", "Second")

        assert len(email.to) == 2
        assert email.to[0].email == "a@example.com"
        assert email.to[0].name == "Second"
        assert email.to[1].email == "b@example.com"

    def test_single_upsert_yields_one_entry(self):
        email = _make_email()
        email.add_recipient(EmailRecipient(email="a@example.com", name="One"))
        email.add_recipient(EmailRecipient(email="a@example.com", name="Two"))
        assert len(email.to) == 1
        assert email.to[0].name == "Two"

    def test_invalid_address_rejected(self):
        email = _make_email()
        with pytest.raises(ValidationError):
            email.add_to("", "Empty")
        assert email.to == []

    def test_recipients_snapshot_is_a_copy(self):
        email = _make_email()
        email.add_to("a@example.com")
        snapshot = email.recipients
        email.add_to("b@example.com")
        assert len(snapshot) == 1
        assert len(email.recipients) == 2


# ---------------------------------------------------------------------------
# Subject and bodies
# ---------------------------------------------------------------------------


class TestContent:
    def test_subject_at_limit(self):
        email = _make_email()
        email.set_subject("a" * 255)
        assert len(email.subject) == 255

    def test_subject_over_limit(self):
        email = _make_email()
        with pytest.raises(ValidationError):
            email.set_subject("a" * 256)
        assert email.subject == ""

    def test_subject_assignment_validated(self):
        email = _make_email()
        with pytest.raises(ValidationError):
            email.subject = "a" * 300

    def test_text_and_html(self):
        email = _make_email()
        email.set_text("plain")
        email.set_html("<p>rich</p>")
        assert email.text == "plain"
        assert email.html == "<p>rich</p>"


# ---------------------------------------------------------------------------
# Attachments
# ---------------------------------------------------------------------------


class TestAttachments:
    def test_same_name_replaced_in_place(self):
        email = _make_email()
        email.add_attachment(_attachment("a.txt", b"one"))
        email.add_attachment(_attachment("b.txt", b"bee"))
        email.add_attachment(_attachment("a.txt", b"two"))

        assert [a.name for a in email.attachments] == ["a.txt", "b.txt"]
        assert email.attachments[0].decode() == b"two"

    def test_files_snapshot(self):
        email = _make_email()
        email.add_attachment(_attachment("a.txt", b"one"))
        assert email.files == (email.attachments[0],)


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------


class TestHeaders:
    def test_append_new_key(self):
        email = _make_email()
        email.add_header("X-One", "1")
        email.add_header("X-Two", "2")
        assert [str(h) for h in email.headers] == ["X-One: 1", "X-Two: 2"]

    def test_existing_key_updated_in_place(self):
        email = _make_email()
        email.add_header("X-One", "1")
        email.add_header("X-Two", "2")
        original = email.additional_headers[0]

        email.add_header("X-One", "uno")

        assert len(email.additional_headers) == 2
        assert email.additional_headers[0] is original
        assert original.value == "uno"

    def test_keys_are_case_sensitive(self):
        email = _make_email()
        email.add_header("X-One", "1")
        email.add_header("x-one", "2")
        assert len(email.additional_headers) == 2


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestToPayload:
    def test_documented_fields(self):
        email = _make_email()
        email.set_from("a@example.com", "Alice")
        email.add_to("b@example.com", "Bob")
        email.set_subject("Hi")
        email.set_text("hello")

        payload = email.to_payload()

        assert payload == {
            "project_id": PROJECT_ID,
            "from": {"email": "a@example.com", "name": "Alice"},
            "to": [{"email": "b@example.com", "name": "Bob"}],
            "subject": "Hi",
            "text": "hello",
            "html": "",
            "attachments": [],
            "additional_headers": [],
        }

    def test_unset_sender_serialized_as_none(self):
        payload = _make_email().to_payload()
        assert "from" in payload
        assert payload["from"] is None

    def test_attachments_and_headers(self):
        email = _make_email()
        email.add_attachment(_attachment("a.txt", b"one"))
        email.add_header("X-Tag", "welcome")

        payload = email.to_payload()

        assert payload["attachments"] == [
            {"name": "a.txt", "type": "text/plain", "content": "b25l"}
        ]
        assert payload["additional_headers"] == [{"key": "X-Tag", "value": "welcome"}]

    def test_accepts_wire_alias_on_input(self):
        email = TransactionalEmail.model_validate(
            {"project_id": PROJECT_ID, "from": {"email": "a@example.com"}}
        )
        assert email.from_ is not None
        assert email.from_.email == "a@example.com"
