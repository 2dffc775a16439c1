"""Tests for data models."""

import pytest

from sendgrid_emailer.exceptions import SendError, ValidationError
from sendgrid_emailer.models import (
    Address,
    Attachment,
    EmailMessage,
    SendResult,
    SendStatus,
)


class TestAddress:
    """Tests for Address model."""

    def test_to_dict_without_name(self):
        assert Address("a@x.com").to_dict() == {"email": "a@x.com"}

    def test_to_dict_with_name(self):
        assert Address("a@x.com", "A").to_dict() == {"email": "a@x.com", "name": "A"}

    def test_empty_email_raises_error(self):
        with pytest.raises(ValidationError):
            Address("")

    def test_coerce_from_string(self):
        """Test parsing a display-name string."""
        address = Address.coerce("Alice <alice@example.com>")
        assert address == Address("alice@example.com", "Alice")

    def test_coerce_from_mapping(self):
        address = Address.coerce({"email": "bob@example.com"})
        assert address.email == "bob@example.com"
        assert address.name is None

    def test_coerce_passes_address_through(self):
        original = Address("carol@example.com", "Carol")
        assert Address.coerce(original) is original

    def test_coerce_rejects_invalid_email(self):
        with pytest.raises(ValidationError, match="not-an-email"):
            Address.coerce("not-an-email")

    def test_coerce_rejects_unsupported_type(self):
        with pytest.raises(ValidationError):
            Address.coerce(42)


class TestAttachment:
    """Tests for Attachment model."""

    def test_path_attachment(self):
        attachment = Attachment(path="/tmp/report.pdf")
        assert attachment.filename is None

    def test_inline_attachment_requires_filename(self):
        with pytest.raises(ValidationError):
            Attachment(content=b"data")

    def test_requires_a_source(self):
        with pytest.raises(ValidationError):
            Attachment(filename="empty.txt")

    def test_rejects_both_sources(self):
        with pytest.raises(ValidationError):
            Attachment(path="/tmp/a.txt", content="x", filename="a.txt")

    def test_coerce_from_string_path(self):
        assert Attachment.coerce("/tmp/a.txt") == Attachment(path="/tmp/a.txt")


class TestEmailMessage:
    """Tests for EmailMessage model."""

    def test_defaults(self):
        msg = EmailMessage(to=[Address("user@example.com")], subject="Test")

        assert msg.cc == []
        assert msg.bcc == []
        assert msg.attachments == []
        assert msg.reply_to is None

    def test_from_dict(self):
        """Test building a message from its mapping form."""
        msg = EmailMessage.from_dict(
            {
                "from": {"email": "sender@example.com", "name": "Sender"},
                "to": ["alice@example.com", {"email": "bob@example.com", "name": "Bob"}],
                "cc": "Carol <carol@example.com>",
                "replyTo": {"email": "replies@example.com"},
                "subject": "Hello",
                "text": "Hi there",
                "headers": {"X-Campaign": "spring"},
                "attachments": ["/tmp/report.pdf"],
            }
        )

        assert msg.from_ == Address("sender@example.com", "Sender")
        assert [a.email for a in msg.to] == ["alice@example.com", "bob@example.com"]
        assert msg.cc == [Address("carol@example.com", "Carol")]
        assert msg.bcc == []
        assert msg.reply_to == Address("replies@example.com")
        assert msg.headers == {"X-Campaign": "spring"}
        assert msg.attachments == [Attachment(path="/tmp/report.pdf")]

    def test_from_dict_reports_every_bad_field(self):
        with pytest.raises(ValidationError) as exc_info:
            EmailMessage.from_dict({"to": ["bad-one", "ok@example.com", "bad-two"]})

        message = str(exc_info.value)
        assert "to[0]" in message
        assert "to[2]" in message
        assert "subject" in message
        assert "to[1]" not in message

    @pytest.mark.parametrize("key", ["to", "cc", "bcc"])
    def test_from_dict_rejects_scalar_recipients(self, key):
        with pytest.raises(ValidationError, match=f"{key}: must be an address"):
            EmailMessage.from_dict({"to": ["ok@example.com"], key: 5, "subject": "Hi"})

    @pytest.mark.parametrize("headers", ["X-Campaign: spring", ["X-Campaign"], {"X-Retry": 3}])
    def test_from_dict_rejects_bad_headers(self, headers):
        with pytest.raises(ValidationError, match="headers: must be a mapping"):
            EmailMessage.from_dict({"to": ["ok@example.com"], "subject": "Hi", "headers": headers})

    def test_from_dict_rejects_scalar_attachments(self):
        with pytest.raises(ValidationError, match="attachments: must be"):
            EmailMessage.from_dict({"to": ["ok@example.com"], "subject": "Hi", "attachments": 5})

    def test_to_dict(self, sample_message):
        data = sample_message.to_dict()

        assert data["from"] == {"email": "sender@example.com"}
        assert data["to"][0] == {"email": "alice@example.com", "name": "Alice"}
        assert data["subject"] == "Quarterly report"


class TestSendResult:
    """Tests for SendResult model."""

    def test_successful_send_result(self, sample_message):
        result = SendResult(
            success=True,
            message=sample_message,
            message_id="abc123",
        )

        assert result.raise_for_status() is result
        assert result.message_id == "abc123"

    @pytest.mark.parametrize(
        "success, status", [(True, SendStatus.SUCCESS), (False, SendStatus.FAILED)]
    )
    def test_status_follows_success(self, sample_message, success, status):
        """Test that status is derived from the success flag."""
        result = SendResult(success=success, message=sample_message)

        assert result.status == status
        assert result.to_dict()["status"] == status.value

    def test_failed_send_result_raises_for_status(self, sample_message):
        result = SendResult(
            success=False, message=sample_message, error_reason="bad address"
        )

        with pytest.raises(SendError) as exc_info:
            result.raise_for_status()

        assert exc_info.value.details == "bad address"
        assert "bad address" in str(exc_info.value)

    def test_send_result_to_dict(self, sample_message):
        """Test converting send result to dictionary."""
        result = SendResult(
            success=True,
            message=sample_message,
            status_code=202,
            message_id="abc123",
        )

        result_dict = result.to_dict()

        assert result_dict["success"] is True
        assert result_dict["status"] == "success"
        assert result_dict["status_code"] == 202
        assert result_dict["message_id"] == "abc123"
        assert result_dict["recipients"] == ["alice@example.com", "bob@example.com"]
