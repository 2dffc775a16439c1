"""Shared test fixtures."""

import pytest
from unittest.mock import Mock

from sendgrid_emailer.models import Address, Attachment, EmailMessage

VALID_API_KEY = "SG.test-key-0123456789"


@pytest.fixture
def api_key():
    """A syntactically valid SendGrid API key."""
    return VALID_API_KEY


@pytest.fixture
def sendgrid_client():
    """Fake SendGrid client returning an accepted response."""
    client = Mock()
    client.send.return_value = Mock(
        status_code=202, body=b"", headers={"X-Message-Id": "msg-123"}
    )
    return client


@pytest.fixture
def client_factory(sendgrid_client):
    """Client factory handing out the fake client."""
    return Mock(return_value=sendgrid_client)


@pytest.fixture
def sample_message():
    """A message with no cc, bcc, reply-to or attachments."""
    return EmailMessage(
        from_=Address("sender@example.com"),
        to=[Address("alice@example.com", "Alice"), Address("bob@example.com")],
        subject="Quarterly report",
        text="See attached.",
        html="<p>See attached.</p>",
    )


@pytest.fixture
def attachment_file(tmp_path):
    """A small file on disk to attach."""
    path = tmp_path / "report.csv"
    path.write_bytes(b"month,total\njan,42\n")
    return path


@pytest.fixture
def message_with_attachment(sample_message, attachment_file):
    sample_message.attachments = [Attachment(path=str(attachment_file))]
    return sample_message
