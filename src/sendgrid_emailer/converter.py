"""Conversion of EmailMessage objects into SendGrid v3 mail payloads."""

import base64
from pathlib import Path
from typing import Any, Dict, Optional

from sendgrid.helpers.mail import (
    Attachment as MailAttachment,
    Bcc,
    Cc,
    Content,
    Disposition,
    FileContent,
    FileName,
    FileType,
    From,
    Header,
    Mail,
    MimeType,
    Personalization,
    ReplyTo,
    To,
)

from .exceptions import AttachmentReadError, ValidationError
from .models import Address, Attachment, EmailMessage

ATTACHMENT_TYPE = "application/octet-stream"
ATTACHMENT_DISPOSITION = "attachment"


def format_address(address: Address, email_class=To):
    """Build a SendGrid email object rendering as ``{email}`` or ``{email, name}``."""
    email = email_class()
    email.email = address.email
    if address.name:
        email.name = address.name
    return email


def _read_attachment(attachment: Attachment) -> bytes:
    if attachment.path is None:
        content = attachment.content
        return content.encode("utf-8") if isinstance(content, str) else content

    try:
        return Path(attachment.path).read_bytes()
    except (OSError, ValueError) as e:
        raise AttachmentReadError(
            f"Unable to read attachment {attachment.path!r}: {e}", path=attachment.path
        ) from e


def convert_attachment(attachment: Attachment) -> MailAttachment:
    """Read an attachment and wrap it for the mail payload.

    Raises:
        AttachmentReadError: If the attachment path cannot be read
    """
    data = _read_attachment(attachment)
    filename = attachment.filename or Path(attachment.path).name

    return MailAttachment(
        file_content=FileContent(base64.b64encode(data).decode("ascii")),
        file_name=FileName(filename),
        file_type=FileType(ATTACHMENT_TYPE),
        disposition=Disposition(ATTACHMENT_DISPOSITION),
    )


def build_mail(message: EmailMessage, default_sender: Optional[Address] = None) -> Mail:
    """Build a SendGrid Mail object for a message.

    Args:
        message: Message to convert; it is not modified
        default_sender: Sender used when the message has no ``from_``

    Raises:
        ValidationError: If neither the message nor the default has a sender
        AttachmentReadError: If an attachment path cannot be read
    """
    sender = message.from_ or default_sender
    if sender is None:
        raise ValidationError("Message has no sender and no default sender is configured")

    # Empty cc/bcc lists are dropped by Personalization.get()
    personalization = Personalization()
    for address in message.to:
        personalization.add_to(format_address(address, To))
    for address in message.cc:
        personalization.add_cc(format_address(address, Cc))
    for address in message.bcc:
        personalization.add_bcc(format_address(address, Bcc))
    personalization.subject = message.subject

    mail = Mail()
    mail.from_email = format_address(sender, From)
    mail.subject = message.subject
    mail.add_personalization(personalization)

    if message.reply_to:
        mail.reply_to = format_address(message.reply_to, ReplyTo)

    # add_content keeps text/plain ahead of text/html
    if message.text is not None:
        mail.add_content(Content(MimeType.text, message.text))
    if message.html is not None:
        mail.add_content(Content(MimeType.html, message.html))

    for key, value in (message.headers or {}).items():
        mail.add_header(Header(key, value))

    for attachment in message.attachments:
        mail.add_attachment(convert_attachment(attachment))

    return mail


def convert_message(
    message: EmailMessage, default_sender: Optional[Address] = None
) -> Dict[str, Any]:
    """Convert a message into a SendGrid v3 mail/send request body.

    Returns:
        Request body for ``SendGridAPIClient.send``
    """
    return build_mail(message, default_sender).get()
