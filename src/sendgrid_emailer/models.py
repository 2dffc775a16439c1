"""Data models for the SendGrid emailer."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from .exceptions import SendError, ValidationError
from .validators import split_address, validate_email_address


class SendStatus(str, Enum):
    """Status of an email send operation."""

    SUCCESS = "success"
    FAILED = "failed"


class EmailerState(str, Enum):
    """Lifecycle state of an emailer."""

    UNINITIALIZED = "uninitialized"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


@dataclass
class Address:
    """An email address with an optional display name."""

    email: str
    name: Optional[str] = None

    def __post_init__(self):
        if not self.email:
            raise ValidationError("Address email must not be empty")

    @classmethod
    def coerce(cls, value: Union["Address", Mapping[str, Any], str]) -> "Address":
        """Build an Address from an Address, a mapping or a string.

        Strings and mappings are syntax-checked; ``Address`` instances are
        passed through untouched.

        Raises:
            ValidationError: If the value is not a usable address
        """
        if isinstance(value, Address):
            return value

        if isinstance(value, str):
            email, name = split_address(value)
        elif isinstance(value, Mapping):
            email, name = value.get("email"), value.get("name")
        else:
            raise ValidationError(f"Unsupported address value: {value!r}")

        if not isinstance(email, str) or not email:
            raise ValidationError(f"Address is missing an email: {value!r}")

        is_valid, error = validate_email_address(email)
        if not is_valid:
            raise ValidationError(f"Invalid email address {email!r}: {error}")

        return cls(email=email, name=name or None)

    def to_dict(self) -> Dict[str, str]:
        if self.name:
            return {"email": self.email, "name": self.name}
        return {"email": self.email}


@dataclass
class Attachment:
    """A file attached to a message, given by path or inline content."""

    path: Optional[str] = None
    content: Optional[Union[bytes, str]] = None
    filename: Optional[str] = None

    def __post_init__(self):
        if self.path is None and self.content is None:
            raise ValidationError("Attachment needs either a path or inline content")
        if self.path is not None and self.content is not None:
            raise ValidationError("Attachment cannot have both a path and inline content")
        if self.path is None and not self.filename:
            raise ValidationError("Inline attachments require a filename")

    @classmethod
    def coerce(cls, value: Union["Attachment", Mapping[str, Any], str]) -> "Attachment":
        if isinstance(value, Attachment):
            return value
        if isinstance(value, str):
            return cls(path=value)
        if isinstance(value, Mapping):
            return cls(
                path=value.get("path"),
                content=value.get("content"),
                filename=value.get("filename"),
            )
        raise ValidationError(f"Unsupported attachment value: {value!r}")


@dataclass
class EmailMessage:
    """Provider-agnostic representation of an outgoing email."""

    to: List[Address]
    subject: str
    from_: Optional[Address] = None
    cc: List[Address] = field(default_factory=list)
    bcc: List[Address] = field(default_factory=list)
    reply_to: Optional[Address] = None
    text: Optional[str] = None
    html: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    attachments: List[Attachment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EmailMessage":
        """Build a message from the plain mapping a message builder produces.

        Accepts ``from``/``from_`` and ``replyTo``/``reply_to``. Every bad
        field is reported in a single ValidationError.
        """
        errors = []

        def _address(key, value):
            try:
                return Address.coerce(value)
            except ValidationError as e:
                errors.append(f"{key}: {e}")
                return None

        def _addresses(key):
            values = data.get(key) or []
            if isinstance(values, (str, Mapping, Address)):
                values = [values]
            elif not isinstance(values, (list, tuple)):
                errors.append(f"{key}: must be an address or a list of addresses")
                return []
            coerced = [_address(f"{key}[{i}]", v) for i, v in enumerate(values)]
            return [a for a in coerced if a is not None]

        sender = data.get("from", data.get("from_"))
        reply_to = data.get("replyTo", data.get("reply_to"))

        from_ = _address("from", sender) if sender is not None else None
        reply = _address("reply_to", reply_to) if reply_to is not None else None
        to = _addresses("to")
        cc = _addresses("cc")
        bcc = _addresses("bcc")

        attachments = []
        values = data.get("attachments") or []
        if isinstance(values, (str, Mapping, Attachment)):
            values = [values]
        elif not isinstance(values, (list, tuple)):
            errors.append("attachments: must be an attachment or a list of attachments")
            values = []
        for i, value in enumerate(values):
            try:
                attachments.append(Attachment.coerce(value))
            except ValidationError as e:
                errors.append(f"attachments[{i}]: {e}")

        subject = data.get("subject")
        if not isinstance(subject, str):
            errors.append("subject: must be a string")

        headers = data.get("headers")
        if headers is not None and not (
            isinstance(headers, Mapping)
            and all(isinstance(k, str) and isinstance(v, str) for k, v in headers.items())
        ):
            errors.append("headers: must be a mapping of strings to strings")

        if errors:
            raise ValidationError("Invalid message: " + ", ".join(errors))

        return cls(
            to=to,
            subject=subject,
            from_=from_,
            cc=cc,
            bcc=bcc,
            reply_to=reply,
            text=data.get("text"),
            html=data.get("html"),
            headers=dict(headers) if headers is not None else None,
            attachments=attachments,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary suitable for logging."""
        return {
            "from": self.from_.to_dict() if self.from_ else None,
            "to": [a.to_dict() for a in self.to],
            "cc": [a.to_dict() for a in self.cc],
            "bcc": [a.to_dict() for a in self.bcc],
            "reply_to": self.reply_to.to_dict() if self.reply_to else None,
            "subject": self.subject,
            "text": self.text,
            "html": self.html,
            "headers": self.headers,
            "attachments": [a.filename or a.path for a in self.attachments],
        }


@dataclass
class SendResult:
    """Result of sending an email."""

    success: bool
    message: EmailMessage
    info: Any = None
    status: SendStatus = field(init=False, default=SendStatus.FAILED)
    status_code: Optional[int] = None
    message_id: Optional[str] = None
    error_reason: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        self.status = SendStatus.SUCCESS if self.success else SendStatus.FAILED

    def raise_for_status(self) -> "SendResult":
        """Raise SendError if the send failed, otherwise return self."""
        if not self.success:
            raise SendError(
                f"SendGrid send failed: {self.error_reason}", details=self.error_reason
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "status": self.status.value,
            "status_code": self.status_code,
            "message_id": self.message_id,
            "error_reason": self.error_reason,
            "timestamp": self.timestamp.isoformat(),
            "recipients": [a.email for a in self.message.to],
        }
