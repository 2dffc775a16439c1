"""Email validation utilities."""

from email.utils import parseaddr
from typing import Optional, Tuple

from email_validator import validate_email, EmailNotValidError


def validate_email_address(email: str) -> Tuple[bool, str]:
    """Validate an email address.

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, normalized_email_or_error_message)
    """
    try:
        valid = validate_email(email, check_deliverability=False)
        return True, valid.normalized
    except EmailNotValidError as e:
        return False, str(e)


def split_address(value: str) -> Tuple[str, Optional[str]]:
    """Split ``"Name <user@example.com>"`` into its email and display name.

    A bare address comes back with a name of ``None``.
    """
    name, email = parseaddr(value)
    if not email:
        email = value.strip()
    return email, (name or None)
