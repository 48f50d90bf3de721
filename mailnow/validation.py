"""Local validation of API keys and email requests.

All checks are pure functions: they return ``None`` when the input is
acceptable and raise :class:`~mailnow.errors.ValidationError` otherwise.
The address check is a pragmatic pattern match, not RFC 5322 parsing;
quoted local parts, IP-literal domains and internationalised labels are
rejected.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

from mailnow.constants import API_KEY_PREFIX_LIVE, API_KEY_PREFIX_TEST
from mailnow.errors import ValidationError

if TYPE_CHECKING:
    from mailnow.models import EmailRequest

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def validate_api_key(api_key: str) -> None:
    """Check that ``api_key`` is non-empty and carries a known prefix.

    Raises:
        ValidationError: If the key is empty or has neither the live nor
            the test prefix.
    """
    if not api_key:
        raise ValidationError("API key cannot be empty")

    if not api_key.startswith((API_KEY_PREFIX_LIVE, API_KEY_PREFIX_TEST)):
        raise ValidationError(
            f"API key must start with '{API_KEY_PREFIX_LIVE}' or '{API_KEY_PREFIX_TEST}'"
        )


def validate_email_address(address: str) -> None:
    """Check that ``address`` looks like ``local@domain.tld``.

    Raises:
        ValidationError: If the address is empty or does not match
            :data:`EMAIL_PATTERN`.
    """
    if not address:
        raise ValidationError("email address cannot be empty")

    # ``$`` alone would also accept a trailing newline
    if not EMAIL_PATTERN.fullmatch(address):
        raise ValidationError(f"invalid email address format: {address}")


def validate_email_request(request: Optional[EmailRequest]) -> None:
    """Validate a request before anything is sent.

    Fields are checked in a fixed order (from, to, subject, html body) and
    the first failure is raised.  Address format failures wrap the error
    from :func:`validate_email_address` as their cause.

    Raises:
        ValidationError: On the first missing or malformed field.
    """
    if request is None:
        raise ValidationError("email request cannot be nil")

    if not request.from_:
        raise ValidationError("from address is required")
    try:
        validate_email_address(request.from_)
    except ValidationError as exc:
        raise ValidationError("invalid from address", exc) from exc

    if not request.to:
        raise ValidationError("to address is required")
    try:
        validate_email_address(request.to)
    except ValidationError as exc:
        raise ValidationError("invalid to address", exc) from exc

    if not request.subject:
        raise ValidationError("subject is required")

    if not request.html_body:
        raise ValidationError("HTML body is required")


__all__ = [
    "EMAIL_PATTERN",
    "validate_api_key",
    "validate_email_address",
    "validate_email_request",
]
