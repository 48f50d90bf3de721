"""Python client for the Mailnow transactional email API.

The package validates an email request locally, posts it to
``https://api.mailnow.xyz/v1/email/send`` and maps the reply to either an
:class:`EmailResponse` or one of five exception kinds
(:class:`ValidationError`, :class:`AuthError`, :class:`RateLimitError`,
:class:`ServerError`, :class:`MailnowConnectionError`).

Example::

    from mailnow import Client, EmailRequest

    client = Client("mn_live_your_api_key")
    response = client.send_email(
        EmailRequest(
            from_="sender@example.com",
            to="recipient@example.com",
            subject="Hello",
            html_body="<h1>Hello World</h1>",
        )
    )
    print(response.data.message_id)
"""

from __future__ import annotations

from mailnow.client import Client, new_client
from mailnow.context import ContextCancelled, DeadlineExceeded, RequestContext
from mailnow.errors import (
    AuthError,
    ErrorKind,
    MailnowConnectionError,
    MailnowError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from mailnow.models import (
    Attachment,
    EmailData,
    EmailRequest,
    EmailResponse,
    ErrorDetail,
    ErrorResponse,
)
from mailnow.transport import handle_response, make_request, map_status_to_error
from mailnow.validation import (
    validate_api_key,
    validate_email_address,
    validate_email_request,
)

__all__ = [
    "Client",
    "new_client",
    "RequestContext",
    "ContextCancelled",
    "DeadlineExceeded",
    "ErrorKind",
    "MailnowError",
    "ValidationError",
    "AuthError",
    "RateLimitError",
    "ServerError",
    "MailnowConnectionError",
    "Attachment",
    "EmailRequest",
    "EmailData",
    "EmailResponse",
    "ErrorDetail",
    "ErrorResponse",
    "make_request",
    "handle_response",
    "map_status_to_error",
    "validate_api_key",
    "validate_email_address",
    "validate_email_request",
]

# SemVer version of the package
__version__: str = "0.1.0"
