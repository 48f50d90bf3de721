"""Wire shapes exchanged with the Mailnow API.

The models hold no behaviour beyond serialisation.  Python attribute names
are snake_case; the aliases are the JSON keys the API uses (``from`` is a
reserved word, hence ``from_``).  Requests are frozen once built.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Attachment(BaseModel):
    """A file attached to an email.

    ``content`` must already be in a transport-safe encoding (base64) and
    ``content_type`` is a MIME type string.  Neither is checked locally.
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    content: str
    content_type: str


class EmailRequest(BaseModel):
    """Payload for ``POST /v1/email/send``.

    Missing string fields default to ``""`` so that they are reported by
    :func:`mailnow.validation.validate_email_request` rather than by the
    model constructor.

    Example::

        EmailRequest(
            from_="sender@example.com",
            to="recipient@example.com",
            subject="Hello",
            html_body="<h1>Hello World</h1>",
        )
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: str = Field(default="", alias="from")
    to: str = ""
    subject: str = ""
    html_body: str = Field(default="", alias="html")
    attachments: Tuple[Attachment, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready body, omitting ``attachments`` when empty."""
        payload = self.model_dump(by_alias=True)
        if not self.attachments:
            payload.pop("attachments", None)
        else:
            payload["attachments"] = list(payload["attachments"])
        return payload


class EmailData(BaseModel):
    """Delivery information echoed back for an accepted email."""

    message_id: str
    status: str


class EmailResponse(BaseModel):
    """Body of a successful (2xx) send."""

    success: bool
    message: str
    status_code: int
    data: EmailData


class ErrorDetail(BaseModel):
    code: str = ""
    message: str = ""
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Body of a failed (non-2xx) call: ``{"error": {...}}``."""

    error: ErrorDetail = Field(default_factory=ErrorDetail)


__all__ = [
    "Attachment",
    "EmailRequest",
    "EmailData",
    "EmailResponse",
    "ErrorDetail",
    "ErrorResponse",
]
