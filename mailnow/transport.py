"""HTTP execution and response classification.

:func:`make_request` builds and sends one authenticated JSON request and
:func:`handle_response` turns the reply into either the raw success body or
a :class:`~mailnow.errors.MailnowError`.  Neither function keeps state; the
``requests.Session`` passed in owns the connection pool and may be shared
between threads.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import pydantic
import requests

from mailnow.constants import API_KEY_HEADER, JSON_CONTENT_TYPE, REQUEST_TIMEOUT
from mailnow.context import DeadlineExceeded, RequestContext
from mailnow.errors import (
    AuthError,
    MailnowConnectionError,
    MailnowError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from mailnow.models import EmailRequest, ErrorResponse

LOGGER = logging.getLogger(__name__)


def _encode_body(body: Any) -> bytes:
    if isinstance(body, EmailRequest):
        payload = body.to_payload()
    elif isinstance(body, pydantic.BaseModel):
        payload = body.model_dump(mode="json", by_alias=True)
    else:
        payload = body
    return json.dumps(payload, allow_nan=False).encode("utf-8")


def make_request(
    context: Optional[RequestContext],
    session: requests.Session,
    method: str,
    url: str,
    api_key: str,
    body: Any = None,
    timeout: float = REQUEST_TIMEOUT,
) -> requests.Response:
    """Send a single JSON request to the API.

    Args:
        context: Cancellation handle for this call; ``None`` behaves like
            :meth:`RequestContext.background`.
        session: Session used to execute the request.
        method: HTTP method, e.g. ``"POST"``.
        url: Absolute request URL.
        api_key: Value for the ``X-API-Key`` header.
        body: Object to encode as JSON, or ``None`` for an empty body.
        timeout: Upper bound in seconds for connecting and for each read.
            A context deadline that is closer wins.

    Returns:
        The streamed response.  The caller must close it, normally through
        :func:`handle_response`.

    Raises:
        ValidationError: If ``body`` cannot be encoded as JSON.
        MailnowConnectionError: If the request cannot be built, the context
            is already done, the headers cannot be encoded, or the network
            call fails or times out.
    """
    data: Optional[bytes] = None
    if body is not None:
        try:
            data = _encode_body(body)
        except (TypeError, ValueError) as exc:
            raise ValidationError("failed to encode request body", exc) from exc

    headers = {
        API_KEY_HEADER: api_key,
        "Content-Type": JSON_CONTENT_TYPE,
    }
    try:
        prepared = session.prepare_request(
            requests.Request(method, url, headers=headers, data=data)
        )
    except (requests.RequestException, ValueError) as exc:
        raise MailnowConnectionError("failed to create request", exc) from exc

    if context is not None:
        done = context.error()
        if done is not None:
            raise MailnowConnectionError("failed to send request", done)
        remaining = context.remaining()
        if remaining is not None:
            if remaining <= 0:
                raise MailnowConnectionError("failed to send request", DeadlineExceeded())
            timeout = min(timeout, remaining)

    # Proxies and CA bundle from the environment, as Session.request does
    settings = session.merge_environment_settings(prepared.url, {}, True, None, None)

    LOGGER.debug("%s %s (timeout=%.3fs)", method, url, timeout)
    try:
        return session.send(prepared, timeout=timeout, **settings)
    except (requests.RequestException, ValueError) as exc:
        # ValueError: http.client rejects header values outside latin-1
        raise MailnowConnectionError("failed to send request", exc) from exc


def map_status_to_error(status_code: int, message: str) -> MailnowError:
    """Return the error for a non-2xx ``status_code``.

    The mapping is total: 400, 401 and 429 have dedicated kinds, everything
    else (5xx and any unexpected code) is a :class:`ServerError`.
    """
    if status_code == 400:
        return ValidationError(message)
    if status_code == 401:
        return AuthError(message)
    if status_code == 429:
        return RateLimitError(message)
    if status_code >= 500:
        return ServerError(message)
    return ServerError(f"unexpected status code {status_code}: {message}")


def handle_response(response: requests.Response) -> bytes:
    """Read and classify ``response``, closing it on every path.

    Returns:
        The raw body of a 2xx response, unmodified.

    Raises:
        MailnowConnectionError: If the body cannot be read.
        MailnowError: The kind chosen by :func:`map_status_to_error` for any
            non-2xx status.
    """
    with response:
        try:
            body = response.content
        except requests.RequestException as exc:
            raise MailnowConnectionError("failed to read response body", exc) from exc

    status = response.status_code
    if 200 <= status < 300:
        return body

    try:
        parsed = ErrorResponse.model_validate_json(body)
    except pydantic.ValidationError:
        text = body.decode("utf-8", errors="replace")
        message = f"API request failed with status {status}: {text}"
    else:
        message = parsed.error.message or f"API request failed with status {status}"

    error = map_status_to_error(status, message)
    LOGGER.warning("Mailnow API returned %d (%s): %s", status, error.kind.value, message)
    raise error


__all__ = ["make_request", "handle_response", "map_status_to_error"]
