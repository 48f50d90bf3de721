"""Client facade for the Mailnow transactional email API.

:class:`Client` validates its API key once, keeps a shared
``requests.Session`` and sends one email per :meth:`Client.send_email`
call: local validation first, then a single HTTP attempt, then response
classification.  There are no retries; callers decide how to react to each
:class:`~mailnow.errors.MailnowError` kind.

Environment variables used by :meth:`Client.from_env`:

* ``MAILNOW_API_KEY`` – API key (``mn_live_...`` or ``mn_test_...``)
* ``MAILNOW_BASE_URL`` – Optional base URL; defaults to the production API
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

import pydantic
import requests

from mailnow.constants import (
    API_BASE_URL,
    EMAIL_SEND_ENDPOINT,
    ENV_API_KEY,
    ENV_BASE_URL,
    REQUEST_TIMEOUT,
)
from mailnow.context import RequestContext
from mailnow.errors import ServerError
from mailnow.models import EmailRequest, EmailResponse
from mailnow.transport import handle_response, make_request
from mailnow.validation import validate_api_key, validate_email_request

LOGGER = logging.getLogger(__name__)


class Client:
    """Mailnow API client.

    A client can be shared between threads; each :meth:`send_email` call is
    independent and only the session's connection pool is shared.

    Args:
        api_key: Key starting with ``mn_live_`` or ``mn_test_``.
        base_url: API origin, without a trailing slash.
        timeout: Default request timeout in seconds.
        session: Optional pre-configured session.  When omitted the client
            creates one and closes it in :meth:`close`.

    Raises:
        ValidationError: If ``api_key`` is empty or malformed.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        validate_api_key(api_key)

        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Client":
        """Build a client from ``MAILNOW_API_KEY`` and ``MAILNOW_BASE_URL``.

        Raises:
            ValidationError: If the key is unset or malformed.
        """
        env = os.environ if environ is None else environ
        api_key = env.get(ENV_API_KEY, "")
        base_url = env.get(ENV_BASE_URL) or API_BASE_URL
        return cls(api_key, base_url=base_url)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def send_email(
        self,
        request: Optional[EmailRequest],
        context: Optional[RequestContext] = None,
    ) -> EmailResponse:
        """Send one email.

        Args:
            request: The email to send.
            context: Optional cancellation/deadline handle for this call.

        Returns:
            The parsed success body.

        Raises:
            ValidationError: If the request is invalid (no network call is
                made) or the API answered 400.
            AuthError: If the API answered 401.
            RateLimitError: If the API answered 429.
            ServerError: On 5xx, unexpected statuses, or a success body that
                does not match :class:`EmailResponse`.
            MailnowConnectionError: If no response was received.
        """
        validate_email_request(request)

        url = self._base_url + EMAIL_SEND_ENDPOINT
        response = make_request(
            context,
            self._session,
            "POST",
            url,
            self._api_key,
            request,
            timeout=self._timeout,
        )
        body = handle_response(response)

        try:
            result = EmailResponse.model_validate_json(body)
        except pydantic.ValidationError as exc:
            raise ServerError("failed to parse response", exc) from exc

        LOGGER.info(
            "Email accepted: message_id=%s status=%s",
            result.data.message_id,
            result.data.status,
        )
        return result

    def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        prefix = self._api_key[: self._api_key.index("_", 3) + 1]
        return f"Client(api_key='{prefix}***', base_url={self._base_url!r})"


def new_client(api_key: str) -> Client:
    """Create a client for the production API.

    Raises:
        ValidationError: If ``api_key`` is empty or malformed.
    """
    return Client(api_key)


__all__ = ["Client", "new_client"]
