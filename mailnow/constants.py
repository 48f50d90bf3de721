"""Fixed configuration values for the Mailnow API.

These are module level constants and are never rebound at runtime.  Per
client overrides (base URL, timeout) are passed to :class:`mailnow.Client`
at construction instead.
"""

from __future__ import annotations

from typing import Final

API_BASE_URL: Final[str] = "https://api.mailnow.xyz"

API_VERSION: Final[str] = "v1"

EMAIL_SEND_ENDPOINT: Final[str] = f"/{API_VERSION}/email/send"

# Seconds
REQUEST_TIMEOUT: Final[float] = 30.0

API_KEY_PREFIX_LIVE: Final[str] = "mn_live_"
API_KEY_PREFIX_TEST: Final[str] = "mn_test_"

API_KEY_HEADER: Final[str] = "X-API-Key"
JSON_CONTENT_TYPE: Final[str] = "application/json"

# Environment variables read by ``Client.from_env``
ENV_API_KEY: Final[str] = "MAILNOW_API_KEY"
ENV_BASE_URL: Final[str] = "MAILNOW_BASE_URL"


__all__ = [
    "API_BASE_URL",
    "API_VERSION",
    "EMAIL_SEND_ENDPOINT",
    "REQUEST_TIMEOUT",
    "API_KEY_PREFIX_LIVE",
    "API_KEY_PREFIX_TEST",
    "API_KEY_HEADER",
    "JSON_CONTENT_TYPE",
    "ENV_API_KEY",
    "ENV_BASE_URL",
]
