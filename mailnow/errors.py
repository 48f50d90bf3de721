"""Exception hierarchy raised by the Mailnow client.

Every failure surfaced by the library is one of five kinds.  Each kind is a
subclass of :class:`MailnowError` and carries an :class:`ErrorKind`
discriminant, a human readable message and an optional underlying cause.
The five subclasses are siblings, so an instance matches exactly one of
them in an ``except`` clause.

Example::

    try:
        client.send_email(request)
    except RateLimitError:
        schedule_retry()
    except MailnowError as exc:
        log_failure(exc.kind, str(exc))
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Optional


class ErrorKind(str, Enum):
    """Discriminant identifying the remediation path for a failure."""

    VALIDATION = "validation"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    CONNECTION = "connection"


class MailnowError(Exception):
    """Base class for all errors raised by the Mailnow client.

    Args:
        message: Human readable description of the failure.
        cause: Optional underlying exception.  It is also exposed through
            ``__cause__`` so tracebacks show the full chain.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, cause={self.cause!r})"

    def unwrap(self) -> Optional[BaseException]:
        """Return the wrapped cause, or ``None`` when there is none."""
        return self.cause


class ValidationError(MailnowError):
    """Input was rejected, locally or by the API with HTTP 400."""

    kind = ErrorKind.VALIDATION


class AuthError(MailnowError):
    """The API rejected the credentials (HTTP 401)."""

    kind = ErrorKind.AUTH


class RateLimitError(MailnowError):
    """The API rate limited the caller (HTTP 429)."""

    kind = ErrorKind.RATE_LIMIT


class ServerError(MailnowError):
    """The API failed or answered outside its contract."""

    kind = ErrorKind.SERVER


class MailnowConnectionError(MailnowError):
    """No response was received: network failure, timeout or cancellation."""

    kind = ErrorKind.CONNECTION


__all__ = [
    "ErrorKind",
    "MailnowError",
    "ValidationError",
    "AuthError",
    "RateLimitError",
    "ServerError",
    "MailnowConnectionError",
]
