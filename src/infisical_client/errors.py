"""Exceptions raised by the Infisical client.

Every failure surfaced to callers derives from :class:`InfisicalError` so
applications can catch the whole family at once, or a single branch when
they care about the difference between an unreachable service, rejected
credentials and a missing secret.
"""

from __future__ import annotations

from typing import Any, Optional


class InfisicalError(Exception):
    """Base class for all client errors."""


class ConfigError(InfisicalError, ValueError):
    """Required configuration is missing or invalid."""


class TransportError(InfisicalError):
    """The HTTP request never produced a response (connection, DNS, timeout)."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class AuthenticationError(InfisicalError):
    """The Universal Auth login call failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Any = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.reason = reason


class ApiFailure(InfisicalError):
    """The API answered with a non-200 status.

    ``body`` holds the decoded JSON payload when the response was JSON and the
    raw text otherwise.
    """

    def __init__(self, status_code: int, body: Any) -> None:
        super().__init__(f"Infisical API returned {status_code}: {_describe(body)}")
        self.status_code = status_code
        self.body = body


class DecodeError(InfisicalError):
    """A 200 response whose body does not have the expected shape."""

    def __init__(self, message: str, body: Any = None) -> None:
        super().__init__(message)
        self.body = body


def _describe(body: Any) -> str:
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)
