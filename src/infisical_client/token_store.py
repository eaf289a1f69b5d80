"""Single-slot cache for the Universal Auth access token."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .errors import DecodeError

logger = logging.getLogger("infisical-token-store")


class TokenStore:
    """Holds at most one bearer token and knows how to obtain a new one.

    ``login`` is called to produce a token; any exception it raises is
    propagated and leaves the cached value untouched. No lock is held while
    logging in, so concurrent first callers may each log in and the last one
    to finish wins.
    """

    def __init__(self, login: Callable[[], str]) -> None:
        self._login = login
        self._token: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def has_token(self) -> bool:
        return self._token is not None

    def get_token(self) -> str:
        token = self._token
        if token is not None:
            return token
        return self._store(self._login())

    def force_refresh(self) -> str:
        logger.info("Refreshing access token")
        return self._store(self._login())

    def _store(self, token: str) -> str:
        if not token:
            raise DecodeError("login returned an empty access token")
        self._token = token
        return token
