from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, TypeVar
from urllib.parse import quote

import requests

from .config_loader import InfisicalConfig
from .errors import ApiFailure, AuthenticationError, DecodeError, TransportError
from .token_store import TokenStore

logger = logging.getLogger("infisical-client")

LOGIN_PATH = "/v1/auth/universal-auth/login"
SECRETS_PATH = "/v3/secrets/raw"
TOKEN_ERROR = "TokenError"

T = TypeVar("T")


@dataclass(frozen=True)
class _Outcome:
    """Result of classifying one API response."""

    status_code: int
    body: Any
    bad_token: bool = False


class SecretsClient:
    """Reads secrets from one Infisical workspace.

    The client logs in lazily on first use and keeps the access token for its
    own lifetime. When the API reports the token as invalid it logs in again
    and retries the request once.

    Usage::

        with SecretsClient(load_config()) as client:
            db_url = client.get_secret("DATABASE_URL")
    """

    def __init__(
        self,
        config: InfisicalConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._config = config
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._tokens = TokenStore(self.login)

    @property
    def config(self) -> InfisicalConfig:
        return self._config

    @property
    def token_store(self) -> TokenStore:
        return self._tokens

    # -- lifecycle ----------------------------------------------------------

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "SecretsClient":
        return self

    def __exit__(self, *exc: Any) -> bool:
        self.close()
        return False

    # -- auth ---------------------------------------------------------------

    def login(self) -> str:
        """Exchange the client credentials for a new access token."""

        url = f"{self._config.api_url}{LOGIN_PATH}"
        try:
            response = self._session.post(
                url,
                data={
                    "clientId": self._config.client_id,
                    "clientSecret": self._config.client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self._config.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Login request failed: %s", exc)
            raise AuthenticationError(
                f"Login request failed: {exc}", reason=str(exc)
            ) from exc

        if response.status_code != 200:
            body = _decode_lenient(response)
            logger.error("Login rejected with status %s", response.status_code)
            raise AuthenticationError(
                f"Login rejected with status {response.status_code}",
                status_code=response.status_code,
                body=body,
            )

        payload = _decode_json(response)
        token = payload.get("accessToken") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise DecodeError("Login response has no accessToken", payload)
        logger.info("Authenticated against %s", self._config.api_url)
        return token

    # -- operations ---------------------------------------------------------

    def get_secret(self, name: str, environment: Optional[str] = None) -> str:
        """Return the value of secret ``name`` in ``environment``.

        ``environment`` defaults to the configured one.
        """

        env = self._config.resolve_environment(environment)
        url = f"{self._config.api_url}{SECRETS_PATH}/{quote(name, safe='')}"
        return self._with_token(url, env, _extract_secret_value)

    def get_all_secrets(self, environment: Optional[str] = None) -> Dict[str, str]:
        """Return every secret in ``environment`` as a ``{key: value}`` dict.

        When a key appears more than once the last occurrence wins.
        """

        env = self._config.resolve_environment(environment)
        url = f"{self._config.api_url}{SECRETS_PATH}"
        return self._with_token(url, env, _fold_secrets)

    # -- request/retry --------------------------------------------------------

    def _with_token(
        self, url: str, environment: str, extract: Callable[[Any], T]
    ) -> T:
        params = {"environment": environment, "workspaceSlug": self._config.workspace}

        outcome = self._fetch(url, params, self._tokens.get_token())
        if outcome.bad_token:
            logger.warning("Access token rejected; logging in again")
            outcome = self._fetch(url, params, self._tokens.force_refresh())
            if outcome.bad_token:
                raise ApiFailure(outcome.status_code, outcome.body)
        return extract(outcome.body)

    def _fetch(self, url: str, params: Dict[str, str], token: str) -> _Outcome:
        try:
            response = self._session.get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self._config.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Request to %s failed: %s", url, exc)
            raise TransportError(str(exc)) from exc
        return _classify(response)


def _classify(response: requests.Response) -> _Outcome:
    """Sort a response into success, bad token or failure.

    Failures other than a bad token are raised as :class:`ApiFailure`.
    """

    if response.status_code == 200:
        return _Outcome(200, _decode_json(response))

    body = _decode_lenient(response)
    if isinstance(body, dict) and body.get("error") == TOKEN_ERROR:
        return _Outcome(response.status_code, body, bad_token=True)

    logger.warning("Infisical API returned %s", response.status_code)
    raise ApiFailure(response.status_code, body)


def _decode_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError(
            f"Response from {response.url} is not valid JSON", response.text
        ) from exc


def _decode_lenient(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _extract_secret_value(body: Any) -> str:
    secret = body.get("secret") if isinstance(body, dict) else None
    value = secret.get("secretValue") if isinstance(secret, dict) else None
    if not isinstance(value, str):
        raise DecodeError("Response has no secret.secretValue", body)
    return value


def _fold_secrets(body: Any) -> Dict[str, str]:
    entries = body.get("secrets") if isinstance(body, dict) else None
    if not isinstance(entries, list):
        raise DecodeError("Response has no secrets list", body)

    secrets: Dict[str, str] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            raise DecodeError("Secret entry is not an object", body)
        key, value = entry.get("secretKey"), entry.get("secretValue")
        if not isinstance(key, str) or not isinstance(value, str):
            raise DecodeError("Secret entry lacks secretKey/secretValue", body)
        secrets[key] = value
    return secrets
