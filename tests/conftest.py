"""Shared fixtures: a config and a client backed by a mocked HTTP session."""

from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests

from infisical_client import InfisicalConfig, SecretsClient

API_URL = "https://infisical.test"


def make_response(status_code: int, body: Any = None, text: Optional[str] = None) -> MagicMock:
    """Build a stand-in for ``requests.Response``."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.url = API_URL
    if text is not None:
        response.text = text
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.text = repr(body)
        response.json.return_value = body
    return response


def login_ok(token: str) -> MagicMock:
    return make_response(200, {"accessToken": token})


def token_error() -> MagicMock:
    return make_response(
        401,
        {"error": "TokenError", "message": "Your token has expired", "statusCode": 401},
    )


@pytest.fixture
def config() -> InfisicalConfig:
    return InfisicalConfig(
        client_id="cid",
        client_secret="csecret",
        workspace="ws1",
        environment="prod",
        api_url=API_URL,
    )


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(config: InfisicalConfig, session: MagicMock) -> SecretsClient:
    return SecretsClient(config, session=session)
