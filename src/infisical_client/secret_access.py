"""One-shot helpers that read secrets without managing a client.

Configuration is loaded on each call and the client is closed afterwards, so
every call logs in again. Long-running applications should keep a
:class:`~infisical_client.client.SecretsClient` around instead.
"""

from __future__ import annotations

from typing import Dict, Optional

from .client import SecretsClient
from .config_loader import load_config


def get_secret(
    name: str,
    environment: Optional[str] = None,
    *,
    env_file: Optional[str] = None,
) -> str:
    """Return a single secret value using configuration from the environment."""

    with SecretsClient(load_config(env_file=env_file)) as client:
        return client.get_secret(name, environment)


def get_all_secrets(
    environment: Optional[str] = None,
    *,
    env_file: Optional[str] = None,
) -> Dict[str, str]:
    """Return every secret of ``environment`` using configuration from the environment."""

    with SecretsClient(load_config(env_file=env_file)) as client:
        return client.get_all_secrets(environment)
