"""Helpers for loading client configuration.

Values come from the process environment. A ``.env`` file can be layered in
first; variables already present in the environment win over the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import dotenv_values

from .errors import ConfigError

DEFAULT_API_URL = "https://api.infisical.com"
DEFAULT_TIMEOUT = 15.0
ENV_PREFIX = "INFISICAL_"


@dataclass(frozen=True)
class InfisicalConfig:
    """Static settings for one workspace/credential pair."""

    client_id: str
    client_secret: str = field(repr=False)
    workspace: str
    environment: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.client_id or not self.client_secret:
            raise ConfigError("client_id and client_secret are required")
        if not self.workspace:
            raise ConfigError("workspace is required")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout!r}")
        object.__setattr__(self, "api_url", (self.api_url or DEFAULT_API_URL).rstrip("/"))

    def resolve_environment(self, environment: Optional[str] = None) -> str:
        env = environment or self.environment
        if not env:
            raise ConfigError(
                "No environment given and no default environment configured"
            )
        return env


def load_config(
    *,
    env_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Optional[str],
) -> InfisicalConfig:
    """Build an :class:`InfisicalConfig` from the environment.

    ``overrides`` (``api_url``, ``workspace``, ``environment``, ...) take
    precedence over anything read from the environment when not ``None``.
    """

    values = {}
    if env_file:
        values.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    values.update(os.environ if environ is None else environ)

    def read(name: str) -> Optional[str]:
        override = overrides.get(name)
        if override is not None:
            return override
        return values.get(ENV_PREFIX + name.upper()) or None

    timeout_raw = read("timeout")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
    except ValueError as exc:
        raise ConfigError(f"Invalid {ENV_PREFIX}TIMEOUT: {timeout_raw!r}") from exc

    return InfisicalConfig(
        client_id=read("client_id") or "",
        client_secret=read("client_secret") or "",
        workspace=read("workspace") or "",
        environment=read("environment"),
        api_url=read("api_url") or DEFAULT_API_URL,
        timeout=timeout,
    )
