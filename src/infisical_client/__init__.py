"""Infisical secrets retrieval with a self-refreshing access token."""

from .client import SecretsClient
from .config_loader import InfisicalConfig, load_config
from .errors import (
    ApiFailure,
    AuthenticationError,
    ConfigError,
    DecodeError,
    InfisicalError,
    TransportError,
)
from .secret_access import get_all_secrets, get_secret
from .token_store import TokenStore

__version__ = "0.1.0"

__all__ = [
    "SecretsClient",
    "InfisicalConfig",
    "load_config",
    "TokenStore",
    "get_secret",
    "get_all_secrets",
    "InfisicalError",
    "ConfigError",
    "TransportError",
    "AuthenticationError",
    "ApiFailure",
    "DecodeError",
    "__version__",
]
