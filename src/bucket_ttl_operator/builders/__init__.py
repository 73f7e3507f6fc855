"""Builders for operator configuration and clients."""

from .expiration import ExpirationConfig, create_expiration_config_from_spec, resolve_field
from .provider import create_storage_client_from_env

__all__ = [
    "ExpirationConfig",
    "create_expiration_config_from_spec",
    "create_storage_client_from_env",
    "resolve_field",
]
