"""Application configuration helpers."""

from __future__ import annotations

from .auth import AuthConfig, get_auth_config
from .env import optional_int_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .server import ServerConfig, get_server_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "AuthConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "ServerConfig",
    "StorageConfig",
    "configure_logging",
    "get_auth_config",
    "get_database_config",
    "get_server_config",
    "get_storage_config",
    "optional_int_env_var",
    "require_env_vars",
]
