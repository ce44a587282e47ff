"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .storage import MapKind, StorageConfig, get_storage_config
from .sync import DEFAULT_NAME_FORMAT, NameFormat, SyncConfig, get_sync_config, parse_name_format

__all__ = [
    "DEFAULT_NAME_FORMAT",
    "ConfigurationError",
    "MapKind",
    "NameFormat",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "get_storage_config",
    "get_sync_config",
    "optional_env_var",
    "parse_name_format",
]
