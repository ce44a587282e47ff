"""Synchronization defaults for correlation runs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .env import optional_env_var
from .errors import ConfigurationError


class NameFormat(StrEnum):
    """How residential client names are rendered into correlation names."""

    FIRST_LAST = "first_last"
    LAST_FIRST = "last_first"


DEFAULT_NAME_FORMAT = NameFormat.FIRST_LAST


@dataclass(frozen=True, slots=True)
class SyncConfig:
    name_format: NameFormat = DEFAULT_NAME_FORMAT


def parse_name_format(value: str) -> NameFormat:
    normalized = value.strip().lower().replace("-", "_")
    try:
        return NameFormat(normalized)
    except ValueError as exc:
        choices = ", ".join(member.value for member in NameFormat)
        raise ConfigurationError(
            f"Invalid name format {value!r} (expected one of: {choices})"
        ) from exc


def get_sync_config() -> SyncConfig:
    raw = optional_env_var("RECORDMAP_NAME_FORMAT")
    if raw is None:
        return SyncConfig()
    return SyncConfig(name_format=parse_name_format(raw))
