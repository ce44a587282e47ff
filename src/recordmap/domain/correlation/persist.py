"""Persistence of the correlation map.

The map is the only state that survives between runs. It is stored as one
pretty-printed JSON object (name -> flat entry) and always rewritten whole:
the new content goes to a temporary sibling file that is then renamed over
the target, so readers see either the previous map or the new one.
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from pydantic import JsonValue, TypeAdapter, ValidationError

from .errors import MapPersistenceError

if TYPE_CHECKING:
    from .contracts import CorrelationMap

log = getLogger(__name__)

JSON_INDENT = 4

_MAP_ADAPTER: TypeAdapter[dict[str, dict[str, JsonValue]]] = TypeAdapter(
    dict[str, dict[str, JsonValue]]
)


class MapStore(Protocol):
    """Load and save a correlation map as one unit."""

    def load(self) -> CorrelationMap: ...

    def save(self, correlation_map: CorrelationMap) -> None: ...


@dataclass(frozen=True, slots=True)
class JsonMapStore:
    """Correlation map stored in a JSON file."""

    path: Path

    def load(self) -> CorrelationMap:
        """Return the persisted map, or an empty map when the file does not exist."""

        if not self.path.exists():
            log.debug("No correlation map at %s, starting empty", self.path)
            return {}
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise MapPersistenceError(
                f"Could not read correlation map {self.path}: {exc}", path=self.path
            ) from exc
        return decode_map(raw, path=self.path)

    def save(self, correlation_map: CorrelationMap) -> None:
        payload = encode_map(correlation_map)
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            handle, temp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(handle, "w", encoding="utf-8") as stream:
                    stream.write(payload)
                os.replace(temp_name, self.path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise MapPersistenceError(
                f"Could not write correlation map {self.path}: {exc}", path=self.path
            ) from exc
        log.debug("Wrote %s correlation entries to %s", len(correlation_map), self.path)


def encode_map(correlation_map: CorrelationMap) -> str:
    return json.dumps(correlation_map, indent=JSON_INDENT, ensure_ascii=False) + "\n"


def decode_map(raw: str | bytes, *, path: Path | None = None) -> CorrelationMap:
    """Validate serialized map content: an object of objects keyed by name."""

    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    except UnicodeDecodeError as exc:
        raise MapPersistenceError("Correlation map is not valid UTF-8", path=path) from exc
    # Empty maps written by older exports are serialized as an empty JSON array.
    if text.strip() in {"", "[]"}:
        return {}
    try:
        return _MAP_ADAPTER.validate_json(text)
    except ValidationError as exc:
        location = f" {path}" if path is not None else ""
        raise MapPersistenceError(
            f"Malformed correlation map{location}: {exc.error_count()} error(s)", path=path
        ) from exc
