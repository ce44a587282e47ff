"""Load native records from JSON exports of either system.

An export is either a JSON array of record payloads or an object wrapping
that array under a single collection key (``{"Contacts": [...]}``), which is
how the ledger API returns its collections.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

from pydantic import JsonValue, TypeAdapter, ValidationError

if TYPE_CHECKING:
    from pathlib import Path

    from recordmap.domain.records import RecordModel

log = getLogger(__name__)

RecordT = TypeVar("RecordT", bound="RecordModel")

_PAYLOAD_ADAPTER: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)


class ExportFormatError(ValueError):
    """Raised when an export file cannot be turned into records."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


def load_records(path: Path, model: type[RecordT]) -> list[RecordT]:
    """Read ``path`` and validate every payload in it as ``model``."""

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ExportFormatError(f"cannot read export ({exc.strerror})", path=path) from exc

    try:
        payload = _PAYLOAD_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise ExportFormatError("export is not valid JSON", path=path) from exc

    items = _unwrap_collection(payload, path=path)
    adapter = TypeAdapter(list[model])
    try:
        records = adapter.validate_python(items)
    except ValidationError as exc:
        raise ExportFormatError(
            f"{exc.error_count()} invalid {model.__name__} payload(s)", path=path
        ) from exc

    log.debug("Loaded %s %s records from %s", len(records), model.__name__, path)
    return records


def _unwrap_collection(payload: JsonValue, *, path: Path) -> list[JsonValue]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and len(payload) == 1:
        (items,) = payload.values()
        if isinstance(items, list):
            return items
    raise ExportFormatError("expected a list of records", path=path)
