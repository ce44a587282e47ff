"""Read-only queries over a correlation map for downstream pushers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydantic import JsonValue

    from .contracts import CorrelationMap, CorrelationName


@dataclass(frozen=True, slots=True)
class PendingCreation:
    """A record known on one side only, still to be created on the other."""

    name: CorrelationName
    identifier: JsonValue


def identifier_for(
    correlation_map: CorrelationMap,
    name: CorrelationName,
    *,
    id_field: str,
) -> JsonValue | None:
    """Return the identifier stored under ``id_field`` for ``name``, if any."""

    entry = correlation_map.get(name)
    if entry is None:
        return None
    return entry.get(id_field)


def counterpart_of(
    correlation_map: CorrelationMap,
    value: JsonValue,
    *,
    id_field: str,
    counterpart_field: str,
) -> JsonValue | None:
    """Return the other side's identifier for the entry whose ``id_field`` is ``value``."""

    for entry in correlation_map.values():
        if id_field in entry and entry[id_field] == value:
            return entry.get(counterpart_field)
    return None


def pending_creations(
    correlation_map: CorrelationMap,
    *,
    from_field: str,
    to_field: str,
) -> list[PendingCreation]:
    """List entries holding ``from_field`` but not ``to_field``, in map order.

    This is the one-way work list: each item names a record that exists on the
    ``from_field`` side and has no counterpart yet on the ``to_field`` side.
    """

    return [
        PendingCreation(name=name, identifier=entry[from_field])
        for name, entry in correlation_map.items()
        if from_field in entry and to_field not in entry
    ]
