"""Correlation engine linking source and destination records by derived name.

One run:
1) load the persisted map (empty when there is none)
2) run the single-side pass for the source records
3) run the same pass for the destination records
4) recompute the ``missing`` lists and prune entries without any identifier
5) write the map back as one unit

The map is mutated in place throughout; nothing is written unless every
record of both sides passed the structural checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .contracts import ReconciliationResult
from .errors import InvalidDefinitionError, MapPersistenceError, RecordTypeMismatchError
from .persist import JsonMapStore

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from pydantic import JsonValue

    from .changes import ChangeSet
    from .contracts import CorrelationMap, CorrelationName, MapEntry
    from .definition import CorrelationDefinition
    from .persist import MapStore

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Run correlation passes against an optional persisted map."""

    store: MapStore | None = None

    def reconcile(
        self,
        source_records: Iterable[object],
        destination_records: Iterable[object],
        *,
        source: CorrelationDefinition,
        destination: CorrelationDefinition,
    ) -> ReconciliationResult:
        """Correlate both record collections and return the map plus both change-sets.

        Raises the structural errors of :mod:`.errors` before anything is persisted.
        A failed write raises ``MapPersistenceError`` whose ``result`` holds the
        computed outcome.
        """

        if source.id_field == destination.id_field:
            raise InvalidDefinitionError(
                f"Source and destination share the id field {source.id_field!r}"
            )
        shared = set(source.side_fields) & set(destination.side_fields)
        if shared:
            raise InvalidDefinitionError(
                f"Source and destination share map fields: {', '.join(sorted(shared))}"
            )

        correlation_map = self.store.load() if self.store is not None else {}
        result = ReconciliationResult(map=correlation_map)

        reconcile_side(
            source_records,
            definition=source,
            correlation_map=correlation_map,
            changes=result.source,
        )
        reconcile_side(
            destination_records,
            definition=destination,
            correlation_map=correlation_map,
            changes=result.destination,
        )
        reconcile_missing(
            correlation_map,
            source_field=source.id_field,
            destination_field=destination.id_field,
            source_changes=result.source,
            destination_changes=result.destination,
        )

        log.info(
            "Correlated %s entries: source=%s, destination=%s",
            len(correlation_map),
            result.source.summary(),
            result.destination.summary(),
        )

        if self.store is not None:
            try:
                self.store.save(correlation_map)
            except MapPersistenceError as exc:
                exc.result = result
                raise
        return result


def reconcile(
    source_records: Iterable[object],
    destination_records: Iterable[object],
    *,
    source: CorrelationDefinition,
    destination: CorrelationDefinition,
    map_path: Path | None = None,
) -> ReconciliationResult:
    """Run one correlation, persisting to ``map_path`` when given."""

    store = JsonMapStore(map_path) if map_path is not None else None
    return ReconciliationEngine(store=store).reconcile(
        source_records,
        destination_records,
        source=source,
        destination=destination,
    )


def reconcile_side(
    records: Iterable[object],
    *,
    definition: CorrelationDefinition,
    correlation_map: CorrelationMap,
    changes: ChangeSet,
) -> None:
    """Apply one side's fresh records to ``correlation_map`` and record the changes."""

    id_field = definition.id_field
    # Ordered set of the names present before the pass; whatever is left after
    # processing the input no longer exists on this side.
    handled: dict[CorrelationName, None] = dict.fromkeys(correlation_map)
    seen_names: set[CorrelationName] = set()

    for record in records:
        _ensure_record_type(record, definition)
        value = definition.value_of(record)
        name = definition.generate_name(record)

        if not name.strip():
            log.warning(
                "Skipping %s record without a correlation name (%s=%r)",
                definition.record_class.__qualname__,
                id_field,
                value,
            )
            changes.add_unnamed(value)
            # Keep the existing mapping until the record is named again.
            mapped = _find_by_identifier(correlation_map, id_field=id_field, value=value)
            if mapped is not None:
                handled.pop(mapped, None)
            continue

        if name in seen_names:
            log.warning("Duplicate correlation name %r for %s, skipping", name, id_field)
            changes.add_duplicated(name)
            continue
        seen_names.add(name)

        entry = correlation_map.get(name)
        if entry is not None:
            if id_field not in entry:
                entry[id_field] = value
                changes.add_created(name)
            elif entry[id_field] != value:
                entry[id_field] = value
                changes.add_updated(name)
            handled.pop(name, None)
            entry.update(definition.related_values(record))
            continue

        previous = _find_by_identifier(correlation_map, id_field=id_field, value=value)
        if previous is not None:
            # Same identifier under another name: the record was renamed. Only this
            # side's fields move; the other side reports its own rename.
            _clear_side(correlation_map[previous], definition)
            changes.add_deleted(previous)
            handled.pop(previous, None)
            log.info("Renamed %s %r -> %r", id_field, previous, name)

        correlation_map[name] = {id_field: value, **definition.related_values(record)}
        changes.add_created(name)
        handled.pop(name, None)

    for name in handled:
        entry = correlation_map.get(name)
        if entry is not None and id_field in entry:
            _clear_side(entry, definition)
            changes.add_deleted(name)


def reconcile_missing(
    correlation_map: CorrelationMap,
    *,
    source_field: str,
    destination_field: str,
    source_changes: ChangeSet,
    destination_changes: ChangeSet,
) -> None:
    """Bring both ``missing`` lists in line with the map and prune empty entries.

    Running this twice on the same map leaves the lists unchanged.
    """

    for name in list(correlation_map):
        entry = correlation_map[name]
        has_source = source_field in entry
        has_destination = destination_field in entry

        if has_source and not has_destination:
            destination_changes.add_missing(name)
            source_changes.discard_missing(name)
            continue
        if has_destination and not has_source:
            source_changes.add_missing(name)
            destination_changes.discard_missing(name)
            continue

        source_changes.discard_missing(name)
        destination_changes.discard_missing(name)
        if not has_source and not has_destination:
            del correlation_map[name]


def _find_by_identifier(
    correlation_map: CorrelationMap,
    *,
    id_field: str,
    value: JsonValue,
) -> CorrelationName | None:
    # TODO: index entries by identifier when maps grow beyond a few thousand names;
    # stored values can be whole flattened records, which are not hashable.
    for name, entry in correlation_map.items():
        if id_field in entry and entry[id_field] == value:
            return name
    return None


def _clear_side(entry: MapEntry, definition: CorrelationDefinition) -> None:
    for key in definition.side_fields:
        entry.pop(key, None)


def _ensure_record_type(record: object, definition: CorrelationDefinition) -> None:
    if type(record) is not definition.record_class:
        raise RecordTypeMismatchError(expected=definition.record_class, actual=type(record))
