"""Reusable record types and fakes for correlation tests."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from recordmap.domain.correlation import CorrelationDefinition

if TYPE_CHECKING:
    from recordmap.domain.correlation import CorrelationMap

SOURCE_ID = "sourceId"
DESTINATION_ID = "destinationId"


@dataclass(frozen=True, slots=True)
class SourceRecord:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class DestinationRecord:
    guid: str
    name: str


def record_name(record: SourceRecord | DestinationRecord) -> str:
    return record.name


def source_definition(compare_field: str = "id") -> CorrelationDefinition:
    return CorrelationDefinition(
        record_type=SourceRecord,
        name_generator=record_name,
        id_field=SOURCE_ID,
        compare_field=compare_field,
    )


def destination_definition(compare_field: str = "guid") -> CorrelationDefinition:
    return CorrelationDefinition(
        record_type=DestinationRecord,
        name_generator=record_name,
        id_field=DESTINATION_ID,
        compare_field=compare_field,
    )


@dataclass(slots=True)
class FakeMapStore:
    """In-memory map store that hands out copies, like a file would."""

    stored: CorrelationMap = field(default_factory=dict)
    saves: int = 0

    def load(self) -> CorrelationMap:
        return copy.deepcopy(self.stored)

    def save(self, correlation_map: CorrelationMap) -> None:
        self.stored = copy.deepcopy(correlation_map)
        self.saves += 1
