"""Shared correlation contract types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from pydantic import JsonValue

from .changes import ChangeSet

CorrelationName: TypeAlias = str
MapEntry: TypeAlias = dict[str, JsonValue]
CorrelationMap: TypeAlias = dict[CorrelationName, MapEntry]


@dataclass(slots=True)
class ReconciliationResult:
    """Outcome of one correlation run: the pruned map and one change-set per side."""

    map: CorrelationMap = field(default_factory=dict["CorrelationName", "MapEntry"])
    source: ChangeSet = field(default_factory=ChangeSet)
    destination: ChangeSet = field(default_factory=ChangeSet)

    @property
    def has_changes(self) -> bool:
        return self.source.has_changes or self.destination.has_changes
