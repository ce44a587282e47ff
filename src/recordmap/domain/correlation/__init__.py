"""Correlation core linking records of two systems that share no identifier.

Each side is described by a :class:`CorrelationDefinition`; the
:class:`ReconciliationEngine` diffs freshly fetched records of both sides
against the persisted correlation map and reports, per side, which names were
created, updated, deleted, are missing a counterpart or were duplicated.
"""

from __future__ import annotations

from .changes import ChangeSet
from .contracts import CorrelationMap, CorrelationName, MapEntry, ReconciliationResult
from .definition import CorrelationDefinition, NameGenerator, flatten_record, resolve_record_type
from .engine import ReconciliationEngine, reconcile, reconcile_missing, reconcile_side
from .errors import (
    CorrelationDefinitionError,
    CorrelationError,
    InvalidDefinitionError,
    MapPersistenceError,
    MissingAccessorError,
    RecordTypeMismatchError,
    UnresolvableDefinitionError,
)
from .lookup import PendingCreation, counterpart_of, identifier_for, pending_creations
from .persist import JsonMapStore, MapStore

__all__ = [
    "ChangeSet",
    "CorrelationDefinition",
    "CorrelationDefinitionError",
    "CorrelationError",
    "CorrelationMap",
    "CorrelationName",
    "InvalidDefinitionError",
    "JsonMapStore",
    "MapEntry",
    "MapPersistenceError",
    "MapStore",
    "MissingAccessorError",
    "NameGenerator",
    "PendingCreation",
    "ReconciliationEngine",
    "ReconciliationResult",
    "RecordTypeMismatchError",
    "UnresolvableDefinitionError",
    "counterpart_of",
    "flatten_record",
    "identifier_for",
    "pending_creations",
    "reconcile",
    "reconcile_missing",
    "reconcile_side",
    "resolve_record_type",
]
