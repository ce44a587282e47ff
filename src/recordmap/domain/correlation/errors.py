"""Error taxonomy for correlation runs.

Structural problems (bad definitions, foreign record types, unreadable fields)
are raised and abort the run before anything is persisted. Business anomalies
such as duplicated names or missing counterparts are never raised; they are
reported through :class:`~recordmap.domain.correlation.changes.ChangeSet`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from .contracts import ReconciliationResult


class CorrelationError(RuntimeError):
    """Base class for all correlation failures."""


class CorrelationDefinitionError(CorrelationError):
    """Raised when a correlation definition cannot be built or used."""


class UnresolvableDefinitionError(CorrelationDefinitionError):
    """Raised when a definition's record type does not resolve to a class."""

    def __init__(self, record_type: object) -> None:
        self.record_type = record_type
        super().__init__(f"Record type {record_type!r} could not be resolved to a class")


class InvalidDefinitionError(CorrelationDefinitionError):
    """Raised when a definition's id field is unusable."""


class MissingAccessorError(CorrelationDefinitionError):
    """Raised when the compare field cannot be read from a record."""

    def __init__(self, record_type: type, field_name: str) -> None:
        self.record_type = record_type
        self.field_name = field_name
        super().__init__(
            f"Field {field_name!r} could not be read from records of type {record_type.__qualname__}"
        )


class RecordTypeMismatchError(CorrelationError, TypeError):
    """Raised when an input record is not of its definition's declared type."""

    def __init__(self, *, expected: type, actual: type) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Record of type {actual.__qualname__} does not match the definition type "
            f"{expected.__qualname__}"
        )


class MapPersistenceError(CorrelationError):
    """Raised when the correlation map cannot be loaded or saved.

    When raised while saving, ``result`` carries the reconciliation outcome that
    was computed in memory but could not be made durable.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        result: ReconciliationResult | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.result = result
