"""Per-side change accumulator for correlation runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydantic import JsonValue

    from .contracts import CorrelationName


@dataclass(slots=True)
class ChangeSet:
    """Correlation names touched on one side during a single run.

    ``created``, ``updated`` and ``deleted`` describe what happened to this
    side's identifiers in the map. ``missing`` lists names whose entry only
    carries the *other* side's identifier once the run has finished, i.e.
    records still awaiting creation on this side. ``duplicated`` lists names
    produced by more than one record of this side's input; later occurrences
    were skipped. ``unnamed`` holds the identifiers of records whose name came out blank;
    they were not correlated and keep whatever mapping they already had.
    """

    created: list[CorrelationName] = field(default_factory=list["CorrelationName"])
    updated: list[CorrelationName] = field(default_factory=list["CorrelationName"])
    deleted: list[CorrelationName] = field(default_factory=list["CorrelationName"])
    missing: list[CorrelationName] = field(default_factory=list["CorrelationName"])
    duplicated: list[CorrelationName] = field(default_factory=list["CorrelationName"])
    unnamed: list[JsonValue] = field(default_factory=list["JsonValue"])

    def add_created(self, name: CorrelationName) -> None:
        # A name whose identifier was removed earlier in the same pass and is now
        # assigned again has only changed value.
        if name in self.deleted:
            self.deleted.remove(name)
            self.add_updated(name)
            return
        _append_once(self.created, name)

    def add_updated(self, name: CorrelationName) -> None:
        if name in self.created:
            return
        _append_once(self.updated, name)

    def add_deleted(self, name: CorrelationName) -> None:
        if name in self.created:
            self.created.remove(name)
            return
        if name in self.updated:
            self.updated.remove(name)
        _append_once(self.deleted, name)

    def add_duplicated(self, name: CorrelationName) -> None:
        self.duplicated.append(name)

    def add_unnamed(self, identifier: JsonValue) -> None:
        self.unnamed.append(identifier)

    def add_missing(self, name: CorrelationName) -> None:
        _append_once(self.missing, name)

    def discard_missing(self, name: CorrelationName) -> None:
        if name in self.missing:
            self.missing.remove(name)

    @property
    def has_changes(self) -> bool:
        """Whether this side's identifiers moved in the map during the run."""

        return bool(self.created or self.updated or self.deleted)

    def summary(self) -> dict[str, int]:
        return {
            "created": len(self.created),
            "updated": len(self.updated),
            "deleted": len(self.deleted),
            "missing": len(self.missing),
            "duplicated": len(self.duplicated),
            "unnamed": len(self.unnamed),
        }

    def as_dict(self) -> dict[str, list[JsonValue]]:
        return {
            "created": list(self.created),
            "updated": list(self.updated),
            "deleted": list(self.deleted),
            "missing": list(self.missing),
            "duplicated": list(self.duplicated),
            "unnamed": list(self.unnamed),
        }


def _append_once(names: list[CorrelationName], name: CorrelationName) -> None:
    if name not in names:
        names.append(name)
