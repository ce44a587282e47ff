"""Correlation definitions: how one side's native records are named and keyed.

A definition is resolved once, at construction:
- the record type (a class or a dotted ``"module:Class"`` path)
- the accessor producing the value stored under the side's id field

Runs therefore never look fields up by name; a definition that cannot name or
read its records fails before any run starts.
"""

from __future__ import annotations

import dataclasses
import importlib
import inspect
from dataclasses import dataclass, field
from operator import attrgetter
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .errors import InvalidDefinitionError, MissingAccessorError, UnresolvableDefinitionError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from pydantic import JsonValue


class NameGenerator(Protocol):
    """Derive a correlation name from one native record. Must be pure."""

    def __call__(self, record: Any, /) -> str: ...


FieldAccessor: TypeAlias = "Callable[[Any], JsonValue]"


@dataclass(frozen=True, slots=True)
class CorrelationDefinition:
    """Describe how one side takes part in a correlation run.

    ``id_field`` is the key written into map entries for this side. The value
    stored under it comes from ``compare_field`` (an attribute, property or
    zero-argument method of the record) or, when ``compare_field`` is blank,
    from the whole record flattened to JSON-compatible data. ``accessor``
    overrides both.

    ``related_fields`` maps further entry keys to record attributes (or
    accessors) written next to the identifier, e.g. the client owning an
    invoice. They belong to this side and follow its identifier.
    """

    record_type: type[Any] | str
    name_generator: NameGenerator
    id_field: str
    compare_field: str = ""
    accessor: FieldAccessor | None = None
    related_fields: Mapping[str, str | FieldAccessor] = field(default_factory=dict, hash=False)
    _record_class: type[Any] = field(init=False, repr=False, compare=False)
    _value_of: FieldAccessor = field(init=False, repr=False, compare=False)
    _related: tuple[tuple[str, FieldAccessor], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        record_class = resolve_record_type(self.record_type)
        object.__setattr__(self, "record_type", record_class)
        object.__setattr__(self, "_record_class", record_class)

        if not self.id_field.strip():
            raise InvalidDefinitionError(
                f"Definition for {record_class.__qualname__} needs a non-blank id field"
            )

        value_of = self.accessor or _resolve_accessor(record_class, self.compare_field)
        object.__setattr__(self, "_value_of", value_of)

        related: list[tuple[str, FieldAccessor]] = []
        for key, source in self.related_fields.items():
            if not key.strip() or key == self.id_field:
                raise InvalidDefinitionError(
                    f"Related field {key!r} of {record_class.__qualname__} "
                    f"must be non-blank and differ from {self.id_field!r}"
                )
            read = _resolve_accessor(record_class, source) if isinstance(source, str) else source
            related.append((key, read))
        object.__setattr__(self, "_related", tuple(related))

    @property
    def record_class(self) -> type[Any]:
        return self._record_class

    @property
    def side_fields(self) -> tuple[str, ...]:
        """Map entry keys owned by this side: the id field, then the related fields."""

        return (self.id_field, *(key for key, _ in self._related))

    def generate_name(self, record: object) -> str:
        return self.name_generator(record)

    def value_of(self, record: object) -> JsonValue:
        try:
            return self._value_of(record)
        except AttributeError as exc:
            raise MissingAccessorError(self.record_class, self.compare_field) from exc

    def related_values(self, record: object) -> dict[str, JsonValue]:
        values: dict[str, JsonValue] = {}
        for key, read in self._related:
            try:
                values[key] = read(record)
            except AttributeError as exc:
                raise MissingAccessorError(self.record_class, key) from exc
        return values


def resolve_record_type(record_type: object) -> type[Any]:
    """Return the class named by ``record_type`` or raise ``UnresolvableDefinitionError``."""

    if isinstance(record_type, type):
        return record_type
    if not isinstance(record_type, str) or not record_type.strip():
        raise UnresolvableDefinitionError(record_type)

    path = record_type.strip()
    if ":" in path:
        module_name, _, qualname = path.partition(":")
    else:
        module_name, _, qualname = path.rpartition(".")
    if not module_name or not qualname:
        raise UnresolvableDefinitionError(record_type)

    try:
        resolved: object = importlib.import_module(module_name)
        for part in qualname.split("."):
            resolved = getattr(resolved, part)
    except (ImportError, AttributeError) as exc:
        raise UnresolvableDefinitionError(record_type) from exc

    if not isinstance(resolved, type):
        raise UnresolvableDefinitionError(record_type)
    return resolved


def flatten_record(record: object) -> JsonValue:
    """Flatten a whole record into plain JSON-compatible key/value data."""

    if isinstance(record, BaseModel):
        return record.model_dump(mode="json")
    try:
        return to_jsonable_python(record, fallback=_public_attributes)
    except (PydanticSerializationError, TypeError) as exc:
        raise MissingAccessorError(type(record), "") from exc


def _public_attributes(value: object) -> dict[str, object]:
    try:
        attributes = vars(value)
    except TypeError as exc:
        raise TypeError(f"Cannot flatten {type(value).__qualname__}") from exc
    return {name: item for name, item in attributes.items() if not name.startswith("_")}


def _resolve_accessor(record_class: type[Any], compare_field: str) -> FieldAccessor:
    name = compare_field.strip()
    if not name:
        return flatten_record

    declared = _declared_fields(record_class)
    class_attribute = inspect.getattr_static(record_class, name, None)
    if declared is not None and name not in declared and class_attribute is None:
        raise MissingAccessorError(record_class, name)

    if inspect.isfunction(class_attribute):
        method = attrgetter(name)
        return lambda record: method(record)()
    return attrgetter(name)


def _declared_fields(record_class: type[Any]) -> frozenset[str] | None:
    if issubclass(record_class, BaseModel):
        return frozenset(record_class.model_fields)
    if dataclasses.is_dataclass(record_class):
        return frozenset(item.name for item in dataclasses.fields(record_class))
    return None
