from __future__ import annotations

from dataclasses import dataclass

import pytest

from recordmap.domain.correlation import (
    CorrelationDefinition,
    InvalidDefinitionError,
    MissingAccessorError,
    UnresolvableDefinitionError,
    flatten_record,
    resolve_record_type,
)
from recordmap.domain.records import Contact
from tests.helpers.records import SOURCE_ID, SourceRecord, record_name


def test_definition_resolves_dotted_record_type() -> None:
    definition = CorrelationDefinition(
        record_type="recordmap.domain.records:Contact",
        name_generator=record_name,
        id_field="destinationId",
        compare_field="contact_id",
    )

    assert definition.record_class is Contact
    assert definition.record_type is Contact


def test_resolve_record_type_accepts_module_dot_path() -> None:
    assert resolve_record_type("recordmap.domain.records.Contact") is Contact


@pytest.mark.parametrize(
    "record_type",
    ["recordmap.domain.records:Nope", "no_such_module:Thing", "", "Contact", 42],
)
def test_unknown_record_type_fails_at_construction(record_type: object) -> None:
    with pytest.raises(UnresolvableDefinitionError):
        CorrelationDefinition(
            record_type=record_type,  # type: ignore[arg-type]
            name_generator=record_name,
            id_field=SOURCE_ID,
        )


def test_blank_id_field_is_rejected() -> None:
    with pytest.raises(InvalidDefinitionError):
        CorrelationDefinition(record_type=SourceRecord, name_generator=record_name, id_field=" ")


def test_undeclared_compare_field_fails_at_construction() -> None:
    with pytest.raises(MissingAccessorError) as excinfo:
        CorrelationDefinition(
            record_type=SourceRecord,
            name_generator=record_name,
            id_field=SOURCE_ID,
            compare_field="guid",
        )

    assert excinfo.value.field_name == "guid"


def test_compare_field_reads_attribute_and_generates_name() -> None:
    definition = CorrelationDefinition(
        record_type=SourceRecord,
        name_generator=record_name,
        id_field=SOURCE_ID,
        compare_field="id",
    )
    record = SourceRecord(id=11, name="Jane Doe")

    assert definition.value_of(record) == 11
    assert definition.generate_name(record) == "Jane Doe"


def test_compare_field_may_name_a_method() -> None:
    @dataclass(frozen=True)
    class WithGetter:
        raw_id: int

        def get_id(self) -> str:
            return f"C-{self.raw_id}"

    definition = CorrelationDefinition(
        record_type=WithGetter,
        name_generator=lambda record: "x",
        id_field=SOURCE_ID,
        compare_field="get_id",
    )

    assert definition.value_of(WithGetter(raw_id=5)) == "C-5"


def test_explicit_accessor_overrides_compare_field() -> None:
    definition = CorrelationDefinition(
        record_type=SourceRecord,
        name_generator=record_name,
        id_field=SOURCE_ID,
        accessor=lambda record: f"S-{record.id}",
    )

    assert definition.value_of(SourceRecord(id=3, name="Jane Doe")) == "S-3"


def test_flatten_record_handles_models_and_plain_objects() -> None:
    class Plain:
        def __init__(self) -> None:
            self.id = 1
            self.tags = ("a", "b")
            self._private = "hidden"

    contact = Contact.model_validate({"ContactID": "G-1", "Name": "Jane Doe"})

    assert flatten_record(contact) == {"contact_id": "G-1", "name": "Jane Doe"}
    assert flatten_record(Plain()) == {"id": 1, "tags": ["a", "b"]}


def test_related_fields_read_attributes_and_accessors() -> None:
    definition = CorrelationDefinition(
        record_type=SourceRecord,
        name_generator=record_name,
        id_field=SOURCE_ID,
        compare_field="id",
        related_fields={"label": "name", "shout": lambda record: record.name.upper()},
    )

    assert definition.side_fields == (SOURCE_ID, "label", "shout")
    assert definition.related_values(SourceRecord(id=1, name="Jane")) == {
        "label": "Jane",
        "shout": "JANE",
    }


@pytest.mark.parametrize("key", [" ", SOURCE_ID])
def test_related_field_cannot_shadow_id_field(key: str) -> None:
    with pytest.raises(InvalidDefinitionError):
        CorrelationDefinition(
            record_type=SourceRecord,
            name_generator=record_name,
            id_field=SOURCE_ID,
            related_fields={key: "name"},
        )


def test_undeclared_related_field_fails_at_construction() -> None:
    with pytest.raises(MissingAccessorError):
        CorrelationDefinition(
            record_type=SourceRecord,
            name_generator=record_name,
            id_field=SOURCE_ID,
            related_fields={"owner": "owner_id"},
        )
