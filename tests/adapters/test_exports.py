from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from recordmap.adapters import ExportFormatError, load_records
from recordmap.domain.records import Client, ClientType, Contact

if TYPE_CHECKING:
    from pathlib import Path


def test_load_records_from_plain_list(tmp_path: Path) -> None:
    path = tmp_path / "clients.json"
    path.write_text(
        json.dumps(
            [
                {"id": 1, "clientType": 1, "firstName": "Jane", "lastName": "Doe", "extra": 5},
                {"id": 2, "clientType": 2, "companyName": "Acme Corp"},
            ]
        ),
        encoding="utf-8",
    )

    clients = load_records(path, Client)

    assert [client.id for client in clients] == [1, 2]
    assert clients[1].client_type is ClientType.COMMERCIAL


def test_load_records_unwraps_collection_object(tmp_path: Path) -> None:
    path = tmp_path / "contacts.json"
    path.write_text(
        json.dumps({"Contacts": [{"ContactID": "G-1", "Name": "Acme Corp", "EmailAddress": ""}]}),
        encoding="utf-8",
    )

    contacts = load_records(path, Contact)

    assert contacts == [Contact(contact_id="G-1", name="Acme Corp")]


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"a": [], "b": []}',
        '[{"id": "x", "clientType": 1}]',
    ],
)
def test_invalid_exports_raise(tmp_path: Path, content: str) -> None:
    path = tmp_path / "clients.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ExportFormatError) as excinfo:
        load_records(path, Client)

    assert excinfo.value.path == path


def test_unreadable_export_raises(tmp_path: Path) -> None:
    with pytest.raises(ExportFormatError):
        load_records(tmp_path / "missing.json", Client)
