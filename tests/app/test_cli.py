from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from recordmap.domain.correlation import ReconciliationResult
from recordmap.ui import cli as cli_module

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_clients_command_passes_loaded_records(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    captured: dict[str, object] = {}

    def fake_sync(clients: object, contacts: object, **kwargs: object) -> ReconciliationResult:
        captured.update(clients=clients, contacts=contacts, **kwargs)
        return ReconciliationResult()

    monkeypatch.setattr(cli_module, "sync_clients", fake_sync)
    source = _write(tmp_path / "clients.json", [{"id": 1, "clientType": 2, "companyName": "Acme"}])
    destination = _write(tmp_path / "contacts.json", {"Contacts": []})

    cli_module.main(
        [
            "clients",
            "--source",
            str(source),
            "--destination",
            str(destination),
            "--map",
            str(tmp_path / "map.json"),
        ]
    )

    assert [client.id for client in captured["clients"]] == [1]  # type: ignore[attr-defined]
    assert captured["contacts"] == []
    assert captured["map_path"] == tmp_path / "map.json"


def test_invoices_command_writes_map(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RECORDMAP_DATA_DIR", str(tmp_path / "data"))
    source = _write(tmp_path / "invoices.json", [{"id": 1, "number": "A-1", "clientId": 3}])
    destination = _write(
        tmp_path / "ledger.json", {"Invoices": [{"InvoiceID": "I-1", "InvoiceNumber": "A-1"}]}
    )

    cli_module.main(["invoices", "--source", str(source), "--destination", str(destination)])

    stored = json.loads((tmp_path / "data" / "invoices.json").read_text(encoding="utf-8"))
    assert stored == {"A-1": {"sourceId": 1, "destinationId": "I-1"}}


def test_invalid_export_exits_with_usage_code(tmp_path: Path) -> None:
    source = _write(tmp_path / "clients.json", {"not": "a list", "of": "records"})
    destination = _write(tmp_path / "contacts.json", [])

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["clients", "--source", str(source), "--destination", str(destination)])

    assert excinfo.value.code == 2


def test_fatal_error_exits_with_failure_code(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def failing_sync(*_: object, **__: object) -> ReconciliationResult:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli_module, "sync_clients", failing_sync)
    source = _write(tmp_path / "clients.json", [])
    destination = _write(tmp_path / "contacts.json", [])

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["clients", "--source", str(source), "--destination", str(destination)])

    assert excinfo.value.code == 1


def test_missing_subcommand_is_rejected() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2
