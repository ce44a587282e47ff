"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from recordmap.config import MapKind, get_storage_config, get_sync_config
from recordmap.domain.sync import map_clients, map_invoices

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from recordmap.config import StorageConfig, SyncConfig
    from recordmap.domain.correlation import ReconciliationResult
    from recordmap.domain.records import Client, Contact, Invoice, LedgerInvoice


log = getLogger(__name__)


def sync_clients(
    clients: Iterable[Client],
    contacts: Iterable[Contact],
    *,
    map_path: Path | None = None,
    storage: StorageConfig | None = None,
    sync_config: SyncConfig | None = None,
) -> ReconciliationResult:
    """Correlate billing clients with ledger contacts using the configured map file."""

    effective_sync = sync_config or get_sync_config()
    effective_path = map_path or (storage or get_storage_config()).map_path(MapKind.CLIENTS)
    log.info(
        "Starting client correlation: map=%s, name_format=%s",
        effective_path,
        effective_sync.name_format.value,
    )

    result = map_clients(
        clients,
        contacts,
        name_format=effective_sync.name_format,
        map_path=effective_path,
    )

    _log_result("client", result)
    return result


def sync_invoices(
    invoices: Iterable[Invoice],
    ledger_invoices: Iterable[LedgerInvoice],
    *,
    map_path: Path | None = None,
    storage: StorageConfig | None = None,
) -> ReconciliationResult:
    """Correlate billing invoices with ledger invoices using the configured map file."""

    effective_path = map_path or (storage or get_storage_config()).map_path(MapKind.INVOICES)
    log.info("Starting invoice correlation: map=%s", effective_path)

    result = map_invoices(invoices, ledger_invoices, map_path=effective_path)

    _log_result("invoice", result)
    return result


def _log_result(label: str, result: ReconciliationResult) -> None:
    log.info(
        f"Finished {label} correlation: entries={len(result.map)}, "
        f"source={result.source.summary()}, destination={result.destination.summary()}"
    )
    if result.source.duplicated or result.destination.duplicated:
        log.warning(
            "Duplicated %s names skipped: source=%s, destination=%s",
            label,
            result.source.duplicated,
            result.destination.duplicated,
        )
