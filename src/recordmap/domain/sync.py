"""Correlation workflows for clients and invoices.

Both workflows store the billing identifier under ``sourceId`` and the ledger
identifier under ``destinationId``; they differ only in how records are named.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from recordmap.config import DEFAULT_NAME_FORMAT

from .correlation import CorrelationDefinition, ReconciliationEngine, pending_creations
from .correlation.persist import JsonMapStore
from .naming import ClientNameGenerator, contact_name, invoice_number, ledger_invoice_number
from .records import Client, Contact, Invoice, LedgerInvoice

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from recordmap.config import NameFormat

    from .correlation import CorrelationMap, PendingCreation, ReconciliationResult

SOURCE_ID_FIELD: Final[str] = "sourceId"
DESTINATION_ID_FIELD: Final[str] = "destinationId"
SOURCE_CLIENT_FIELD: Final[str] = "sourceClientId"
DESTINATION_CONTACT_FIELD: Final[str] = "destinationContactId"


def client_definitions(
    name_format: NameFormat = DEFAULT_NAME_FORMAT,
) -> tuple[CorrelationDefinition, CorrelationDefinition]:
    """Return the (source, destination) definitions correlating clients with contacts."""

    return (
        CorrelationDefinition(
            record_type=Client,
            name_generator=ClientNameGenerator(name_format=name_format),
            id_field=SOURCE_ID_FIELD,
            compare_field="id",
        ),
        CorrelationDefinition(
            record_type=Contact,
            name_generator=contact_name,
            id_field=DESTINATION_ID_FIELD,
            compare_field="contact_id",
        ),
    )


def invoice_definitions() -> tuple[CorrelationDefinition, CorrelationDefinition]:
    """Return the (source, destination) definitions correlating invoices by number.

    Each side also records the client or contact owning the invoice, so a push
    can attach the invoice to the right ledger contact.
    """

    return (
        CorrelationDefinition(
            record_type=Invoice,
            name_generator=invoice_number,
            id_field=SOURCE_ID_FIELD,
            compare_field="id",
            related_fields={SOURCE_CLIENT_FIELD: "client_id"},
        ),
        CorrelationDefinition(
            record_type=LedgerInvoice,
            name_generator=ledger_invoice_number,
            id_field=DESTINATION_ID_FIELD,
            compare_field="invoice_id",
            related_fields={DESTINATION_CONTACT_FIELD: _ledger_contact_id},
        ),
    )


def map_clients(
    clients: Iterable[Client],
    contacts: Iterable[Contact],
    *,
    name_format: NameFormat = DEFAULT_NAME_FORMAT,
    map_path: Path | None = None,
) -> ReconciliationResult:
    source, destination = client_definitions(name_format)
    return _engine(map_path).reconcile(clients, contacts, source=source, destination=destination)


def map_invoices(
    invoices: Iterable[Invoice],
    ledger_invoices: Iterable[LedgerInvoice],
    *,
    map_path: Path | None = None,
) -> ReconciliationResult:
    source, destination = invoice_definitions()
    return _engine(map_path).reconcile(
        invoices, ledger_invoices, source=source, destination=destination
    )


def pending_destination_creations(correlation_map: CorrelationMap) -> list[PendingCreation]:
    """Billing records without a ledger counterpart, i.e. what a one-way push must create."""

    return pending_creations(
        correlation_map, from_field=SOURCE_ID_FIELD, to_field=DESTINATION_ID_FIELD
    )


def _ledger_contact_id(invoice: LedgerInvoice) -> str | None:
    return invoice.contact.contact_id if invoice.contact is not None else None


def _engine(map_path: Path | None) -> ReconciliationEngine:
    return ReconciliationEngine(store=JsonMapStore(map_path) if map_path is not None else None)
