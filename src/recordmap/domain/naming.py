"""Correlation-name strategies for the record types in :mod:`.records`."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger

from recordmap.config import DEFAULT_NAME_FORMAT, NameFormat

from .records import Client, ClientType, Contact, Invoice, LedgerInvoice

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClientNameGenerator:
    """Name a billing client the way it is named in the ledger.

    Residential clients are rendered from their first and last names in the
    configured ``name_format``; commercial clients use the company name. An
    undeterminable name is logged and returned as ``""``.
    """

    name_format: NameFormat = DEFAULT_NAME_FORMAT

    def __call__(self, client: Client, /) -> str:
        if client.client_type is ClientType.COMMERCIAL:
            if client.company_name:
                return client.company_name
        elif client.first_name and client.last_name:
            if self.name_format is NameFormat.LAST_FIRST:
                return f"{client.last_name}, {client.first_name}"
            return f"{client.first_name} {client.last_name}"
        elif client.first_name or client.last_name:
            return client.first_name or client.last_name or ""

        log.error("Name could not be determined for client %s", client.id)
        return ""


def contact_name(contact: Contact, /) -> str:
    return contact.name.strip()


def invoice_number(invoice: Invoice, /) -> str:
    return invoice.number.strip()


def ledger_invoice_number(invoice: LedgerInvoice, /) -> str:
    return invoice.invoice_number.strip()
