"""Pydantic models for the native records of both systems.

Source side: billing ``Client`` and ``Invoice`` payloads.
Destination side: ledger ``Contact`` and ``LedgerInvoice`` payloads.

Only the fields used for naming and correlation are modelled; everything
else in the exported payloads is ignored.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class RecordModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ClientType(IntEnum):
    RESIDENTIAL = 1
    COMMERCIAL = 2


class Client(RecordModel):
    id: int
    client_type: ClientType = Field(alias="clientType")
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    company_name: str | None = Field(default=None, alias="companyName")

    _normalize_names = field_validator(
        "first_name", "last_name", "company_name", mode="before"
    )(_blank_to_none)


class Invoice(RecordModel):
    id: int
    number: str
    client_id: int = Field(alias="clientId")


class Contact(RecordModel):
    contact_id: str = Field(alias="ContactID")
    name: str = Field(alias="Name")


class ContactRef(RecordModel):
    contact_id: str = Field(alias="ContactID")


class LedgerInvoice(RecordModel):
    invoice_id: str = Field(alias="InvoiceID")
    invoice_number: str = Field(alias="InvoiceNumber")
    contact: ContactRef | None = Field(default=None, alias="Contact")
