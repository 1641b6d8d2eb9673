"""
Pydantic models for invoice data: strict typing at the request boundary.

Incoming JSON keeps the field names of the invoice form (invoiceNo,
alamatSewa, noItems, ...). Python code uses snake_case; both spellings are
accepted on input and the form names are used on output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


# ─── Request Models ─────────────────────────────────────────────────


class InvoiceItem(BaseModel):
    """One rented item on the invoice."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(..., ge=1)
    price: Decimal = Field(..., ge=0)

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.price


class InvoiceRequest(BaseModel):
    """Request body for invoice generation, as submitted by the invoice form."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "pelanggan": "PT Sinar Jaya",
                "tanggal": "2024-01-15",
                "invoiceNo": "INV-2024-001",
                "periode": "Januari 2024",
                "alamatSewa": "Jl. Merdeka No. 10, Bandung",
                "noItems": [
                    {"name": "Genset 5000 Watt", "quantity": 2, "price": 750000},
                ],
                "ongkir": 0,
                "keterangan": "",
            }
        },
    )

    pelanggan: str = Field(..., min_length=2, max_length=255, description="Customer name")
    tanggal: date = Field(..., description="Invoice date (ISO 8601)")
    invoice_no: str = Field(..., alias="invoiceNo", min_length=1, max_length=100)
    periode: str = Field(..., min_length=1, max_length=100, description="Rental period")
    alamat_sewa: str = Field(..., alias="alamatSewa", min_length=5, max_length=1000)
    no_items: list[InvoiceItem] = Field(..., alias="noItems", min_length=1)
    ongkir: Decimal = Field(default=Decimal(0), ge=0, description="Shipping cost")
    keterangan: str = Field(default="", max_length=1000, description="Notes")


# ─── Rendered Document Models ───────────────────────────────────────


class InvoiceLine(BaseModel):
    """A table row as it appears in the rendered invoice."""

    model_config = ConfigDict(populate_by_name=True)

    no: int
    nama: str
    jumlah: int
    harga_satuan: str = Field(alias="hargaSatuan")
    total: str


class InvoiceDocument(BaseModel):
    """Everything the invoice template needs, already formatted for display."""

    model_config = ConfigDict(populate_by_name=True)

    pelanggan: str
    tanggal: str
    invoice_no: str = Field(alias="invoiceNo")
    periode: str
    alamat_sewa: str = Field(alias="alamatSewa")
    no_items: list[InvoiceLine] = Field(alias="noItems")
    ongkir: str
    subtotal: str
    total: str
    total_rupiah: str = Field(alias="totalRupiah")
    total_terbilang: str = Field(alias="totalTerbilang")
    keterangan: str = ""
    subtotal_amount: Decimal
    total_amount: Decimal

    def to_context(self) -> dict:
        """Template data keyed by the tag names used inside the DOCX template."""
        return self.model_dump(
            by_alias=True, exclude={"subtotal_amount", "total_amount"}
        )


# ─── Output ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GeneratedInvoice:
    """The final PDF, ready to be streamed to the client."""

    filename: str
    content: bytes
    media_type: str = "application/pdf"

    @staticmethod
    def filename_for(invoice_no: str) -> str:
        """invoice-<no>.pdf with anything unsafe for a header replaced by "_"."""
        safe = _UNSAFE_FILENAME_CHARS.sub("_", invoice_no).strip("_") or "invoice"
        return f"invoice-{safe}.pdf"
