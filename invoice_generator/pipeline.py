"""
Main invoice pipeline: orchestrates the full workflow.

Flow:
  ┌─────────────┐
  │   Request   │
  └──────┬──────┘
         │
  ┌──────▼──────┐
  │   Totals    │   ← subtotal + ongkir, terbilang of the total
  └──────┬──────┘
         │
  ┌──────▼──────┐
  │  Document   │   ← id-ID formatting of every displayed value
  └──────┬──────┘
         │
  ┌──────▼──────┐
  │    DOCX     │   ← template tags filled (python-docx)
  └──────┬──────┘
         │
  ┌──────▼──────┐
  │     PDF     │   ← LibreOffice headless
  └─────────────┘

Design principles:
  - Amounts are Decimal end to end; nothing is rounded before display.
  - The total is spelled out by the shared terbilang converter, so an
    out-of-range amount fails before any file is touched.
  - Building the document is pure; only render/run do I/O.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path

from . import terbilang
from .formatting import format_currency, format_date, format_number
from .models import GeneratedInvoice, InvoiceDocument, InvoiceLine, InvoiceRequest
from .renderer import convert_to_pdf, render_docx
from .settings import Settings

logger = logging.getLogger(__name__)


class InvoicePipeline:
    """Orchestrates invoice generation.

    Usage:
        pipeline = InvoicePipeline()
        invoice = pipeline.run(request)
        Path(invoice.filename).write_bytes(invoice.content)
    """

    def __init__(
        self,
        template_path: str | Path | None = None,
        soffice_path: str | None = None,
        timeout: float | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or Settings.from_env()
        self.template_path = Path(template_path or settings.template_path)
        self.soffice_path = soffice_path or settings.soffice_path
        self.timeout = timeout or settings.pdf_timeout

    @property
    def template_found(self) -> bool:
        return self.template_path.is_file()

    def build(self, request: InvoiceRequest) -> InvoiceDocument:
        """Compute totals and format every field for the template.

        Raises:
            OutOfRangeError: If the total is too large to spell out.
        """
        subtotal = sum((item.line_total for item in request.no_items), Decimal(0))
        total = subtotal + request.ongkir
        total_words = terbilang.convert(total)

        lines = [
            InvoiceLine(
                no=index,
                nama=item.name,
                jumlah=item.quantity,
                harga_satuan=format_number(item.price),
                total=format_number(item.line_total),
            )
            for index, item in enumerate(request.no_items, start=1)
        ]

        logger.info(
            "Built invoice %s: %d item(s), total %s",
            request.invoice_no,
            len(lines),
            total,
        )
        return InvoiceDocument(
            pelanggan=request.pelanggan,
            tanggal=format_date(request.tanggal),
            invoice_no=request.invoice_no,
            periode=request.periode,
            alamat_sewa=request.alamat_sewa,
            no_items=lines,
            ongkir=format_number(request.ongkir),
            subtotal=format_number(subtotal),
            total=format_number(total),
            total_rupiah=format_currency(total),
            total_terbilang=total_words,
            keterangan=request.keterangan,
            subtotal_amount=subtotal,
            total_amount=total,
        )

    def render(self, document: InvoiceDocument) -> bytes:
        """Fill the DOCX template and return the document bytes."""
        return render_docx(document.to_context(), self.template_path)

    def run(self, request: InvoiceRequest) -> GeneratedInvoice:
        """Execute the full pipeline: build → DOCX → PDF.

        Raises:
            OutOfRangeError, TemplateNotFoundError, TemplateRenderError,
            DocumentConversionError
        """
        document = self.build(request)
        docx_bytes = self.render(document)
        pdf_bytes = convert_to_pdf(
            docx_bytes, soffice_path=self.soffice_path, timeout=self.timeout
        )
        logger.info("Generated PDF for invoice %s (%d bytes)", request.invoice_no, len(pdf_bytes))
        return GeneratedInvoice(
            filename=GeneratedInvoice.filename_for(request.invoice_no),
            content=pdf_bytes,
        )
