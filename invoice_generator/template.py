"""
Default DOCX invoice template, built with python-docx.

The generated file uses the same tags the renderer fills, so it doubles as a
reference for anyone designing a custom template in Word:

    {pelanggan} {tanggal} {invoiceNo} {periode} {alamatSewa}
    {#noItems}{no} {nama} {jumlah} {hargaSatuan} {total}{/noItems}
    {subtotal} {ongkir} {total} {totalRupiah} {totalTerbilang} {keterangan}
"""

from __future__ import annotations

from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt

_ITEM_HEADERS = ("No", "Nama Barang", "Jumlah", "Harga Satuan", "Total")
_ITEM_ROW = ("{#noItems}{no}", "{nama}", "{jumlah}", "{hargaSatuan}", "{total}{/noItems}")


def write_default_template(path: str | Path) -> Path:
    """Write a plain invoice template to `path`, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    doc = Document()

    title = doc.paragraphs[0] if doc.paragraphs else doc.add_paragraph()
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = title.add_run("INVOICE")
    run.bold = True
    run.font.size = Pt(16)

    doc.add_paragraph("No. Invoice: {invoiceNo}")
    doc.add_paragraph("Tanggal: {tanggal}")
    doc.add_paragraph("Kepada Yth.: {pelanggan}")
    doc.add_paragraph("Alamat Sewa: {alamatSewa}")
    doc.add_paragraph("Periode: {periode}")

    table = doc.add_table(rows=2, cols=len(_ITEM_HEADERS))
    table.style = "Table Grid"
    for cell, text in zip(table.rows[0].cells, _ITEM_HEADERS):
        cell.text = text
    for cell, text in zip(table.rows[1].cells, _ITEM_ROW):
        cell.text = text

    totals = doc.add_table(rows=3, cols=2)
    for row, (label, tag) in zip(
        totals.rows,
        (("Subtotal", "{subtotal}"), ("Ongkos Kirim", "{ongkir}"), ("Total", "{total}")),
    ):
        row.cells[0].text = label
        row.cells[1].text = tag

    doc.add_paragraph("Jumlah Tagihan: {totalRupiah}")

    terbilang = doc.add_paragraph("Terbilang: ")
    terbilang.add_run("{totalTerbilang}").italic = True

    doc.add_paragraph("Keterangan: {keterangan}")

    doc.save(str(path))
    return path
