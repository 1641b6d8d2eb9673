"""
DOCX template filling and PDF conversion.

Template syntax (compatible with templates written for docxtemplater):
    {tag}               replaced by context["tag"]
    {#items} ... {/items}
                        inside one table row: the row is repeated for every
                        element of context["items"]; element keys shadow
                        top-level keys within that row

PDF conversion shells out to LibreOffice in headless mode. It is the only
part of the service that touches the filesystem or spawns a process.
"""

from __future__ import annotations

import copy
import io
import logging
import os
import re
import shutil
import subprocess
import tempfile
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from docx import Document
from docx.table import Table, _Row
from docx.text.paragraph import Paragraph

from .exceptions import DocumentConversionError, TemplateNotFoundError, TemplateRenderError

logger = logging.getLogger(__name__)

_TAG = re.compile(r"\{([#/]?)([A-Za-z_][A-Za-z0-9_]*)\}")

_SOFFICE_CANDIDATES = ("soffice", "libreoffice")


# ─── Template Rendering ─────────────────────────────────────────────


def render_docx(context: Mapping[str, Any], template_path: str | Path) -> bytes:
    """Fill a DOCX template with `context` and return the new document bytes.

    Raises:
        TemplateNotFoundError: If the template file does not exist.
        TemplateRenderError: If the template uses tags missing from `context`.
    """
    template_path = Path(template_path)
    if not template_path.is_file():
        raise TemplateNotFoundError(
            f"Invoice template not found: {template_path}",
            details={"path": str(template_path)},
        )

    doc = Document(str(template_path))
    missing: set[str] = set()

    for paragraph in _iter_paragraphs(doc, context, missing):
        _fill_paragraph(paragraph, context, missing)

    if missing:
        tags = sorted(missing)
        raise TemplateRenderError(
            f"Template rendering failed: unknown tag(s) {', '.join(tags)}",
            details={"missing_tags": tags, "path": str(template_path)},
        )

    buffer = io.BytesIO()
    doc.save(buffer)
    logger.info("Rendered template %s", template_path.name)
    return buffer.getvalue()


def _iter_paragraphs(
    doc: Any, context: Mapping[str, Any], missing: set[str]
) -> Iterator[Paragraph]:
    """Yield every top-level paragraph; loop rows are expanded and filled in place."""
    yield from doc.paragraphs
    for table in doc.tables:
        yield from _iter_table(table, context, missing)
    for section in doc.sections:
        for part in (section.header, section.footer):
            # Linked parts have no definition of their own; touching them would add one
            if part.is_linked_to_previous:
                continue
            yield from part.paragraphs
            for table in part.tables:
                yield from _iter_table(table, context, missing)


def _iter_table(
    table: Table, context: Mapping[str, Any], missing: set[str]
) -> Iterator[Paragraph]:
    for row in list(table.rows):
        loop_name = _loop_name(row, context)
        if loop_name is None:
            yield from _row_paragraphs(row, context, missing)
        else:
            _expand_loop_row(table, row, loop_name, context, missing)


def _row_paragraphs(
    row: _Row, context: Mapping[str, Any], missing: set[str]
) -> Iterator[Paragraph]:
    for cell in _unique_cells(row):
        yield from cell.paragraphs
        for nested in cell.tables:
            yield from _iter_table(nested, context, missing)


def _unique_cells(row: _Row) -> list:
    # Merged cells come back once per grid column
    cells: list = []
    for cell in row.cells:
        if any(cell._tc is kept._tc for kept in cells):
            continue
        cells.append(cell)
    return cells


def _loop_name(row: _Row, context: Mapping[str, Any]) -> str | None:
    text = "".join(cell.text for cell in _unique_cells(row))
    for marker, name in _TAG.findall(text):
        if marker == "#" and isinstance(context.get(name), list):
            return name
    return None


def _expand_loop_row(
    table: Table,
    row: _Row,
    name: str,
    context: Mapping[str, Any],
    missing: set[str],
) -> None:
    """Clone `row` once per element of context[name], then drop the template row."""
    template_tr = row._tr
    for element in context[name]:
        scope = {**context, **element} if isinstance(element, Mapping) else dict(context)
        new_tr = copy.deepcopy(template_tr)
        template_tr.addprevious(new_tr)
        new_row = _Row(new_tr, table)
        for paragraph in _row_paragraphs(new_row, scope, missing):
            _fill_paragraph(paragraph, scope, missing, loop=name)
    template_tr.getparent().remove(template_tr)


def _fill_paragraph(
    paragraph: Paragraph,
    context: Mapping[str, Any],
    missing: set[str],
    loop: str | None = None,
) -> None:
    text = paragraph.text
    if "{" not in text:
        return

    def substitute(match: re.Match) -> str:
        marker, name = match.groups()
        if marker:
            # Loop markers only belong to the row being expanded
            if name == loop:
                return ""
            missing.add(f"{marker}{name}")
            return match.group(0)
        if name not in context:
            missing.add(name)
            return match.group(0)
        value = context[name]
        return "" if value is None else str(value)

    rendered = _TAG.sub(substitute, text)
    if rendered == text:
        return

    runs = paragraph.runs
    if not runs:
        paragraph.text = rendered
        return
    if sum(len(_TAG.findall(run.text)) for run in runs) == len(_TAG.findall(text)):
        # Every tag sits inside a single run; fill in place so each run keeps its formatting
        for run in runs:
            if "{" in run.text:
                run.text = _TAG.sub(substitute, run.text)
        return
    # A tag is split across runs; keep the first run's formatting
    runs[0].text = rendered
    for run in runs[1:]:
        run.text = ""


# ─── PDF Conversion ─────────────────────────────────────────────────


def find_soffice(explicit: str | None = None) -> str | None:
    """Locate the LibreOffice binary: explicit path, SOFFICE_PATH, then PATH."""
    candidate = explicit or os.environ.get("SOFFICE_PATH")
    if candidate:
        return candidate
    for name in _SOFFICE_CANDIDATES:
        found = shutil.which(name)
        if found:
            return found
    return None


def convert_to_pdf(
    docx_bytes: bytes,
    *,
    soffice_path: str | None = None,
    timeout: float = 90.0,
) -> bytes:
    """Convert a DOCX document to PDF with LibreOffice (headless).

    Raises:
        DocumentConversionError: If LibreOffice is missing, fails, times out,
            or produces no PDF.
    """
    binary = find_soffice(soffice_path)
    if binary is None:
        raise DocumentConversionError(
            "LibreOffice not found; install it or set SOFFICE_PATH",
            details={"searched": list(_SOFFICE_CANDIDATES)},
        )

    with tempfile.TemporaryDirectory(prefix="invoice-") as tmp:
        workdir = Path(tmp)
        docx_path = workdir / "invoice.docx"
        pdf_path = workdir / "invoice.pdf"
        docx_path.write_bytes(docx_bytes)

        cmd = [
            binary,
            "--headless",
            "--nologo",
            "--nolockcheck",
            "--norestore",
            "--convert-to",
            "pdf",
            "--outdir",
            str(workdir),
            str(docx_path),
        ]
        logger.info("Starting PDF conversion...")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
                # A private profile dir lets conversions run side by side
                env={**os.environ, "HOME": str(workdir)},
            )
        except subprocess.TimeoutExpired:
            raise DocumentConversionError(
                f"PDF conversion timed out after {timeout:g}s",
                details={"timeout": timeout},
            ) from None
        except OSError as exc:
            raise DocumentConversionError(
                f"Could not start LibreOffice: {exc}",
                details={"binary": binary},
            ) from exc

        if result.returncode != 0:
            raise DocumentConversionError(
                f"LibreOffice exited with status {result.returncode}",
                details={"stderr": result.stderr.strip()[-2000:]},
            )
        if not pdf_path.is_file():
            raise DocumentConversionError(
                "LibreOffice reported success but produced no PDF",
                details={"stdout": result.stdout.strip()[-2000:]},
            )

        logger.info("PDF conversion completed")
        return pdf_path.read_bytes()
