"""Pytest configuration: makes the project root importable."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from invoice_generator.template import write_default_template  # noqa: E402

FAKE_PDF = b"%PDF-1.4\n% test document\n%%EOF\n"


@pytest.fixture(autouse=True)
def _no_libreoffice():
    """Prevent real LibreOffice runs during tests."""
    with patch("invoice_generator.pipeline.convert_to_pdf", return_value=FAKE_PDF) as fake:
        yield fake


@pytest.fixture
def template_path(tmp_path: Path) -> Path:
    """A freshly generated default invoice template."""
    return write_default_template(tmp_path / "templates" / "invoice-template.docx")
