"""
Custom exception hierarchy for invoice generation.

Each exception type maps to a specific category of failure, so the HTTP
layer can turn it into a precise status code and JSON body.
"""

from __future__ import annotations


class InvoiceError(Exception):
    """Base exception for all invoice generation failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class OutOfRangeError(InvoiceError, ValueError):
    """The amount is too large to be spelled out with the known scale words."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("AMOUNT_OUT_OF_RANGE", message, details)


class TemplateNotFoundError(InvoiceError):
    """The DOCX invoice template does not exist."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("TEMPLATE_NOT_FOUND", message, details)


class TemplateRenderError(InvoiceError):
    """The template references tags the invoice data cannot fill."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("TEMPLATE_RENDER_FAILED", message, details)


class DocumentConversionError(InvoiceError):
    """LibreOffice could not turn the rendered DOCX into a PDF."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("PDF_CONVERSION_FAILED", message, details)
