"""
Invoice Generator — Indonesian invoices with the total spelled out in words.

Architecture: Request → Totals + Terbilang → DOCX template → PDF (LibreOffice)
Core:        A pure number-to-words converter shared by every caller.
"""

__version__ = "1.0.0"
