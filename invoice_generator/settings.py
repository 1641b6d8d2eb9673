"""
Runtime configuration, read from environment variables.

Entry points load a local `.env` first (python-dotenv), so every value can
live there during development.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TEMPLATE_PATH = Path("templates") / "invoice-template.docx"
DEFAULT_PDF_TIMEOUT = 90.0
DEFAULT_FRONTEND_URL = "http://localhost:5173"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    """Service configuration."""

    template_path: Path = DEFAULT_TEMPLATE_PATH
    soffice_path: str | None = None  # None → search PATH for soffice/libreoffice
    pdf_timeout: float = DEFAULT_PDF_TIMEOUT
    frontend_url: str = DEFAULT_FRONTEND_URL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the process environment.

        Raises:
            ValueError: If PDF_CONVERT_TIMEOUT is not a positive number.
        """
        raw_timeout = os.environ.get("PDF_CONVERT_TIMEOUT", str(DEFAULT_PDF_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(
                f"PDF_CONVERT_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from None
        if timeout <= 0:
            raise ValueError(f"PDF_CONVERT_TIMEOUT must be positive, got {timeout}")

        return cls(
            template_path=Path(os.environ.get("INVOICE_TEMPLATE", str(DEFAULT_TEMPLATE_PATH))),
            soffice_path=os.environ.get("SOFFICE_PATH") or None,
            pdf_timeout=timeout,
            frontend_url=os.environ.get("FRONTEND_URL", DEFAULT_FRONTEND_URL),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging for the CLI and the API server."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
