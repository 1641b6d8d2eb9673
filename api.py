"""
Invoice Generator — FastAPI Server
===================================

RESTful API for generating Indonesian rental invoices as PDF.

Endpoints:
    POST /api/invoices/generate     Render the invoice and return the PDF
    POST /api/invoices/preview      Totals + terbilang as JSON (no file work)
    GET  /api/invoices/health       Health check / readiness probe
    GET  /api/terbilang?amount=N    Spell out an amount (live form preview)
    GET  /                          Service info

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from invoice_generator import __version__, terbilang
from invoice_generator.exceptions import InvoiceError, OutOfRangeError, TemplateNotFoundError
from invoice_generator.models import InvoiceDocument, InvoiceRequest
from invoice_generator.pipeline import InvoicePipeline
from invoice_generator.settings import Settings, configure_logging

load_dotenv()

settings = Settings.from_env()
configure_logging(settings.log_level)
logger = logging.getLogger("invoice_generator.api")


# ─── Application Lifespan ───────────────────────────────────────────

_pipeline: InvoicePipeline | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the pipeline on startup and report a missing template early."""
    global _pipeline  # noqa: PLW0603
    _pipeline = InvoicePipeline(settings=settings)
    if not _pipeline.template_found:
        logger.warning("Invoice template not found at %s", _pipeline.template_path)
    logger.info("Invoice Generator API %s ready", __version__)
    yield
    _pipeline = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Invoice Generator API",
    description=(
        "Generates Indonesian rental invoices from a DOCX template, "
        "with the total spelled out in words (terbilang), and returns a PDF."
    ),
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s -> %d", request.method, request.url.path, response.status_code)
    return response


# ─── Response Schemas ───────────────────────────────────────────────


class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: datetime
    version: str
    template_found: bool


class TerbilangResponse(BaseModel):
    amount: Decimal
    terbilang: str = Field(description="The amount in Indonesian words, e.g. 'Seribu rupiah'")


# ─── Error Handlers ─────────────────────────────────────────────────


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part not in ("body", "query")),
            "message": err["msg"],
            "value": err.get("input"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"error": "Validation failed", "details": details}),
    )


@app.exception_handler(InvoiceError)
async def invoice_error_handler(request: Request, exc: InvoiceError) -> JSONResponse:
    if isinstance(exc, OutOfRangeError):
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder({
                "error": "Amount out of range",
                "code": exc.code,
                "message": exc.message,
                "details": exc.details,
            }),
        )

    logger.error("Invoice generation failed [%s]: %s", exc.code, exc.message)
    if isinstance(exc, TemplateNotFoundError):
        return JSONResponse(
            status_code=500,
            content={"error": "Invoice template not found", "path": exc.details.get("path")},
        )
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to generate invoice", "code": exc.code, "message": exc.message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not found",
                "message": f"Route {request.method} {request.url.path} not found",
            },
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_pipeline() -> InvoicePipeline:
    if _pipeline is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialised")
    return _pipeline


# ─── Endpoints ───────────────────────────────────────────────────────


@app.get("/", summary="Service info", tags=["System"])
def root() -> dict:
    return {
        "message": "Invoice Generator API",
        "version": __version__,
        "endpoints": {
            "health": "/api/invoices/health",
            "generateInvoice": "POST /api/invoices/generate",
            "previewInvoice": "POST /api/invoices/preview",
            "terbilang": "/api/terbilang?amount=<number>",
        },
    }


@app.get(
    "/api/invoices/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and whether the DOCX template is in place."""
    pipeline = _get_pipeline()
    return HealthResponse(
        status="OK",
        message="Invoice generator API is running",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        template_found=pipeline.template_found,
    )


@app.post(
    "/api/invoices/generate",
    summary="Generate an invoice PDF",
    tags=["Invoices"],
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "The rendered invoice"},
        400: {"description": "Invalid invoice data"},
        422: {"description": "Total too large to spell out"},
        500: {"description": "Template missing or PDF conversion failed"},
        503: {"description": "Pipeline not yet initialised"},
    },
)
async def generate_invoice(request: InvoiceRequest) -> Response:
    """Compute totals, fill the DOCX template and return it converted to PDF.

    LibreOffice runs in a worker thread so the event loop stays responsive.
    """
    pipeline = _get_pipeline()
    invoice = await asyncio.to_thread(pipeline.run, request)
    return Response(
        content=invoice.content,
        media_type=invoice.media_type,
        headers={"Content-Disposition": f'attachment; filename="{invoice.filename}"'},
    )


@app.post(
    "/api/invoices/preview",
    summary="Preview invoice totals",
    tags=["Invoices"],
    responses={
        400: {"description": "Invalid invoice data"},
        422: {"description": "Total too large to spell out"},
    },
)
def preview_invoice(request: InvoiceRequest) -> InvoiceDocument:
    """Return the formatted invoice fields, including **totalTerbilang**."""
    return _get_pipeline().build(request)


@app.get(
    "/api/terbilang",
    summary="Spell out an amount in Indonesian",
    tags=["Terbilang"],
    responses={422: {"description": "Amount too large to spell out"}},
)
def spell_amount(amount: Decimal = Query(..., description="Amount in rupiah")) -> TerbilangResponse:
    """The fractional part is dropped: 1500.99 → 'Seribu lima ratus rupiah'."""
    return TerbilangResponse(amount=amount, terbilang=terbilang.convert(amount))
