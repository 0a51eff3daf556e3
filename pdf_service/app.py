"""
PDF Service - FastAPI application for PDF generation.

Provides POST /api/pdf for converting HTML to a base64-encoded PDF
using Playwright/Chromium, GET /api/pdf for the API documentation and
GET /health for container orchestration.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from . import __version__
from .auth import verify_api_key
from .browser import BrowserSessionManager
from .config import PDFServiceSettings, get_settings, validate_config_on_startup
from .docs import build_api_documentation
from .errors import AuthenticationError, PDFServiceError
from .generator import generate_pdf
from .models import HealthResponse, PDFRequest
from .resource_guard import validate_html_size
from .responses import format_error_response, format_timestamp, status_code_for
from .validation import parse_json_body, validate_pdf_request

# Configure logging
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

# Browser readiness state, set by the startup check
_browser_ready: Optional[bool] = None
_browser_error: Optional[str] = None

STARTUP_TEST_HTML = "<html><body><h1>Test</h1></body></html>"


# ============================================================================
# Startup - Validate Configuration and Chromium
# ============================================================================

async def validate_browser_on_startup():
    """
    Validate configuration and, if enabled, that Chromium can print a PDF.

    This ensures the service won't report as healthy if Playwright can't
    actually generate PDFs.
    """
    global _browser_ready, _browser_error

    settings = validate_config_on_startup()
    if not settings.validate_browser_on_startup:
        logger.info("Startup browser validation disabled")
        return

    logger.info("PDF Service starting - validating Chromium launch...")

    try:
        request = PDFRequest(html=STARTUP_TEST_HTML)
        result = await generate_pdf(request, settings, BrowserSessionManager(settings))

        if result.size > 0:
            _browser_ready = True
            _browser_error = None
            logger.info(f"Browser validation successful - generated {result.size} byte test PDF")
        else:
            _browser_ready = False
            _browser_error = "Test PDF generation returned empty result"
            logger.error(f"Browser validation failed: {_browser_error}")

    except Exception as e:
        _browser_ready = False
        _browser_error = str(e)
        logger.error(f"Browser validation failed: {_browser_error}")
        logger.error("PDF generation will not work until this is resolved.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await validate_browser_on_startup()
    yield


app = FastAPI(
    title="PDF Service",
    version=__version__,
    description="HTML to PDF generation service using Playwright/Chromium",
    lifespan=lifespan,
)


# ============================================================================
# Error Handlers
# ============================================================================

@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    """Answer rejected API keys with the error envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc)},
    )


def error_response(error: BaseException, settings: PDFServiceSettings) -> JSONResponse:
    envelope = format_error_response(error, settings)
    return JSONResponse(
        status_code=status_code_for(error),
        content=envelope.model_dump(exclude_none=True),
    )


# ============================================================================
# Health Check Endpoint
# ============================================================================

@app.get("/health", response_model=HealthResponse)
async def health_check(settings: PDFServiceSettings = Depends(get_settings)) -> HealthResponse:
    """
    Health check endpoint for container orchestration.

    Returns HTTP 503 if the startup browser check failed.
    """
    timestamp = format_timestamp(datetime.now(timezone.utc))

    if _browser_ready is False:
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "timestamp": timestamp,
                "environment": settings.environment,
                "browser_ready": False,
                "browser_error": _browser_error,
                "message": "PDF service is unhealthy - Chromium not available"
            }
        )

    return HealthResponse(
        status="healthy",
        timestamp=timestamp,
        environment=settings.environment,
        browser_ready=_browser_ready,
        browser_error=None,
    )


# ============================================================================
# PDF Endpoints
# ============================================================================

@app.get("/api/pdf")
async def api_documentation(settings: PDFServiceSettings = Depends(get_settings)):
    """API documentation and status."""
    return build_api_documentation(settings)


@app.post("/api/pdf", dependencies=[Depends(verify_api_key)])
async def create_pdf(request: Request, settings: PDFServiceSettings = Depends(get_settings)):
    """
    Generate a PDF from HTML content.

    Args:
        request: JSON body with html and optional layout settings

    Returns:
        JSONResponse with the base64 PDF, or the error envelope

    Status codes: 400 for invalid input, 401 for a bad API key (raised by
    the dependency), 500 for size limit, launch and rendering failures.
    """
    try:
        body = parse_json_body(await request.body())
        pdf_request = validate_pdf_request(body)
        validate_html_size(pdf_request.html)

        logger.info(
            f"Starting PDF render (format={pdf_request.format}, "
            f"landscape={pdf_request.landscape}, filename={pdf_request.filename})"
        )
        result = await generate_pdf(pdf_request, settings)

    except PDFServiceError as e:
        logger.error(f"PDF request failed ({type(e).__name__}): {e}")
        return error_response(e, settings)
    except Exception as e:
        logger.exception(f"Unexpected error generating PDF: {e}")
        return error_response(e, settings)

    logger.info(f"PDF render completed: {result.filename} ({result.size} bytes)")
    return JSONResponse(status_code=200, content=result.model_dump(by_alias=True))
