"""
Response shaping for the PDF endpoint.

Builds the success payload around a rendered PDF and the error envelope
for any failure.
"""

import base64
import traceback
from datetime import datetime, timezone
from typing import Optional

from .config import PDFServiceSettings
from .errors import PDFServiceError
from .models import ErrorResponse, PDFRequest, PDFResult


UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def encode_pdf(pdf_bytes: bytes) -> str:
    """Base64-encode raw PDF bytes as ASCII text."""
    return base64.b64encode(pdf_bytes).decode("ascii")


def format_timestamp(moment: datetime) -> str:
    """ISO 8601 UTC with millisecond precision, e.g. 2026-01-02T03:04:05.678Z."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_pdf_result(
    request: PDFRequest,
    pdf_bytes: bytes,
    generated_at: Optional[datetime] = None,
) -> PDFResult:
    """
    Package a rendered PDF into the success payload.

    Caller metadata is kept; the effective format, landscape and
    printBackground values overwrite same-named caller keys.
    """
    metadata = {
        **request.metadata,
        "format": request.format,
        "landscape": request.landscape,
        "printBackground": request.print_background,
    }
    return PDFResult(
        filename=request.filename,
        pdf_base64=encode_pdf(pdf_bytes),
        size=len(pdf_bytes),
        metadata=metadata,
        generated_at=format_timestamp(generated_at or datetime.now(timezone.utc)),
    )


def status_code_for(error: BaseException) -> int:
    if isinstance(error, PDFServiceError):
        return error.status_code
    return 500


def format_error_response(error: BaseException, settings: PDFServiceSettings) -> ErrorResponse:
    """
    Build the error envelope for a failed request.

    The traceback is attached as details only outside production.
    """
    if isinstance(error, PDFServiceError):
        message = str(error)
    else:
        message = UNEXPECTED_ERROR_MESSAGE

    details = None
    if not settings.is_production:
        details = "".join(traceback.format_exception(type(error), error, error.__traceback__))

    return ErrorResponse(error=message, details=details)
