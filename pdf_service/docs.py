"""Static API documentation served by GET /api/pdf."""

from typing import Any, Dict

from . import __version__
from .config import PDFServiceSettings
from .models import DEFAULT_FILENAME, DEFAULT_FORMAT, DEFAULT_MARGIN
from .resource_guard import MAX_MEMORY_BYTES


def build_api_documentation(settings: PDFServiceSettings) -> Dict[str, Any]:
    margin_default = f"string (default: {DEFAULT_MARGIN})"
    return {
        "name": "PDF Generator API",
        "version": __version__,
        "status": "operational",
        "endpoint": "/api/pdf",
        "methods": ["POST", "GET"],
        "documentation": {
            "method": "POST",
            "contentType": "application/json",
            "authentication": {
                "header": "x-api-key",
                "description": "Required unless running in development without API_KEY",
            },
            "requiredFields": ["html"],
            "optionalFields": {
                "filename": f"string (default: {DEFAULT_FILENAME})",
                "format": f"A4 | A3 | Letter | Legal | Tabloid (default: {DEFAULT_FORMAT})",
                "margins": {
                    "top": margin_default,
                    "right": margin_default,
                    "bottom": margin_default,
                    "left": margin_default,
                },
                "landscape": "boolean (default: false)",
                "printBackground": "boolean (default: true)",
                "metadata": "object (default: {})",
            },
            "response": {
                "success": "boolean",
                "filename": "string",
                "pdfBase64": "string (base64 encoded PDF)",
                "size": "number (bytes)",
                "metadata": "object",
                "generatedAt": "string (ISO 8601)",
            },
            "errors": {
                "400": "Validation error",
                "401": "Invalid or missing API key",
                "500": "Browser launch, rendering, size limit or unexpected failure",
            },
            "limits": {
                "maxDuration": f"{settings.max_duration_seconds}s",
                "renderTimeout": f"{settings.render_timeout_ms // 1000}s",
                "maxMemory": f"{MAX_MEMORY_BYTES // (1024 * 1024)}MB (estimated HTML size)",
            },
        },
        "example": {
            "request": {
                "html": "<html><body><h1>Hello World</h1></body></html>",
                "filename": "hello.pdf",
                "format": "A4",
                "printBackground": True,
            },
            "curl": (
                "curl -X POST http://localhost:8000/api/pdf \\\n"
                '  -H "Content-Type: application/json" \\\n'
                '  -H "x-api-key: your-api-key" \\\n'
                "  -d '{\"html\": \"<html><body><h1>Hello World</h1></body></html>\", "
                "\"filename\": \"hello.pdf\"}'"
            ),
        },
    }
