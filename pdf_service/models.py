"""
Pydantic models for the PDF service.

These models define the structure for API requests and responses.
JSON names are camelCase on the wire; attributes are snake_case.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator


PDFFormat = Literal["A4", "A3", "Letter", "Legal", "Tabloid"]

DEFAULT_FILENAME = "document.pdf"
DEFAULT_FORMAT = "A4"
DEFAULT_MARGIN = "20mm"


class PDFMargins(BaseModel):
    """Page margins as CSS lengths (e.g. "20mm", "0.5in")."""

    model_config = ConfigDict(frozen=True)

    top: StrictStr = DEFAULT_MARGIN
    right: StrictStr = DEFAULT_MARGIN
    bottom: StrictStr = DEFAULT_MARGIN
    left: StrictStr = DEFAULT_MARGIN


class PDFRequest(BaseModel):
    """HTML to PDF request with every optional field defaulted."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    html: StrictStr = Field(..., description="HTML content to render")
    filename: StrictStr = Field(DEFAULT_FILENAME, description="Name reported back for the PDF")
    format: PDFFormat = Field(DEFAULT_FORMAT, description="Paper format")
    margins: PDFMargins = Field(default_factory=PDFMargins, description="Page margins")
    landscape: StrictBool = Field(False, description="Landscape orientation")
    print_background: StrictBool = Field(
        True, alias="printBackground", description="Print background colors/images"
    )
    metadata: Dict[str, Any] = Field(
        default_factory=dict, description="Caller metadata echoed in the response"
    )

    @field_validator("html")
    @classmethod
    def html_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("HTML content is required")
        return v


class PDFResult(BaseModel):
    """Successful PDF generation response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool = True
    filename: str
    pdf_base64: str = Field(..., alias="pdfBase64")
    size: int = Field(..., description="Raw PDF size in bytes")
    metadata: Dict[str, Any]
    generated_at: str = Field(..., alias="generatedAt")


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    success: bool = False
    error: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    timestamp: str
    environment: str
    browser_ready: Optional[bool] = None
    browser_error: Optional[str] = None
