"""
Error taxonomy for the PDF service.

Every failure the pipeline can report derives from PDFServiceError and
carries the HTTP status the request boundary should answer with.
"""

from typing import List, Optional


class PDFServiceError(Exception):
    """Base class for errors converted to the error envelope."""

    status_code: int = 500


class AuthenticationError(PDFServiceError):
    """The x-api-key header did not match the configured secret."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized: Invalid or missing API key"):
        super().__init__(message)


class ValidationError(PDFServiceError):
    """
    Request body failed schema validation.

    Attributes:
        violations: One "<path>: <reason>" entry per failed field
    """

    status_code = 400

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__(f"Validation error: {', '.join(self.violations)}")


class ResourceLimitError(PDFServiceError):
    """Estimated rendering memory exceeds the safety ceiling."""

    def __init__(self, estimated_mb: float, max_mb: float):
        self.estimated_mb = round(estimated_mb, 2)
        self.max_mb = round(max_mb, 2)
        super().__init__(
            f"HTML content too large. Estimated memory: {estimated_mb:.2f}MB, "
            f"Max: {max_mb:.2f}MB"
        )


class BrowserLaunchError(PDFServiceError):
    """Chromium could not be started or a page could not be opened."""

    def __init__(self, cause: Optional[BaseException] = None):
        reason = str(cause) if cause is not None else "Unknown error"
        super().__init__(f"Browser launch failed: {reason}")


class RenderError(PDFServiceError):
    """Loading the HTML or printing it to PDF failed or timed out."""

    def __init__(self, cause: Optional[BaseException] = None):
        reason = (str(cause) or type(cause).__name__) if cause is not None else "Unknown error"
        super().__init__(f"PDF rendering failed: {reason}")
