"""
Request body parsing and schema validation.

Pydantic reports every failing field at once; this module flattens those
reports into a single ValidationError so callers see all violations.
"""

import json
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .models import PDFRequest


def _format_location(loc: tuple) -> str:
    path = ".".join(str(part) for part in loc)
    return path or "body"


def _format_reason(error: dict) -> str:
    # Custom validators raise ValueError; report their message without
    # pydantic's "Value error, " prefix.
    if error.get("type") == "value_error":
        cause = error.get("ctx", {}).get("error")
        if cause is not None:
            return str(cause)
    return error["msg"]


def parse_json_body(raw: bytes) -> Any:
    """
    Decode a raw HTTP body as JSON.

    Raises:
        ValidationError: If the body is not valid JSON
    """
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise ValidationError(["body: Request body must be valid JSON"]) from e


def validate_pdf_request(payload: Any) -> PDFRequest:
    """
    Validate a decoded payload and fill in defaults.

    Args:
        payload: Decoded JSON body (any type)

    Returns:
        Fully defaulted PDFRequest

    Raises:
        ValidationError: Listing every "<path>: <reason>" violation

    Example:
        >>> validate_pdf_request({"html": "<h1>Hi</h1>"}).format
        'A4'
    """
    try:
        return PDFRequest.model_validate(payload)
    except PydanticValidationError as e:
        violations = [
            f"{_format_location(err['loc'])}: {_format_reason(err)}"
            for err in e.errors()
        ]
        raise ValidationError(violations) from e
