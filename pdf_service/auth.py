"""
Authentication Module

Handles API authentication using a shared secret in the x-api-key header.
Uses centralized config for settings validation.
"""

import hmac
import logging
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader

from .config import PDFServiceSettings, get_settings
from .errors import AuthenticationError


logger = logging.getLogger(__name__)
api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)


async def verify_api_key(
    api_key: Optional[str] = Security(api_key_header),
    settings: PDFServiceSettings = Depends(get_settings),
) -> Optional[str]:
    """
    Verify the shared secret.

    Development processes with no API_KEY configured skip the check.
    Anywhere else, a missing or mismatched key is rejected, including
    when no key is configured at all.

    Raises:
        AuthenticationError: 401 if the key is missing or invalid
    """
    if not settings.auth_required:
        return api_key

    if settings.api_key is None:
        logger.error("API_KEY is not configured; rejecting request")
        raise AuthenticationError()

    if api_key is None or not hmac.compare_digest(api_key, settings.api_key):
        logger.warning("Rejected request with invalid or missing API key")
        raise AuthenticationError()

    return api_key
