"""
Fail-fast size check run before a browser is launched.

The estimate is a heuristic (UTF-8 size times a fixed overhead factor),
not a runtime memory limit.
"""

from typing import Callable

from .errors import ResourceLimitError


MEMORY_MULTIPLIER = 10
MAX_MEMORY_BYTES = 200 * 1024 * 1024  # 200MB
_BYTES_PER_MB = 1024 * 1024


def estimate_memory_usage(html: str) -> int:
    """Estimated rendering memory in bytes for an HTML string."""
    return len(html.encode("utf-8")) * MEMORY_MULTIPLIER


def validate_html_size(
    html: str,
    estimator: Callable[[str], int] = estimate_memory_usage,
    max_bytes: int = MAX_MEMORY_BYTES,
) -> int:
    """
    Reject HTML whose estimated rendering cost exceeds max_bytes.

    Returns:
        The estimate, in bytes

    Raises:
        ResourceLimitError: If the estimate is above the ceiling
    """
    estimated = estimator(html)
    if estimated > max_bytes:
        raise ResourceLimitError(
            estimated_mb=estimated / _BYTES_PER_MB,
            max_mb=max_bytes / _BYTES_PER_MB,
        )
    return estimated
