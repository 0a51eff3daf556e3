"""
HTML to PDF rendering pipeline.

Loads HTML into a browser page, waits for the page to settle and prints
it with Playwright's page.pdf(). Loading, settling and printing share a
single timeout.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from .browser import BrowserSession, BrowserSessionManager
from .config import DEFAULT_RENDER_TIMEOUT_MS, PDFServiceSettings
from .errors import RenderError
from .models import PDFRequest, PDFResult
from .responses import build_pdf_result

logger = logging.getLogger(__name__)


def build_pdf_options(request: PDFRequest) -> Dict[str, Any]:
    """
    Build Playwright page.pdf() options from a validated request.

    The requested format always wins over any CSS @page size in the document.
    """
    return {
        "format": request.format,
        "margin": request.margins.model_dump(),
        "landscape": request.landscape,
        "print_background": request.print_background,
        "prefer_css_page_size": False,
    }


async def _load_and_print(page: Any, request: PDFRequest, timeout_ms: int) -> bytes:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_ms / 1000

    def remaining_ms() -> int:
        # Playwright treats 0 as "no timeout"
        return max(int((deadline - loop.time()) * 1000), 1)

    await page.set_content(request.html, wait_until="load", timeout=timeout_ms)
    await page.wait_for_load_state("networkidle", timeout=remaining_ms())
    return await page.pdf(**build_pdf_options(request))


async def render_pdf(
    session: BrowserSession,
    request: PDFRequest,
    timeout_ms: int = DEFAULT_RENDER_TIMEOUT_MS,
) -> bytes:
    """
    Render request.html in the session's page and print it to PDF.

    timeout_ms bounds the whole render: page load, network idle and print.
    page.pdf() takes no timeout of its own, so the deadline is enforced
    around all three steps.

    Raises:
        RenderError: On load timeout, renderer crash or print failure
    """
    try:
        pdf_bytes = await asyncio.wait_for(
            _load_and_print(session.page, request, timeout_ms),
            timeout=timeout_ms / 1000,
        )
    except asyncio.TimeoutError as e:
        logger.error(f"PDF rendering timed out after {timeout_ms}ms")
        raise RenderError(TimeoutError(f"Timeout {timeout_ms}ms exceeded")) from e
    except Exception as e:
        logger.error(f"PDF rendering failed: {e}")
        raise RenderError(e) from e

    logger.info(f"Rendered PDF: {len(pdf_bytes)} bytes (format={request.format})")
    return pdf_bytes


async def generate_pdf(
    request: PDFRequest,
    settings: PDFServiceSettings,
    session_manager: Optional[BrowserSessionManager] = None,
) -> PDFResult:
    """
    Generate a PDF from a validated request.

    A fresh browser session is acquired for the call and released before
    returning, whether rendering succeeded or not.

    Raises:
        BrowserLaunchError: If Chromium cannot be started
        RenderError: If loading or printing fails
    """
    manager = session_manager or BrowserSessionManager(settings)

    async with manager.session() as session:
        pdf_bytes = await render_pdf(session, request, timeout_ms=settings.render_timeout_ms)

    return build_pdf_result(request, pdf_bytes)
