"""
Browser session management for PDF rendering.

Each request gets its own Chromium process launched through Playwright and
torn down afterwards; nothing is pooled between requests. The deployment
mode decides which binary is launched and with which flags, through a
launch strategy resolved when the session is acquired.
"""

import logging
import os
import sys
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, List, Optional

from playwright.async_api import async_playwright

from .config import PDFServiceSettings
from .errors import BrowserLaunchError

logger = logging.getLogger(__name__)


DEFAULT_VIEWPORT = {"width": 1280, "height": 720}
EMULATED_MEDIA = "screen"

BASE_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-accelerated-2d-canvas",
    "--hide-scrollbars",
]

# Serverless/container hosts: no process isolation, single renderer process
SERVERLESS_LAUNCH_ARGS = [
    "--disable-web-security",
    "--disable-features=IsolateOrigins,site-per-process",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
]

DEVELOPMENT_EXECUTABLE_PATHS = {
    "darwin": "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
    "linux": "/usr/bin/google-chrome",
    "win32": r"C:\Program Files\Google\Chrome\Application\chrome.exe",
}
CONTAINER_EXECUTABLE_PATH = "/usr/bin/chromium"


@dataclass(frozen=True)
class LaunchOptions:
    """Resolved Chromium launch configuration."""

    executable_path: Optional[str]  # None: Playwright-managed Chromium
    args: List[str]
    headless: bool = True
    viewport: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_VIEWPORT))


class LaunchStrategy(ABC):
    """Resolves executable path and flags for one deployment mode."""

    name = "base"

    def __init__(self, settings: PDFServiceSettings):
        self.settings = settings

    def executable_path(self) -> Optional[str]:
        if self.settings.chrome_executable_path:
            return self.settings.chrome_executable_path
        return self.default_executable_path()

    @abstractmethod
    def default_executable_path(self) -> Optional[str]:
        """Binary used when no CHROME_EXECUTABLE_PATH override is set."""

    def launch_args(self) -> List[str]:
        return list(BASE_LAUNCH_ARGS)

    def launch_options(self) -> LaunchOptions:
        return LaunchOptions(
            executable_path=self.executable_path(),
            args=self.launch_args(),
        )


class DevelopmentLaunchStrategy(LaunchStrategy):
    """Local runs: the installed Google Chrome when present."""

    name = "development"

    def default_executable_path(self) -> Optional[str]:
        path = DEVELOPMENT_EXECUTABLE_PATHS.get(sys.platform)
        if path and os.path.exists(path):
            return path
        return None


class ProductionLaunchStrategy(LaunchStrategy):
    """Serverless and container deployments."""

    name = "production"

    def default_executable_path(self) -> Optional[str]:
        if self.settings.running_in_container:
            return CONTAINER_EXECUTABLE_PATH
        return None

    def launch_args(self) -> List[str]:
        return BASE_LAUNCH_ARGS + SERVERLESS_LAUNCH_ARGS


def select_launch_strategy(settings: PDFServiceSettings) -> LaunchStrategy:
    """Pick the launch strategy for the configured deployment mode."""
    if settings.is_development:
        return DevelopmentLaunchStrategy(settings)
    return ProductionLaunchStrategy(settings)


@dataclass
class BrowserSession:
    """A running Chromium process with one page, owned by one request."""

    playwright: Any
    browser: Any
    page: Any
    released: bool = False


class BrowserSessionManager:
    """
    Acquires and releases single-use browser sessions.

    Usage:
        manager = BrowserSessionManager(settings)
        async with manager.session() as session:
            await session.page.set_content(html)
    """

    def __init__(self, settings: PDFServiceSettings):
        self.settings = settings

    async def acquire(self) -> BrowserSession:
        """
        Launch Chromium and open a page configured for PDF rendering.

        Raises:
            BrowserLaunchError: If the driver, browser or page fails to start
        """
        strategy = select_launch_strategy(self.settings)
        options = strategy.launch_options()
        logger.info(
            f"Launching Chromium (strategy={strategy.name}, "
            f"executable={options.executable_path or 'playwright-managed'})"
        )

        playwright = None
        browser = None
        try:
            playwright = await async_playwright().start()
            browser = await playwright.chromium.launch(
                headless=options.headless,
                executable_path=options.executable_path,
                args=options.args,
            )
            page = await browser.new_page(viewport=options.viewport)
            page.set_default_timeout(self.settings.render_timeout_ms)
            await page.emulate_media(media=EMULATED_MEDIA)
        except Exception as e:
            logger.error(f"Failed to launch browser: {e}")
            await self._shutdown(playwright, browser)
            raise BrowserLaunchError(e) from e

        return BrowserSession(playwright=playwright, browser=browser, page=page)

    async def release(self, session: BrowserSession) -> None:
        """Close the browser and stop the driver. Never raises."""
        if session.released:
            logger.debug("Browser session already released")
            return
        session.released = True
        await self._shutdown(session.playwright, session.browser)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[BrowserSession]:
        """Acquire a session and release it on every exit path."""
        browser_session = await self.acquire()
        try:
            yield browser_session
        finally:
            await self.release(browser_session)

    async def _shutdown(self, playwright: Any, browser: Any) -> None:
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                logger.error(f"Error closing browser: {e}")
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                logger.error(f"Error stopping Playwright: {e}")
