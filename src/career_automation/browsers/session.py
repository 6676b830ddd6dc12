"""
Browser Session

Owns the browser process and the single page used by one application
attempt. Sessions are never shared or reused between attempts.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from ..config import AutomationSettings


logger = logging.getLogger(__name__)


BROWSER_ARGS = [
    '--disable-blink-features=AutomationControlled',
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-gpu',
    '--no-first-run',
]


class BrowserSession:
    """Attempt-scoped Playwright browser with explicit acquire/release."""

    def __init__(self, settings: AutomationSettings):
        self.settings = settings
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @property
    def is_active(self) -> bool:
        return self._browser is not None

    async def acquire(self) -> Browser:
        """Start the browser if none is held and return it."""
        if self._browser is None:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.settings.headless,
                args=BROWSER_ARGS,
            )
            logger.info("Browser launched for application attempt")
        return self._browser

    async def new_page(self) -> Page:
        """Open the attempt's page in a fresh context."""
        browser = await self.acquire()
        if self._page is not None:
            return self._page

        self._context = await browser.new_context(
            user_agent=self.settings.user_agent,
            viewport={'width': self.settings.viewport_width, 'height': self.settings.viewport_height},
            locale=self.settings.locale,
        )
        self._context.set_default_timeout(self.settings.action_timeout_ms)
        self._context.set_default_navigation_timeout(self.settings.navigation_timeout_ms)
        self._page = await self._context.new_page()
        return self._page

    async def release(self) -> None:
        """Close page, context, browser and driver. Safe to call repeatedly."""
        page, context, browser, playwright = self._page, self._context, self._browser, self._playwright
        self._page = self._context = self._browser = self._playwright = None

        for name, closer in (
            ("page", page.close if page else None),
            ("context", context.close if context else None),
            ("browser", browser.close if browser else None),
            ("playwright", playwright.stop if playwright else None),
        ):
            if closer is None:
                continue
            try:
                await closer()
            except Exception as e:
                logger.warning("Error closing %s: %s", name, e)

        if browser is not None:
            logger.info("Browser closed")

    async def take_screenshot(self, page: Page, prefix: str = "screenshot") -> Optional[str]:
        """Capture a debug screenshot when enabled. Never raises."""
        if not self.settings.screenshots_enabled:
            return None

        try:
            directory = Path(self.settings.screenshot_dir)
            directory.mkdir(parents=True, exist_ok=True)
            path = directory / f"{prefix}_{uuid.uuid4().hex[:8]}.png"
            await page.screenshot(path=str(path), full_page=True)
            logger.info("Debug screenshot saved to %s", path)
            return str(path)
        except Exception as e:
            logger.warning("Failed to take debug screenshot: %s", e)
            return None
