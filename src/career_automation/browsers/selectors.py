"""
Selector Chains

Ordered element descriptors for one logical field, tried in priority order
until one resolves to a usable element on the page.
"""

import logging
from typing import AsyncIterator, Optional

from playwright.async_api import Error as PlaywrightError, Locator, Page
from pydantic import BaseModel, ConfigDict, Field


logger = logging.getLogger(__name__)


class SelectorChain(BaseModel):
    """Ordered candidate selectors plus the policy used to accept a match."""

    model_config = ConfigDict(frozen=True)

    name: str
    selectors: tuple[str, ...] = Field(min_length=1)
    require_visible: bool = True
    require_enabled: bool = False

    def union(self) -> str:
        """Single selector matching any candidate, for one bounded wait."""
        return ", ".join(self.selectors)

    async def _is_usable(self, locator: Locator) -> bool:
        if await locator.count() == 0:
            return False
        if self.require_visible and not await locator.is_visible():
            return False
        if self.require_enabled and not await locator.is_enabled():
            logger.info("%s: candidate is disabled, trying next selector", self.name)
            return False
        return True

    async def candidates(self, page: Page) -> AsyncIterator[tuple[str, Locator]]:
        """Yield ``(selector, locator)`` for every candidate that is usable right now."""
        for selector in self.selectors:
            locator = page.locator(selector).first
            try:
                usable = await self._is_usable(locator)
            except PlaywrightError as e:
                logger.debug("%s: selector %r failed: %s", self.name, selector, e)
                continue

            if not usable:
                continue
            yield selector, locator

    async def resolve(self, page: Page) -> Optional[Locator]:
        """Return the first usable candidate, or None when the chain is exhausted."""
        async for selector, locator in self.candidates(page):
            logger.debug("%s: resolved with selector %r", self.name, selector)
            return locator
        return None


def chain(name: str, *selectors: str, require_visible: bool = True, require_enabled: bool = False) -> SelectorChain:
    """Shorthand used by platform configuration."""
    return SelectorChain(
        name=name,
        selectors=selectors,
        require_visible=require_visible,
        require_enabled=require_enabled,
    )
