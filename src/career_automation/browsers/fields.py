"""
Field Filling

Writes a value into the first input of a selector chain that accepts it and
verifies the write by reading the value back.
"""

import logging

from playwright.async_api import Error as PlaywrightError, Locator, Page

from .base import FieldOutcome, FieldReport
from .selectors import SelectorChain


logger = logging.getLogger(__name__)


async def _write(locator: Locator, value: str) -> bool:
    """Clear, type and read back. Containment tolerates platform-side formatting."""
    await locator.click()
    await locator.fill("")
    await locator.fill(value)
    current = await locator.input_value()
    return value in current


async def fill_field(page: Page, chain: SelectorChain, value: str, field: str) -> FieldReport:
    """
    Fill ``field`` using the first candidate of ``chain`` whose readback
    confirms the write.

    Never raises. An exhausted chain is reported as not found; a chain where
    every usable candidate raised is reported as an error.
    """
    errors: list[str] = []

    async for selector, locator in chain.candidates(page):
        try:
            if await _write(locator, value):
                logger.info("Filled %s with selector %r", field, selector)
                return FieldReport(field=field, outcome=FieldOutcome.FILLED, selector=selector)
            logger.debug("%s: readback did not confirm write for selector %r", field, selector)
        except PlaywrightError as e:
            logger.debug("Failed to fill %s with selector %r: %s", field, selector, e)
            errors.append(f"{selector}: {e}")

    if errors:
        logger.warning("Could not fill %s: every matching selector failed", field)
        return FieldReport(field=field, outcome=FieldOutcome.ERROR, detail="; ".join(errors))

    logger.warning("Could not fill %s - no matching selectors found", field)
    return FieldReport(field=field, outcome=FieldOutcome.NOT_FOUND)
