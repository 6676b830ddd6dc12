"""
Submission Confirmation

Best-effort detection of a success signal after the submit click. Third-party
sites often show nothing recognisable after a successful submission, so a
missing signal still counts as submitted and yields a sentinel id.
"""

import logging
import re
from enum import Enum
from typing import Optional

from playwright.async_api import Error as PlaywrightError, Page
from pydantic import BaseModel, ConfigDict

from .selectors import SelectorChain


logger = logging.getLogger(__name__)


class ConfirmationSignal(str, Enum):
    """Which signal confirmed the submission."""
    ELEMENT = "element"
    URL = "url"
    PAGE_TEXT = "page_text"
    NONE = "none"


class ConfirmationRule(BaseModel):
    """Where a platform shows that an application went through."""
    model_config = ConfigDict(frozen=True)

    region: Optional[SelectorChain] = None
    confirmation_id: Optional[SelectorChain] = None
    url_markers: tuple[str, ...] = ('thank', 'confirmation', 'submitted')
    text_phrases: tuple[str, ...] = ()


class Confirmation(BaseModel):
    """Normalised confirmation for a submitted application."""
    confirmation_id: str
    signal: ConfirmationSignal

    @property
    def observed(self) -> bool:
        return self.signal != ConfirmationSignal.NONE


def sentinel(platform: str, suffix: str) -> str:
    """Fixed placeholder id, e.g. GREENHOUSE_SUBMITTED_NO_CONFIRMATION."""
    prefix = re.sub(r"[^A-Z0-9]+", "_", platform.upper()).strip("_")
    return f"{prefix}_{suffix}" if prefix else suffix


def _clean_text(text: Optional[str]) -> str:
    return " ".join((text or "").split())


async def _text_of(page: Page, chain: SelectorChain) -> str:
    locator = await chain.resolve(page)
    if locator is None:
        return ""
    try:
        return _clean_text(await locator.text_content())
    except PlaywrightError as e:
        logger.debug("%s: could not read text: %s", chain.name, e)
        return ""


async def _check_once(page: Page, rule: ConfirmationRule, platform: str) -> Optional[Confirmation]:
    # Confirmation region on the page
    if rule.region is not None and await rule.region.resolve(page) is not None:
        text = ""
        if rule.confirmation_id is not None:
            text = await _text_of(page, rule.confirmation_id)
        if not text:
            text = await _text_of(page, rule.region)
        return Confirmation(
            confirmation_id=text or sentinel(platform, "APPLICATION_SUBMITTED"),
            signal=ConfirmationSignal.ELEMENT,
        )

    # Redirect to a thank-you style URL
    url = page.url.lower()
    if any(marker in url for marker in rule.url_markers):
        return Confirmation(
            confirmation_id=sentinel(platform, "SUBMITTED_SUCCESS"),
            signal=ConfirmationSignal.URL,
        )

    # Success wording anywhere on the page
    if rule.text_phrases:
        body = (await page.locator('body').inner_text()).lower()
        if any(phrase in body for phrase in rule.text_phrases):
            return Confirmation(
                confirmation_id=sentinel(platform, "SUBMITTED_SUCCESS"),
                signal=ConfirmationSignal.PAGE_TEXT,
            )

    return None


async def confirm_submission(
    page: Page,
    rule: ConfirmationRule,
    platform: str,
    timeout_ms: int,
    poll_ms: int = 500,
) -> Confirmation:
    """
    Wait up to ``timeout_ms`` for a success signal after submitting.

    Never raises: errors and timeouts both end in the no-confirmation sentinel.
    """
    rounds = max(1, timeout_ms // max(poll_ms, 1))
    try:
        for attempt in range(rounds):
            try:
                found = await _check_once(page, rule, platform)
            except PlaywrightError as e:
                # Transient while the page re-renders: keep polling
                logger.debug("%s: confirmation check failed, polling again: %s", platform, e)
                found = None
            if found is not None:
                logger.info("%s: submission confirmed via %s: %s", platform, found.signal.value, found.confirmation_id)
                return found
            if attempt < rounds - 1:
                await page.wait_for_timeout(poll_ms)
    except Exception as e:
        logger.warning("%s: confirmation check failed, treating as unconfirmed: %s", platform, e)

    logger.info("%s: no confirmation observed within %sms, application may still have succeeded", platform, timeout_ms)
    return Confirmation(
        confirmation_id=sentinel(platform, "SUBMITTED_NO_CONFIRMATION"),
        signal=ConfirmationSignal.NONE,
    )

