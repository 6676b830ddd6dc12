"""
Browser Automation Base

Data models shared by the automation engine and the base class every
platform strategy derives from.
"""

import logging
from enum import Enum
from typing import Optional
from urllib.parse import urlparse

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..config import AutomationSettings
from .confirmation import ConfirmationRule
from .errors import (
    ApplicationFormNotFound,
    AuthenticationRequired,
    ExternalApplicationRequired,
    InitiatingControlNotFound,
    NavigationTimeout,
)
from .selectors import SelectorChain


logger = logging.getLogger(__name__)


class ApplicationMethod(str, Enum):
    """How an application attempt ended."""
    AUTOMATED = "automated"  # Form filled and submitted by the engine
    REDIRECT = "redirect"    # User has to apply manually
    FAILED = "failed"        # Attempt made, did not complete


class FieldOutcome(str, Enum):
    """Outcome of one field step."""
    FILLED = "filled"
    NOT_FOUND = "not_found"
    ERROR = "error"


class ApplicationData(BaseModel):
    """Applicant data for one attempt."""
    model_config = ConfigDict(frozen=True)

    # Required
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    resume_url: str = Field(min_length=1)

    # Optional
    cover_letter: Optional[str] = None
    linkedin_profile: Optional[str] = None
    portfolio_url: Optional[str] = None

    @field_validator("full_name", "email", "phone", "resume_url")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("cover_letter", "linkedin_profile", "portfolio_url")
    @classmethod
    def _blank_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()


class ApplicationResult(BaseModel):
    """Outcome of one application attempt."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    platform: str
    method: ApplicationMethod
    confirmation_id: Optional[str] = None
    error: Optional[str] = None
    redirect_url: Optional[str] = None
    duration_ms: Optional[int] = None
    fields_filled: int = 0
    fields_missing: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_invariants(self) -> "ApplicationResult":
        if self.success and self.method != ApplicationMethod.AUTOMATED:
            raise ValueError("success requires method=automated")
        if self.method != ApplicationMethod.AUTOMATED and not self.redirect_url:
            raise ValueError(f"method={self.method.value} requires a redirect_url")
        if self.confirmation_id and self.method != ApplicationMethod.AUTOMATED:
            raise ValueError("confirmation_id is only set for automated results")
        return self

    @classmethod
    def automated(cls, platform: str, confirmation_id: str, **kwargs) -> "ApplicationResult":
        return cls(
            success=True,
            platform=platform,
            method=ApplicationMethod.AUTOMATED,
            confirmation_id=confirmation_id,
            **kwargs,
        )

    @classmethod
    def redirect(cls, platform: str, job_url: str, error: str, **kwargs) -> "ApplicationResult":
        return cls(
            success=False,
            platform=platform,
            method=ApplicationMethod.REDIRECT,
            redirect_url=job_url,
            error=error,
            **kwargs,
        )

    @classmethod
    def failed(cls, platform: str, job_url: str, error: str, **kwargs) -> "ApplicationResult":
        return cls(
            success=False,
            platform=platform,
            method=ApplicationMethod.FAILED,
            redirect_url=job_url,
            error=error,
            **kwargs,
        )

    @classmethod
    def unchecked_failure(cls, platform: str, job_url: str, error: str) -> "ApplicationResult":
        """A failed result built without validation, for when validation itself is what broke."""
        return cls.model_construct(
            success=False,
            platform=platform,
            method=ApplicationMethod.FAILED,
            redirect_url=job_url or None,
            error=error,
        )


class FieldReport(BaseModel):
    """What happened when the engine tried to fill one field."""
    field: str
    outcome: FieldOutcome
    selector: Optional[str] = None
    detail: Optional[str] = None

    @property
    def filled(self) -> bool:
        return self.outcome == FieldOutcome.FILLED


class FieldStep(BaseModel):
    """One "attempt field X" step planned by a strategy."""
    field: str
    chain: SelectorChain
    value: str
    is_file: bool = False
    unless_filled: Optional[str] = None  # Skip when this other field was filled


def split_full_name(full_name: str) -> tuple[str, str]:
    """First whitespace-delimited token, and the remainder."""
    parts = full_name.split(None, 1)
    if not parts:
        return "", ""
    first = parts[0]
    last = parts[1].strip() if len(parts) > 1 else ""
    return first, last


def _host(url: str) -> str:
    host = urlparse(url).hostname or ""
    return host.lower()


class JobApplicator:
    """
    Platform strategy: selector chains plus the few behaviours that differ
    between platforms. Subclasses only override class attributes unless the
    platform genuinely behaves differently.
    """

    platform: str = "generic"
    display_name: str = "Generic"
    aliases: tuple[str, ...] = ()
    domains: tuple[str, ...] = ()

    # Page lifecycle
    page_marker: Optional[SelectorChain] = None
    auth_wall: Optional[SelectorChain] = None
    auth_url_markers: tuple[str, ...] = ('/login', '/signin', '/authwall', '/checkpoint')
    apply_button: Optional[SelectorChain] = None
    apply_required: bool = False
    form_marker: Optional[SelectorChain] = None

    # Fields
    full_name: Optional[SelectorChain] = None
    first_name: Optional[SelectorChain] = None
    last_name: Optional[SelectorChain] = None
    email: Optional[SelectorChain] = None
    phone: Optional[SelectorChain] = None
    resume: Optional[SelectorChain] = None
    cover_letter: Optional[SelectorChain] = None
    linkedin_profile: Optional[SelectorChain] = None
    portfolio: Optional[SelectorChain] = None

    # Submission
    submit: Optional[SelectorChain] = None
    advance: Optional[SelectorChain] = None
    max_form_steps: int = 1
    confirmation: ConfirmationRule = ConfirmationRule()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(platform={self.platform!r})"

    @property
    def keys(self) -> tuple[str, ...]:
        return (self.platform.lower(),) + tuple(alias.lower() for alias in self.aliases)

    def owns_url(self, url: str) -> bool:
        """Check if the URL belongs to this platform."""
        host = _host(url)
        return any(host == domain or host.endswith("." + domain) for domain in self.domains)

    def field_steps(self, data: ApplicationData) -> list[FieldStep]:
        """Plan the field steps for this platform, in fill order."""
        steps: list[FieldStep] = []

        def add(field: str, chain: Optional[SelectorChain], value: Optional[str], **extra) -> None:
            if chain is None or not value:
                return
            steps.append(FieldStep(field=field, chain=chain, value=value, **extra))

        # Name: one field, two fields, or one field with a split fallback
        first, last = split_full_name(data.full_name)
        add("full_name", self.full_name, data.full_name)
        fallback = "full_name" if self.full_name is not None else None
        add("first_name", self.first_name, first, unless_filled=fallback)
        add("last_name", self.last_name, last, unless_filled=fallback)

        add("email", self.email, data.email)
        add("phone", self.phone, data.phone)
        add("resume", self.resume, data.resume_url, is_file=True)
        add("cover_letter", self.cover_letter, data.cover_letter)
        add("linkedin_profile", self.linkedin_profile, data.linkedin_profile)
        add("portfolio", self.portfolio, data.portfolio_url)
        return steps

    async def detect_auth_wall(self, page: Page) -> bool:
        """Check for a login wall right after navigation."""
        url = page.url.lower()
        if any(marker in url for marker in self.auth_url_markers):
            return True
        if self.auth_wall is not None and await self.auth_wall.resolve(page) is not None:
            return True
        return False

    async def wait_until_loaded(self, page: Page, timeout_ms: int) -> None:
        """Wait for the platform-characteristic marker of a loaded job page."""
        if self.page_marker is None:
            return
        try:
            await page.wait_for_selector(self.page_marker.union(), state="attached", timeout=timeout_ms)
        except PlaywrightTimeoutError:
            raise NavigationTimeout(
                f"Timed out after {timeout_ms}ms waiting for the {self.display_name} job page to load"
            )

    async def open_form(self, page: Page, settings: AutomationSettings) -> None:
        """Click the Apply control when the platform has one, then wait for the form."""
        if self.apply_button is not None:
            button = await self.apply_button.resolve(page)
            if button is not None:
                logger.info("%s: clicking Apply", self.display_name)
                await button.click()
                await page.wait_for_timeout(settings.settle_delay_ms)
            elif self.apply_required:
                raise InitiatingControlNotFound("Could not find or click Apply button")
            else:
                logger.info("%s: no Apply control, expecting the form inline", self.display_name)

            # Some postings hand the application off to the employer's own site
            if self.domains and not self.owns_url(page.url):
                raise ExternalApplicationRequired(f"Application continues on an external site: {page.url}")

        if self.form_marker is not None:
            try:
                await page.wait_for_selector(
                    self.form_marker.union(),
                    state="attached",
                    timeout=settings.load_marker_timeout_ms,
                )
            except PlaywrightTimeoutError:
                raise ApplicationFormNotFound(f"{self.display_name} application form did not appear")

    async def ensure_accessible(self, page: Page) -> None:
        """Raise AuthenticationRequired when the page is behind a login wall."""
        if await self.detect_auth_wall(page):
            raise AuthenticationRequired(f"Authentication required to apply on {self.display_name}")
