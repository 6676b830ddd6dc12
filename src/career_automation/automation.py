"""
Job Application Automation

Entry point of the engine. ``apply_to_job`` sequences dispatch, session,
navigation, field filling, resume upload, submit and confirmation, and turns
every failure into an ApplicationResult. Nothing raised inside an attempt
reaches the caller.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional

from playwright.async_api import Error as PlaywrightError, Page, TimeoutError as PlaywrightTimeoutError

from .browsers.base import ApplicationData, ApplicationResult, FieldReport, FieldStep, JobApplicator
from .browsers.confirmation import confirm_submission
from .browsers.errors import (
    AuthenticationRequired,
    AutomationError,
    ExternalApplicationRequired,
    NavigationTimeout,
    RedirectRequired,
    SubmitControlNotFound,
    UnsupportedPlatform,
)
from .browsers.fields import fill_field
from .browsers.registry import PlatformRegistry, default_registry
from .browsers.resume import ResumeArtifact
from .browsers.session import BrowserSession
from .config import AutomationSettings
from .services.resume_fetcher import ResumeFetcher


logger = logging.getLogger(__name__)


class AttemptState(str, Enum):
    """Where an attempt is in its lifecycle."""
    DISPATCHED = "dispatched"
    SESSION_ACQUIRED = "session_acquired"
    NAVIGATED = "navigated"
    FORM_PROCESSED = "form_processed"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    SUBMITTED_UNCONFIRMED = "submitted_unconfirmed"
    UNSUPPORTED_REDIRECT = "unsupported_redirect"
    AUTH_REDIRECT = "auth_redirect"
    EXTERNAL_REDIRECT = "external_redirect"
    FAILED = "failed"


class FormProgress:
    """Field reports for one attempt, merged across form pages."""

    def __init__(self) -> None:
        self.reports: dict[str, FieldReport] = {}

    def record(self, report: FieldReport) -> None:
        previous = self.reports.get(report.field)
        if previous is None or not previous.filled:
            self.reports[report.field] = report

    def is_filled(self, field: Optional[str]) -> bool:
        report = self.reports.get(field) if field else None
        return report is not None and report.filled

    @property
    def filled(self) -> list[str]:
        return [field for field, report in self.reports.items() if report.filled]

    @property
    def missing(self) -> list[str]:
        return [field for field, report in self.reports.items() if not report.filled]


SessionFactory = Callable[[AutomationSettings], BrowserSession]


class JobApplicationAutomation:
    """Applies to jobs on supported platforms with a fresh browser per attempt."""

    def __init__(
        self,
        registry: Optional[PlatformRegistry] = None,
        settings: Optional[AutomationSettings] = None,
        session_factory: Optional[SessionFactory] = None,
        resume_fetcher: Optional[ResumeFetcher] = None,
    ):
        self.settings = settings or AutomationSettings.from_env()
        self.registry = registry or default_registry()
        self.session_factory = session_factory or BrowserSession
        self.resume_fetcher = resume_fetcher or ResumeFetcher(timeout=self.settings.resume_fetch_timeout_s)

    async def apply_to_job(self, job_url: str, platform_id: str, data: ApplicationData) -> ApplicationResult:
        """
        Apply to ``job_url`` on ``platform_id`` with ``data``.

        Always returns exactly one ApplicationResult and never raises. Results
        other than ``automated`` carry ``redirect_url`` set to ``job_url`` so
        the user can always apply manually.
        """
        started = time.monotonic()
        logger.info("=== STARTING AUTOMATION === platform=%s url=%s", platform_id, job_url)

        if not (job_url or "").strip():
            logger.error("No job URL given, nothing to apply to")
            result = ApplicationResult.unchecked_failure(platform_id, job_url, "Job URL is required")
        else:
            try:
                result = await self._attempt(job_url, platform_id, data)
            except Exception as e:
                logger.exception("Job application automation failed: %s", e)
                result = ApplicationResult.unchecked_failure(
                    platform_id,
                    job_url,
                    str(e) or "Unknown automation error",
                )

        result.duration_ms = int((time.monotonic() - started) * 1000)
        logger.info("Automation completed in %sms: %s", result.duration_ms, result.method.value)
        return result

    def _transition(self, platform: str, state: AttemptState) -> AttemptState:
        logger.info("%s: %s", platform, state.value)
        return state

    async def _attempt(self, job_url: str, platform_id: str, data: ApplicationData) -> ApplicationResult:
        try:
            applicator = self._dispatch(platform_id)
        except UnsupportedPlatform as e:
            self._transition(platform_id, AttemptState.UNSUPPORTED_REDIRECT)
            return ApplicationResult.redirect(platform_id, job_url, str(e))
        self._transition(platform_id, AttemptState.DISPATCHED)

        session = self.session_factory(self.settings)
        page: Optional[Page] = None
        progress = FormProgress()
        try:
            await session.acquire()
            page = await session.new_page()
            self._transition(platform_id, AttemptState.SESSION_ACQUIRED)

            await self._navigate(page, applicator, job_url)
            self._transition(platform_id, AttemptState.NAVIGATED)

            await applicator.open_form(page, self.settings)
            resume = ResumeArtifact(data.resume_url, self.resume_fetcher, self.settings.resume_scratch_dir)
            await self._fill_and_submit(page, applicator, data, resume, progress, platform_id)
            self._transition(platform_id, AttemptState.SUBMITTED)

            # From here on the submit click happened: never report a failure
            confirmation = await confirm_submission(
                page,
                applicator.confirmation,
                applicator.platform,
                timeout_ms=self.settings.confirmation_timeout_ms,
                poll_ms=self.settings.confirmation_poll_ms,
            )
            self._transition(
                platform_id,
                AttemptState.CONFIRMED if confirmation.observed else AttemptState.SUBMITTED_UNCONFIRMED,
            )
            return ApplicationResult.automated(
                platform_id,
                confirmation.confirmation_id,
                fields_filled=len(progress.filled),
                fields_missing=progress.missing,
            )

        except RedirectRequired as e:
            self._transition(platform_id, self._redirect_state(e))
            logger.info("%s: redirecting to manual application (%s): %s", platform_id, type(e).__name__, e)
            return ApplicationResult.redirect(platform_id, job_url, str(e))

        except (AutomationError, PlaywrightError) as e:
            self._transition(platform_id, AttemptState.FAILED)
            logger.error("%s automation error: %s", applicator.display_name, e)
            if page is not None:
                await session.take_screenshot(page, f"debug-{applicator.platform}")
            return ApplicationResult.failed(
                platform_id,
                job_url,
                str(e) or f"Unknown {applicator.display_name} error",
                fields_filled=len(progress.filled),
                fields_missing=progress.missing,
            )

        finally:
            await session.release()

    def _redirect_state(self, error: RedirectRequired) -> AttemptState:
        if isinstance(error, AuthenticationRequired):
            return AttemptState.AUTH_REDIRECT
        if isinstance(error, ExternalApplicationRequired):
            return AttemptState.EXTERNAL_REDIRECT
        return AttemptState.UNSUPPORTED_REDIRECT

    def _dispatch(self, platform_id: str) -> JobApplicator:
        applicator = self.registry.resolve(platform_id)
        if applicator is None:
            logger.info("Unsupported platform: %s, falling back to redirect", platform_id)
            raise UnsupportedPlatform(platform_id)
        return applicator

    async def _navigate(self, page: Page, applicator: JobApplicator, job_url: str) -> None:
        try:
            await page.goto(job_url, wait_until='domcontentloaded', timeout=self.settings.navigation_timeout_ms)
        except PlaywrightTimeoutError:
            raise NavigationTimeout(f"Page load timeout after {self.settings.navigation_timeout_ms}ms")

        await applicator.ensure_accessible(page)

        await applicator.wait_until_loaded(page, self.settings.load_marker_timeout_ms)

    async def _run_step(self, page: Page, step: FieldStep, resume: ResumeArtifact) -> FieldReport:
        if step.is_file:
            return await resume.attach(page, step.chain, step.field)
        return await fill_field(page, step.chain, step.value, step.field)

    async def _fill_and_submit(
        self,
        page: Page,
        applicator: JobApplicator,
        data: ApplicationData,
        resume: ResumeArtifact,
        progress: FormProgress,
        platform_id: str,
    ) -> None:
        """Fill the form page by page until an enabled submit control is clicked."""
        steps = applicator.field_steps(data)

        for form_page in range(1, applicator.max_form_steps + 1):
            for step in steps:
                if progress.is_filled(step.field) or progress.is_filled(step.unless_filled):
                    continue
                progress.record(await self._run_step(page, step, resume))
            self._transition(platform_id, AttemptState.FORM_PROCESSED)
            logger.info(
                "%s: form page %s filled=%s missing=%s",
                platform_id, form_page, progress.filled, progress.missing,
            )

            await page.wait_for_timeout(self.settings.settle_delay_ms)
            if await self._click_submit(page, applicator):
                return

            if applicator.advance is None:
                break
            next_button = await applicator.advance.resolve(page)
            if next_button is None:
                break
            logger.info("%s: advancing to the next form page", platform_id)
            await next_button.click()
            await page.wait_for_timeout(self.settings.settle_delay_ms)

        raise SubmitControlNotFound("Could not find or click submit button")

    async def _click_submit(self, page: Page, applicator: JobApplicator) -> bool:
        if applicator.submit is None:
            return False
        async for selector, button in applicator.submit.candidates(page):
            try:
                await button.click()
            except PlaywrightError as e:
                logger.info("Submit selector %r failed: %s", selector, e)
                continue
            logger.info("Submit button clicked with selector %r", selector)
            return True
        return False


async def apply_to_job(
    job_url: str,
    platform_id: str,
    data: ApplicationData,
    automation: Optional[JobApplicationAutomation] = None,
) -> ApplicationResult:
    """Apply to one job with a default-configured engine unless one is given."""
    if automation is None:
        try:
            automation = JobApplicationAutomation()
        except Exception as e:
            logger.exception("Could not configure automation: %s", e)
            return ApplicationResult.unchecked_failure(platform_id, job_url, f"Automation not configured: {e}")
    return await automation.apply_to_job(job_url, platform_id, data)
