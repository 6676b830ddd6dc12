"""Tests for the application orchestrator, end to end against fake pages."""

import logging

from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from career_automation import apply_to_job
from career_automation.automation import FormProgress
from career_automation.browsers.base import ApplicationMethod, ApplicationResult, FieldOutcome, FieldReport

from .fakes import (
    RESUME_BYTES,
    FakeElement,
    FakePage,
    greenhouse_page,
    indeed_page,
    lever_page,
    linkedin_page,
)


GREENHOUSE_URL = "https://boards.greenhouse.io/acme/jobs/4012345"
LEVER_URL = "https://jobs.lever.co/acme/5f1e2d3c/apply"
INDEED_URL = "https://www.indeed.com/viewjob?jk=abc123"
LINKEDIN_URL = "https://www.linkedin.com/jobs/view/3790000000"


class TestGreenhouse:
    async def test_standard_form_is_automated_with_confirmation_id(self, make_automation, application):
        automation = make_automation(greenhouse_page)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.success is True
        assert result.method == ApplicationMethod.AUTOMATED
        assert result.confirmation_id == "GH-12345"
        assert result.platform == "greenhouse"
        assert result.redirect_url is None
        assert result.duration_ms is not None and result.duration_ms >= 0

    async def test_fields_are_filled_with_split_name(self, make_automation, application):
        automation = make_automation(greenhouse_page)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        page = automation.pages[0]
        assert page.elements["#first_name"].value == "Ada"
        assert page.elements["#last_name"].value == "Lovelace Byron"
        assert page.elements["#email"].value == "ada@example.com"
        assert page.elements["#phone"].value == "+1 555 0100"
        assert page.elements["#cover_letter"].value == "I would love to work on your engines."
        assert result.fields_filled == 6

    async def test_resume_is_uploaded_and_scratch_file_removed(self, make_automation, application, scratch_dir):
        automation = make_automation(greenhouse_page)

        await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        uploads = automation.pages[0].elements["#resume"].uploads
        assert len(uploads) == 1
        assert uploads[0]["existed"] is True
        assert uploads[0]["content"] == RESUME_BYTES
        assert uploads[0]["path"].endswith(".pdf")
        assert list(scratch_dir.iterdir()) == []

    async def test_disabled_submit_is_skipped(self, make_automation, application):
        def page_factory():
            page = greenhouse_page(submit_enabled=False)
            page.elements['button[type="submit"]'] = FakeElement()
            return page

        automation = make_automation(page_factory)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        page = automation.pages[0]
        assert page.elements["#submit_application"].clicks == 0
        assert page.elements['button[type="submit"]'].clicks == 1
        assert result.method == ApplicationMethod.AUTOMATED

    async def test_missing_confirmation_is_still_automated(self, make_automation, application):
        automation = make_automation(lambda: greenhouse_page(confirmation=None))

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.success is True
        assert result.method == ApplicationMethod.AUTOMATED
        assert result.confirmation_id == "GREENHOUSE_SUBMITTED_NO_CONFIRMATION"

    async def test_missing_optional_field_does_not_fail(self, make_automation, application):
        def page_factory():
            page = greenhouse_page()
            del page.elements["#cover_letter"]
            return page

        automation = make_automation(page_factory)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.method == ApplicationMethod.AUTOMATED
        assert "cover_letter" in result.fields_missing

    async def test_field_that_raises_is_non_fatal(self, make_automation, application):
        def page_factory():
            page = greenhouse_page()
            page.elements["#phone"].error = "Element is not attached to the DOM"
            return page

        automation = make_automation(page_factory)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.method == ApplicationMethod.AUTOMATED
        assert "phone" in result.fields_missing
        assert result.fields_filled == 5

    async def test_resume_404_proceeds_to_submit(self, make_automation, application, resume_status, scratch_dir):
        resume_status["status"] = 404
        automation = make_automation(greenhouse_page)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.method == ApplicationMethod.AUTOMATED
        assert result.success is True
        assert "resume" in result.fields_missing
        assert automation.pages[0].elements["#resume"].uploads == []
        assert list(scratch_dir.iterdir()) == []

    async def test_unwritable_scratch_dir_is_non_fatal(self, make_automation, application, settings, tmp_path):
        settings.resume_scratch_dir = str(tmp_path / "does-not-exist")
        automation = make_automation(greenhouse_page)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.method == ApplicationMethod.AUTOMATED
        assert result.confirmation_id == "GH-12345"
        assert "resume" in result.fields_missing
        assert result.fields_filled == 5
        assert automation.pages[0].elements["#resume"].uploads == []

    async def test_load_marker_never_appears(self, make_automation, application, tracker):
        def page_factory():
            page = greenhouse_page()
            del page.elements["#application_form"]
            return page

        automation = make_automation(page_factory)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.success is False
        assert result.method == ApplicationMethod.FAILED
        assert "Timed out" in result.error
        assert result.redirect_url == GREENHOUSE_URL
        assert tracker.screenshots == ["debug-greenhouse"]

    async def test_no_submit_control_fails(self, make_automation, application):
        def page_factory():
            page = greenhouse_page()
            del page.elements["#submit_application"]
            return page

        automation = make_automation(page_factory)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.method == ApplicationMethod.FAILED
        assert result.error == "Could not find or click submit button"
        assert result.redirect_url == GREENHOUSE_URL
        assert result.fields_filled == 6


class TestLever:
    async def test_full_name_field_skips_first_and_last(self, make_automation, application):
        automation = make_automation(lever_page)

        result = await automation.apply_to_job(LEVER_URL, "lever", application)

        page = automation.pages[0]
        assert page.elements['input[name="name"]'].value == "Ada Lovelace Byron"
        assert page.elements['textarea[name="comments"]'].value == "I would love to work on your engines."
        assert page.elements['input[name="urls[LinkedIn]"]'].value == "https://www.linkedin.com/in/ada"
        assert result.method == ApplicationMethod.AUTOMATED
        assert result.confirmation_id == "LEVER_SUBMITTED_SUCCESS"
        assert "first_name" not in result.fields_missing

    async def test_split_name_form_uses_first_and_last(self, make_automation, application):
        automation = make_automation(lambda: lever_page(split_name=True))

        result = await automation.apply_to_job(LEVER_URL, "Lever", application)

        page = automation.pages[0]
        assert page.elements['input[placeholder*="First name" i]'].value == "Ada"
        assert page.elements['input[placeholder*="Last name" i]'].value == "Lovelace Byron"
        assert result.method == ApplicationMethod.AUTOMATED
        assert result.fields_missing == ["full_name"]
        assert result.platform == "Lever"


class TestIndeed:
    async def test_multi_page_form(self, make_automation, application, resume_requests):
        automation = make_automation(indeed_page)

        result = await automation.apply_to_job(INDEED_URL, "indeed", application)

        page = automation.pages[0]
        assert page.clicked[0] == "#indeedApplyButton"
        assert 'button:has-text("Continue")' in page.clicked
        assert page.elements['input[data-testid="resume-upload"]'].uploads[0]["content"] == RESUME_BYTES
        assert result.method == ApplicationMethod.AUTOMATED
        assert result.confirmation_id == "INDEED_SUBMITTED_SUCCESS"
        assert sorted(result.fields_missing) == ["cover_letter", "linkedin_profile"]
        assert len(resume_requests) == 1

    async def test_external_application_redirects(self, make_automation, application, caplog):
        caplog.set_level(logging.INFO, logger="career_automation.automation")
        automation = make_automation(lambda: indeed_page(external=True))

        result = await automation.apply_to_job(INDEED_URL, "indeed.com", application)

        assert result.method == ApplicationMethod.REDIRECT
        assert result.redirect_url == INDEED_URL
        assert "external site" in result.error
        assert "external_redirect" in caplog.text
        assert "auth_redirect" not in caplog.text
        assert "ExternalApplicationRequired" in caplog.text

    async def test_search_form_is_not_the_application_form(self, make_automation, application):
        def page_factory():
            page = indeed_page()
            page.elements["#indeedApplyButton"].on_click = None
            page.elements["form"] = FakeElement()
            return page

        automation = make_automation(page_factory)

        result = await automation.apply_to_job(INDEED_URL, "indeed", application)

        assert result.method == ApplicationMethod.FAILED
        assert result.error == "Indeed application form did not appear"

    async def test_missing_apply_button_fails(self, make_automation, application):
        def page_factory():
            page = indeed_page()
            page.elements['[data-testid="apply-button"]'] = page.elements.pop("#indeedApplyButton")
            page.elements['[data-testid="apply-button"]'].visible = False
            return page

        automation = make_automation(page_factory)

        result = await automation.apply_to_job(INDEED_URL, "indeed", application)

        assert result.method == ApplicationMethod.FAILED
        assert result.error == "Could not find or click Apply button"

    async def test_login_redirect_is_auth_wall(self, make_automation, application):
        def page_factory():
            page = indeed_page()
            page.redirect_to = "https://secure.indeed.com/account/login?continue=viewjob"
            return page

        automation = make_automation(page_factory)

        result = await automation.apply_to_job(INDEED_URL, "indeed", application)

        assert result.method == ApplicationMethod.REDIRECT
        assert result.error.startswith("Authentication required")
        assert automation.pages[0].clicked == []


class TestLinkedIn:
    async def test_guest_session_redirects(self, make_automation, application, tracker):
        automation = make_automation(linkedin_page)

        result = await automation.apply_to_job(LINKEDIN_URL, "linkedin", application)

        assert result.success is False
        assert result.method == ApplicationMethod.REDIRECT
        assert result.redirect_url == LINKEDIN_URL
        assert result.error.startswith("Authentication required")
        assert automation.pages[0].clicked == []
        assert tracker.acquired == tracker.released == 1


class TestDispatch:
    async def test_unknown_vendor_redirects_without_session(self, make_automation, application, tracker):
        automation = make_automation(FakePage)

        result = await automation.apply_to_job("https://jobs.unknown-vendor.example/1", "unknown-vendor", application)

        assert result.success is False
        assert result.method == ApplicationMethod.REDIRECT
        assert result.error == "Platform not supported for automation"
        assert result.redirect_url == "https://jobs.unknown-vendor.example/1"
        assert result.confirmation_id is None
        assert tracker.created == 0
        assert automation.pages == []

    async def test_empty_job_url_is_reported_not_raised(self, make_automation, application, tracker):
        automation = make_automation(FakePage)

        result = await automation.apply_to_job("", "unknown-vendor", application)

        assert result.success is False
        assert result.method == ApplicationMethod.FAILED
        assert result.error == "Job URL is required"
        assert result.duration_ms is not None
        assert tracker.created == 0

    async def test_platform_is_not_inferred_from_url(self, make_automation, application, tracker):
        automation = make_automation(greenhouse_page)

        result = await automation.apply_to_job(GREENHOUSE_URL, "workday", application)

        assert result.method == ApplicationMethod.REDIRECT
        assert tracker.created == 0


class TestResilience:
    async def test_navigation_timeout(self, make_automation, application):
        def page_factory():
            page = greenhouse_page()
            page.goto_error = PlaywrightTimeoutError("Timeout 1000ms exceeded.")
            return page

        automation = make_automation(page_factory)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.method == ApplicationMethod.FAILED
        assert result.error == "Page load timeout after 1000ms"

    async def test_browser_error_becomes_failed(self, make_automation, application):
        def page_factory():
            page = greenhouse_page()
            page.goto_error = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
            return page

        automation = make_automation(page_factory)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.method == ApplicationMethod.FAILED
        assert "ERR_NAME_NOT_RESOLVED" in result.error
        assert result.redirect_url == GREENHOUSE_URL

    async def test_unexpected_error_never_escapes(self, make_automation, application, tracker):
        automation = make_automation(greenhouse_page, acquire_error=RuntimeError("driver crashed"))

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.method == ApplicationMethod.FAILED
        assert result.error == "driver crashed"
        assert result.redirect_url == GREENHOUSE_URL
        assert result.duration_ms is not None
        assert tracker.released == 1

    async def test_invalid_result_never_escapes(self, make_automation, application, monkeypatch):
        def broken_redirect(*args, **kwargs):
            raise ValueError("method=redirect requires a redirect_url")

        monkeypatch.setattr(ApplicationResult, "redirect", broken_redirect)
        automation = make_automation(FakePage)

        result = await automation.apply_to_job("https://jobs.unknown-vendor.example/1", "unknown-vendor", application)

        assert result.method == ApplicationMethod.FAILED
        assert result.error == "method=redirect requires a redirect_url"
        assert result.redirect_url == "https://jobs.unknown-vendor.example/1"

    async def test_confirmation_errors_never_downgrade_submit(self, make_automation, application):
        def page_factory():
            page = greenhouse_page(confirmation=None)
            page.body_error = "Target page, context or browser has been closed"
            return page

        automation = make_automation(page_factory)

        result = await automation.apply_to_job(GREENHOUSE_URL, "greenhouse", application)

        assert result.method == ApplicationMethod.AUTOMATED
        assert result.confirmation_id == "GREENHOUSE_SUBMITTED_NO_CONFIRMATION"

    async def test_sessions_balanced_across_attempts(self, make_automation, application, tracker, scratch_dir):
        def broken_page():
            page = greenhouse_page()
            page.goto_error = PlaywrightError("net::ERR_CONNECTION_RESET")
            return page

        pages = iter([greenhouse_page, broken_page, linkedin_page, greenhouse_page])
        automation = make_automation(lambda: next(pages)())

        urls = [
            (GREENHOUSE_URL, "greenhouse"),
            (GREENHOUSE_URL, "greenhouse"),
            ("https://example.com/careers/1", "unknown-vendor"),
            (LINKEDIN_URL, "linkedin"),
            (GREENHOUSE_URL, "greenhouse"),
        ]
        methods = [
            (await automation.apply_to_job(url, platform, application)).method
            for url, platform in urls
        ]

        assert methods == [
            ApplicationMethod.AUTOMATED,
            ApplicationMethod.FAILED,
            ApplicationMethod.REDIRECT,
            ApplicationMethod.REDIRECT,
            ApplicationMethod.AUTOMATED,
        ]
        assert tracker.acquired == tracker.released == 4
        assert list(scratch_dir.iterdir()) == []


class TestModuleEntryPoint:
    async def test_apply_to_job_with_engine(self, make_automation, application):
        automation = make_automation(greenhouse_page)

        result = await apply_to_job(GREENHOUSE_URL, "greenhouse", application, automation=automation)

        assert result.success is True


class TestFormProgress:
    def test_filled_report_is_not_overwritten(self):
        progress = FormProgress()
        progress.record(FieldReport(field="email", outcome=FieldOutcome.FILLED, selector="#email"))
        progress.record(FieldReport(field="email", outcome=FieldOutcome.NOT_FOUND))

        assert progress.filled == ["email"]
        assert progress.missing == []

    def test_later_success_replaces_miss(self):
        progress = FormProgress()
        progress.record(FieldReport(field="resume", outcome=FieldOutcome.NOT_FOUND))
        progress.record(FieldReport(field="resume", outcome=FieldOutcome.FILLED, selector="input[type=file]"))

        assert progress.is_filled("resume")
        assert not progress.is_filled(None)
