"""Shared fixtures for the automation tests."""

from pathlib import Path
from typing import Callable, Optional

import httpx
import pytest

from career_automation.automation import JobApplicationAutomation
from career_automation.browsers.base import ApplicationData
from career_automation.browsers.registry import default_registry
from career_automation.config import AutomationSettings
from career_automation.services.resume_fetcher import ResumeFetcher

from .fakes import RESUME_BYTES, RESUME_URL, FakePage, FakeSession, SessionTracker


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def scratch_dir(tmp_path) -> Path:
    directory = tmp_path / "scratch"
    directory.mkdir()
    return directory


@pytest.fixture
def settings(scratch_dir) -> AutomationSettings:
    return AutomationSettings(
        navigation_timeout_ms=1000,
        load_marker_timeout_ms=100,
        action_timeout_ms=100,
        settle_delay_ms=0,
        confirmation_timeout_ms=50,
        confirmation_poll_ms=10,
        resume_scratch_dir=str(scratch_dir),
    )


@pytest.fixture
def application() -> ApplicationData:
    return ApplicationData(
        full_name="Ada Lovelace Byron",
        email="ada@example.com",
        phone="+1 555 0100",
        resume_url=RESUME_URL,
        cover_letter="I would love to work on your engines.",
        linkedin_profile="https://www.linkedin.com/in/ada",
    )


@pytest.fixture
def resume_requests() -> list[str]:
    return []


@pytest.fixture
def resume_status() -> dict:
    return {"status": 200}


@pytest.fixture
def resume_fetcher(resume_requests, resume_status) -> ResumeFetcher:
    def handler(request: httpx.Request) -> httpx.Response:
        resume_requests.append(str(request.url))
        status = resume_status["status"]
        return httpx.Response(status, content=RESUME_BYTES if status == 200 else b"not found")

    return ResumeFetcher(timeout=5, transport=httpx.MockTransport(handler))


@pytest.fixture
def tracker() -> SessionTracker:
    return SessionTracker()


@pytest.fixture
def make_automation(settings, resume_fetcher, tracker):
    """Build an engine whose sessions serve pages from ``page_factory``."""

    def build(page_factory: Callable[[], FakePage], acquire_error: Optional[Exception] = None):
        pages: list[FakePage] = []

        def session_factory(session_settings: AutomationSettings) -> FakeSession:
            page = page_factory()
            pages.append(page)
            return FakeSession(session_settings, page, tracker, acquire_error=acquire_error)

        automation = JobApplicationAutomation(
            registry=default_registry(),
            settings=settings,
            session_factory=session_factory,
            resume_fetcher=resume_fetcher,
        )
        automation.pages = pages
        return automation

    return build
