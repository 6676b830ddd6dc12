"""
Automation Settings

Runtime configuration for the automation engine, read from the environment
(optionally seeded from a .env file).
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


class AutomationSettings(BaseModel):
    """Timeouts, browser options and debug switches for one engine."""

    environment: str = "development"

    # Browser
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    viewport_width: int = 1366
    viewport_height: int = 768
    locale: str = "en-US"

    # Bounded waits (milliseconds)
    navigation_timeout_ms: int = Field(default=30000, gt=0)
    load_marker_timeout_ms: int = Field(default=15000, gt=0)
    action_timeout_ms: int = Field(default=5000, gt=0)
    settle_delay_ms: int = Field(default=2000, ge=0)
    confirmation_timeout_ms: int = Field(default=10000, gt=0)
    confirmation_poll_ms: int = Field(default=500, gt=0)

    # Resume handling
    resume_fetch_timeout_s: float = Field(default=30.0, gt=0)
    resume_scratch_dir: Optional[str] = None

    # Debug artifacts
    debug_screenshots: bool = False
    screenshot_dir: str = "debug-screenshots"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def screenshots_enabled(self) -> bool:
        """Screenshots are a development aid and never run in production."""
        return self.debug_screenshots and not self.is_production

    @classmethod
    def from_env(cls, dotenv_path: Optional[str | Path] = None) -> "AutomationSettings":
        """Build settings from environment variables."""
        load_dotenv(dotenv_path=dotenv_path)

        return cls(
            environment=os.getenv("APP_ENV", "development"),
            headless=_env_bool("BROWSER_HEADLESS", True),
            user_agent=os.getenv("BROWSER_USER_AGENT") or DEFAULT_USER_AGENT,
            navigation_timeout_ms=_env_int("NAVIGATION_TIMEOUT_MS", 30000),
            load_marker_timeout_ms=_env_int("LOAD_MARKER_TIMEOUT_MS", 15000),
            action_timeout_ms=_env_int("ACTION_TIMEOUT_MS", 5000),
            settle_delay_ms=_env_int("SETTLE_DELAY_MS", 2000),
            confirmation_timeout_ms=_env_int("CONFIRMATION_TIMEOUT_MS", 10000),
            confirmation_poll_ms=_env_int("CONFIRMATION_POLL_MS", 500),
            resume_fetch_timeout_s=float(os.getenv("RESUME_FETCH_TIMEOUT_S") or 30.0),
            resume_scratch_dir=os.getenv("RESUME_SCRATCH_DIR") or None,
            debug_screenshots=_env_bool("DEBUG_SCREENSHOTS", False),
            screenshot_dir=os.getenv("SCREENSHOT_DIR") or "debug-screenshots",
        )
