"""
Career Automation

Applies to jobs on supported hiring platforms by driving a headless browser,
and falls back to manual application everywhere else.
"""

from .automation import AttemptState, JobApplicationAutomation, apply_to_job
from .browsers import ApplicationData, ApplicationMethod, ApplicationResult, PlatformRegistry, default_registry
from .config import AutomationSettings

__version__ = "1.0.0"

__all__ = [
    "ApplicationData",
    "ApplicationMethod",
    "ApplicationResult",
    "AttemptState",
    "AutomationSettings",
    "JobApplicationAutomation",
    "PlatformRegistry",
    "apply_to_job",
    "default_registry",
]
