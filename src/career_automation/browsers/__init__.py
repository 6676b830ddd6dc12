"""
Browser Automation Package

Platform strategies and the browser-side building blocks used to fill and
submit job applications.
"""

from .base import (
    ApplicationData,
    ApplicationMethod,
    ApplicationResult,
    FieldOutcome,
    FieldReport,
    FieldStep,
    JobApplicator,
    split_full_name,
)
from .confirmation import Confirmation, ConfirmationRule, ConfirmationSignal, confirm_submission
from .errors import (
    ApplicationFormNotFound,
    AuthenticationRequired,
    AutomationError,
    ExternalApplicationRequired,
    InitiatingControlNotFound,
    NavigationTimeout,
    RedirectRequired,
    SubmitControlNotFound,
    UnsupportedPlatform,
)
from .fields import fill_field
from .greenhouse import GreenhouseApplicator
from .indeed import IndeedApplicator
from .lever import LeverApplicator
from .linkedin import LinkedInApplicator
from .registry import PlatformRegistry, default_registry, normalize_platform_id
from .resume import ResumeArtifact
from .selectors import SelectorChain, chain
from .session import BrowserSession


__all__ = [
    # Base classes
    "JobApplicator",
    "BrowserSession",
    "PlatformRegistry",
    # Platform-specific
    "GreenhouseApplicator",
    "LeverApplicator",
    "IndeedApplicator",
    "LinkedInApplicator",
    # Data models
    "ApplicationData",
    "ApplicationMethod",
    "ApplicationResult",
    "Confirmation",
    "ConfirmationRule",
    "ConfirmationSignal",
    "FieldOutcome",
    "FieldReport",
    "FieldStep",
    "SelectorChain",
    # Errors
    "AutomationError",
    "NavigationTimeout",
    "InitiatingControlNotFound",
    "ApplicationFormNotFound",
    "SubmitControlNotFound",
    "RedirectRequired",
    "UnsupportedPlatform",
    "AuthenticationRequired",
    "ExternalApplicationRequired",
    # Utilities
    "ResumeArtifact",
    "chain",
    "confirm_submission",
    "default_registry",
    "fill_field",
    "normalize_platform_id",
    "split_full_name",
]
