"""
Platform Registry

Maps platform identifiers (as they arrive from job feeds: "Indeed",
"indeed.com", "boards.greenhouse.io", ...) to platform strategies.
"""

from typing import Iterable, Optional

from .base import JobApplicator
from .greenhouse import GreenhouseApplicator
from .indeed import IndeedApplicator
from .lever import LeverApplicator
from .linkedin import LinkedInApplicator


def normalize_platform_id(platform_id: Optional[str]) -> str:
    """Lowercase, and drop scheme, ``www.`` and any path."""
    key = (platform_id or "").strip().lower()
    if "://" in key:
        key = key.split("://", 1)[1]
    key = key.split("/", 1)[0]
    if key.startswith("www."):
        key = key[4:]
    return key


class PlatformRegistry:
    """Registry of platform strategies."""

    def __init__(self, applicators: Iterable[JobApplicator] = ()):
        self._applicators: list[JobApplicator] = []
        self._by_key: dict[str, JobApplicator] = {}
        for applicator in applicators:
            self.register(applicator)

    def register(self, applicator: JobApplicator) -> None:
        """Add a strategy under its platform key and aliases."""
        for key in applicator.keys:
            key = normalize_platform_id(key)
            existing = self._by_key.get(key)
            if existing is not None and existing is not applicator:
                raise ValueError(f"Platform key {key!r} already registered by {existing!r}")
            self._by_key[key] = applicator
        self._applicators.append(applicator)

    @property
    def applicators(self) -> list[JobApplicator]:
        return list(self._applicators)

    def resolve(self, platform_id: Optional[str]) -> Optional[JobApplicator]:
        """Return the strategy for ``platform_id``, or None when unsupported."""
        key = normalize_platform_id(platform_id)
        if not key:
            return None

        applicator = self._by_key.get(key)
        if applicator is not None:
            return applicator

        # "jobs.lever.co", "indeed.co.uk": match any host label against platform keys
        for label in key.split("."):
            for candidate in self._applicators:
                if label == candidate.platform:
                    return candidate
        return None

    def detect(self, job_url: str) -> Optional[JobApplicator]:
        """Find the strategy whose domains own ``job_url``."""
        for applicator in self._applicators:
            if applicator.owns_url(job_url):
                return applicator
        return None

    def __contains__(self, platform_id: str) -> bool:
        return self.resolve(platform_id) is not None


def default_registry() -> PlatformRegistry:
    """Registry with every built-in platform."""
    return PlatformRegistry([
        GreenhouseApplicator(),
        LeverApplicator(),
        IndeedApplicator(),
        LinkedInApplicator(),
    ])
