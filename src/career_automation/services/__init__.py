"""
Services Package

Network collaborators used by the automation engine.
"""

from .resume_fetcher import ResumeFetcher, ResumeFetchFailed

__all__ = [
    "ResumeFetcher",
    "ResumeFetchFailed",
]
