"""
Resume Fetching Service

Downloads resume files from remote storage so they can be attached to
application forms.
"""

import logging
from typing import Optional

import httpx


logger = logging.getLogger(__name__)


class ResumeFetchFailed(Exception):
    """The resume could not be downloaded."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to download resume: {reason}")
        self.url = url
        self.reason = reason


class ResumeFetcher:
    """Fetch resume bytes over HTTP."""

    def __init__(self, timeout: float = 30.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, url: str) -> bytes:
        """
        Download ``url`` and return its body.

        Raises:
            ResumeFetchFailed: On transport errors, non-2xx responses or an
                empty body.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise ResumeFetchFailed(url, str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise ResumeFetchFailed(url, f"HTTP {response.status_code}")
        if not response.content:
            raise ResumeFetchFailed(url, "empty response body")

        logger.info("Resume downloaded (%.1f KB)", len(response.content) / 1024)
        return response.content
