"""
Resume Upload

Moves a resume from remote storage into a form's file input through a local
ephemeral file that is always deleted afterwards.
"""

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional
from urllib.parse import urlparse

from playwright.async_api import Error as PlaywrightError, Page

from ..services.resume_fetcher import ResumeFetcher, ResumeFetchFailed
from .base import FieldOutcome, FieldReport
from .selectors import SelectorChain


logger = logging.getLogger(__name__)


def resume_suffix(url: str) -> str:
    """File extension for the downloaded resume, based on its URL."""
    path = urlparse(url).path.lower()
    if path.endswith('.docx'):
        return '.docx'
    if path.endswith('.doc'):
        return '.doc'
    return '.pdf'


@contextmanager
def ephemeral_file(content: bytes, suffix: str, directory: Optional[str] = None) -> Iterator[Path]:
    """Write ``content`` to a temp file and delete it on exit, whatever happens."""
    fd, name = tempfile.mkstemp(prefix="resume-", suffix=suffix, dir=directory)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Failed to delete temporary resume %s: %s", path, e)


class ResumeArtifact:
    """The resume for one attempt. Downloads at most once, even across form steps."""

    def __init__(self, url: str, fetcher: ResumeFetcher, scratch_dir: Optional[str] = None):
        self.url = url
        self.fetcher = fetcher
        self.scratch_dir = scratch_dir
        self._content: Optional[bytes] = None
        self._fetch_error: Optional[str] = None

    async def load(self) -> Optional[bytes]:
        if self._content is None and self._fetch_error is None:
            try:
                self._content = await self.fetcher.fetch(self.url)
            except ResumeFetchFailed as e:
                logger.warning("Resume download failed, continuing without it: %s", e)
                self._fetch_error = str(e)
        return self._content

    async def attach(self, page: Page, chain: SelectorChain, field: str = "resume") -> FieldReport:
        """Upload the resume into the first file input of ``chain``. Never raises."""
        content = await self.load()
        if content is None:
            return FieldReport(field=field, outcome=FieldOutcome.ERROR, detail=self._fetch_error)

        try:
            with ephemeral_file(content, resume_suffix(self.url), self.scratch_dir) as path:
                logger.debug("Resume written to %s", path)
                return await self._upload(page, chain, path, field)
        except OSError as e:
            logger.warning("Could not write resume to scratch storage: %s", e)
            return FieldReport(field=field, outcome=FieldOutcome.ERROR, detail=f"Resume scratch file: {e}")

    async def _upload(self, page: Page, chain: SelectorChain, path: Path, field: str) -> FieldReport:
        errors: list[str] = []
        async for selector, file_input in chain.candidates(page):
            try:
                await file_input.set_input_files(str(path))
            except PlaywrightError as e:
                logger.debug("File upload selector %r failed: %s", selector, e)
                errors.append(f"{selector}: {e}")
                continue
            logger.info("Resume uploaded with selector %r", selector)
            return FieldReport(field=field, outcome=FieldOutcome.FILLED, selector=selector)

        if errors:
            logger.warning("Resume upload failed on every file input")
            return FieldReport(field=field, outcome=FieldOutcome.ERROR, detail="; ".join(errors))

        logger.warning("No file upload input found for resume")
        return FieldReport(field=field, outcome=FieldOutcome.NOT_FOUND)
