"""
Career Automation Service

HTTP surface for the job application automation engine:
- Platform listing
- Single job application
- Batch job application with bounded concurrency
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .automation import JobApplicationAutomation
from .browsers import ApplicationData, ApplicationMethod, ApplicationResult


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from LOG_LEVEL."""
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


_automation: Optional[JobApplicationAutomation] = None


def get_automation() -> JobApplicationAutomation:
    """Engine shared by all requests. Sessions are still created per attempt."""
    global _automation
    if _automation is None:
        _automation = JobApplicationAutomation()
    return _automation


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    load_dotenv()
    configure_logging()
    logger.info("Career Automation Service starting...")
    yield
    logger.info("Career Automation Service stopped.")


app = FastAPI(
    title="Career Automation Service",
    description="Automated job applications on supported hiring platforms",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "career-automation",
        "version": "1.0.0",
    }


# ============================================================================
# Platforms
# ============================================================================

class PlatformInfo(BaseModel):
    """A platform the engine can automate."""
    platform: str
    display_name: str
    aliases: list[str]


@app.get("/platforms")
async def list_platforms(automation: JobApplicationAutomation = Depends(get_automation)) -> list[PlatformInfo]:
    """List the platforms with a registered strategy."""
    return [
        PlatformInfo(
            platform=applicator.platform,
            display_name=applicator.display_name,
            aliases=list(applicator.aliases),
        )
        for applicator in automation.registry.applicators
    ]


# ============================================================================
# Job Application Automation
# ============================================================================

class ApplyToJobRequest(BaseModel):
    """Request to apply to a job."""
    job_url: str = Field(min_length=1)
    platform: Optional[str] = None  # greenhouse, lever, indeed, linkedin, or auto-detect
    application: ApplicationData


def resolve_platform(automation: JobApplicationAutomation, job_url: str, platform: Optional[str]) -> str:
    """Use the caller's platform, else detect it from the job URL."""
    if platform:
        return platform
    applicator = automation.registry.detect(job_url)
    if applicator is None:
        logger.info("Could not detect platform for %s", job_url)
        return "unknown"
    return applicator.platform


@app.post("/apply", response_model=ApplicationResult, response_model_by_alias=True)
async def apply_to_job(
    request: ApplyToJobRequest,
    automation: JobApplicationAutomation = Depends(get_automation),
) -> ApplicationResult:
    """
    Apply to a job using browser automation.

    Always answers 200 with an ApplicationResult. Unsupported platforms and
    authentication walls come back as ``method=redirect`` with the job URL.
    """
    platform = resolve_platform(automation, request.job_url, request.platform)
    return await automation.apply_to_job(request.job_url, platform, request.application)


class BatchJob(BaseModel):
    """One job in a batch."""
    job_url: str = Field(min_length=1)
    platform: Optional[str] = None


class BatchApplyRequest(BaseModel):
    """Request to apply to multiple jobs."""
    jobs: list[BatchJob] = Field(min_length=1)
    application: ApplicationData
    max_concurrency: int = Field(default=2, ge=1, le=10)


class BatchApplyResponse(BaseModel):
    """Response from batch application."""
    total_jobs: int
    automated: int
    redirected: int
    failed: int
    results: list[ApplicationResult]


@app.post("/apply/batch", response_model=BatchApplyResponse, response_model_by_alias=True)
async def batch_apply_to_jobs(
    request: BatchApplyRequest,
    automation: JobApplicationAutomation = Depends(get_automation),
) -> BatchApplyResponse:
    """
    Apply to multiple jobs.

    Each job runs in its own browser session; at most ``max_concurrency``
    sessions are open at once. Results keep the order of ``jobs``.
    """
    semaphore = asyncio.Semaphore(request.max_concurrency)

    async def run(job: BatchJob) -> ApplicationResult:
        async with semaphore:
            platform = resolve_platform(automation, job.job_url, job.platform)
            return await automation.apply_to_job(job.job_url, platform, request.application)

    results = await asyncio.gather(*(run(job) for job in request.jobs))

    def count(method: ApplicationMethod) -> int:
        return sum(1 for result in results if result.method == method)

    return BatchApplyResponse(
        total_jobs=len(results),
        automated=count(ApplicationMethod.AUTOMATED),
        redirected=count(ApplicationMethod.REDIRECT),
        failed=count(ApplicationMethod.FAILED),
        results=list(results),
    )


# ============================================================================
# Main Entry Point
# ============================================================================

def run() -> None:
    import uvicorn
    load_dotenv()
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8002")),
    )


if __name__ == "__main__":
    run()
