"""Job feed sources for the jobs section."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careerstudio.core.logging import get_logger
from careerstudio.db.models import Job
from careerstudio.schemas.job import JobFeedPage, JobFeedRequest, JobRead

logger = get_logger(__name__)


class JobFeed(Protocol):
    """Supplies one page of a company's jobs for a filter/pagination request."""

    def fetch(self, company_id: str, request: JobFeedRequest) -> JobFeedPage: ...


def job_to_read(job: Job) -> JobRead:
    return JobRead.model_validate(job.to_dict())


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlJobFeed:
    """Job feed backed by the jobs table.

    Title and location match case-insensitive substrings, job type matches
    exactly, newest postings first.
    """

    def __init__(self, db: Session):
        self.db = db

    def fetch(self, company_id: str, request: JobFeedRequest) -> JobFeedPage:
        query = self.db.query(Job).filter(Job.company_id == uuid.UUID(str(company_id)))

        if request.search:
            query = query.filter(Job.title.ilike(f"%{_escape_like(request.search)}%", escape="\\"))
        if request.location:
            query = query.filter(
                Job.location.ilike(f"%{_escape_like(request.location)}%", escape="\\")
            )
        if request.job_type:
            query = query.filter(Job.job_type == request.job_type)

        total = query.count()
        jobs = (
            query.order_by(Job.created_at.desc(), Job.id)
            .offset(request.offset)
            .limit(request.limit)
            .all()
        )

        logger.debug(
            f"Job feed for company {company_id}: page {request.page}, "
            f"{len(jobs)} of {total} jobs"
        )
        return JobFeedPage.build([job_to_read(job) for job in jobs], total, request)


class StaticJobFeed:
    """Job feed over an in-memory list, filtered and paged like SqlJobFeed."""

    def __init__(self, jobs: Sequence[JobRead]):
        self.jobs = list(jobs)

    def fetch(self, company_id: str, request: JobFeedRequest) -> JobFeedPage:
        search = request.search.lower()
        location = request.location.lower()
        matches = [
            job
            for job in self.jobs
            if (not search or search in job.title.lower())
            and (not location or location in job.location.lower())
            and (not request.job_type or job.job_type == request.job_type.value)
        ]
        page = matches[request.offset : request.offset + request.limit]
        return JobFeedPage.build(page, len(matches), request)


@dataclass(frozen=True)
class JobFeedState:
    """Current job feed request and the page it produced.

    `error` is set when the feed could not be loaded; the jobs section then
    shows it instead of listings.
    """

    request: JobFeedRequest = field(default_factory=JobFeedRequest)
    page: JobFeedPage = field(default_factory=JobFeedPage.empty)
    error: str | None = None


JOB_FEED_UNAVAILABLE = "Open positions could not be loaded right now. Please try again later."


def load_job_feed(feed: JobFeed, company_id: str, request: JobFeedRequest) -> JobFeedState:
    """Fetch a page for rendering.

    A failing source yields an empty page carrying an error message so the
    rest of the careers page still renders.
    """
    try:
        page = feed.fetch(company_id, request)
    except SQLAlchemyError as e:
        logger.error(f"Job feed for company {company_id} failed: {e}")
        return JobFeedState(request=request, error=JOB_FEED_UNAVAILABLE)
    return JobFeedState(request=request, page=page)
