"""Shared request dependencies."""

from datetime import datetime
from typing import Optional

from fastapi import Query

from careerstudio.core.config import get_settings
from careerstudio.core.logging import get_logger
from careerstudio.schemas.job import MAX_PAGE_SIZE, JobFeedRequest, JobType

logger = get_logger(__name__)

JOB_TYPE_VALUES = {t.value for t in JobType}


def job_feed_request(
    search: str = "",
    location: str = "",
    job_type: str = Query("", alias="jobType"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_SIZE),
) -> JobFeedRequest:
    """Job feed filters and page from the query string.

    An unknown job type is ignored rather than rejected, so a hand-edited
    careers page URL still renders.
    """
    if job_type and job_type not in JOB_TYPE_VALUES:
        logger.debug(f"Ignoring unknown job type filter: {job_type}")
        job_type = ""

    return JobFeedRequest(
        search=search,
        location=location,
        job_type=job_type or None,
        page=page,
        limit=limit or get_settings().jobs_page_size,
    )


def current_year() -> int:
    return datetime.now().year
