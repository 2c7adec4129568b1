"""Job posting and job feed schema definitions."""

from __future__ import annotations

import math
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PAGE_SIZE = 9
MAX_PAGE_SIZE = 50
MAX_BULK_JOBS = 200


class JobType(str, Enum):
    """Job type enumeration."""

    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    TEMPORARY = "Temporary"
    PERMANENT = "Permanent"
    INTERNSHIP = "Internship"


class WorkPolicy(str, Enum):
    REMOTE = "Remote"
    HYBRID = "Hybrid"
    ON_SITE = "On-site"


class ExperienceLevel(str, Enum):
    JUNIOR = "Junior"
    MID_LEVEL = "Mid-level"
    SENIOR = "Senior"


class JobCreate(BaseModel):
    """Request body for creating a job posting."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=255)
    location: str = Field(min_length=1, max_length=255)
    job_type: JobType = Field(alias="jobType")
    description: str = Field(min_length=1)
    work_policy: WorkPolicy = Field(default=WorkPolicy.ON_SITE, alias="workPolicy")
    department: str | None = Field(default=None, max_length=120)
    experience_level: ExperienceLevel = Field(
        default=ExperienceLevel.MID_LEVEL, alias="experienceLevel"
    )
    salary_range: str | None = Field(default=None, alias="salaryRange", max_length=120)

    @field_validator("title", "location", "description")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("All job fields are required")
        return v


class BulkJobCreate(BaseModel):
    jobs: list[JobCreate] = Field(min_length=1, max_length=MAX_BULK_JOBS)


class JobRead(BaseModel):
    """Job posting as returned by the API and consumed by the renderer."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    company_id: str = Field(alias="companyId")
    title: str
    location: str
    job_type: str = Field(alias="jobType")
    description: str
    work_policy: str | None = Field(default=None, alias="workPolicy")
    department: str | None = None
    experience_level: str | None = Field(default=None, alias="experienceLevel")
    salary_range: str | None = Field(default=None, alias="salaryRange")
    created_at: datetime | None = Field(default=None, alias="createdAt")


class JobFeedRequest(BaseModel):
    """Filter and pagination state of a job feed.

    Instances are immutable; use `with_filters` and `with_page` to derive
    the next request. Changing any filter always returns to page 1 so a
    stale page number is never combined with a new filter.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    search: str = ""
    location: str = ""
    job_type: JobType | None = Field(default=None, alias="jobType")
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @field_validator("search", "location", mode="before")
    @classmethod
    def strip_text(cls, v: str | None) -> str:
        return (v or "").strip()

    @field_validator("job_type", mode="before")
    @classmethod
    def empty_job_type(cls, v: object) -> object:
        return None if v == "" else v

    @property
    def has_filters(self) -> bool:
        return bool(self.search or self.location or self.job_type)

    def with_filters(
        self,
        *,
        search: str | None = None,
        location: str | None = None,
        job_type: JobType | str | None = None,
    ) -> JobFeedRequest:
        """Return a request with the given filters changed.

        Arguments left as None keep their current value; pass "" to clear a
        filter.
        """
        changes: dict[str, object] = {}
        if search is not None:
            changes["search"] = search
        if location is not None:
            changes["location"] = location
        if job_type is not None:
            changes["job_type"] = job_type

        candidate = JobFeedRequest(**{**self.model_dump(), **changes})
        if (candidate.search, candidate.location, candidate.job_type) == (
            self.search,
            self.location,
            self.job_type,
        ):
            return self
        return JobFeedRequest(**{**candidate.model_dump(), "page": 1})

    def with_page(self, page: int) -> JobFeedRequest:
        return JobFeedRequest(**{**self.model_dump(), "page": max(1, page)})

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class JobFeedPage(BaseModel):
    """One page of a job feed."""

    jobs: list[JobRead] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    pages: int = 0

    @classmethod
    def build(cls, jobs: list[JobRead], total: int, request: JobFeedRequest) -> JobFeedPage:
        return cls(
            jobs=jobs,
            total=total,
            page=request.page,
            pages=math.ceil(total / request.limit) if total else 0,
        )

    @classmethod
    def empty(cls) -> JobFeedPage:
        return cls()

    def to_response(self) -> dict:
        return {
            "jobs": [job.model_dump(mode="json", by_alias=True) for job in self.jobs],
            "total": self.total,
            "page": self.page,
            "pages": self.pages,
        }
