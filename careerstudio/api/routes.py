"""API routes for CareerStudio."""
import uuid
from collections.abc import Callable
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from careerstudio.api.deps import current_year, job_feed_request
from careerstudio.core.config import get_settings
from careerstudio.core.exceptions import JobNotFoundError
from careerstudio.core.logging import get_logger
from careerstudio.db import Company, Job, Recruiter, get_db
from careerstudio.schemas.company import CompanyCreate, CompanyUpdate, PreviewRequest
from careerstudio.schemas.job import BulkJobCreate, JobCreate, JobFeedRequest
from careerstudio.schemas.section import Section, SectionKind
from careerstudio.schemas.theme import STYLE_PRESETS, apply_preset, merge_theme_with_defaults
from careerstudio.services import companies, section_store
from careerstudio.services.auth import ensure_company_owner, get_current_recruiter
from careerstudio.services.job_feed import SqlJobFeed, job_to_read, load_job_feed
from careerstudio.services.renderer import HostContext, render_page
from careerstudio.services.section_store import MoveDirection

logger = get_logger(__name__)
router = APIRouter(prefix="/api")
settings = get_settings()


class AddSectionRequest(BaseModel):
    """Request body for adding a section."""
    model_config = ConfigDict(populate_by_name=True)

    kind: SectionKind = Field(alias="type")


class MoveSectionRequest(BaseModel):
    """Request body for moving a section."""
    direction: MoveDirection


def _company_response(company: Company, **extra: Any) -> dict:
    return {"company": companies.to_document(company).to_document(), **extra}


def _change_sections(
    db: Session,
    company: Company,
    change: Callable[[list[Section]], list[Section]],
    version: Optional[int],
) -> Company:
    sections = change(companies.to_document(company).sections)
    return companies.save_sections(db, company, sections, expected_version=version)


# ============================================================================
# Companies
# ============================================================================


@router.post("/companies")
async def create_company(
    payload: CompanyCreate,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    """Create the recruiter's company (one per recruiter)."""
    company = companies.create_company(db, recruiter, payload)
    return JSONResponse(
        status_code=201,
        content={"message": "Company created", **_company_response(company)},
    )


@router.get("/companies/me")
async def get_my_company(
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    company = companies.get_company_for_recruiter(db, recruiter)
    return _company_response(company)


@router.patch("/companies/me")
async def update_my_company(
    payload: CompanyUpdate,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    """
    Partially update the recruiter's company.

    - theme and content are merged onto the stored values
    - sections replaces the whole collection
    - version, when sent, must match the stored version
    """
    company = companies.get_company_for_recruiter(db, recruiter)
    company = companies.update_company(db, company, payload)
    return {"message": "Company updated", **_company_response(company)}


@router.get("/companies/presets")
async def list_presets():
    return {
        "presets": [
            {"id": p.id, "name": p.name, "description": p.description, "styles": p.styles}
            for p in STYLE_PRESETS.values()
        ]
    }


@router.post("/companies/me/theme/preset/{preset_id}")
async def apply_theme_preset(
    preset_id: str,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    company = companies.get_company_for_recruiter(db, recruiter)
    theme = apply_preset(merge_theme_with_defaults(company.theme_json), preset_id)
    company = companies.save_theme(db, company, theme)
    logger.info(f"Applied preset {preset_id} to company {company.id}")
    return _company_response(company)


@router.get("/companies/public")
async def list_public_companies(db: Session = Depends(get_db)):
    """Companies with at least one open position."""
    summaries = companies.list_public_companies(db)
    return {"companies": [s.model_dump(by_alias=True) for s in summaries]}


@router.get("/companies/public/{slug}")
async def get_public_company(slug: str, db: Session = Depends(get_db)):
    company = companies.get_company_by_slug(db, slug)
    return _company_response(company)


@router.post("/companies/me/preview")
async def preview_company(
    draft: PreviewRequest,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    """Render an unsaved editor draft of the recruiter's company."""
    company = companies.get_company_for_recruiter(db, recruiter)
    document = companies.apply_draft(companies.to_document(company), draft)

    request = JobFeedRequest(
        search=draft.search,
        location=draft.location,
        job_type=draft.job_type,
        page=draft.page,
        limit=settings.jobs_page_size,
    )
    feed = load_job_feed(SqlJobFeed(db), str(company.id), request)
    page = render_page(document, feed, HostContext.editor(current_year(), settings.public_base_url))
    return page.to_response()


# ============================================================================
# Sections
# ============================================================================


@router.post("/companies/me/sections")
async def add_section(
    payload: AddSectionRequest,
    version: Optional[int] = None,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    """Append a section of the given type with its default title."""
    company = companies.get_company_for_recruiter(db, recruiter)
    sections, section = section_store.add_section(
        companies.to_document(company).sections, payload.kind
    )
    company = companies.save_sections(db, company, sections, expected_version=version)
    return JSONResponse(
        status_code=201,
        content=_company_response(company, section=section.to_document()),
    )


@router.delete("/companies/me/sections/{section_id}")
async def remove_section(
    section_id: str,
    version: Optional[int] = None,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    """Remove a section; the last remaining section cannot be removed."""
    company = companies.get_company_for_recruiter(db, recruiter)
    company = _change_sections(
        db,
        company,
        lambda sections: section_store.remove_section(sections, section_id, strict=True),
        version,
    )
    return _company_response(company)


@router.post("/companies/me/sections/{section_id}/move")
async def move_section(
    section_id: str,
    payload: MoveSectionRequest,
    version: Optional[int] = None,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    company = companies.get_company_for_recruiter(db, recruiter)
    company = _change_sections(
        db,
        company,
        lambda sections: section_store.move_section(sections, section_id, payload.direction),
        version,
    )
    return _company_response(company)


@router.post("/companies/me/sections/{section_id}/toggle")
async def toggle_section(
    section_id: str,
    version: Optional[int] = None,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    company = companies.get_company_for_recruiter(db, recruiter)
    company = _change_sections(
        db,
        company,
        lambda sections: section_store.toggle_enabled(sections, section_id),
        version,
    )
    return _company_response(company)


@router.patch("/companies/me/sections/{section_id}/config")
async def update_section_config(
    section_id: str,
    partial: dict = Body(...),
    version: Optional[int] = None,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    company = companies.get_company_for_recruiter(db, recruiter)
    company = _change_sections(
        db,
        company,
        lambda sections: section_store.update_config(sections, section_id, partial),
        version,
    )
    return _company_response(company)


@router.patch("/companies/me/sections/{section_id}/theme")
async def update_section_theme(
    section_id: str,
    partial: dict = Body(...),
    version: Optional[int] = None,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    company = companies.get_company_for_recruiter(db, recruiter)
    company = _change_sections(
        db,
        company,
        lambda sections: section_store.update_theme(sections, section_id, partial),
        version,
    )
    return _company_response(company)


@router.delete("/companies/me/sections/{section_id}/theme")
async def reset_section_theme(
    section_id: str,
    version: Optional[int] = None,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    """Drop the section's color override so it follows the page theme."""
    company = companies.get_company_for_recruiter(db, recruiter)
    company = _change_sections(
        db,
        company,
        lambda sections: section_store.reset_theme(sections, section_id),
        version,
    )
    return _company_response(company)


@router.patch("/companies/me/sections/{section_id}")
async def update_section(
    section_id: str,
    partial: dict = Body(...),
    version: Optional[int] = None,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    """Update top-level section fields (title, subtitle, content, enabled, theme)."""
    company = companies.get_company_for_recruiter(db, recruiter)
    company = _change_sections(
        db,
        company,
        lambda sections: section_store.update_fields(sections, section_id, partial),
        version,
    )
    return _company_response(company)


# ============================================================================
# Jobs
# ============================================================================


def _new_job(company: Company, payload: JobCreate) -> Job:
    return Job(
        company_id=company.id,
        title=payload.title,
        location=payload.location,
        job_type=payload.job_type,
        description=payload.description,
        work_policy=payload.work_policy,
        department=payload.department,
        experience_level=payload.experience_level,
        salary_range=payload.salary_range,
    )


@router.get("/companies/{company_id}/jobs")
async def list_company_jobs(
    company_id: str,
    request: JobFeedRequest = Depends(job_feed_request),
    db: Session = Depends(get_db),
):
    """
    List a company's jobs.

    - search: case-insensitive match on the title
    - location: case-insensitive match on the location
    - jobType: exact job type
    - page / limit: pagination (newest first)
    """
    company = companies.get_company_by_id(db, company_id)
    page = SqlJobFeed(db).fetch(str(company.id), request)
    return page.to_response()


@router.post("/companies/{company_id}/jobs")
async def create_job(
    company_id: str,
    payload: JobCreate,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    company = companies.get_company_by_id(db, company_id)
    ensure_company_owner(company, recruiter)

    job = _new_job(company, payload)
    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info(f"Job created: {job.id} for company {company.id}")
    return JSONResponse(
        status_code=201,
        content={
            "message": "Job created",
            "job": job_to_read(job).model_dump(mode="json", by_alias=True),
        },
    )


@router.post("/companies/{company_id}/jobs/bulk")
async def create_jobs_bulk(
    company_id: str,
    payload: BulkJobCreate,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    company = companies.get_company_by_id(db, company_id)
    ensure_company_owner(company, recruiter)

    jobs = [_new_job(company, item) for item in payload.jobs]
    db.add_all(jobs)
    db.commit()

    logger.info(f"Created {len(jobs)} jobs for company {company.id}")
    return JSONResponse(
        status_code=201,
        content={"message": f"{len(jobs)} jobs created", "count": len(jobs)},
    )


@router.delete("/jobs/{job_id}")
async def delete_job(
    job_id: str,
    recruiter: Recruiter = Depends(get_current_recruiter),
    db: Session = Depends(get_db),
):
    try:
        job_uuid = uuid.UUID(job_id)
    except ValueError:
        raise JobNotFoundError(job_id)

    job = db.query(Job).filter(Job.id == job_uuid).first()
    if not job:
        raise JobNotFoundError(job_id)
    ensure_company_owner(job.company, recruiter)

    db.delete(job)
    db.commit()

    logger.info(f"Job deleted: {job_id}")
    return {"message": "Job deleted"}
