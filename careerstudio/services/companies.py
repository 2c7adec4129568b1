"""Company persistence: slugs, document loading, updates and the public directory."""

from __future__ import annotations

import re
import uuid
from collections.abc import Sequence
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from careerstudio.core.exceptions import (
    CompanyAlreadyExistsError,
    CompanyNotFoundError,
    SectionValidationError,
    VersionConflictError,
)
from careerstudio.core.logging import get_logger
from careerstudio.db.models import Company, Job, Recruiter
from careerstudio.schemas.company import (
    CompanyCreate,
    CompanyDocument,
    CompanySummary,
    CompanyUpdate,
    Content,
    PreviewRequest,
    SocialLinks,
)
from careerstudio.schemas.section import (
    Section,
    sections_to_documents,
    validate_section,
    validate_sections,
)
from careerstudio.schemas.theme import Theme, merge_theme_with_defaults

from .section_store import default_sections

logger = get_logger(__name__)

SLUG_SEPARATOR_PATTERN = re.compile(r"[^a-z0-9]+")
FALLBACK_SLUG = "company"


def generate_slug(name: str) -> str:
    """Convert a company name to a URL-safe slug."""
    slug = SLUG_SEPARATOR_PATTERN.sub("-", name.strip().lower()).strip("-")
    return slug or FALLBACK_SLUG


def unique_slug(db: Session, name: str, exclude_id: uuid.UUID | None = None) -> str:
    """Slug for `name`, suffixed with -2, -3... while another company holds it."""
    base = generate_slug(name)
    candidate = base
    suffix = 2
    while True:
        query = db.query(Company.id).filter(Company.slug == candidate)
        if exclude_id is not None:
            query = query.filter(Company.id != exclude_id)
        if query.first() is None:
            return candidate
        candidate = f"{base}-{suffix}"
        suffix += 1


def _load_sections(company_id: Any, documents: list[dict] | None) -> list[Section]:
    """Validate stored sections, skipping entries that no longer validate."""
    if documents is None:
        return default_sections()

    sections: list[Section] = []
    seen: set[str] = set()
    for document in documents:
        try:
            section = validate_section(document, seen)
        except SectionValidationError as e:
            logger.warning(f"Skipping stored section of company {company_id}: {e.message}")
            continue
        seen.add(section.id)
        sections.append(section)
    return sections


def to_document(company: Company) -> CompanyDocument:
    """Build the renderer-facing document of a stored company."""
    return CompanyDocument(
        id=str(company.id),
        name=company.name,
        slug=company.slug,
        recruiter_id=str(company.recruiter_id),
        logo_url=company.logo_url or "",
        banner_url=company.banner_url or "",
        description=company.description or "",
        social_links=SocialLinks(**(company.social_links_json or {})),
        theme=merge_theme_with_defaults(company.theme_json),
        content=Content(**(company.content_json or {})),
        sections=_load_sections(company.id, company.sections_json),
        version=company.version,
        created_at=company.created_at,
        updated_at=company.updated_at,
    )


def get_company_for_recruiter(db: Session, recruiter: Recruiter) -> Company:
    company = db.query(Company).filter(Company.recruiter_id == recruiter.id).first()
    if company is None:
        raise CompanyNotFoundError(f"recruiter {recruiter.id}")
    return company


def get_company_by_slug(db: Session, slug: str) -> Company:
    company = db.query(Company).filter(Company.slug == slug).first()
    if company is None:
        raise CompanyNotFoundError(slug)
    return company


def get_company_by_id(db: Session, company_id: str) -> Company:
    try:
        company_uuid = uuid.UUID(company_id)
    except ValueError:
        raise CompanyNotFoundError(company_id)

    company = db.query(Company).filter(Company.id == company_uuid).first()
    if company is None:
        raise CompanyNotFoundError(company_id)
    return company


def validate_page_sections(candidates: Sequence[Any]) -> list[Section]:
    """Validate a replacement section collection; a page keeps at least one section."""
    if not candidates:
        raise SectionValidationError("A careers page must keep at least one section")
    return validate_sections(candidates)


def create_company(db: Session, recruiter: Recruiter, payload: CompanyCreate) -> Company:
    """Create the recruiter's company with the default theme and sections."""
    existing = db.query(Company).filter(Company.recruiter_id == recruiter.id).first()
    if existing is not None:
        raise CompanyAlreadyExistsError()

    theme = merge_theme_with_defaults(payload.theme.to_document() if payload.theme else None)
    sections = (
        validate_page_sections(payload.sections)
        if payload.sections is not None
        else default_sections()
    )

    company = Company(
        name=payload.name,
        slug=unique_slug(db, payload.name),
        recruiter_id=recruiter.id,
        theme_json=theme.to_document(),
        content_json=Content().model_dump(by_alias=True),
        sections_json=sections_to_documents(sections),
        version=1,
    )
    db.add(company)
    db.commit()
    db.refresh(company)

    logger.info(f"Created company {company.id} ({company.slug}) for recruiter {recruiter.id}")
    return company


def check_version(company: Company, expected: int | None) -> None:
    if expected is not None and expected != company.version:
        logger.warning(
            f"Version conflict on company {company.id}: got {expected}, stored {company.version}"
        )
        raise VersionConflictError(expected, company.version)


def update_company(db: Session, company: Company, update: CompanyUpdate) -> Company:
    """Apply a partial update.

    Theme, content and social links are shallow-merged; sections replace
    the stored collection after validation; a new name regenerates the slug.
    """
    check_version(company, update.version)

    if update.name:
        company.name = update.name
        company.slug = unique_slug(db, update.name, exclude_id=company.id)

    if update.theme is not None:
        current = merge_theme_with_defaults(company.theme_json).to_document()
        company.theme_json = Theme(**{**current, **update.theme.to_document()}).to_document()

    if update.content is not None:
        changes = update.content.model_dump(by_alias=True, exclude_none=True)
        company.content_json = {**(company.content_json or {}), **changes}

    if update.sections is not None:
        company.sections_json = sections_to_documents(validate_page_sections(update.sections))

    if update.logo_url is not None:
        company.logo_url = update.logo_url
    if update.banner_url is not None:
        company.banner_url = update.banner_url
    if update.description is not None:
        company.description = update.description
    if update.social_links is not None:
        company.social_links_json = {**(company.social_links_json or {}), **update.social_links}

    company.version = company.version + 1
    db.commit()
    db.refresh(company)

    logger.info(f"Updated company {company.id} to version {company.version}")
    return company


def save_theme(db: Session, company: Company, theme: Theme) -> Company:
    company.theme_json = theme.to_document()
    company.version = company.version + 1
    db.commit()
    db.refresh(company)
    return company


def save_sections(
    db: Session, company: Company, sections: Sequence[Section], expected_version: int | None = None
) -> Company:
    """Persist a section collection produced by the section store."""
    check_version(company, expected_version)
    if not sections:
        raise SectionValidationError("A careers page must keep at least one section")
    company.sections_json = sections_to_documents(sections)
    company.version = company.version + 1
    db.commit()
    db.refresh(company)
    return company


def apply_draft(document: CompanyDocument, draft: PreviewRequest) -> CompanyDocument:
    """Overlay an unsaved editor draft on the stored document."""
    changes: dict[str, Any] = {}
    if draft.name:
        changes["name"] = draft.name
    if draft.theme is not None:
        changes["theme"] = Theme(
            **{**document.theme.to_document(), **draft.theme.to_document()}
        )
    if draft.content is not None:
        edits = draft.content.model_dump(by_alias=True, exclude_none=True)
        changes["content"] = Content(**{**document.content.model_dump(by_alias=True), **edits})
    if draft.sections is not None:
        changes["sections"] = validate_page_sections(draft.sections)
    return document.model_copy(update=changes)


def list_public_companies(db: Session) -> list[CompanySummary]:
    """Companies with at least one job, with their job counts."""
    rows = (
        db.query(Company, func.count(Job.id))
        .join(Job, Job.company_id == Company.id)
        .group_by(Company.id)
        .having(func.count(Job.id) > 0)
        .order_by(Company.name)
        .all()
    )

    summaries = []
    for company, job_count in rows:
        theme = merge_theme_with_defaults(company.theme_json)
        content = Content(**(company.content_json or {}))
        summaries.append(
            CompanySummary(
                id=str(company.id),
                name=company.name,
                slug=company.slug,
                logo_url=company.logo_url or theme.logo_url,
                primary_color=theme.primary_color,
                banner_url=company.banner_url or theme.banner_url,
                hero_title=content.hero_title,
                hero_subtitle=content.hero_subtitle,
                job_count=job_count,
            )
        )
    return summaries
