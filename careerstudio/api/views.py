"""HTML views for CareerStudio."""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from careerstudio.api.deps import current_year, job_feed_request
from careerstudio.core.config import get_settings
from careerstudio.core.logging import get_logger
from careerstudio.db import Company, get_db
from careerstudio.schemas.job import JobFeedRequest
from careerstudio.services import companies
from careerstudio.services.job_feed import SqlJobFeed, load_job_feed
from careerstudio.services.renderer import HostContext, render_page

logger = get_logger(__name__)
router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
settings = get_settings()


def _company_or_404(db: Session, slug: str) -> Company:
    company = db.query(Company).filter(Company.slug == slug).first()
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.get("/", response_class=HTMLResponse)
async def browse_companies(request: Request, db: Session = Depends(get_db)):
    """Directory of companies with open positions."""
    return templates.TemplateResponse(
        request,
        "companies.html",
        {"companies": companies.list_public_companies(db)},
    )


@router.get("/careers/{slug}", response_class=HTMLResponse)
async def careers_page(
    slug: str,
    feed_request: JobFeedRequest = Depends(job_feed_request),
    db: Session = Depends(get_db),
):
    """Public careers page; job filters arrive as query parameters."""
    company = _company_or_404(db, slug)
    feed = load_job_feed(SqlJobFeed(db), str(company.id), feed_request)
    page = render_page(
        companies.to_document(company),
        feed,
        HostContext.careers(slug, current_year(), settings.public_base_url),
    )
    return HTMLResponse(page.html)


@router.get("/preview/{slug}", response_class=HTMLResponse)
async def preview_page(
    slug: str,
    feed_request: JobFeedRequest = Depends(job_feed_request),
    db: Session = Depends(get_db),
):
    """Preview of the saved page; the job filters run in the page's script."""
    company = _company_or_404(db, slug)
    feed = load_job_feed(SqlJobFeed(db), str(company.id), feed_request)
    rendered = render_page(
        companies.to_document(company),
        feed,
        HostContext.preview(slug, current_year(), settings.public_base_url),
    )
    return HTMLResponse(rendered.html)
