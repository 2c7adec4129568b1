"""Company schema definitions."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .job import JobType
from .section import Section
from .theme import Theme, ThemeUpdate

DEFAULT_HERO_TITLE = "Join Our Team"
DEFAULT_HERO_SUBTITLE = "Build the future with us"
MAX_COMPANY_NAME_LENGTH = 120
SOCIAL_PLATFORMS = ("linkedin", "twitter", "instagram", "facebook", "youtube", "website")


class Content(BaseModel):
    """Legacy page copy.

    Only read as a fallback for a hero section whose own title or subtitle
    is empty; documents written before sections existed still carry it.
    """

    model_config = ConfigDict(populate_by_name=True)

    hero_title: str = Field(default=DEFAULT_HERO_TITLE, alias="heroTitle")
    hero_subtitle: str = Field(default=DEFAULT_HERO_SUBTITLE, alias="heroSubtitle")


class ContentUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hero_title: str | None = Field(default=None, alias="heroTitle")
    hero_subtitle: str | None = Field(default=None, alias="heroSubtitle")


class SocialLinks(BaseModel):
    linkedin: str = ""
    twitter: str = ""
    instagram: str = ""
    facebook: str = ""
    youtube: str = ""
    website: str = ""


class CompanyDocument(BaseModel):
    """Complete company record as consumed by the page renderer."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str
    slug: str = ""
    recruiter_id: str | None = Field(default=None, alias="recruiterId")
    logo_url: str = Field(default="", alias="logoUrl")
    banner_url: str = Field(default="", alias="bannerUrl")
    description: str = ""
    social_links: SocialLinks = Field(default_factory=SocialLinks, alias="socialLinks")
    theme: Theme = Field(default_factory=Theme)
    content: Content = Field(default_factory=Content)
    sections: list[Section] = Field(default_factory=list)
    version: int = 1
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    def to_document(self) -> dict[str, Any]:
        document = self.model_dump(mode="json", by_alias=True, exclude={"sections"})
        document["sections"] = [section.to_document() for section in self.sections]
        return document


class CompanyCreate(BaseModel):
    """Request body for creating the recruiter's company."""

    name: str = Field(min_length=1, max_length=MAX_COMPANY_NAME_LENGTH)
    theme: ThemeUpdate | None = None
    sections: list[dict[str, Any]] | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Company name is required")
        return v


class CompanyUpdate(BaseModel):
    """Partial company update from the editor.

    `theme` and `content` are shallow-merged onto the stored values,
    `sections` replaces the whole collection, and `version` (when sent)
    must match the stored version.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, max_length=MAX_COMPANY_NAME_LENGTH)
    theme: ThemeUpdate | None = None
    content: ContentUpdate | None = None
    sections: list[dict[str, Any]] | None = None
    logo_url: str | None = Field(default=None, alias="logoUrl")
    banner_url: str | None = Field(default=None, alias="bannerUrl")
    description: str | None = None
    social_links: dict[str, str] | None = Field(default=None, alias="socialLinks")
    version: int | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("social_links")
    @classmethod
    def known_platforms(cls, v: dict[str, str] | None) -> dict[str, str] | None:
        if v is None:
            return None
        unknown = set(v) - set(SOCIAL_PLATFORMS)
        if unknown:
            raise ValueError(f"Unknown social platforms: {', '.join(sorted(unknown))}")
        return v


class CompanySummary(BaseModel):
    """Entry of the public company directory."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    slug: str
    logo_url: str = Field(default="", alias="logoUrl")
    primary_color: str = Field(default="", alias="primaryColor")
    banner_url: str = Field(default="", alias="bannerUrl")
    hero_title: str = Field(default="", alias="heroTitle")
    hero_subtitle: str = Field(default="", alias="heroSubtitle")
    job_count: int = Field(default=0, alias="jobCount")


class PreviewRequest(BaseModel):
    """Editor draft to render without saving.

    Any field left out falls back to the stored company.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    theme: ThemeUpdate | None = None
    content: ContentUpdate | None = None
    sections: list[dict[str, Any]] | None = None
    search: str = ""
    location: str = ""
    job_type: JobType | None = Field(default=None, alias="jobType")
    page: int = Field(default=1, ge=1)

    @field_validator("job_type", mode="before")
    @classmethod
    def empty_job_type(cls, v: object) -> object:
        return None if v == "" else v
