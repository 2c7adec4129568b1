"""Schema definitions."""

from .company import CompanyDocument, CompanySummary, CompanyUpdate
from .job import JobFeedPage, JobFeedRequest, JobRead, JobType
from .section import Section, SectionKind, validate_section, validate_sections
from .theme import (
    STYLE_PRESETS,
    SectionTheme,
    Theme,
    ThemeUpdate,
    apply_preset,
    get_default_theme,
    merge_theme_with_defaults,
)

__all__ = [
    "CompanyDocument",
    "CompanySummary",
    "CompanyUpdate",
    "JobFeedPage",
    "JobFeedRequest",
    "JobRead",
    "JobType",
    "Section",
    "SectionKind",
    "validate_section",
    "validate_sections",
    "STYLE_PRESETS",
    "SectionTheme",
    "Theme",
    "ThemeUpdate",
    "apply_preset",
    "get_default_theme",
    "merge_theme_with_defaults",
]
