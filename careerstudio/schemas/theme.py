"""Theme schema definitions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from careerstudio.core.exceptions import UnknownPresetError

# Hex colors: #RGB, #RGBA, #RRGGBB or #RRGGBBAA
HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9A-Fa-f]{3,4}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")

# Default theme values - single source of truth
DEFAULT_PRIMARY_COLOR = "#3B82F6"
DEFAULT_SECONDARY_COLOR = "#1E40AF"
DEFAULT_ACCENT_COLOR = "#10B981"
DEFAULT_BACKGROUND_COLOR = "#FFFFFF"
DEFAULT_TEXT_COLOR = "#1F2937"
DEFAULT_FONT_FAMILY = "Inter, system-ui, sans-serif"
DEFAULT_BASE_FONT_SIZE = "16px"
DEFAULT_BORDER_RADIUS = "0.5rem"

COLOR_FIELDS = (
    "primary_color",
    "secondary_color",
    "accent_color",
    "background_color",
    "text_color",
)


class Spacing(str, Enum):
    """Vertical rhythm of the page."""

    COMPACT = "compact"
    NORMAL = "normal"
    RELAXED = "relaxed"


class ButtonStyle(str, Enum):
    """Button paint style."""

    ROUNDED = "rounded"
    PILL = "pill"
    SHARP = "sharp"
    MINIMAL = "minimal"


def _validate_color(v: str) -> str:
    if not HEX_COLOR_PATTERN.match(v):
        raise ValueError(f"Invalid color format: {v}. Must be a hex color (e.g., #3B82F6)")
    return v.upper()


class Theme(BaseModel):
    """Page-wide visual configuration of a careers page.

    Every field carries a default: the renderer reads all of them
    unconditionally, so a stored partial theme is always completed with
    `merge_theme_with_defaults` before use.
    """

    model_config = ConfigDict(populate_by_name=True)

    primary_color: str = Field(default=DEFAULT_PRIMARY_COLOR, alias="primaryColor")
    secondary_color: str = Field(default=DEFAULT_SECONDARY_COLOR, alias="secondaryColor")
    accent_color: str = Field(default=DEFAULT_ACCENT_COLOR, alias="accentColor")
    background_color: str = Field(default=DEFAULT_BACKGROUND_COLOR, alias="backgroundColor")
    text_color: str = Field(default=DEFAULT_TEXT_COLOR, alias="textColor")

    font_family: str = Field(default=DEFAULT_FONT_FAMILY, alias="fontFamily")
    heading_font: str = Field(default=DEFAULT_FONT_FAMILY, alias="headingFont")
    base_font_size: str = Field(default=DEFAULT_BASE_FONT_SIZE, alias="baseFontSize")

    border_radius: str = Field(default=DEFAULT_BORDER_RADIUS, alias="borderRadius")
    spacing: Spacing = Field(default=Spacing.NORMAL)
    button_style: ButtonStyle = Field(default=ButtonStyle.ROUNDED, alias="buttonStyle")

    logo_url: str = Field(default="", alias="logoUrl")
    banner_url: str = Field(default="", alias="bannerUrl")

    preset: str = Field(default="", description="Id of the last applied style preset")
    custom_css: str = Field(
        default="",
        alias="customCSS",
        description="Recruiter-authored CSS injected after all computed styles",
    )

    @field_validator(*COLOR_FIELDS)
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        """Validate hex color format."""
        return _validate_color(v)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the persisted camelCase shape."""
        return self.model_dump(mode="json", by_alias=True)


class ThemeUpdate(BaseModel):
    """Partial theme update (PATCH semantics: only set fields are applied)."""

    model_config = ConfigDict(populate_by_name=True)

    primary_color: str | None = Field(default=None, alias="primaryColor")
    secondary_color: str | None = Field(default=None, alias="secondaryColor")
    accent_color: str | None = Field(default=None, alias="accentColor")
    background_color: str | None = Field(default=None, alias="backgroundColor")
    text_color: str | None = Field(default=None, alias="textColor")
    font_family: str | None = Field(default=None, alias="fontFamily")
    heading_font: str | None = Field(default=None, alias="headingFont")
    base_font_size: str | None = Field(default=None, alias="baseFontSize")
    border_radius: str | None = Field(default=None, alias="borderRadius")
    spacing: Spacing | None = None
    button_style: ButtonStyle | None = Field(default=None, alias="buttonStyle")
    logo_url: str | None = Field(default=None, alias="logoUrl")
    banner_url: str | None = Field(default=None, alias="bannerUrl")
    preset: str | None = None
    custom_css: str | None = Field(default=None, alias="customCSS")

    @field_validator(*COLOR_FIELDS)
    @classmethod
    def validate_hex_color(cls, v: str | None) -> str | None:
        """Validate hex color format."""
        return _validate_color(v) if v is not None else None

    def to_document(self) -> dict[str, Any]:
        """Only the fields the caller actually sent, camelCase."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)


class SectionTheme(BaseModel):
    """Per-section color override.

    Unset (or empty) fields fall back to the page theme's corresponding
    field when colors are resolved.
    """

    model_config = ConfigDict(populate_by_name=True)

    background_color: str | None = Field(default=None, alias="backgroundColor")
    text_color: str | None = Field(default=None, alias="textColor")
    accent_color: str | None = Field(default=None, alias="accentColor")

    @field_validator("background_color", "text_color", "accent_color", mode="before")
    @classmethod
    def validate_override(cls, v: str | None) -> str | None:
        """Empty strings clear the override."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return _validate_color(v)

    def is_empty(self) -> bool:
        return not (self.background_color or self.text_color or self.accent_color)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def get_default_theme() -> Theme:
    """Get the default theme configuration."""
    return Theme()


def merge_theme_with_defaults(theme_json: dict | None) -> Theme:
    """Merge stored theme JSON with defaults.

    Args:
        theme_json: Stored theme configuration (may be None or partial)

    Returns:
        Complete Theme object with defaults applied
    """
    if theme_json is None:
        return get_default_theme()

    # Drop nulls so Pydantic applies the defaults for them
    return Theme(**{k: v for k, v in theme_json.items() if v is not None})


@dataclass(frozen=True)
class StylePreset:
    """Named bundle of theme values applied in one step from the editor."""

    id: str
    name: str
    description: str
    styles: dict[str, str] = field(default_factory=dict)


STYLE_PRESETS: dict[str, StylePreset] = {
    preset.id: preset
    for preset in (
        StylePreset(
            id="modern",
            name="Modern",
            description="Clean and contemporary",
            styles={
                "primaryColor": "#3B82F6",
                "secondaryColor": "#1E40AF",
                "accentColor": "#10B981",
                "fontFamily": "Inter, system-ui, sans-serif",
                "headingFont": "Inter, system-ui, sans-serif",
                "borderRadius": "0.5rem",
                "spacing": "normal",
                "buttonStyle": "rounded",
            },
        ),
        StylePreset(
            id="minimal",
            name="Minimal",
            description="Simple and elegant",
            styles={
                "primaryColor": "#18181B",
                "secondaryColor": "#3F3F46",
                "accentColor": "#71717A",
                "fontFamily": "system-ui, -apple-system, sans-serif",
                "headingFont": "system-ui, -apple-system, sans-serif",
                "borderRadius": "0.25rem",
                "spacing": "relaxed",
                "buttonStyle": "minimal",
            },
        ),
        StylePreset(
            id="vibrant",
            name="Vibrant",
            description="Bold and energetic",
            styles={
                "primaryColor": "#7C3AED",
                "secondaryColor": "#EC4899",
                "accentColor": "#F59E0B",
                "fontFamily": "Poppins, sans-serif",
                "headingFont": "Poppins, sans-serif",
                "borderRadius": "1rem",
                "spacing": "normal",
                "buttonStyle": "pill",
            },
        ),
        StylePreset(
            id="corporate",
            name="Corporate",
            description="Professional and trustworthy",
            styles={
                "primaryColor": "#1E40AF",
                "secondaryColor": "#1E3A8A",
                "accentColor": "#0F766E",
                "fontFamily": "Source Sans Pro, sans-serif",
                "headingFont": "Source Sans Pro, sans-serif",
                "borderRadius": "0.375rem",
                "spacing": "compact",
                "buttonStyle": "rounded",
            },
        ),
        StylePreset(
            id="startup",
            name="Startup",
            description="Fresh and innovative",
            styles={
                "primaryColor": "#059669",
                "secondaryColor": "#0D9488",
                "accentColor": "#6366F1",
                "fontFamily": "DM Sans, sans-serif",
                "headingFont": "DM Sans, sans-serif",
                "borderRadius": "0.75rem",
                "spacing": "normal",
                "buttonStyle": "rounded",
            },
        ),
        StylePreset(
            id="luxury",
            name="Luxury",
            description="Elegant and sophisticated",
            styles={
                "primaryColor": "#78350F",
                "secondaryColor": "#92400E",
                "accentColor": "#B45309",
                "fontFamily": "Georgia, serif",
                "headingFont": "Playfair Display, serif",
                "borderRadius": "0",
                "spacing": "relaxed",
                "buttonStyle": "sharp",
            },
        ),
    )
}


def apply_preset(theme: Theme, preset_id: str) -> Theme:
    """Return a copy of `theme` with the preset's values applied.

    Fields the preset does not cover (background/text colors, assets,
    custom CSS) are left as they are.
    """
    preset = STYLE_PRESETS.get(preset_id)
    if preset is None:
        raise UnknownPresetError(preset_id)

    document = theme.to_document()
    document.update(preset.styles)
    document["preset"] = preset.id
    return Theme(**document)
