"""Effective color and paint resolution for sections."""

from __future__ import annotations

from dataclasses import dataclass, field

from careerstudio.schemas.theme import ButtonStyle, SectionTheme, Spacing, Theme

BUTTON_BASE_CLASS = "btn"


@dataclass(frozen=True)
class ResolvedColors:
    """Effective colors of one section."""

    background_color: str
    text_color: str
    accent_color: str


@dataclass(frozen=True)
class ResolvedButtonStyle:
    """Button paint: a class hint plus inline style properties."""

    class_hint: str
    style: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SpacingScale:
    section_padding: str
    gap: str
    text_margin: str
    hero_padding: str


SPACING_SCALES: dict[Spacing, SpacingScale] = {
    Spacing.COMPACT: SpacingScale("2.5rem 1rem", "0.75rem", "1rem", "3rem 1rem"),
    Spacing.NORMAL: SpacingScale("4rem 1.5rem", "1rem", "1.5rem", "5rem 1.5rem"),
    Spacing.RELAXED: SpacingScale("5rem 2rem", "1.5rem", "2rem", "6rem 2rem"),
}


def resolve_colors(theme: Theme, section_theme: SectionTheme | None) -> ResolvedColors:
    """Merge a section's color override with the page theme.

    Each field comes from the override when it is set and non-empty,
    otherwise from the page theme.
    """
    override = section_theme or SectionTheme()
    return ResolvedColors(
        background_color=override.background_color or theme.background_color,
        text_color=override.text_color or theme.text_color,
        accent_color=override.accent_color or theme.accent_color,
    )


def resolve_button_style(
    button_style: ButtonStyle | str, accent_color: str, border_radius: str
) -> ResolvedButtonStyle:
    """Map a button style token to concrete paint.

    pill and sharp force a full or zero radius; minimal is an outline in
    the accent color; anything else is the rounded default using the page
    radius.
    """
    try:
        style = ButtonStyle(button_style)
    except ValueError:
        style = ButtonStyle.ROUNDED

    if style is ButtonStyle.PILL:
        return ResolvedButtonStyle(
            f"{BUTTON_BASE_CLASS} btn-pill",
            {"border-radius": "9999px", "background-color": accent_color, "color": "#fff"},
        )
    if style is ButtonStyle.SHARP:
        return ResolvedButtonStyle(
            f"{BUTTON_BASE_CLASS} btn-sharp",
            {"border-radius": "0", "background-color": accent_color, "color": "#fff"},
        )
    if style is ButtonStyle.MINIMAL:
        return ResolvedButtonStyle(
            f"{BUTTON_BASE_CLASS} btn-minimal",
            {
                "border-radius": border_radius,
                "background-color": "transparent",
                "color": accent_color,
                "border": f"2px solid {accent_color}",
            },
        )
    return ResolvedButtonStyle(
        f"{BUTTON_BASE_CLASS} btn-rounded",
        {"border-radius": border_radius, "background-color": accent_color, "color": "#fff"},
    )


def spacing_for(spacing: Spacing | str) -> SpacingScale:
    try:
        return SPACING_SCALES[Spacing(spacing)]
    except ValueError:
        return SPACING_SCALES[Spacing.NORMAL]


def add_alpha(color: str, opacity: float) -> str:
    """Append an alpha channel to a #RGB or #RRGGBB color.

    Other color notations are returned unchanged.
    """
    if not color or not color.startswith("#"):
        return color
    hex_part = color[1:]
    alpha = f"{round(max(0.0, min(1.0, opacity)) * 255):02x}"
    if len(hex_part) == 3:
        return "#" + "".join(ch * 2 for ch in hex_part) + alpha
    if len(hex_part) == 6:
        return f"#{hex_part}{alpha}"
    return color


def resolve_image_url(url: str | None, base_url: str) -> str:
    """Resolve a path-rooted upload URL against the public origin."""
    if not url:
        return ""
    if url.startswith("/") and not url.startswith("//"):
        return f"{base_url.rstrip('/')}{url}"
    return url
