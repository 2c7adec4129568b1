"""Careers page renderer.

One renderer serves every host of a careers page: the editor's live
preview, the public careers page and the preview-only route. Hosts differ
only in their HostContext (how job filters and pagination are wired, the
origin used for uploaded images, the year shown in the footer), so the same
company, job feed and filter state always produce the same markup.

Rendering is a pure function. Missing images, unusable video URLs and an
empty section list degrade to placeholders instead of raising, so a
half-edited page in the editor never goes blank.

All recruiter text is HTML-escaped except the body of `custom` sections
and the page's custom CSS, which are inserted as written.
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import urlencode

from careerstudio.core.logging import get_logger
from careerstudio.schemas.company import CompanyDocument
from careerstudio.schemas.job import JobRead, JobType
from careerstudio.schemas.section import (
    DEFAULT_OVERLAY_OPACITY,
    CtaSection,
    CustomSection,
    GallerySection,
    HeroSection,
    JobsSection,
    Section,
    SectionKind,
    TextSection,
    VideoSection,
)
from careerstudio.schemas.theme import Theme

from .job_feed import JobFeedState
from .section_store import sorted_sections
from .theme_resolver import (
    ResolvedColors,
    SpacingScale,
    add_alpha,
    resolve_button_style,
    resolve_colors,
    resolve_image_url,
    spacing_for,
)

logger = get_logger(__name__)

GALLERY_PLACEHOLDER_CELLS = 6
JOB_DESCRIPTION_PREVIEW_LENGTH = 200
DEFAULT_CTA_LABEL = "Get Started"
DEFAULT_CTA_URL = "#"

EMPTY_PAGE_MESSAGE = "This careers page has no visible content yet."
OUT_OF_RANGE_MESSAGE = "There are no positions on this page."

YOUTUBE_ID_PATTERN = re.compile(
    r"(?:youtube\.com/(?:watch\?v=|embed/)|youtu\.be/)([a-zA-Z0-9_-]{11})"
)
VIMEO_ID_PATTERN = re.compile(r"vimeo\.com/(?:video/)?(\d+)")

PLAY_ICON_SVG = '<svg viewBox="0 0 24 24" width="32" height="32" fill="currentColor"><path d="M8 5v14l11-7z"/></svg>'

BASE_CSS = """
* { box-sizing: border-box; }
body { margin: 0; }
.careers-page { min-height: 100vh; line-height: 1.6; }
.section-inner { margin: 0 auto; }
.w-narrow { max-width: 48rem; }
.w-medium { max-width: 56rem; }
.w-wide { max-width: 64rem; }
.w-full { max-width: 72rem; }
.hero-section { position: relative; color: #fff; }
.hero-overlay { position: absolute; inset: 0; background-color: #000; }
.hero-content { position: relative; margin: 0 auto; max-width: 56rem; text-align: center; }
.hero-logo { height: 4rem; width: 4rem; object-fit: contain; background: rgba(255,255,255,0.9); padding: 0.5rem; }
.gallery-grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 1rem; margin-top: 2rem; }
.gallery-cell { aspect-ratio: 1 / 1; overflow: hidden; display: flex; align-items: center; justify-content: center; margin: 0; }
.gallery-cell img { width: 100%; height: 100%; object-fit: cover; }
.video-frame { aspect-ratio: 16 / 9; width: 100%; max-width: 48rem; margin: 0 auto; overflow: hidden; }
.video-frame iframe { width: 100%; height: 100%; border: 0; }
.video-placeholder { display: flex; flex-direction: column; align-items: center; justify-content: center; }
.job-filters { display: flex; flex-wrap: wrap; gap: 0.5rem; margin-bottom: 2rem; }
.job-grid { display: grid; grid-template-columns: repeat(2, 1fr); }
.job-card { padding: 1.5rem; border: 1px solid; }
.job-meta { font-size: 0.875rem; margin-bottom: 1rem; }
.jobs-empty { text-align: center; padding: 3rem 0; border: 2px dashed; border-radius: 0.75rem; }
.pagination { display: flex; justify-content: center; gap: 0.5rem; margin-top: 2rem; }
.btn { display: inline-block; padding: 0.625rem 1.5rem; font-weight: 600; text-decoration: none; cursor: pointer; border: 0; }
.empty-page { padding: 5rem 0; text-align: center; opacity: 0.5; }
.footer { padding: 2rem 0; text-align: center; font-size: 0.875rem; }
""".strip()

# Wiring for client-mode job filters. Each change is announced as a
# `careerstudio:job-filters` event; pages served from a base path also
# reload with the new query string.
JOB_FILTERS_SCRIPT = """
(function () {
  var form = document.querySelector('form[data-job-filters="client"]');
  if (!form) { return; }
  var basePath = form.getAttribute("data-base-path");
  function state(page) {
    var fields = form.elements;
    return {search: fields["search"].value, location: fields["location"].value,
            jobType: fields["jobType"].value, page: String(page)};
  }
  function apply(filters) {
    window.dispatchEvent(new CustomEvent("careerstudio:job-filters", {detail: filters}));
    if (!basePath) { return; }
    var query = new URLSearchParams();
    Object.keys(filters).forEach(function (key) {
      if (filters[key]) { query.set(key, filters[key]); }
    });
    window.location.search = query.toString();
  }
  form.addEventListener("submit", function (event) { event.preventDefault(); apply(state(1)); });
  form.addEventListener("change", function () { apply(state(1)); });
  document.querySelectorAll("[data-clear-filters]").forEach(function (button) {
    button.addEventListener("click", function () { apply({page: "1"}); });
  });
  document.querySelectorAll("button[data-page]").forEach(function (button) {
    button.addEventListener("click", function () { apply(state(button.getAttribute("data-page"))); });
  });
})();
""".strip()


class HostKind(str, Enum):
    """Where a rendered page is shown."""

    EDITOR = "editor"
    CAREERS = "careers"
    PREVIEW = "preview"


class JobFilterMode(str, Enum):
    """How the jobs section exposes filters and pagination.

    client: controls carry data attributes read by the page's filter script;
        with a `base_path` it reloads the page with the new query string.
    server: a GET form and page links against `HostContext.base_path`.
    none: no filter bar; pagination still links against `base_path`.
    """

    CLIENT = "client"
    SERVER = "server"
    NONE = "none"


@dataclass(frozen=True)
class HostContext:
    """What differs between the hosts of the renderer."""

    current_year: int
    host: HostKind = HostKind.CAREERS
    job_filters: JobFilterMode = JobFilterMode.SERVER
    asset_base_url: str = ""
    base_path: str = ""

    @classmethod
    def editor(cls, current_year: int, asset_base_url: str = "") -> HostContext:
        return cls(current_year, HostKind.EDITOR, JobFilterMode.CLIENT, asset_base_url)

    @classmethod
    def careers(cls, slug: str, current_year: int, asset_base_url: str = "") -> HostContext:
        return cls(
            current_year, HostKind.CAREERS, JobFilterMode.SERVER, asset_base_url, f"/careers/{slug}"
        )

    @classmethod
    def preview(cls, slug: str, current_year: int, asset_base_url: str = "") -> HostContext:
        return cls(
            current_year, HostKind.PREVIEW, JobFilterMode.CLIENT, asset_base_url, f"/preview/{slug}"
        )


@dataclass(frozen=True)
class VideoEmbed:
    provider: str
    video_id: str

    @property
    def src(self) -> str:
        if self.provider == "vimeo":
            return f"https://player.vimeo.com/video/{self.video_id}"
        return f"https://www.youtube.com/embed/{self.video_id}"


@dataclass(frozen=True)
class RenderedSection:
    id: str
    kind: str
    html: str
    placeholder: bool = False
    embed_id: str | None = None


@dataclass(frozen=True)
class RenderedPage:
    title: str
    sections: tuple[RenderedSection, ...]
    body: str
    html: str

    @property
    def is_empty(self) -> bool:
        return not self.sections

    def to_response(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "html": self.html,
            "sections": [
                {
                    "id": s.id,
                    "type": s.kind,
                    "placeholder": s.placeholder,
                    "embedId": s.embed_id,
                }
                for s in self.sections
            ],
        }


@dataclass(frozen=True)
class _RenderContext:
    company: CompanyDocument
    theme: Theme
    spacing: SpacingScale
    host: HostContext
    job_feed: JobFeedState


# ============================================================================
# Helpers
# ============================================================================


def _escape_html(text: Any) -> str:
    """Escape HTML special characters to prevent XSS."""
    if text is None:
        return ""
    return html.escape(str(text))


def _style_attr(props: dict[str, Any]) -> str:
    declarations = "; ".join(f"{k}: {v}" for k, v in props.items() if v not in (None, ""))
    return f' style="{_escape_html(declarations)}"' if declarations else ""


def _css_url(url: str) -> str:
    return "url('" + url.replace("'", "%27").replace(")", "%29") + "')"


def extract_youtube_id(url: str | None) -> str | None:
    """Extract the 11-character id from a watch, embed or youtu.be URL."""
    if not url:
        return None
    match = YOUTUBE_ID_PATTERN.search(url)
    return match.group(1) if match else None


def extract_video_embed(url: str | None) -> VideoEmbed | None:
    """Find an embeddable YouTube or Vimeo video in `url`."""
    youtube_id = extract_youtube_id(url)
    if youtube_id:
        return VideoEmbed("youtube", youtube_id)
    if url:
        match = VIMEO_ID_PATTERN.search(url)
        if match:
            return VideoEmbed("vimeo", match.group(1))
    return None


def truncate(text: str, length: int = JOB_DESCRIPTION_PREVIEW_LENGTH) -> str:
    text = " ".join(text.split())
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "…"


def _section_open(section: Section, colors: ResolvedColors, ctx: _RenderContext) -> str:
    return (
        f'<section id="section-{_escape_html(section.id)}" '
        f'class="section section-{section.kind}" data-section-id="{_escape_html(section.id)}"'
        + _style_attr(
            {"background-color": colors.background_color, "padding": ctx.spacing.section_padding}
        )
        + ">"
    )


def _heading(text: str, colors: ResolvedColors, ctx: _RenderContext, align: str = "") -> str:
    return (
        '<h2 class="section-title"'
        + _style_attr(
            {
                "font-family": ctx.theme.heading_font,
                "color": colors.text_color,
                "margin-bottom": ctx.spacing.text_margin,
                "text-align": align,
            }
        )
        + f">{_escape_html(text)}</h2>"
    )


def _subtitle(text: str, colors: ResolvedColors, ctx: _RenderContext) -> str:
    if not text:
        return ""
    return (
        '<p class="section-subtitle"'
        + _style_attr(
            {"font-family": ctx.theme.font_family, "color": colors.text_color, "opacity": "0.7"}
        )
        + f">{_escape_html(text)}</p>"
    )


def _button_attrs(colors: ResolvedColors, ctx: _RenderContext) -> str:
    button = resolve_button_style(ctx.theme.button_style, colors.accent_color, ctx.theme.border_radius)
    return f'class="{button.class_hint}"' + _style_attr(button.style)


# ============================================================================
# Section renderers
# ============================================================================


def _render_hero(section: HeroSection, colors: ResolvedColors, ctx: _RenderContext) -> RenderedSection:
    config = section.config
    theme = ctx.theme
    background_image = config.background_image_url or theme.banner_url or ctx.company.banner_url
    text_color = section.theme.text_color if section.theme and section.theme.text_color else "#fff"

    style: dict[str, Any] = {
        "background-color": theme.primary_color,
        "background-size": "cover",
        "background-position": "center",
    }
    if config.background_type == "image" and background_image:
        style["background-image"] = _css_url(resolve_image_url(background_image, ctx.host.asset_base_url))
    elif config.background_type == "color" and config.background_value:
        style["background-color"] = config.background_value
        style["background-image"] = "none"
    elif config.background_type == "gradient" and config.background_value:
        style["background-image"] = config.background_value
    style["color"] = text_color

    opacity = config.overlay_opacity if config.overlay_opacity is not None else DEFAULT_OVERLAY_OPACITY
    title = section.title or ctx.company.content.hero_title
    subtitle = section.subtitle or ctx.company.content.hero_subtitle
    logo_url = theme.logo_url or ctx.company.logo_url

    parts = [
        f'<header id="section-{_escape_html(section.id)}" class="section hero-section" '
        f'data-section-id="{_escape_html(section.id)}"' + _style_attr(style) + ">",
        f'<div class="hero-overlay"{_style_attr({"opacity": f"{opacity:g}"})}></div>',
        f'<div class="hero-content"{_style_attr({"padding": ctx.spacing.hero_padding})}>',
    ]
    if logo_url:
        parts.append(
            f'<img class="hero-logo" src="{_escape_html(resolve_image_url(logo_url, ctx.host.asset_base_url))}" alt="Logo"'
            + _style_attr({"border-radius": theme.border_radius})
            + ">"
        )
    parts.append(
        f'<h1 class="hero-title"{_style_attr({"font-family": theme.heading_font})}>{_escape_html(title)}</h1>'
    )
    parts.append(
        f'<p class="hero-subtitle"{_style_attr({"font-family": theme.font_family})}>{_escape_html(subtitle)}</p>'
    )
    parts.append("</div></header>")
    return RenderedSection(section.id, section.kind, "".join(parts))


def _render_text(section: TextSection, colors: ResolvedColors, ctx: _RenderContext) -> RenderedSection:
    layout = section.config.layout or "center"
    width = "w-wide" if layout == "left" else "w-medium"
    parts = [
        _section_open(section, colors, ctx),
        f'<div class="section-inner {width}"{_style_attr({"text-align": layout})}>',
        _heading(section.title, colors, ctx),
        _subtitle(section.subtitle, colors, ctx),
        '<p class="section-text"'
        + _style_attr(
            {
                "font-family": ctx.theme.font_family,
                "color": colors.text_color,
                "opacity": "0.8",
                "white-space": "pre-wrap",
            }
        )
        + f">{_escape_html(section.content)}</p>",
        "</div></section>",
    ]
    return RenderedSection(section.id, section.kind, "".join(parts))


def _render_gallery(
    section: GallerySection, colors: ResolvedColors, ctx: _RenderContext
) -> RenderedSection:
    images = section.config.images
    radius = ctx.theme.border_radius
    parts = [
        _section_open(section, colors, ctx),
        '<div class="section-inner w-full">',
        _heading(section.title, colors, ctx, align="center"),
        '<div class="gallery-grid">',
    ]

    if images:
        for i, image in enumerate(images, 1):
            src = resolve_image_url(image.url, ctx.host.asset_base_url)
            alt = image.caption or f"Gallery {i}"
            parts.append(f'<figure class="gallery-cell"{_style_attr({"border-radius": radius})}>')
            parts.append(f'<img src="{_escape_html(src)}" alt="{_escape_html(alt)}" loading="lazy">')
            if image.caption:
                parts.append(f"<figcaption>{_escape_html(image.caption)}</figcaption>")
            parts.append("</figure>")
    else:
        # Keep the grid visible while the recruiter has not uploaded anything
        for i in range(1, GALLERY_PLACEHOLDER_CELLS + 1):
            parts.append(
                '<div class="gallery-cell gallery-placeholder"'
                + _style_attr(
                    {"background-color": add_alpha(colors.accent_color, 0.1), "border-radius": radius}
                )
                + f'><span{_style_attr({"color": colors.text_color, "opacity": "0.4"})}>Image {i}</span></div>'
            )

    parts.append("</div></div></section>")
    return RenderedSection(section.id, section.kind, "".join(parts), placeholder=not images)


def _render_video(section: VideoSection, colors: ResolvedColors, ctx: _RenderContext) -> RenderedSection:
    embed = extract_video_embed(section.config.video_url)
    radius = ctx.theme.border_radius
    parts = [
        _section_open(section, colors, ctx),
        '<div class="section-inner w-medium"' + _style_attr({"text-align": "center"}) + ">",
        _heading(section.title, colors, ctx),
    ]

    if embed:
        parts.append(
            f'<div class="video-frame"{_style_attr({"border-radius": radius})}>'
            f'<iframe src="{_escape_html(embed.src)}" title="{_escape_html(section.title)}" '
            'allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture" '
            "allowfullscreen></iframe></div>"
        )
    else:
        parts.append(
            '<div class="video-frame video-placeholder"'
            + _style_attr({"background-color": add_alpha(colors.accent_color, 0.1), "border-radius": radius})
            + ">"
            + f'<div class="play-icon"{_style_attr({"color": colors.accent_color})}>{PLAY_ICON_SVG}</div>'
            + f'<span{_style_attr({"color": colors.text_color, "opacity": "0.5"})}>Add a video URL</span>'
            + "</div>"
        )

    parts.append("</div></section>")
    return RenderedSection(
        section.id,
        section.kind,
        "".join(parts),
        placeholder=embed is None,
        embed_id=embed.video_id if embed else None,
    )


def _page_href(ctx: _RenderContext, page: int) -> str:
    request = ctx.job_feed.request
    params: dict[str, Any] = {}
    if ctx.host.job_filters is JobFilterMode.SERVER:
        if request.search:
            params["search"] = request.search
        if request.location:
            params["location"] = request.location
        if request.job_type:
            params["jobType"] = request.job_type.value
    params["page"] = page
    return f"{ctx.host.base_path}?{urlencode(params)}"


def _render_job_filters(colors: ResolvedColors, ctx: _RenderContext) -> str:
    mode = ctx.host.job_filters
    if mode is JobFilterMode.NONE:
        return ""

    request = ctx.job_feed.request
    selected = request.job_type.value if request.job_type else ""
    options = ['<option value="">All types</option>'] + [
        f'<option value="{_escape_html(t.value)}"{" selected" if t.value == selected else ""}>'
        f"{_escape_html(t.value)}</option>"
        for t in JobType
    ]

    # The form carries no page field, so submitting new filters lands on page 1
    if mode is JobFilterMode.SERVER:
        opening = f'<form class="job-filters" method="get" action="{_escape_html(ctx.host.base_path)}">'
        closing = f'<button type="submit" {_button_attrs(colors, ctx)}>Search</button></form>'
    else:
        opening = (
            '<form class="job-filters" data-job-filters="client"'
            f' data-base-path="{_escape_html(ctx.host.base_path)}">'
        )
        closing = "</form>"
    if request.has_filters:
        if mode is JobFilterMode.SERVER:
            clear = f'<a href="{_escape_html(ctx.host.base_path)}" data-clear-filters {_button_attrs(colors, ctx)}>'
            closing = f"{clear}Clear filters</a>{closing}"
        else:
            clear = f'<button type="button" data-clear-filters {_button_attrs(colors, ctx)}>'
            closing = f"{clear}Clear filters</button>{closing}"

    return (
        opening
        + f'<input type="search" name="search" placeholder="Search jobs" value="{_escape_html(request.search)}">'
        + f'<input type="text" name="location" placeholder="Location" value="{_escape_html(request.location)}">'
        + f'<select name="jobType">{"".join(options)}</select>'
        + closing
    )


def _render_pagination(colors: ResolvedColors, ctx: _RenderContext) -> str:
    page = ctx.job_feed.page
    # A page past the end still links back to the real pages
    if page.pages == 0 or (page.pages == 1 and page.page == 1):
        return ""

    current = page.page
    radius = ctx.theme.border_radius
    parts = ['<nav class="pagination" aria-label="Job pages">']
    for number in range(1, page.pages + 1):
        is_current = number == current
        style = _style_attr(
            {
                "border-radius": radius,
                "background-color": colors.accent_color if is_current else "transparent",
                "color": "#fff" if is_current else colors.text_color,
                "padding": "0.25rem 0.75rem",
            }
        )
        aria = ' aria-current="page"' if is_current else ""
        if ctx.host.job_filters is JobFilterMode.CLIENT:
            parts.append(f'<button type="button" data-page="{number}"{aria}{style}>{number}</button>')
        else:
            parts.append(f'<a href="{_escape_html(_page_href(ctx, number))}"{aria}{style}>{number}</a>')
    parts.append("</nav>")
    return "".join(parts)


def _render_job_card(job: JobRead, colors: ResolvedColors, ctx: _RenderContext) -> str:
    return (
        f'<article class="job-card" data-job-id="{_escape_html(job.id)}"'
        + _style_attr(
            {
                "background-color": colors.background_color,
                "border-radius": ctx.theme.border_radius,
                "border-color": add_alpha(colors.text_color, 0.1),
            }
        )
        + ">"
        + f'<h3 class="job-title"{_style_attr({"font-family": ctx.theme.heading_font, "color": colors.text_color})}>'
        + f"{_escape_html(job.title)}</h3>"
        + f'<div class="job-meta"{_style_attr({"color": colors.text_color, "opacity": "0.6"})}>'
        + f'<span class="job-location">{_escape_html(job.location)}</span> • '
        + f'<span class="job-type">{_escape_html(job.job_type)}</span></div>'
        + '<p class="job-description"'
        + _style_attr({"font-family": ctx.theme.font_family, "color": colors.text_color, "opacity": "0.7"})
        + f">{_escape_html(truncate(job.description))}</p>"
        + f'<button type="button" {_button_attrs(colors, ctx)}>Apply Now</button>'
        + "</article>"
    )


def _render_jobs(section: JobsSection, colors: ResolvedColors, ctx: _RenderContext) -> RenderedSection:
    feed = ctx.job_feed
    parts = [
        _section_open(section, colors, ctx),
        '<div class="section-inner w-wide">',
        '<div class="jobs-header"' + _style_attr({"text-align": "center"}) + ">",
        _heading(section.title, colors, ctx),
        _subtitle(section.subtitle, colors, ctx),
        "</div>",
        _render_job_filters(colors, ctx),
    ]

    empty_style = _style_attr({"border-color": add_alpha(colors.text_color, 0.2), "color": colors.text_color})
    placeholder = False
    if feed.error:
        placeholder = True
        parts.append(f'<div class="jobs-empty jobs-error"{empty_style}><p>{_escape_html(feed.error)}</p></div>')
    elif not feed.page.jobs and feed.page.total:
        placeholder = True
        parts.append(
            f'<div class="jobs-empty jobs-out-of-range"{empty_style}>'
            f"<p>{OUT_OF_RANGE_MESSAGE}</p></div>"
        )
        parts.append(_render_pagination(colors, ctx))
    elif not feed.page.jobs:
        placeholder = True
        message = (
            "No positions match your filters."
            if feed.request.has_filters
            else "No open positions at the moment."
        )
        parts.append(f'<div class="jobs-empty"{empty_style}><p>{message}</p></div>')
    else:
        parts.append(f'<div class="job-grid"{_style_attr({"gap": ctx.spacing.gap})}>')
        parts.extend(_render_job_card(job, colors, ctx) for job in feed.page.jobs)
        parts.append("</div>")
        parts.append(_render_pagination(colors, ctx))

    parts.append("</div></section>")
    return RenderedSection(section.id, section.kind, "".join(parts), placeholder=placeholder)


def _render_cta(section: CtaSection, colors: ResolvedColors, ctx: _RenderContext) -> RenderedSection:
    href = section.config.cta_button_url or DEFAULT_CTA_URL
    label = section.config.cta_button_text or DEFAULT_CTA_LABEL
    parts = [
        _section_open(section, colors, ctx),
        '<div class="section-inner w-narrow"' + _style_attr({"text-align": "center"}) + ">",
        _heading(section.title, colors, ctx),
        _subtitle(section.subtitle, colors, ctx),
        f'<a href="{_escape_html(href)}" {_button_attrs(colors, ctx)}>{_escape_html(label)}</a>',
        "</div></section>",
    ]
    return RenderedSection(section.id, section.kind, "".join(parts))


def _render_custom(section: CustomSection, colors: ResolvedColors, ctx: _RenderContext) -> RenderedSection:
    parts = [_section_open(section, colors, ctx), '<div class="section-inner w-medium">']
    if section.title:
        parts.append(_heading(section.title, colors, ctx, align="center"))
    if section.content:
        # Recruiter-authored markup, inserted as written
        parts.append(f'<div class="custom-content"{_style_attr({"color": colors.text_color})}>{section.content}</div>')
    parts.append("</div></section>")
    return RenderedSection(section.id, section.kind, "".join(parts))


_RENDERERS: dict[str, Callable[[Any, ResolvedColors, _RenderContext], RenderedSection]] = {
    SectionKind.HERO.value: _render_hero,
    SectionKind.TEXT.value: _render_text,
    SectionKind.GALLERY.value: _render_gallery,
    SectionKind.VIDEO.value: _render_video,
    SectionKind.JOBS.value: _render_jobs,
    SectionKind.CTA.value: _render_cta,
    SectionKind.CUSTOM.value: _render_custom,
}


# ============================================================================
# Page
# ============================================================================


def visible_sections(sections: list[Section]) -> list[Section]:
    """Enabled sections in render order."""
    return [s for s in sorted_sections(sections) if s.enabled]


def render_page(
    company: CompanyDocument,
    job_feed: JobFeedState | None,
    host: HostContext,
) -> RenderedPage:
    """Render a company's careers page.

    Args:
        company: Company document (theme, legacy content, sections)
        job_feed: Current job feed request and page, used by jobs sections
        host: Host-specific wiring; carries the footer year

    Returns:
        RenderedPage with the per-section fragments and the full document
    """
    theme = company.theme
    ctx = _RenderContext(
        company=company,
        theme=theme,
        spacing=spacing_for(theme.spacing),
        host=host,
        job_feed=job_feed or JobFeedState(),
    )

    rendered = tuple(
        _RENDERERS[section.kind](section, resolve_colors(theme, section.theme), ctx)
        for section in visible_sections(company.sections)
    )

    parts = [
        '<div class="careers-page"'
        + _style_attr(
            {
                "font-family": theme.font_family,
                "font-size": theme.base_font_size,
                "background-color": theme.background_color,
                "color": theme.text_color,
            }
        )
        + ">",
        "<main>",
    ]
    if rendered:
        parts.extend(section.html for section in rendered)
    else:
        parts.append(f'<div class="empty-page">{EMPTY_PAGE_MESSAGE}</div>')
    parts.append("</main>")
    parts.append(
        '<footer class="footer"'
        + _style_attr(
            {"background-color": add_alpha(theme.text_color, 0.05), "color": theme.text_color, "opacity": "0.8"}
        )
        + f">© {host.current_year} {_escape_html(company.name)}. All rights reserved.</footer>"
    )
    parts.append("</div>")
    if theme.custom_css:
        # Last in the document so recruiter rules win over the computed ones
        parts.append(f'<style id="custom-css">{theme.custom_css}</style>')
    if host.job_filters is JobFilterMode.CLIENT and any(s.kind == SectionKind.JOBS.value for s in rendered):
        parts.append(f"<script>{JOB_FILTERS_SCRIPT}</script>")
    body = "\n".join(parts)

    title = f"Careers at {company.name}"
    document = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{_escape_html(title)}</title>
<style>
{BASE_CSS}
</style>
</head>
<body>
{body}
</body>
</html>"""

    logger.debug(
        f"Rendered {company.slug or company.name} for {host.host.value}: "
        f"{len(rendered)} of {len(company.sections)} sections visible"
    )
    return RenderedPage(title=title, sections=rendered, body=body, html=document)
