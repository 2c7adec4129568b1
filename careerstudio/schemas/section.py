"""Section schema definitions and validators.

A careers page is an ordered list of sections. Each section shares a common
base (id, title, subtitle, content, enabled, order, optional color override)
and carries a config payload whose shape depends on its kind. The kind is
stored under the `type` key of the persisted document.

Config payloads accept and keep keys they do not know about, so documents
written by newer editors survive a round trip through older code.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from careerstudio.core.exceptions import (
    DuplicateIdError,
    InvalidKindError,
    MissingRequiredFieldError,
    SectionValidationError,
)

from .theme import SectionTheme

DEFAULT_OVERLAY_OPACITY = 0.4


class SectionKind(str, Enum):
    """Closed set of section kinds."""

    HERO = "hero"
    TEXT = "text"
    GALLERY = "gallery"
    VIDEO = "video"
    JOBS = "jobs"
    CTA = "cta"
    CUSTOM = "custom"


SECTION_KINDS = frozenset(kind.value for kind in SectionKind)


# ============================================================================
# Config payloads
# ============================================================================


class SectionConfig(BaseModel):
    """Base for kind-specific config payloads."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_document(self) -> dict[str, Any]:
        # exclude_unset keeps stored documents minimal; extras are always kept
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class HeroConfig(SectionConfig):
    background_type: Literal["image", "color", "gradient"] = Field(
        default="image", alias="backgroundType"
    )
    background_image_url: str | None = Field(default=None, alias="backgroundImageUrl")
    background_value: str | None = Field(
        default=None,
        alias="backgroundValue",
        description="Hex color or CSS gradient expression",
    )
    overlay_opacity: float = Field(default=DEFAULT_OVERLAY_OPACITY, alias="overlayOpacity")

    @field_validator("overlay_opacity")
    @classmethod
    def clamp_opacity(cls, v: float) -> float:
        return max(0.0, min(1.0, v))


class TextConfig(SectionConfig):
    layout: Literal["left", "center", "right"] = "center"


class GalleryImage(BaseModel):
    url: str
    caption: str = ""

    @model_validator(mode="before")
    @classmethod
    def accept_bare_url(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"url": data}
        return data


class GalleryConfig(SectionConfig):
    """Gallery images.

    `images` is the current shape. `imageUrls` is the legacy flat list; it is
    upgraded into `images` when `images` is absent and is rewritten from
    `images` on every validation so older readers keep working.
    """

    images: list[GalleryImage] = Field(default_factory=list)
    image_urls: list[str] = Field(default_factory=list, alias="imageUrls")

    @model_validator(mode="before")
    @classmethod
    def upgrade_legacy_urls(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        urls = data.get("imageUrls", data.get("image_urls"))
        if data.get("images") is None and urls:
            data = dict(data)
            data["images"] = [{"url": url, "caption": ""} for url in urls if url]
        return data

    @model_validator(mode="after")
    def sync_image_urls(self) -> GalleryConfig:
        self.images = list(self.images)
        self.image_urls = [image.url for image in self.images]
        return self


class VideoConfig(SectionConfig):
    video_url: str | None = Field(default=None, alias="videoUrl")


class CtaConfig(SectionConfig):
    cta_button_text: str | None = Field(default=None, alias="ctaButtonText")
    cta_button_url: str | None = Field(default=None, alias="ctaButtonUrl")


class EmptyConfig(SectionConfig):
    """Jobs and custom sections need nothing beyond the base fields."""


# ============================================================================
# Sections
# ============================================================================


class SectionBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    title: str = ""
    subtitle: str = ""
    content: str = ""
    enabled: bool = True
    order: int
    theme: SectionTheme | None = None

    @field_validator("title", "subtitle", "content", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    def to_document(self) -> dict[str, Any]:
        """Serialize to the persisted camelCase document shape."""
        document = self.model_dump(mode="json", by_alias=True, exclude={"theme", "config"})
        if self.theme is not None and not self.theme.is_empty():
            document["theme"] = self.theme.to_document()
        document["config"] = self.config.to_document()  # type: ignore[attr-defined]
        return document


class HeroSection(SectionBase):
    kind: Literal["hero"] = Field(alias="type")
    config: HeroConfig = Field(default_factory=HeroConfig)


class TextSection(SectionBase):
    kind: Literal["text"] = Field(alias="type")
    config: TextConfig = Field(default_factory=TextConfig)


class GallerySection(SectionBase):
    kind: Literal["gallery"] = Field(alias="type")
    config: GalleryConfig = Field(default_factory=GalleryConfig)


class VideoSection(SectionBase):
    kind: Literal["video"] = Field(alias="type")
    config: VideoConfig = Field(default_factory=VideoConfig)


class JobsSection(SectionBase):
    kind: Literal["jobs"] = Field(alias="type")
    config: EmptyConfig = Field(default_factory=EmptyConfig)


class CtaSection(SectionBase):
    kind: Literal["cta"] = Field(alias="type")
    config: CtaConfig = Field(default_factory=CtaConfig)


class CustomSection(SectionBase):
    kind: Literal["custom"] = Field(alias="type")
    config: EmptyConfig = Field(default_factory=EmptyConfig)


Section = Annotated[
    Union[
        HeroSection,
        TextSection,
        GallerySection,
        VideoSection,
        JobsSection,
        CtaSection,
        CustomSection,
    ],
    Field(discriminator="kind"),
]

section_adapter: TypeAdapter[Section] = TypeAdapter(Section)


# ============================================================================
# Validators
# ============================================================================


def _as_mapping(candidate: Any) -> dict[str, Any]:
    if isinstance(candidate, SectionBase):
        return candidate.to_document()
    if isinstance(candidate, Mapping):
        data = dict(candidate)
        # Accept the Python-side name as well as the document key
        if "type" not in data and "kind" in data:
            data["type"] = data.pop("kind")
        return data
    raise SectionValidationError(f"Section must be an object, got {type(candidate).__name__}")


def validate_section(candidate: Any, existing_ids: Iterable[str] = ()) -> Section:
    """Validate and normalize a section document.

    Args:
        candidate: Section document (camelCase dict) or Section model
        existing_ids: Ids of the other sections of the same company

    Returns:
        The normalized Section

    Raises:
        MissingRequiredFieldError: id, type or order absent (or id empty)
        InvalidKindError: type not one of the known kinds
        DuplicateIdError: id already used by another section
        SectionValidationError: any other structural problem
    """
    data = _as_mapping(candidate)

    section_id = data.get("id")
    if section_id is None or (isinstance(section_id, str) and not section_id.strip()):
        raise MissingRequiredFieldError("id")
    if data.get("type") is None:
        raise MissingRequiredFieldError("type")
    if data.get("order") is None:
        raise MissingRequiredFieldError("order")

    kind = data["type"]
    if isinstance(kind, SectionKind):
        data["type"] = kind = kind.value
    if not isinstance(kind, str) or kind not in SECTION_KINDS:
        raise InvalidKindError(kind)

    if not isinstance(section_id, str):
        raise SectionValidationError(f"Section id must be a string, got {type(section_id).__name__}")
    if section_id in set(existing_ids):
        raise DuplicateIdError(str(section_id))

    if data.get("enabled") is None:
        data["enabled"] = True
    if data.get("config") is None:
        data["config"] = {}

    try:
        return section_adapter.validate_python(data)
    except ValidationError as e:
        raise SectionValidationError(f"Invalid section {section_id}: {e}") from e


def validate_sections(candidates: Iterable[Any]) -> list[Section]:
    """Validate a whole section collection, checking ids against each other."""
    sections: list[Section] = []
    seen: set[str] = set()
    for candidate in candidates:
        section = validate_section(candidate, seen)
        seen.add(section.id)
        sections.append(section)
    return sections


def sections_to_documents(sections: Iterable[Section]) -> list[dict[str, Any]]:
    return [section.to_document() for section in sections]
