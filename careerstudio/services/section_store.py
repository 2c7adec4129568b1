"""Section collection operations.

Every operation takes the current collection and returns a new list; the
input list and its sections are never modified. Callers replace their
stored collection with the result.

After add, remove and move the `order` values are exactly 0..N-1. Removing
the only section and moving past either end are no-ops rather than errors.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import Any

from careerstudio.core.exceptions import (
    InvalidKindError,
    LastSectionError,
    SectionNotFoundError,
    SectionValidationError,
)
from careerstudio.core.logging import get_logger
from careerstudio.schemas.section import (
    Section,
    SectionKind,
    validate_section,
    validate_sections,
)

logger = get_logger(__name__)

DEFAULT_TITLES: dict[SectionKind, str] = {
    SectionKind.HERO: "Welcome",
    SectionKind.TEXT: "About Us",
    SectionKind.JOBS: "Open Positions",
    SectionKind.GALLERY: "Our Team",
    SectionKind.VIDEO: "Our Story",
    SectionKind.CTA: "Join Us",
    SectionKind.CUSTOM: "Custom Section",
}

DEFAULT_TEXT_CONTENT = "Add your content here..."

# Top-level fields that update_fields leaves alone
PROTECTED_FIELDS = frozenset({"order", "config"})


class MoveDirection(str, Enum):
    UP = "up"
    DOWN = "down"


def default_sections() -> list[Section]:
    """Sections of a newly created company."""
    return validate_sections(
        [
            {
                "id": "hero-1",
                "type": "hero",
                "title": "Join Our Team",
                "subtitle": "Build the future with us",
                "order": 0,
            },
            {
                "id": "about-1",
                "type": "text",
                "title": "About Us",
                "content": "We are a team dedicated to excellence and innovation.",
                "order": 1,
            },
            {
                "id": "culture-1",
                "type": "text",
                "title": "Our Culture",
                "content": "Experience what it's like to work with us.",
                "order": 2,
            },
            {
                "id": "jobs-1",
                "type": "jobs",
                "title": "Open Positions",
                "subtitle": "Find the role that fits you best",
                "order": 3,
            },
        ]
    )


def sorted_sections(sections: Sequence[Section]) -> list[Section]:
    """Sections in render order; ties keep their list position."""
    return sorted(sections, key=lambda s: s.order)


def new_section_id(kind: SectionKind | str, existing_ids: set[str]) -> str:
    kind_value = SectionKind(kind).value
    while True:
        candidate = f"{kind_value}-{uuid.uuid4().hex[:12]}"
        if candidate not in existing_ids:
            return candidate


def _renumber(ordered: Sequence[Section]) -> list[Section]:
    return [
        section if section.order == i else section.model_copy(update={"order": i})
        for i, section in enumerate(ordered)
    ]


def _index_of(sections: Sequence[Section], section_id: str) -> int:
    for i, section in enumerate(sections):
        if section.id == section_id:
            return i
    raise SectionNotFoundError(section_id)


def _replace(sections: Sequence[Section], index: int, section: Section) -> list[Section]:
    result = list(sections)
    result[index] = section
    return result


def add_section(
    sections: Sequence[Section],
    kind: SectionKind | str,
    id_factory: Callable[[SectionKind, set[str]], str] | None = None,
) -> tuple[list[Section], Section]:
    """Append a new section of `kind` with its default title.

    Returns:
        (new collection, the created section)
    """
    try:
        kind = SectionKind(kind)
    except ValueError:
        raise InvalidKindError(kind)

    existing_ids = {s.id for s in sections}
    section_id = (id_factory or new_section_id)(kind, existing_ids)

    config: dict[str, Any] = {}
    if kind is SectionKind.GALLERY:
        config = {"images": [], "imageUrls": []}

    section = validate_section(
        {
            "id": section_id,
            "type": kind.value,
            "title": DEFAULT_TITLES[kind],
            "subtitle": "",
            "content": DEFAULT_TEXT_CONTENT if kind is SectionKind.TEXT else "",
            "enabled": True,
            "order": len(sections),
            "config": config,
        },
        existing_ids,
    )
    logger.info(f"Added {kind.value} section {section.id} at position {section.order}")
    return [*sections, section], section


def remove_section(
    sections: Sequence[Section], section_id: str, *, strict: bool = False
) -> list[Section]:
    """Remove a section and close the gap in `order`.

    A page keeps at least one section: removing the only one returns the
    collection unchanged, or raises LastSectionError when `strict` is set.
    """
    _index_of(sections, section_id)

    if len(sections) <= 1:
        if strict:
            raise LastSectionError(section_id)
        logger.debug(f"Refusing to remove last section {section_id}")
        return list(sections)

    remaining = [s for s in sorted_sections(sections) if s.id != section_id]
    logger.info(f"Removed section {section_id}")
    return _renumber(remaining)


def move_section(
    sections: Sequence[Section], section_id: str, direction: MoveDirection | str
) -> list[Section]:
    """Swap a section with its neighbour in render order.

    Moving the first section up or the last section down is a no-op.
    """
    direction = MoveDirection(direction)
    ordered = sorted_sections(sections)
    index = _index_of(ordered, section_id)

    target = index - 1 if direction is MoveDirection.UP else index + 1
    if target < 0 or target >= len(ordered):
        logger.debug(f"Section {section_id} already at the {direction.value} boundary")
        return list(sections)

    ordered[index], ordered[target] = ordered[target], ordered[index]
    return _renumber(ordered)


def toggle_enabled(sections: Sequence[Section], section_id: str) -> list[Section]:
    """Flip `enabled`; the section keeps its position."""
    index = _index_of(sections, section_id)
    section = sections[index]
    return _replace(sections, index, section.model_copy(update={"enabled": not section.enabled}))


def update_config(
    sections: Sequence[Section], section_id: str, partial: Mapping[str, Any]
) -> list[Section]:
    """Shallow-merge `partial` onto the section's config."""
    index = _index_of(sections, section_id)
    section = sections[index]

    merged = {**section.config.to_document(), **partial}
    if section.kind == SectionKind.GALLERY and "imageUrls" in partial and "images" not in partial:
        # Legacy list edit: rebuild images from it, keeping known captions
        captions = {image.url: image.caption for image in section.config.images}
        merged["images"] = [
            {"url": url, "caption": captions.get(url, "")} for url in partial["imageUrls"] or []
        ]
    elif section.kind == SectionKind.GALLERY and "images" in partial:
        # The legacy list is rebuilt from the new images
        merged.pop("imageUrls", None)

    document = section.to_document()
    document["config"] = merged
    return _replace(sections, index, validate_section(document))


def update_theme(
    sections: Sequence[Section], section_id: str, partial: Mapping[str, Any]
) -> list[Section]:
    """Shallow-merge a color override; an empty value clears that field."""
    index = _index_of(sections, section_id)
    section = sections[index]

    current = section.theme.to_document() if section.theme else {}
    merged = {**current, **partial}
    document = section.to_document()
    if any(merged.values()):
        document["theme"] = merged
    else:
        document.pop("theme", None)
    return _replace(sections, index, validate_section(document))


def update_fields(
    sections: Sequence[Section], section_id: str, partial: Mapping[str, Any]
) -> list[Section]:
    """Shallow-merge top-level fields (title, subtitle, content, enabled, theme...).

    `order` is managed by add/remove/move and `config` by update_config, so
    both are left untouched here. Passing `theme` as None or {} reverts the
    section to the page theme.
    """
    index = _index_of(sections, section_id)
    section = sections[index]
    if "id" in partial and partial["id"] != section.id:
        raise SectionValidationError(f"Section id {section.id} cannot be changed")

    changes = {k: v for k, v in partial.items() if k not in PROTECTED_FIELDS}
    if "kind" in changes:
        changes["type"] = changes.pop("kind")

    document = {**section.to_document(), **changes}
    if not document.get("theme"):
        document.pop("theme", None)

    other_ids = [s.id for i, s in enumerate(sections) if i != index]
    return _replace(sections, index, validate_section(document, other_ids))


def reset_theme(sections: Sequence[Section], section_id: str) -> list[Section]:
    """Drop the section's color override so it follows the page theme."""
    return update_fields(sections, section_id, {"theme": None})
