"""Tests for section collection operations."""

import random

import pytest

from careerstudio.core.exceptions import (
    InvalidKindError,
    LastSectionError,
    SectionNotFoundError,
    SectionValidationError,
)
from careerstudio.schemas.section import SectionKind, validate_sections
from careerstudio.services import section_store
from careerstudio.services.section_store import (
    DEFAULT_TEXT_CONTENT,
    DEFAULT_TITLES,
    MoveDirection,
    default_sections,
)


def _orders(sections):
    return sorted(s.order for s in sections)


def _ids_in_order(sections):
    return [s.id for s in section_store.sorted_sections(sections)]


@pytest.fixture
def sections():
    return default_sections()


class TestAddSection:
    """Tests for add_section."""

    @pytest.mark.parametrize("kind", list(SectionKind))
    def test_add_each_kind(self, sections, kind):
        """Test every kind gets its default title and is appended last."""
        result, section = section_store.add_section(sections, kind)

        assert len(result) == len(sections) + 1
        assert section.kind == kind.value
        assert section.title == DEFAULT_TITLES[kind]
        assert section.enabled is True
        assert section.order == len(sections)
        assert _orders(result) == list(range(len(result)))

    def test_text_gets_placeholder_content(self, sections):
        _, section = section_store.add_section(sections, "text")
        assert section.content == DEFAULT_TEXT_CONTENT

    def test_gallery_starts_empty(self, sections):
        _, section = section_store.add_section(sections, "gallery")
        assert section.config.images == []
        assert section.to_document()["config"] == {"images": [], "imageUrls": []}

    def test_ids_unique(self, sections):
        result = sections
        for _ in range(5):
            result, _ = section_store.add_section(result, "cta")
        assert len({s.id for s in result}) == len(result)

    def test_custom_id_factory(self, sections):
        _, section = section_store.add_section(sections, "video", id_factory=lambda kind, ids: "video-x")
        assert section.id == "video-x"

    def test_invalid_kind(self, sections):
        with pytest.raises(InvalidKindError):
            section_store.add_section(sections, "carousel")

    def test_input_not_modified(self, sections):
        before = [s.model_copy() for s in sections]
        section_store.add_section(sections, "cta")
        assert sections == before


class TestRemoveSection:
    """Tests for remove_section."""

    def test_remove_closes_gap(self, sections):
        result = section_store.remove_section(sections, "about-1")
        assert _ids_in_order(result) == ["hero-1", "culture-1", "jobs-1"]
        assert _orders(result) == [0, 1, 2]

    def test_remove_last_section_is_noop(self, sections):
        only = [sections[0]]
        assert section_store.remove_section(only, "hero-1") == only

    def test_remove_last_section_strict(self, sections):
        with pytest.raises(LastSectionError):
            section_store.remove_section([sections[0]], "hero-1", strict=True)

    def test_remove_unknown(self, sections):
        with pytest.raises(SectionNotFoundError):
            section_store.remove_section(sections, "nope")


class TestMoveSection:
    """Tests for move_section."""

    def test_move_down_swaps(self, sections):
        result = section_store.move_section(sections, "hero-1", MoveDirection.DOWN)
        assert _ids_in_order(result) == ["about-1", "hero-1", "culture-1", "jobs-1"]
        assert _orders(result) == [0, 1, 2, 3]

    def test_move_up_then_down_restores(self, sections):
        moved = section_store.move_section(sections, "culture-1", "up")
        restored = section_store.move_section(moved, "culture-1", "down")
        assert _ids_in_order(restored) == _ids_in_order(sections)

    def test_boundary_moves_are_noops(self, sections):
        assert section_store.move_section(sections, "hero-1", "up") == sections
        assert section_store.move_section(sections, "jobs-1", "down") == sections

    def test_invalid_direction(self, sections):
        with pytest.raises(ValueError):
            section_store.move_section(sections, "hero-1", "left")


class TestToggleAndUpdates:
    """Tests for toggle_enabled and the update operations."""

    def test_toggle_keeps_order(self, sections):
        result = section_store.toggle_enabled(sections, "about-1")
        toggled = next(s for s in result if s.id == "about-1")
        assert toggled.enabled is False
        assert toggled.order == 1
        assert section_store.toggle_enabled(result, "about-1") == sections

    def test_update_config_shallow_merge(self, sections):
        result, hero = section_store.add_section(sections, "hero")
        result = section_store.update_config(result, hero.id, {"backgroundType": "color"})
        result = section_store.update_config(result, hero.id, {"backgroundValue": "#000000"})

        updated = next(s for s in result if s.id == hero.id)
        assert updated.config.background_type == "color"
        assert updated.config.background_value == "#000000"

    def test_update_config_revalidates(self, sections):
        with pytest.raises(SectionValidationError):
            section_store.update_config(sections, "about-1", {"layout": "diagonal"})

    def test_gallery_url_edit_keeps_captions(self):
        sections = validate_sections(
            [
                {
                    "id": "g",
                    "type": "gallery",
                    "order": 0,
                    "config": {"images": [{"url": "/a.png", "caption": "Offsite"}]},
                }
            ]
        )
        result = section_store.update_config(sections, "g", {"imageUrls": ["/a.png", "/b.png"]})
        images = result[0].config.images
        assert [(i.url, i.caption) for i in images] == [("/a.png", "Offsite"), ("/b.png", "")]

    def test_gallery_cleared_with_empty_images(self):
        sections = validate_sections(
            [{"id": "g", "type": "gallery", "order": 0, "config": {"imageUrls": ["/a.png", "/b.png"]}}]
        )
        assert len(sections[0].config.images) == 2

        result = section_store.update_config(sections, "g", {"images": []})
        assert result[0].config.images == []
        assert result[0].config.to_document()["imageUrls"] == []

    def test_gallery_images_edit_rebuilds_urls(self):
        sections = validate_sections(
            [{"id": "g", "type": "gallery", "order": 0, "config": {"imageUrls": ["/a.png", "/b.png"]}}]
        )
        result = section_store.update_config(
            sections, "g", {"images": [{"url": "/c.png", "caption": "Launch day"}]}
        )
        assert result[0].config.to_document()["imageUrls"] == ["/c.png"]

    def test_update_theme_and_reset(self, sections):
        result = section_store.update_theme(sections, "about-1", {"backgroundColor": "#000000"})
        result = section_store.update_theme(result, "about-1", {"textColor": "#ffffff"})
        themed = next(s for s in result if s.id == "about-1")
        assert themed.theme.background_color == "#000000"
        assert themed.theme.text_color == "#FFFFFF"

        reset = section_store.reset_theme(result, "about-1")
        assert next(s for s in reset if s.id == "about-1").theme is None

    def test_update_theme_empty_value_clears_field(self, sections):
        result = section_store.update_theme(sections, "about-1", {"backgroundColor": "#000000"})
        result = section_store.update_theme(result, "about-1", {"backgroundColor": ""})
        assert next(s for s in result if s.id == "about-1").theme is None

    def test_update_fields_ignores_order_and_config(self, sections):
        result = section_store.update_fields(
            sections, "about-1", {"title": "Who we are", "order": 9, "config": {"layout": "left"}}
        )
        updated = next(s for s in result if s.id == "about-1")
        assert updated.title == "Who we are"
        assert updated.order == 1
        assert updated.config.layout == "center"

    @pytest.mark.parametrize("new_id", ["hero-1", "brand-new", ["about-1"]])
    def test_update_fields_cannot_change_id(self, sections, new_id):
        with pytest.raises(SectionValidationError, match="cannot be changed"):
            section_store.update_fields(sections, "about-1", {"id": new_id})

    def test_update_fields_same_id_is_allowed(self, sections):
        result = section_store.update_fields(sections, "about-1", {"id": "about-1", "title": "Us"})
        assert next(s for s in result if s.id == "about-1").title == "Us"
        assert [s.id for s in result] == [s.id for s in sections]

    @pytest.mark.parametrize("kind", [["hero"], {"kind": "hero"}])
    def test_update_fields_unhashable_kind(self, sections, kind):
        with pytest.raises(InvalidKindError):
            section_store.update_fields(sections, "about-1", {"type": kind})

    def test_update_unknown_section(self, sections):
        with pytest.raises(SectionNotFoundError):
            section_store.update_fields(sections, "nope", {"title": "x"})

    def test_operations_do_not_mutate_input(self, sections):
        snapshot = [s.to_document() for s in sections]
        section_store.update_fields(sections, "hero-1", {"title": "Changed"})
        section_store.toggle_enabled(sections, "hero-1")
        section_store.move_section(sections, "hero-1", "down")
        section_store.remove_section(sections, "hero-1")
        assert [s.to_document() for s in sections] == snapshot


class TestMixedEditSequences:
    """Order stays dense across interleaved add, remove and move calls."""

    @pytest.mark.parametrize("seed", range(8))
    def test_orders_stay_dense(self, sections, seed):
        rng = random.Random(seed)
        kinds = [kind.value for kind in SectionKind]
        result = sections

        for step in range(60):
            action = rng.choice(["add", "remove", "move"])
            if action == "add":
                result, _ = section_store.add_section(result, rng.choice(kinds))
            elif action == "remove":
                result = section_store.remove_section(result, rng.choice(result).id)
            else:
                target = rng.choice(result).id
                result = section_store.move_section(result, target, rng.choice(["up", "down"]))

            assert _orders(result) == list(range(len(result))), f"step {step}: {action}"
            assert len({s.id for s in result}) == len(result)
            assert len(result) >= 1

    def test_scripted_sequence(self, sections):
        result, cta = section_store.add_section(sections, "cta")
        result = section_store.move_section(result, cta.id, "up")
        result = section_store.remove_section(result, "hero-1")
        result, video = section_store.add_section(result, "video")
        result = section_store.move_section(result, video.id, "up")
        result = section_store.move_section(result, video.id, "up")
        result = section_store.remove_section(result, "jobs-1")

        assert _ids_in_order(result) == ["about-1", "culture-1", video.id, cta.id]
        assert [s.order for s in section_store.sorted_sections(result)] == [0, 1, 2, 3]
