"""Tests for color parsing and derivation."""

import logging

import pytest

from prioritywheel.core.application.color_service import (
    DEFAULT_PALETTE,
    ColorParseError,
    ColorService,
    HslaColor,
    parse_color,
)
from prioritywheel.core.domain.models import Category


class TestParseColor:
    """Tests for parse_color."""

    def test_hsl(self):
        color = parse_color("hsl(262, 83%, 58%)")

        assert color.hue == pytest.approx(262)
        assert color.saturation == pytest.approx(0.83)
        assert color.lightness == pytest.approx(0.58)
        assert color.alpha == 1.0

    def test_hsla_with_alpha(self):
        assert parse_color("hsla(10, 50%, 40%, 0.25)").alpha == pytest.approx(0.25)

    def test_space_syntax_with_percent_alpha(self):
        color = parse_color("hsl(120deg 40% 30% / 50%)")

        assert color.hue == pytest.approx(120)
        assert color.alpha == pytest.approx(0.5)

    def test_hex_is_converted_to_hsl(self):
        color = parse_color("#ff0000")

        assert color.hue == pytest.approx(0)
        assert color.saturation == pytest.approx(1)
        assert color.lightness == pytest.approx(0.5)

    def test_rgb(self):
        color = parse_color("rgb(0, 0, 255)")

        assert color.hue == pytest.approx(240)
        assert color.to_hex() == "#0000ff"

    def test_named_color(self):
        assert parse_color("green").hue == pytest.approx(120)

    @pytest.mark.parametrize("text", ["", "   ", "not-a-color", "hsl(1, 2, 3)", None])
    def test_invalid_color_raises(self, text):
        with pytest.raises(ColorParseError):
            parse_color(text)


class TestHslaColor:
    def test_values_are_normalized(self):
        color = HslaColor(hue=370, saturation=1.5, lightness=-0.1, alpha=2)

        assert (color.hue, color.saturation, color.lightness, color.alpha) == (10, 1, 0, 1)

    def test_css_serialization(self):
        assert HslaColor(262, 0.83, 0.58, 0.7).to_css() == "hsla(262, 83%, 58%, 0.7)"

    def test_css_round_trip(self):
        color = HslaColor(199, 0.89, 0.48, 0.35)
        assert parse_color(color.to_css()) == color


class TestColorService:
    """Tests for palette and derived colors."""

    def test_palette_is_cyclic(self):
        service = ColorService()

        assert service.palette_size == len(DEFAULT_PALETTE) == 8
        assert service.palette_color(0) == service.palette_color(8)
        assert service.palette_color(1) != service.palette_color(0)

    def test_category_zero_and_eight_share_color(self):
        service = ColorService()
        first = Category(id="a", title="A")
        ninth = Category(id="i", title="I")

        assert service.category_color(first, 0) == service.category_color(ninth, 8)

    def test_group_color_is_related_but_distinct(self):
        service = ColorService()
        base = service.category_color(Category(id="a", title="A"), 0)
        group = service.group_color(base)

        assert group != base
        assert group.hue == base.hue
        assert group.saturation == base.saturation
        assert group.lightness == base.lightness
        assert group.alpha == pytest.approx(0.7)

    def test_item_color(self):
        service = ColorService()
        base = service.palette_color(3)

        item = service.item_color(service.group_color(base))

        assert item.hue == base.hue
        assert item.alpha == pytest.approx(0.5)

    def test_derivation_from_non_hsl_explicit_color(self):
        service = ColorService()
        base = service.category_color(Category(id="a", title="A", color="#336699"), 0)

        group = service.group_color(base)

        assert group.alpha == pytest.approx(0.7)
        assert group.to_hex() == "#336699"

    def test_explicit_color_wins(self):
        service = ColorService()
        category = Category(id="a", title="A", color="hsl(10, 50%, 40%)")

        assert service.category_color(category, 0).hue == pytest.approx(10)

    def test_invalid_explicit_color_falls_back_to_palette(self, caplog):
        service = ColorService()
        category = Category(id="a", title="A", color="definitely-not-a-color")

        with caplog.at_level(logging.WARNING):
            color = service.category_color(category, 2)

        assert color == service.palette_color(2)
        assert "invalid color" in caplog.text

    def test_custom_palette(self):
        service = ColorService(palette=["#ff0000", "#00ff00"])

        assert service.palette_size == 2
        assert service.palette_color(2).to_hex() == "#ff0000"

    def test_invalid_alpha_rejected(self):
        with pytest.raises(ValueError):
            ColorService(group_alpha=0)
