"""Tests for the layout, style and tier tables."""

import pytest

from core.catalog import (
    BASE_AFFIRMATIONS,
    BASE_PROMPT_TEMPLATES,
    SubscriptionTier,
    VisionBoardLayout,
    VisionBoardStyle,
)


@pytest.mark.parametrize(
    "layout, count, name",
    [
        (VisionBoardLayout.GRID_3X3, 9, "3×3 Grid"),
        (VisionBoardLayout.COLLAGE, 6, "Collage"),
        (VisionBoardLayout.SINGLE_POSTER, 1, "Single Poster"),
    ],
)
def test_layouts(layout, count, name):
    assert layout.image_count == count
    assert layout.display_name == name


def test_layout_values_are_persisted_strings():
    assert VisionBoardLayout("3x3") is VisionBoardLayout.GRID_3X3
    assert VisionBoardLayout("poster") is VisionBoardLayout.SINGLE_POSTER


def test_every_style_has_prefix_and_affirmation():
    affirmations = {style.info.affirmation for style in VisionBoardStyle}
    assert len(affirmations) == len(VisionBoardStyle)
    for style in VisionBoardStyle:
        assert style.prompt_prefix.endswith(",")
        assert len(style.info.gradient_colors) == 2


def test_tier_limits():
    assert [tier.max_boards for tier in SubscriptionTier] == [1, 50, None]


def test_base_tables():
    assert len(BASE_AFFIRMATIONS) == 5
    assert len(BASE_PROMPT_TEMPLATES) == 9
    assert all("{prefix}" in template for template in BASE_PROMPT_TEMPLATES)
