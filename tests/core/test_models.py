"""Tests for board and user models."""

import json
from datetime import timedelta

import pytest
from pydantic import ValidationError

from core.catalog import SubscriptionTier, VisionBoardLayout, VisionBoardStyle
from core.models import User, VisionBoard, VisionBoardImage, utcnow


def _board(**overrides) -> VisionBoard:
    fields = dict(
        title="Dream Life",
        description="A year of growth",
        user_image_data=b"\xff\xd8selfie",
        layout=VisionBoardLayout.COLLAGE,
        style=VisionBoardStyle.NATURAL,
        images=[
            VisionBoardImage(prompt="first", position=0, image_url="https://example.com/0"),
            VisionBoardImage(prompt="second", position=1, image_data=b"\x89PNG", aspect_ratio=1.5),
        ],
        affirmations=["I am calm", "I am bold"],
        manifestation_goals=["Dream Home", "Travel"],
    )
    fields.update(overrides)
    return VisionBoard(**fields)


def test_board_json_round_trip_reproduces_entity():
    """Serialize to the persisted format and back: every field survives."""
    board = _board(view_count=3, is_favorite=True)
    payload = json.loads(json.dumps(board.to_json_dict()))
    restored = VisionBoard.model_validate(payload)

    assert restored == board
    assert [image.position for image in restored.images] == [0, 1]
    assert restored.images[1].image_data == b"\x89PNG"
    assert restored.user_image_data == b"\xff\xd8selfie"


def test_persisted_field_names_are_camel_case():
    data = _board().to_json_dict()
    assert "userImageData" in data
    assert "manifestationGoals" in data
    assert "isFavorite" in data
    assert data["layout"] == "collage"
    assert data["images"][0]["imageUrl"] == "https://example.com/0"
    # bytes are base64 text on disk
    assert isinstance(data["userImageData"], str)


def test_toggle_favorite_twice_restores_flag_and_bumps_updated_at():
    board = _board()
    original = board.is_favorite
    first_stamp = board.updated_at

    board.toggle_favorite()
    second_stamp = board.updated_at
    board.toggle_favorite()

    assert board.is_favorite == original
    assert first_stamp < second_stamp < board.updated_at


def test_increment_view_count_bumps_updated_at():
    board = _board()
    before = board.updated_at
    board.increment_view_count()
    assert board.view_count == 1
    assert board.updated_at > before


def test_updated_at_before_created_at_rejected():
    now = utcnow()
    with pytest.raises(ValidationError):
        _board(created_at=now, updated_at=now - timedelta(seconds=1))


def test_image_positions_must_be_contiguous():
    with pytest.raises(ValidationError):
        _board(images=[
            VisionBoardImage(prompt="a", position=0),
            VisionBoardImage(prompt="b", position=2),
        ])


def test_is_complete_tracks_layout_image_count():
    board = _board(layout=VisionBoardLayout.SINGLE_POSTER, images=[
        VisionBoardImage(prompt="poster", position=0),
    ])
    assert board.is_complete
    assert not _board().is_complete  # collage expects 6


def test_matches_searches_title_description_and_goals():
    board = _board()
    assert board.matches("dream")
    assert board.matches("GROWTH")
    assert board.matches("travel")
    assert not board.matches("yacht")
    assert board.matches("   ")


def test_affirmation_at_wraps_around():
    board = _board()
    assert board.affirmation_at(0) == "I am calm"
    assert board.affirmation_at(3) == "I am bold"
    assert _board(affirmations=[]).affirmation_at(0) is None


def test_share_text_lists_affirmations():
    text = _board().share_text()
    assert text.startswith("Check out my personalized vision board: Dream Life")
    assert "• I am calm\n• I am bold" in text
    assert text.endswith("See yourself living your dreams!")


def test_user_board_count_cannot_go_negative():
    with pytest.raises(ValidationError):
        User(email="a@b.c", username="a", vision_board_count=-1)


def test_user_defaults_and_tier_limit():
    user = User(email="sam@example.com", username="sam")
    assert user.subscription_type == SubscriptionTier.FREE
    assert user.max_vision_boards == 1
    assert user.preferences.preferred_layout == VisionBoardLayout.GRID_3X3
    restored = User.model_validate(json.loads(json.dumps(user.to_json_dict())))
    assert restored == user


def test_naive_timestamps_are_read_as_utc():
    data = _board().to_json_dict()
    data["createdAt"] = "2025-01-01T10:00:00"
    data["updatedAt"] = "2025-01-01T10:00:00"
    board = VisionBoard.model_validate(data)
    assert board.created_at.tzinfo is not None
    board.touch()
    assert board.updated_at > board.created_at
