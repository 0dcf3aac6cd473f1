"""Tests for the generation progress state."""

import pytest

from core.state import GenerationStage, GenerationState, image_progress


def test_update_and_snapshot():
    state = GenerationState()
    state.update(stage=GenerationStage.IMAGES_GENERATING, progress=0.4, images_total=9)
    snapshot = state.snapshot()
    assert snapshot["stage"] == "images_generating"
    assert snapshot["progress"] == 0.4
    assert snapshot["images_total"] == 9


def test_update_rejects_unknown_fields():
    state = GenerationState()
    with pytest.raises(AttributeError):
        state.update(progres=0.5)
    assert state.progress == 0.0


def test_reset():
    state = GenerationState(stage=GenerationStage.FAILED, error_message="boom", is_generating=True)
    state.reset()
    assert state == GenerationState()


def test_image_progress_spans_point_four_to_point_nine():
    assert image_progress(0, 6) == pytest.approx(0.4)
    assert image_progress(6, 6) == pytest.approx(0.9)
    assert image_progress(0, 0) == pytest.approx(0.4)
