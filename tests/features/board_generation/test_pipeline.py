"""Tests for the board assembly pipeline."""

import asyncio

import pytest

from core.catalog import SubscriptionTier, VisionBoardLayout, VisionBoardStyle
from core.errors import (
    AlreadyGeneratingError,
    BoardLimitReachedError,
    GenerationFailure,
    InvalidInputError,
    NotSignedInError,
)
from core.state import GenerationStage
from features.board_generation.config import PipelineConfig
from features.board_generation.pipeline import BoardPipeline
from integrations.images.backends import GeneratedImage, ImageBackendError, PlaceholderImageBackend


class FailingBackend:
    def __init__(self, fail_at: int):
        self.fail_at = fail_at
        self.calls = 0

    async def generate(self, prompt, *, selfie_bytes, position):
        self.calls += 1
        if position == self.fail_at:
            raise ImageBackendError("model unavailable")
        return GeneratedImage(image_url=f"https://example.com/{position}")


class BlockingBackend:
    """Waits on an event before returning each image."""

    def __init__(self):
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def generate(self, prompt, *, selfie_bytes, position):
        self.started.set()
        await self.release.wait()
        return GeneratedImage(image_data=b"png", aspect_ratio=1.5)


def _pipeline(repository, ledger, backend=None):
    return BoardPipeline(
        repository,
        ledger=ledger,
        image_backend=backend or PlaceholderImageBackend(),
        config=PipelineConfig(step_delay_seconds=0),
    )


def _record(pipeline):
    snapshots = []
    pipeline.add_observer(snapshots.append)
    return snapshots


@pytest.fixture
def signed_in(ledger):
    ledger.sign_up("sam@example.com", "Sam")
    ledger.update_tier(SubscriptionTier.PRO)
    return ledger


@pytest.mark.asyncio
async def test_grid_board_progress_and_result(repository, signed_in, selfie_bytes):
    pipeline = _pipeline(repository, signed_in)
    snapshots = _record(pipeline)

    board = await pipeline.create_board(
        "My Dream Life",
        "Living by the ocean",
        selfie_bytes,
        layout=VisionBoardLayout.GRID_3X3,
        style=VisionBoardStyle.CINEMATIC,
        goals=["Dream Home", "Travel"],
    )

    progress = [s["progress"] for s in snapshots]
    expected = [0.2, 0.4] + [0.4 + 0.5 * (i + 1) / 9 for i in range(9)] + [1.0]
    assert progress == pytest.approx(expected)
    assert progress == sorted(progress)
    assert snapshots[0]["stage"] == "affirmations_generated"
    assert snapshots[-1]["stage"] == "complete"
    assert snapshots[-1]["is_generating"] is False
    assert [s["images_completed"] for s in snapshots[2:-1]] == list(range(1, 10))

    assert len(board.images) == 9
    assert [image.position for image in board.images] == list(range(9))
    assert len(board.affirmations) == 5
    assert board.manifestation_goals == ["Dream Home", "Travel"]
    assert board.is_personalized
    assert board.owner_id == signed_in.current_user.id
    assert board.user_image_data == selfie_bytes

    assert repository.list() == [board]
    assert signed_in.current_user.vision_board_count == 1
    assert pipeline.state.stage == GenerationStage.COMPLETE


@pytest.mark.asyncio
async def test_single_poster(repository, signed_in, selfie_bytes):
    pipeline = _pipeline(repository, signed_in)
    board = await pipeline.create_board(
        "Poster", "One image", selfie_bytes, layout="poster", style="natural",
    )
    assert len(board.images) == 1
    assert board.layout == VisionBoardLayout.SINGLE_POSTER
    assert board.images[0].image_url == "https://picsum.photos/400/400?random=0"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "title, description, selfie",
    [
        ("Title", "", b"selfie"),
        ("Title", "   ", b"selfie"),
        ("", "Description", b"selfie"),
        ("Title", "Description", b""),
    ],
)
async def test_invalid_input_is_rejected_before_any_work(repository, signed_in, title, description, selfie):
    pipeline = _pipeline(repository, signed_in)
    snapshots = _record(pipeline)

    with pytest.raises(InvalidInputError):
        await pipeline.create_board(title, description, selfie)

    assert snapshots == []
    assert repository.list() == []
    assert signed_in.current_user.vision_board_count == 0
    assert not pipeline.is_generating


@pytest.mark.asyncio
async def test_unknown_layout_is_invalid_input(repository, signed_in, selfie_bytes):
    pipeline = _pipeline(repository, signed_in)
    with pytest.raises(InvalidInputError):
        await pipeline.create_board("T", "D", selfie_bytes, layout="4x4")


@pytest.mark.asyncio
async def test_free_tier_limit(repository, ledger, selfie_bytes):
    ledger.sign_up("sam@example.com", "Sam")
    ledger.increment_board_count()
    pipeline = _pipeline(repository, ledger)
    snapshots = _record(pipeline)

    with pytest.raises(BoardLimitReachedError):
        await pipeline.create_board("T", "D", selfie_bytes)

    assert snapshots == []
    assert repository.list() == []
    assert ledger.current_user.vision_board_count == 1


@pytest.mark.asyncio
async def test_signed_out_user_cannot_create(repository, ledger, selfie_bytes):
    pipeline = _pipeline(repository, ledger)
    snapshots = _record(pipeline)
    with pytest.raises(NotSignedInError, match="Not signed in"):
        await pipeline.create_board("T", "D", selfie_bytes)
    assert snapshots == []
    assert repository.list() == []


@pytest.mark.asyncio
async def test_without_ledger_boards_are_unowned(repository, selfie_bytes):
    pipeline = _pipeline(repository, None)
    board = await pipeline.create_board("T", "D", selfie_bytes, layout=VisionBoardLayout.SINGLE_POSTER)
    assert board.owner_id is None


@pytest.mark.asyncio
async def test_backend_failure_leaves_nothing_persisted(repository, signed_in, selfie_bytes):
    backend = FailingBackend(fail_at=2)
    pipeline = _pipeline(repository, signed_in, backend)
    snapshots = _record(pipeline)

    with pytest.raises(GenerationFailure) as excinfo:
        await pipeline.create_board("T", "D", selfie_bytes, layout=VisionBoardLayout.COLLAGE)

    assert isinstance(excinfo.value.__cause__, ImageBackendError)
    assert backend.calls == 3
    assert pipeline.state.stage == GenerationStage.FAILED
    assert pipeline.state.error_message.startswith("Failed to create vision board")
    assert not pipeline.is_generating
    assert snapshots[-1]["stage"] == "failed"
    assert repository.list() == []
    assert signed_in.current_user.vision_board_count == 0


@pytest.mark.asyncio
async def test_pipeline_recovers_after_failure(repository, signed_in, selfie_bytes):
    pipeline = _pipeline(repository, signed_in, FailingBackend(fail_at=0))
    with pytest.raises(GenerationFailure):
        await pipeline.create_board("T", "D", selfie_bytes, layout=VisionBoardLayout.SINGLE_POSTER)

    pipeline.image_backend = PlaceholderImageBackend()
    board = await pipeline.create_board("T", "D", selfie_bytes, layout=VisionBoardLayout.SINGLE_POSTER)
    assert pipeline.state.error_message is None
    assert repository.get(board.id).title == "T"


@pytest.mark.asyncio
async def test_concurrent_create_is_rejected(repository, signed_in, selfie_bytes):
    backend = BlockingBackend()
    pipeline = _pipeline(repository, signed_in, backend)

    first = asyncio.create_task(
        pipeline.create_board("First", "D", selfie_bytes, layout=VisionBoardLayout.SINGLE_POSTER)
    )
    await backend.started.wait()
    assert pipeline.is_generating

    with pytest.raises(AlreadyGeneratingError):
        await pipeline.create_board("Second", "D", selfie_bytes)

    backend.release.set()
    board = await first
    assert board.title == "First"
    assert [b.title for b in repository.list()] == ["First"]


@pytest.mark.asyncio
async def test_cancel_resets_to_idle(repository, signed_in, selfie_bytes):
    backend = BlockingBackend()
    pipeline = _pipeline(repository, signed_in, backend)
    snapshots = _record(pipeline)

    task = asyncio.create_task(pipeline.create_board("T", "D", selfie_bytes))
    await backend.started.wait()
    assert pipeline.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert pipeline.state.stage == GenerationStage.IDLE
    assert pipeline.state.progress == 0.0
    assert not pipeline.is_generating
    assert snapshots[-1]["stage"] == "idle"
    assert repository.list() == []
    assert signed_in.current_user.vision_board_count == 0
    assert not pipeline.cancel()


@pytest.mark.asyncio
async def test_observer_errors_do_not_stop_generation(repository, signed_in, selfie_bytes):
    pipeline = _pipeline(repository, signed_in)

    def broken(snapshot):
        raise RuntimeError("ui went away")

    pipeline.add_observer(broken)
    board = await pipeline.create_board("T", "D", selfie_bytes, layout=VisionBoardLayout.SINGLE_POSTER)
    assert board.is_complete

    pipeline.remove_observer(broken)
    pipeline.remove_observer(broken)
