"""
Board assembly pipeline.

Runs the generation steps in order on a single asyncio task:

    idle -> affirmations_generated (0.2) -> images_generating (0.4 .. 0.9)
         -> complete (1.0)

Any step failure moves the state to `failed`. A finished board is handed to
the repository only once every step has succeeded, so callers either get a
fully assembled board or nothing.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Sequence

from core.catalog import VisionBoardLayout, VisionBoardStyle
from core.errors import (
    AlreadyGeneratingError,
    BoardLimitReachedError,
    GenerationFailure,
    InvalidInputError,
    NotSignedInError,
)
from core.ledger import EntitlementLedger
from core.models import VisionBoard, VisionBoardImage, utcnow
from core.repository import BoardRepository
from core.state import STAGE_PROGRESS, GenerationStage, GenerationState, image_progress
from features.board_generation.config import PipelineConfig, build_image_backend
from features.board_generation.content_generator import ContentGenerator
from integrations.images.backends import ImageBackend

logger = logging.getLogger(__name__)

ProgressObserver = Callable[[dict], None]


class BoardPipeline:
    """
    Generates one vision board at a time.

    A second `create_board` call while one is in flight is rejected with
    AlreadyGeneratingError rather than queued.
    """

    def __init__(
        self,
        repository: BoardRepository,
        ledger: Optional[EntitlementLedger] = None,
        generator: Optional[ContentGenerator] = None,
        image_backend: Optional[ImageBackend] = None,
        config: Optional[PipelineConfig] = None,
    ):
        self.config = config or PipelineConfig()
        self.repository = repository
        self.ledger = ledger
        self.generator = generator or ContentGenerator()
        self.image_backend = image_backend or build_image_backend(self.config)
        self.state = GenerationState()
        self._observers: list[ProgressObserver] = []
        self._task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_observer(self, observer: ProgressObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: ProgressObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self) -> None:
        snapshot = self.state.snapshot()
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Progress observer raised")

    def _transition(self, stage: Optional[GenerationStage] = None, **fields) -> None:
        if stage is not None:
            self.state.stage = stage
            logger.info(f"Stage -> {stage.value}")
        self.state.update(**fields)
        self._notify()

    @property
    def is_generating(self) -> bool:
        return self.state.is_generating

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(
        title: str,
        description: str,
        selfie_bytes: bytes,
        layout,
        style,
    ) -> tuple[VisionBoardLayout, VisionBoardStyle]:
        if not selfie_bytes:
            raise InvalidInputError("A selfie image is required")
        if not title or not title.strip():
            raise InvalidInputError("A title is required")
        if not description or not description.strip():
            raise InvalidInputError("A description is required")
        try:
            return VisionBoardLayout(layout), VisionBoardStyle(style)
        except ValueError as e:
            raise InvalidInputError(str(e)) from e

    async def create_board(
        self,
        title: str,
        description: str,
        selfie_bytes: bytes,
        layout: VisionBoardLayout = VisionBoardLayout.GRID_3X3,
        style: VisionBoardStyle = VisionBoardStyle.CINEMATIC,
        goals: Sequence[str] = (),
    ) -> VisionBoard:
        """
        Generate, persist and return a new vision board.

        Raises:
            InvalidInputError: a required field is empty (nothing reported).
            AlreadyGeneratingError: another generation is in flight.
            NotSignedInError: a ledger is attached but nobody is signed in.
            BoardLimitReachedError: the current user's tier is exhausted.
            GenerationFailure: a step failed; state is `failed`, nothing saved.
            asyncio.CancelledError: cancelled; state is back to `idle`.
        """
        layout, style = self._validate(title, description, selfie_bytes, layout, style)
        if self.state.is_generating:
            raise AlreadyGeneratingError("A vision board is already being generated")
        if self.ledger is not None and not self.ledger.is_logged_in:
            raise NotSignedInError("Not signed in")
        if self.ledger is not None and not self.ledger.can_create_board():
            raise BoardLimitReachedError("Board limit reached for the current subscription")

        goals = list(goals)
        self._task = asyncio.current_task()
        self.state.reset()
        self.state.update(
            is_generating=True,
            current_title=title,
            images_total=layout.image_count,
        )
        logger.info(f"Generating {layout.value} board {title!r} in {style.value} style")

        try:
            return await self._run(title, description, selfie_bytes, layout, style, goals)
        except asyncio.CancelledError:
            logger.info(f"Generation of {title!r} cancelled")
            self.state.reset()
            self._notify()
            raise
        except GenerationFailure as e:
            self._fail(str(e))
            raise
        except Exception as e:
            message = f"Failed to create vision board: {e}"
            self._fail(message)
            raise GenerationFailure(message) from e
        finally:
            self._task = None

    def _fail(self, message: str) -> None:
        logger.error(message)
        self._transition(GenerationStage.FAILED, error_message=message, is_generating=False)

    async def _pause(self) -> None:
        await asyncio.sleep(self.config.step_delay_seconds)

    async def _run(
        self,
        title: str,
        description: str,
        selfie_bytes: bytes,
        layout: VisionBoardLayout,
        style: VisionBoardStyle,
        goals: list[str],
    ) -> VisionBoard:
        affirmations = self.generator.generate_affirmations(description, goals, style)
        self._transition(
            GenerationStage.AFFIRMATIONS_GENERATED,
            progress=STAGE_PROGRESS[GenerationStage.AFFIRMATIONS_GENERATED],
        )
        await self._pause()

        count = layout.image_count
        prompts = self.generator.generate_image_prompts(description, goals, style, count)
        if len(prompts) != count:
            raise GenerationFailure(f"Expected {count} image prompts, got {len(prompts)}")
        self._transition(
            GenerationStage.IMAGES_GENERATING,
            progress=STAGE_PROGRESS[GenerationStage.IMAGES_GENERATING],
        )

        images: list[VisionBoardImage] = []
        for index, prompt in enumerate(prompts):
            result = await self.image_backend.generate(
                prompt,
                selfie_bytes=selfie_bytes,
                position=index,
            )
            images.append(
                VisionBoardImage(
                    prompt=prompt,
                    position=index,
                    is_personalized=True,
                    image_url=result.image_url,
                    image_data=result.image_data,
                    aspect_ratio=result.aspect_ratio,
                )
            )
            self._transition(progress=image_progress(index + 1, count), images_completed=index + 1)
            await self._pause()

        owner = self.ledger.current_user if self.ledger is not None else None
        now = utcnow()
        board = VisionBoard(
            title=title,
            description=description,
            user_image_data=selfie_bytes,
            layout=layout,
            style=style,
            images=images,
            affirmations=affirmations,
            created_at=now,
            updated_at=now,
            is_personalized=True,
            manifestation_goals=goals,
            owner_id=owner.id if owner is not None else None,
        )
        saved = self.repository.create(board)
        self._transition(
            GenerationStage.COMPLETE,
            progress=STAGE_PROGRESS[GenerationStage.COMPLETE],
            is_generating=False,
        )
        logger.info(f"Vision board {saved.id} complete with {len(saved.images)} images")
        return saved

    def cancel(self) -> bool:
        """Cancel the task running the current generation, if any."""
        if self._task is None or self._task.done():
            return False
        self._task.cancel()
        return True
