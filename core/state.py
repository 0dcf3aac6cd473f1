"""Generation progress state shared between the pipeline and its observers."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional


class GenerationStage(str, Enum):
    IDLE = "idle"
    AFFIRMATIONS_GENERATED = "affirmations_generated"
    IMAGES_GENERATING = "images_generating"
    COMPLETE = "complete"
    FAILED = "failed"


# Progress fraction reported on entering each stage
STAGE_PROGRESS = {
    GenerationStage.IDLE: 0.0,
    GenerationStage.AFFIRMATIONS_GENERATED: 0.2,
    GenerationStage.IMAGES_GENERATING: 0.4,
    GenerationStage.COMPLETE: 1.0,
}

# Share of the progress bar covered by image generation (0.4 -> 0.9)
IMAGE_PROGRESS_SPAN = 0.5


def image_progress(completed: int, total: int) -> float:
    """Progress after `completed` of `total` images are done."""
    if total <= 0:
        return STAGE_PROGRESS[GenerationStage.IMAGES_GENERATING]
    return STAGE_PROGRESS[GenerationStage.IMAGES_GENERATING] + IMAGE_PROGRESS_SPAN * completed / total


@dataclass
class GenerationState:
    """Plain snapshot-able state of one pipeline instance."""

    stage: GenerationStage = GenerationStage.IDLE
    progress: float = 0.0
    is_generating: bool = False
    error_message: Optional[str] = None
    current_title: str = ""
    images_completed: int = 0
    images_total: int = 0

    def update(self, **kwargs) -> None:
        unknown = set(kwargs) - {f.name for f in fields(self)}
        if unknown:
            raise AttributeError(f"Unknown GenerationState fields: {sorted(unknown)}")
        for k, v in kwargs.items():
            setattr(self, k, v)

    def snapshot(self) -> dict:
        """Return a copy of all fields for observers to read."""
        return {
            "stage": self.stage.value,
            "progress": self.progress,
            "is_generating": self.is_generating,
            "error_message": self.error_message,
            "current_title": self.current_title,
            "images_completed": self.images_completed,
            "images_total": self.images_total,
        }

    def reset(self) -> None:
        self.stage = GenerationStage.IDLE
        self.progress = 0.0
        self.is_generating = False
        self.error_message = None
        self.current_title = ""
        self.images_completed = 0
        self.images_total = 0
