"""Board generation feature: affirmations, prompts, image assembly."""

from features.board_generation.config import PipelineConfig, build_image_backend
from features.board_generation.content_generator import (
    ContentGenerator,
    generate_affirmations,
    generate_image_prompts,
)
from features.board_generation.pipeline import BoardPipeline

__all__ = [
    "PipelineConfig",
    "build_image_backend",
    "ContentGenerator",
    "generate_affirmations",
    "generate_image_prompts",
    "BoardPipeline",
]
