"""Pipeline settings, read from the environment and `.env`."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from integrations.images.backends import (
    PLACEHOLDER_URL_TEMPLATE,
    ImageBackend,
    PlaceholderImageBackend,
)


class PipelineConfig(BaseSettings):
    """Pydantic config for the board generation pipeline. Env prefix: VB_."""

    model_config = SettingsConfigDict(
        env_prefix="VB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    image_backend: Literal["placeholder", "openai"] = Field(
        default="placeholder",
        description="Which image backend produces board images",
    )
    step_delay_seconds: float = Field(
        default=0.0,
        ge=0.0,
        description="Pause after each pipeline step (affirmations, each image)",
    )
    placeholder_url_template: str = Field(
        default=PLACEHOLDER_URL_TEMPLATE,
        description="URL template for placeholder images; {position} is substituted",
    )
    openai_image_model: str = Field(
        default="gpt-image-1",
        description="OpenAI image model used when image_backend is 'openai'",
    )
    openai_image_size: str = Field(
        default="1024x1024",
        description="Requested image size, WIDTHxHEIGHT",
    )
    use_selfie_reference: bool = Field(
        default=False,
        description="Send the selfie to the image backend as a reference image",
    )


def build_image_backend(config: PipelineConfig) -> ImageBackend:
    """Instantiate the backend named by `config.image_backend`."""
    if config.image_backend == "openai":
        from integrations.images.openai_backend import OpenAIImageBackend

        return OpenAIImageBackend(
            model=config.openai_image_model,
            size=config.openai_image_size,
            use_selfie_reference=config.use_selfie_reference,
        )
    return PlaceholderImageBackend(url_template=config.placeholder_url_template)
