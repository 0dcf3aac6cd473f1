"""
Image backend using the OpenAI Images API.

Without a selfie reference it calls `images.generate`; with
`use_selfie_reference=True` it calls `images.edit` so the model can place the
user in the scene.
"""

from __future__ import annotations

import base64
import logging
import os
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from integrations.images.backends import GeneratedImage, ImageBackendError
from utils.image_utils import aspect_ratio

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MODEL = "gpt-image-1"
DEFAULT_IMAGE_SIZE = "1024x1024"


def _aspect_ratio(size: str) -> float:
    try:
        width, height = (int(part) for part in size.lower().split("x"))
    except ValueError:
        return 1.0
    return width / height if height else 1.0


class OpenAIImageBackend:
    """Generates board images with an OpenAI image model."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_IMAGE_MODEL,
        size: str = DEFAULT_IMAGE_SIZE,
        use_selfie_reference: bool = False,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.client = client or AsyncOpenAI(api_key=api_key or os.getenv("OPENAI_API_KEY"))
        self.model = model
        self.size = size
        self.use_selfie_reference = use_selfie_reference

    async def generate(
        self,
        prompt: str,
        *,
        selfie_bytes: bytes,
        position: int,
    ) -> GeneratedImage:
        try:
            if self.use_selfie_reference and selfie_bytes:
                response = await self.client.images.edit(
                    model=self.model,
                    image=("selfie.jpg", selfie_bytes, "image/jpeg"),
                    prompt=prompt,
                    size=self.size,
                )
            else:
                response = await self.client.images.generate(
                    model=self.model,
                    prompt=prompt,
                    size=self.size,
                    n=1,
                )
        except OpenAIError as e:
            logger.error(f"OpenAI image generation failed for position {position}: {e}")
            raise ImageBackendError(f"Image generation failed: {e}") from e

        if not response.data:
            raise ImageBackendError("Image generation returned no data")
        item = response.data[0]
        image_data = base64.b64decode(item.b64_json) if item.b64_json else None
        ratio = aspect_ratio(image_data) if image_data else None
        return GeneratedImage(
            image_url=item.url,
            image_data=image_data,
            aspect_ratio=ratio or _aspect_ratio(self.size),
        )
