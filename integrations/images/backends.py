"""Image backend contract and the placeholder implementation."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

PLACEHOLDER_URL_TEMPLATE = "https://picsum.photos/400/400?random={position}"


class ImageBackendError(Exception):
    """The backend could not produce an image for a prompt."""


@dataclass
class GeneratedImage:
    """Result of one generation call: a remote reference, raw bytes, or both."""

    image_url: Optional[str] = None
    image_data: Optional[bytes] = None
    aspect_ratio: float = 1.0

    def __post_init__(self) -> None:
        if self.image_url is None and self.image_data is None:
            raise ImageBackendError("Generated image has neither a URL nor data")


class ImageBackend(Protocol):
    """Asynchronous prompt-to-image contract used by the pipeline."""

    async def generate(
        self,
        prompt: str,
        *,
        selfie_bytes: bytes,
        position: int,
    ) -> GeneratedImage:
        ...


class PlaceholderImageBackend:
    """Returns stock placeholder URLs instead of calling a model."""

    def __init__(self, url_template: str = PLACEHOLDER_URL_TEMPLATE, delay_seconds: float = 0.0):
        self.url_template = url_template
        self.delay_seconds = delay_seconds

    async def generate(
        self,
        prompt: str,
        *,
        selfie_bytes: bytes,
        position: int,
    ) -> GeneratedImage:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        url = self.url_template.format(position=position)
        logger.debug(f"Placeholder image {position}: {url}")
        return GeneratedImage(image_url=url)
