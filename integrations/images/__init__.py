"""Prompt-to-image backends."""

from integrations.images.backends import (
    GeneratedImage,
    ImageBackend,
    ImageBackendError,
    PlaceholderImageBackend,
)

__all__ = [
    "GeneratedImage",
    "ImageBackend",
    "ImageBackendError",
    "PlaceholderImageBackend",
]
