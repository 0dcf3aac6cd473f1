"""Utility functions for the Vision Board Assistant."""

from .image_utils import aspect_ratio, mirror_to_jpeg, validate_image_bytes
from .logging_config import setup_logging

__all__ = [
    "aspect_ratio",
    "mirror_to_jpeg",
    "validate_image_bytes",
    "setup_logging",
]
