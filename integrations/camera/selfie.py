"""Selfie capture: face quality grading and image loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from core.errors import InvalidInputError
from utils.image_utils import mirror_to_jpeg, validate_image_bytes

logger = logging.getLogger(__name__)

SELFIE_JPEG_QUALITY = 80


class FaceQuality(str, Enum):
    UNKNOWN = "unknown"
    POOR = "poor"
    GOOD = "good"
    EXCELLENT = "excellent"

    @property
    def guidance(self) -> str:
        return FACE_GUIDANCE[self]


FACE_GUIDANCE = {
    FaceQuality.UNKNOWN: "Position your face in the circle",
    FaceQuality.POOR: "Move closer and look directly at camera",
    FaceQuality.GOOD: "Good! Hold steady",
    FaceQuality.EXCELLENT: "Perfect! Ready to capture",
}


@dataclass(frozen=True)
class FaceBox:
    """Normalized face bounding box (0..1 on both axes)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2


def grade_face(confidence: float, box: Optional[FaceBox]) -> FaceQuality:
    """Grade a face detection result."""
    if box is None:
        return FaceQuality.UNKNOWN
    well_positioned = box.width > 0.3 and box.height > 0.3
    centered = abs(box.mid_x - 0.5) < 0.2 and abs(box.mid_y - 0.5) < 0.2

    if confidence > 0.9 and well_positioned and centered:
        return FaceQuality.EXCELLENT
    if confidence > 0.7 and well_positioned:
        return FaceQuality.GOOD
    if confidence > 0.5:
        return FaceQuality.POOR
    return FaceQuality.UNKNOWN


@dataclass
class SelfieCapture:
    """Captured selfie bytes plus the face quality seen at capture time."""
    image_bytes: bytes
    face_quality: FaceQuality = FaceQuality.UNKNOWN


def load_selfie(path: str | Path, mirror: bool = True) -> SelfieCapture:
    """
    Read a selfie from disk.

    The image is validated with Pillow. With `mirror=True` it is flipped
    horizontally (front-camera orientation) and re-encoded as JPEG.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InvalidInputError(f"Could not read selfie {path}: {e}") from e

    if not validate_image_bytes(data):
        raise InvalidInputError(f"{path} is not a readable image")

    if mirror:
        data = mirror_to_jpeg(data, quality=SELFIE_JPEG_QUALITY)
    logger.info(f"Loaded selfie {path.name} ({len(data)} bytes)")
    return SelfieCapture(image_bytes=data)
