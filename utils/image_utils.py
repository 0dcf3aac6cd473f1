"""Image handling utilities for selfies and generated images."""

import io
from typing import Optional
from PIL import Image, ImageOps, UnidentifiedImageError


def validate_image_bytes(data: bytes) -> bool:
    """
    Validate that raw bytes decode as an image.

    Args:
        data: Encoded image bytes

    Returns:
        True if Pillow can identify and verify the image, False otherwise
    """
    if not data:
        return False
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
        return True
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return False


def _to_rgb(img: Image.Image) -> Image.Image:
    # JPEG has no alpha channel: flatten onto white
    if img.mode in ('RGBA', 'LA', 'P'):
        background = Image.new('RGB', img.size, (255, 255, 255))
        if img.mode != 'RGBA':
            img = img.convert('RGBA')
        background.paste(img, mask=img.split()[-1])
        return background
    if img.mode != 'RGB':
        return img.convert('RGB')
    return img


def mirror_to_jpeg(data: bytes, quality: int = 80) -> bytes:
    """
    Mirror an image horizontally and re-encode it as JPEG.

    Front cameras deliver mirrored frames; this restores the orientation the
    user saw in the preview.
    """
    with Image.open(io.BytesIO(data)) as img:
        img = ImageOps.exif_transpose(img)
        img = _to_rgb(ImageOps.mirror(img))
        buffer = io.BytesIO()
        img.save(buffer, format='JPEG', quality=quality)
        return buffer.getvalue()


def aspect_ratio(data: bytes) -> Optional[float]:
    """Width / height of encoded image bytes, or None if undecodable."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
    except (UnidentifiedImageError, OSError, ValueError):
        return None
    if not height:
        return None
    return width / height
