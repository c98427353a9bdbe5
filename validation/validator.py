"""
Upload validator — decides whether a byte buffer may become a Job.

Checks run in this order and the first failure wins:

    1. Magic bytes      → NotAnImageError      (not an image at all)
    2. Header decode    → DecodeError          (claims to be an image, header is broken)
    3. Type allow-list  → UnsupportedTypeError (gif, webp, bmp, ... are images, just not accepted)
    4. Minimum size     → BelowMinWidthError / BelowMinHeightError (only when enforce_floor)

Step 2 uses Pillow's lazy Image.open(): it parses the header to get the
size and format but does NOT decode pixel data. That only happens later,
inside the worker thread, so validation stays cheap on the caller's thread.

Nothing here touches the disk or any queue. A returned Job is safe to enqueue.
"""

import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from models.dimensions import DEFAULT_DIMENSIONS, NO_LIMIT, ImageDimensions
from models.enums import ACCEPTED_UPLOAD_TYPES, ImageType
from models.errors import (
    BelowMinHeightError,
    BelowMinWidthError,
    DecodeError,
    NotAnImageError,
    UnsupportedTypeError,
)
from models.job import Job

logger = logging.getLogger(__name__)

# Leading bytes of raster formats we recognize as "an image".
# Broader than what we accept on purpose: a GIF is an image (step 1 passes)
# but not an accepted upload (step 3 rejects it).
IMAGE_SIGNATURES: dict[bytes, str] = {
    b"\xff\xd8\xff": "jpeg",
    b"\x89PNG\r\n\x1a\n": "png",
    b"GIF87a": "gif",
    b"GIF89a": "gif",
    b"BM": "bmp",
    b"II*\x00": "tiff",
    b"MM\x00*": "tiff",
    b"\x00\x00\x01\x00": "ico",
    b"8BPS": "psd",
}

# Pillow names multi-picture JPEGs (most phone cameras) "MPO"; they are still JPEGs
_FORMAT_ALIASES = {"mpo": "jpeg"}


def is_image(buf: bytes) -> bool:
    """Signature check only. WebP needs two markers (RIFF....WEBP)."""
    if any(buf.startswith(magic) for magic in IMAGE_SIGNATURES):
        return True
    return buf[:4] == b"RIFF" and buf[8:12] == b"WEBP"


def decode_header(buf: bytes) -> tuple[int, int, str]:
    """Return (width, height, type) without decoding pixels."""
    try:
        with Image.open(io.BytesIO(buf)) as img:
            width, height = img.size
            image_type = (img.format or "").lower()
            image_type = _FORMAT_ALIASES.get(image_type, image_type)
    except (UnidentifiedImageError, OSError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeError(f"error decoding image: {e}") from e
    return width, height, image_type


def validate(
    buf: bytes,
    file_path: str,
    dimensions: Optional[ImageDimensions] = None,
    enforce_floor: bool = False,
) -> Job:
    """
    Validate an upload and build the Job for it.

    Args:
        buf: the raw uploaded bytes
        file_path: where the upload is stored, also the job's identity
        dimensions: variants to produce; None → DEFAULT_DIMENSIONS (no floor, no formats)
        enforce_floor: check min_width/min_height (NO_LIMIT floors are never checked)

    Raises:
        ValidationError subclasses, see module docstring.
    """
    if dimensions is None:
        dimensions = DEFAULT_DIMENSIONS

    if not is_image(buf):
        logger.warning(f"Rejected {file_path}: not an image")
        raise NotAnImageError("image type invalid", file_path)

    try:
        width, height, image_type = decode_header(buf)
    except DecodeError as e:
        logger.warning(f"Rejected {file_path}: {e}")
        e.file_path = file_path
        raise

    if image_type not in {t.value for t in ACCEPTED_UPLOAD_TYPES}:
        logger.warning(f"Rejected {file_path}: image type {image_type} not accepted")
        raise UnsupportedTypeError(image_type, file_path)

    if enforce_floor:
        if dimensions.min_width != NO_LIMIT and width < dimensions.min_width:
            logger.warning(f"Image {file_path} lower than min width: {dimensions.min_width}")
            raise BelowMinWidthError(width, dimensions.min_width, file_path)

        if dimensions.min_height != NO_LIMIT and height < dimensions.min_height:
            logger.warning(f"Image {file_path} lower than min height: {dimensions.min_height}")
            raise BelowMinHeightError(height, dimensions.min_height, file_path)

    return Job(
        file_path=file_path,
        width=width,
        height=height,
        image_type=ImageType(image_type),
        dimensions=dimensions,
    )
