"""
Tests for the upload validator.

Order matters: signature → header → type → floor. Each test pins one step.
"""

import pytest

from helpers import image_bytes
from models.dimensions import DEFAULT_DIMENSIONS, NO_LIMIT, FormatDimensions, ImageDimensions
from models.enums import ImageType
from models.errors import (
    BelowMinHeightError,
    BelowMinWidthError,
    DecodeError,
    NotAnImageError,
    UnsupportedTypeError,
    ValidationError,
)
from validation.validator import decode_header, is_image, validate


def test_valid_png_builds_job():
    dims = ImageDimensions(formats=[FormatDimensions("thumb", 50, 50)])
    job = validate(image_bytes((200, 100)), "/data/up.png", dims)

    assert job.file_path == "/data/up.png"
    assert (job.width, job.height) == (200, 100)
    assert job.image_type == ImageType.PNG
    assert job.dimensions is dims


def test_jpeg_type_is_reported_as_jpeg():
    job = validate(image_bytes((40, 30), fmt="JPEG"), "/data/up.jpg")
    assert job.image_type == ImageType.JPEG


def test_missing_dimensions_uses_default():
    job = validate(image_bytes((10, 10)), "/data/up.png")
    assert job.dimensions is DEFAULT_DIMENSIONS


def test_text_is_not_an_image():
    with pytest.raises(NotAnImageError):
        validate(b"hello, this is plainly text", "/data/notes.png")


def test_empty_buffer_is_not_an_image():
    with pytest.raises(NotAnImageError):
        validate(b"", "/data/empty.png")


def test_truncated_header_is_decode_error():
    """PNG signature but nothing after it."""
    buf = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
    with pytest.raises(DecodeError) as exc_info:
        validate(buf, "/data/broken.png")
    assert exc_info.value.file_path == "/data/broken.png"


def test_gif_is_an_image_but_not_accepted():
    buf = image_bytes((20, 20), fmt="GIF")
    assert is_image(buf)
    with pytest.raises(UnsupportedTypeError, match="gif"):
        validate(buf, "/data/anim.gif")


def test_bmp_is_not_accepted():
    with pytest.raises(UnsupportedTypeError):
        validate(image_bytes((20, 20), fmt="BMP"), "/data/old.bmp")


def test_below_min_width():
    dims = ImageDimensions(min_width=300, min_height=NO_LIMIT)
    with pytest.raises(BelowMinWidthError) as exc_info:
        validate(image_bytes((200, 100)), "/data/up.png", dims, enforce_floor=True)
    assert exc_info.value.min_width == 300
    assert "300px" in str(exc_info.value)


def test_below_min_height():
    dims = ImageDimensions(min_width=100, min_height=150)
    with pytest.raises(BelowMinHeightError):
        validate(image_bytes((200, 100)), "/data/up.png", dims, enforce_floor=True)


def test_floor_ignored_when_not_enforced():
    dims = ImageDimensions(min_width=5000, min_height=5000)
    job = validate(image_bytes((200, 100)), "/data/up.png", dims, enforce_floor=False)
    assert job.width == 200


@pytest.mark.parametrize("enforce", [True, False])
def test_no_limit_never_rejects(enforce):
    dims = ImageDimensions(min_width=NO_LIMIT, min_height=NO_LIMIT)
    job = validate(image_bytes((1, 1)), "/data/tiny.png", dims, enforce_floor=enforce)
    assert (job.width, job.height) == (1, 1)


def test_exact_floor_is_accepted():
    dims = ImageDimensions(min_width=200, min_height=100)
    validate(image_bytes((200, 100)), "/data/up.png", dims, enforce_floor=True)


def test_all_rejections_are_validation_errors():
    """Callers can catch the whole family with one except clause."""
    for exc in (NotAnImageError, DecodeError, UnsupportedTypeError, BelowMinWidthError, BelowMinHeightError):
        assert issubclass(exc, ValidationError)


def test_decode_header_does_not_need_pixels():
    """A valid PNG header with its pixel data cut off still yields the size."""
    buf = image_bytes((321, 123))
    width, height, image_type = decode_header(buf[:64])
    assert (width, height, image_type) == (321, 123, "png")


def test_webp_signature_needs_both_markers():
    assert not is_image(b"RIFF\x00\x00\x00\x00WAVEfmt ")
    assert is_image(b"RIFF\x00\x00\x00\x00WEBPVP8 ")
