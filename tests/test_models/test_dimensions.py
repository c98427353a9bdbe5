"""Tests for the dimension records."""

import dataclasses

import pytest

from models.dimensions import (
    DEFAULT_DIMENSIONS,
    NO_LIMIT,
    TOP_RIGHT,
    FormatDimensions,
    ImageDimensions,
    WatermarkPosition,
)
from models.enums import HorizontalAnchor, ImageType, VerticalAnchor
from models.job import Job


def test_default_dimensions_have_no_floor_and_no_formats():
    assert DEFAULT_DIMENSIONS.min_width == NO_LIMIT
    assert DEFAULT_DIMENSIONS.min_height == NO_LIMIT
    assert DEFAULT_DIMENSIONS.formats == ()


@pytest.mark.parametrize("fmt, valid", [
    (FormatDimensions("thumb", 10, 10), True),
    (FormatDimensions("", 10, 10), False),
    (FormatDimensions("thumb", 0, 10), False),
    (FormatDimensions("thumb", 10, -5), False),
])
def test_format_validity(fmt, valid):
    assert fmt.is_valid is valid


def test_dimensions_are_immutable():
    dims = ImageDimensions(formats=[FormatDimensions("a", 1, 1)])
    assert isinstance(dims.formats, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        dims.min_width = 5


def test_from_dict_full_shape():
    dims = ImageDimensions.from_dict({
        "min_width": 400,
        "formats": [
            {"name": "thumb", "width": 150, "height": 150},
            {"name": "banner", "width": 1200, "height": 400,
             "watermark": {"horizontal": "right", "vertical": "bottom", "offset_x": 10, "offset_y": 12}},
            {"name": "card", "width": 600, "height": 600, "backdrop": True},
        ],
    })

    assert dims.min_width == 400
    assert dims.min_height == NO_LIMIT
    thumb, banner, card = dims.formats
    assert thumb.watermark is None and not thumb.backdrop
    assert banner.watermark == WatermarkPosition(HorizontalAnchor.RIGHT, VerticalAnchor.BOTTOM, 10, 12)
    assert card.backdrop


def test_watermark_from_dict_normalizes_unknown_anchors():
    pos = WatermarkPosition.from_dict({"horizontal": "middle", "vertical": "up"})
    assert pos.horizontal == HorizontalAnchor.LEFT
    assert pos.vertical == VerticalAnchor.TOP


def test_presets():
    assert TOP_RIGHT.horizontal == HorizontalAnchor.RIGHT
    assert TOP_RIGHT.vertical == VerticalAnchor.TOP
    assert (TOP_RIGHT.offset_x, TOP_RIGHT.offset_y) == (0, 0)


@pytest.mark.parametrize("size, landscape", [((200, 100), True), ((100, 200), False), ((100, 100), False)])
def test_job_orientation(size, landscape):
    job = Job("/x.png", size[0], size[1], ImageType.PNG, DEFAULT_DIMENSIONS)
    assert job.landscape is landscape
