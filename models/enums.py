"""
Shared enumerations used across the entire project.

Using Python enums (inheriting from str) means:
- They serialize to JSON automatically ("succeeded", not "VariantStatus.SUCCEEDED")
- pydantic-settings can parse them straight from environment variables
- Typos become immediate errors instead of silent bugs
"""

import enum


class Environment(str, enum.Enum):
    DEV = "dev"      # assets read from a local directory
    PROD = "prod"    # assets read from resources bundled in an installed package


class HorizontalAnchor(str, enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"

    @classmethod
    def _missing_(cls, value):
        # Anything unrecognized is placed from the left edge
        return cls.LEFT


class VerticalAnchor(str, enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"
    CENTER = "center"

    @classmethod
    def _missing_(cls, value):
        return cls.TOP


class ImageType(str, enum.Enum):
    JPG = "jpg"
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"      # decodable and encodable, but not accepted as an upload


ACCEPTED_UPLOAD_TYPES = frozenset({ImageType.JPG, ImageType.JPEG, ImageType.PNG})


class VariantStatus(str, enum.Enum):
    SUCCEEDED = "succeeded"  # output file written
    FAILED = "failed"        # open/create/encode error, siblings still attempted
    SKIPPED = "skipped"      # format entry had no name or a non-positive size
