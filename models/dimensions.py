"""
Dimension settings supplied with each upload.

An ImageDimensions describes everything the caller wants from one upload:
- a minimum width/height the original must meet (or NO_LIMIT)
- an ordered list of FormatDimensions, one per output variant

Example (as JSON, the shape accepted by ImageDimensions.from_dict):
    {
        "min_width": 400,
        "min_height": -1,
        "formats": [
            {"name": "thumb", "width": 150, "height": 150},
            {"name": "banner", "width": 1200, "height": 400,
             "watermark": {"horizontal": "right", "vertical": "bottom",
                           "offset_x": 10, "offset_y": 10}},
            {"name": "card", "width": 600, "height": 600, "backdrop": true}
        ]
    }

All classes are frozen: once a Job holds its dimensions, nothing can change it.
"""

from dataclasses import dataclass, field
from typing import Optional

from models.enums import HorizontalAnchor, VerticalAnchor

# Floor value meaning "do not enforce this minimum"
NO_LIMIT = -1


@dataclass(frozen=True)
class WatermarkPosition:
    """Anchor plus offset. The offset moves the watermark away from the anchored edge."""
    horizontal: HorizontalAnchor = HorizontalAnchor.LEFT
    vertical: VerticalAnchor = VerticalAnchor.TOP
    offset_x: int = 0
    offset_y: int = 0

    def __post_init__(self):
        # Normalize raw strings (and unknown values) to the enum members
        object.__setattr__(self, "horizontal", HorizontalAnchor(self.horizontal))
        object.__setattr__(self, "vertical", VerticalAnchor(self.vertical))

    @classmethod
    def from_dict(cls, data: dict) -> "WatermarkPosition":
        return cls(
            horizontal=data.get("horizontal", HorizontalAnchor.LEFT),
            vertical=data.get("vertical", VerticalAnchor.TOP),
            offset_x=int(data.get("offset_x", 0)),
            offset_y=int(data.get("offset_y", 0)),
        )


TOP_LEFT = WatermarkPosition(HorizontalAnchor.LEFT, VerticalAnchor.TOP)
TOP_CENTER = WatermarkPosition(HorizontalAnchor.CENTER, VerticalAnchor.TOP)
TOP_RIGHT = WatermarkPosition(HorizontalAnchor.RIGHT, VerticalAnchor.TOP)
CENTER_RIGHT = WatermarkPosition(HorizontalAnchor.RIGHT, VerticalAnchor.CENTER)
BOTTOM_RIGHT = WatermarkPosition(HorizontalAnchor.RIGHT, VerticalAnchor.BOTTOM)
BOTTOM_CENTER = WatermarkPosition(HorizontalAnchor.CENTER, VerticalAnchor.BOTTOM)
BOTTOM_LEFT = WatermarkPosition(HorizontalAnchor.LEFT, VerticalAnchor.BOTTOM)
CENTER_LEFT = WatermarkPosition(HorizontalAnchor.LEFT, VerticalAnchor.CENTER)


@dataclass(frozen=True)
class FormatDimensions:
    """One output variant. The name becomes the output path suffix."""
    name: str
    width: int
    height: int
    backdrop: bool = False                          # fit onto a backdrop instead of cropping
    watermark: Optional[WatermarkPosition] = None   # None → no watermark

    @property
    def is_valid(self) -> bool:
        """Entries with no name or a non-positive size are skipped, not errors."""
        return bool(self.name) and self.width > 0 and self.height > 0

    @classmethod
    def from_dict(cls, data: dict) -> "FormatDimensions":
        watermark = data.get("watermark")
        return cls(
            name=data.get("name", ""),
            width=int(data.get("width", 0)),
            height=int(data.get("height", 0)),
            backdrop=bool(data.get("backdrop", False)),
            watermark=WatermarkPosition.from_dict(watermark) if watermark else None,
        )


@dataclass(frozen=True)
class ImageDimensions:
    min_width: int = NO_LIMIT
    min_height: int = NO_LIMIT
    formats: tuple[FormatDimensions, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable (usually a list) but store a tuple
        object.__setattr__(self, "formats", tuple(self.formats))

    @classmethod
    def from_dict(cls, data: dict) -> "ImageDimensions":
        return cls(
            min_width=int(data.get("min_width", NO_LIMIT)),
            min_height=int(data.get("min_height", NO_LIMIT)),
            formats=[FormatDimensions.from_dict(f) for f in data.get("formats", [])],
        )


# No floors, no formats: the original is accepted as-is and nothing is rendered
DEFAULT_DIMENSIONS = ImageDimensions()
