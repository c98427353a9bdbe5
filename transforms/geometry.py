"""
Pure size and position math. No Pillow and no I/O, just integers.

Kept separate from the layer operations so the rules that matter most
(never upscale, where exactly a watermark lands) can be tested with
plain tuples.
"""

from models.dimensions import FormatDimensions, WatermarkPosition
from models.enums import HorizontalAnchor, VerticalAnchor


def target_box(fmt: FormatDimensions, original_width: int, original_height: int) -> tuple[int, int]:
    """
    Requested size, each axis capped to the original's.

    A 150x150 request on a 100x400 original gives 100x150.
    """
    return min(fmt.width, original_width), min(fmt.height, original_height)


def watermark_point(
    background: tuple[int, int],
    watermark: tuple[int, int],
    position: WatermarkPosition,
) -> tuple[int, int]:
    """
    Top-left corner at which to paste the watermark.

    Offsets always push AWAY from the anchored edge: +offset_x moves a
    Left-anchored mark right and a Right-anchored mark left. For Center,
    the offset is simply added.

    Example: background 200x100, watermark 20x10, Right/Bottom, offsets 5/5 → (175, 85)
    """
    bg_w, bg_h = background
    wm_w, wm_h = watermark

    horizontal = HorizontalAnchor(position.horizontal)
    if horizontal == HorizontalAnchor.RIGHT:
        x = (bg_w - wm_w) - position.offset_x
    elif horizontal == HorizontalAnchor.CENTER:
        x = bg_w // 2 - wm_w // 2 + position.offset_x
    else:
        x = position.offset_x

    vertical = VerticalAnchor(position.vertical)
    if vertical == VerticalAnchor.BOTTOM:
        y = (bg_h - wm_h) - position.offset_y
    elif vertical == VerticalAnchor.CENTER:
        y = bg_h // 2 - wm_h // 2 + position.offset_y
    else:
        y = position.offset_y

    return x, y


def center_point(background: tuple[int, int], foreground: tuple[int, int]) -> tuple[int, int]:
    """Top-left corner that centers foreground on background."""
    return background[0] // 2 - foreground[0] // 2, background[1] // 2 - foreground[1] // 2
