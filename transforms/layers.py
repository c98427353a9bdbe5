"""
Pillow layer operations used by the transform engine.

    fill()     resize to cover the box, then crop the overflow around the center
    fit()      shrink to fit inside the box, aspect preserved, nothing cropped
    solid()    a flat RGBA layer
    overlay()  alpha-composite one layer onto another at a point

All resizing uses Lanczos. None of these mutate their input.
"""

from PIL import Image, ImageOps

from transforms.geometry import center_point

RESAMPLE = Image.Resampling.LANCZOS

# Deep navy with zero alpha. The transparent alpha is intentional for
# compatibility: existing renditions were produced with exactly this value.
FALLBACK_BACKDROP_COLOR = (0, 29, 56, 0)


def normalize_mode(img: Image.Image) -> Image.Image:
    """Bring palette/grayscale/16-bit sources to RGB, or RGBA when they carry transparency."""
    if img.mode in ("RGB", "RGBA"):
        return img
    if img.mode in ("LA", "PA", "La") or "transparency" in img.info:
        return img.convert("RGBA")
    return img.convert("RGB")


def fill(img: Image.Image, width: int, height: int) -> Image.Image:
    return ImageOps.fit(img, (width, height), method=RESAMPLE, centering=(0.5, 0.5))


def fit(img: Image.Image, width: int, height: int) -> Image.Image:
    # thumbnail() only ever shrinks, which is exactly the no-upscale rule
    fitted = img.copy()
    fitted.thumbnail((width, height), RESAMPLE)
    return fitted


def solid(width: int, height: int, color: tuple[int, int, int, int]) -> Image.Image:
    return Image.new("RGBA", (width, height), color)


def overlay(background: Image.Image, foreground: Image.Image, point: tuple[int, int]) -> Image.Image:
    """
    Composite foreground over background with its top-left at `point`, full opacity.

    Parts of the foreground falling outside the background are clipped.
    The result is always RGBA.
    """
    result = background.convert("RGBA")
    fg = foreground.convert("RGBA")

    # Clip to the background so alpha_composite never sees a negative source box
    left, top = point
    src_left, src_top = max(0, -left), max(0, -top)
    dst_left, dst_top = max(0, left), max(0, top)
    src_right = min(fg.width, result.width - left)
    src_bottom = min(fg.height, result.height - top)
    if src_right <= src_left or src_bottom <= src_top:
        return result

    result.alpha_composite(
        fg,
        dest=(dst_left, dst_top),
        source=(src_left, src_top, src_right, src_bottom),
    )
    return result


def overlay_center(background: Image.Image, foreground: Image.Image) -> Image.Image:
    return overlay(background, foreground, center_point(background.size, foreground.size))
