"""
Output encoding.

Variants are written next to the original as "<original path>:<format name>".
Because of that suffix the output path has no usable extension, so the
Pillow format is chosen from the ORIGINAL path and passed explicitly.
"""

import os
from typing import BinaryIO

from PIL import Image

from models.enums import ImageType

# File extension → Pillow format name
CODECS: dict[str, str] = {
    ImageType.JPG.value: "JPEG",
    ImageType.JPEG.value: "JPEG",
    ImageType.PNG.value: "PNG",
    ImageType.GIF.value: "GIF",
}


def codec_for_path(path: str) -> str:
    """Raises ValueError when the extension is not a known codec."""
    ext = os.path.splitext(path)[1].lstrip(".").lower()
    codec = CODECS.get(ext)
    if codec is None:
        raise ValueError(f"unsupported image format: '{ext or path}'")
    return codec


def variant_path(original_path: str, format_name: str) -> str:
    return f"{original_path}:{format_name}"


def encode(img: Image.Image, fp: BinaryIO, codec: str) -> None:
    """Write with the codec's default settings. JPEG has no alpha, so it is dropped."""
    if codec == "JPEG" and img.mode != "RGB":
        img = img.convert("RGB")
    img.save(fp, format=codec)
