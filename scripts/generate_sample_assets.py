"""
Generate demo inputs: a sample upload, a backdrop and per-format watermarks.

Usage:
    python -m scripts.generate_sample_assets                 # dev: ../assets + sample_data/
    python -m scripts.generate_sample_assets --assets-dir assets/static   # bundle for prod

Also writes sample_data/dimensions.json matching the watermark names, so
    python -m worker.main sample_data/sample.jpg --dimensions sample_data/dimensions.json
works straight away.
"""

import argparse
import json
from pathlib import Path

from PIL import Image, ImageDraw

FORMATS = [
    {"name": "thumb", "width": 150, "height": 150},
    {"name": "banner", "width": 800, "height": 200,
     "watermark": {"horizontal": "right", "vertical": "bottom", "offset_x": 10, "offset_y": 10}},
    {"name": "card", "width": 400, "height": 400, "backdrop": True,
     "watermark": {"horizontal": "center", "vertical": "center"}},
]


def make_sample(path: Path) -> None:
    # Portrait on purpose, so the backdrop path is taken for "card"
    img = Image.new("RGB", (600, 800), color=(41, 128, 185))
    draw = ImageDraw.Draw(img)
    for x in range(0, 600, 40):
        draw.line([(x, 0), (x, 800)], fill=(52, 152, 219), width=1)
    for y in range(0, 800, 40):
        draw.line([(0, y), (600, y)], fill=(52, 152, 219), width=1)
    draw.rectangle([150, 200, 450, 600], fill=(231, 76, 60), outline=(192, 57, 43), width=3)
    img.save(path, "JPEG", quality=85)


def make_backdrop(path: Path) -> None:
    img = Image.new("RGB", (400, 400), color=(236, 240, 241))
    draw = ImageDraw.Draw(img)
    for i in range(0, 400, 20):
        draw.line([(i, 0), (0, i)], fill=(189, 195, 199), width=2)
    img.save(path, "JPEG")


def make_watermark(path: Path, width: int) -> None:
    img = Image.new("RGBA", (width, width // 4), color=(255, 255, 255, 0))
    draw = ImageDraw.Draw(img)
    draw.rectangle([0, 0, width - 1, width // 4 - 1], outline=(255, 255, 255, 200), width=2)
    draw.text((6, 4), "SAMPLE", fill=(255, 255, 255, 200))
    img.save(path, "PNG")


def main():
    parser = argparse.ArgumentParser(description="Generate sample upload and assets")
    parser.add_argument("--assets-dir", type=str, default="../assets")
    parser.add_argument("--sample-dir", type=str, default="sample_data")
    args = parser.parse_args()

    assets_dir = Path(args.assets_dir)
    sample_dir = Path(args.sample_dir)
    assets_dir.mkdir(parents=True, exist_ok=True)
    sample_dir.mkdir(parents=True, exist_ok=True)

    make_sample(sample_dir / "sample.jpg")
    make_backdrop(assets_dir / "backdrop.jpg")
    for fmt in FORMATS:
        if "watermark" in fmt:
            make_watermark(assets_dir / f"watermark.png:{fmt['name']}", fmt["width"] // 4)

    dims = {"min_width": 100, "min_height": 100, "formats": FORMATS}
    (sample_dir / "dimensions.json").write_text(json.dumps(dims, indent=2))

    print(f"Created {sample_dir}/sample.jpg (600x800) and assets in {assets_dir}")


if __name__ == "__main__":
    main()
