"""
Transform engine — renders every variant of one job.

This is the code that actually DOES THE WORK. The dispatcher calls
engine.run(job) from a worker thread, and for each requested format:

    1. Compute the target box (requested size, capped to the original)
    2. Backdrop path (backdrop flag AND not landscape):
         fit the image inside the box, center it on a backdrop layer
         (the backdrop asset filled to the box, or a solid fallback color)
       Standard path (everything else):
         fill the box: resize to cover, then crop the overflow around the center
    3. Watermark (if the format asks for one): composite the per-format
       watermark asset at its anchor; a missing asset just means no watermark
    4. Encode to "<original path>:<format name>" using the original's codec

Failure handling:
- Formats are independent: one failing never stops the next one
- Every failure is captured in the JobReport instead of being thrown away
- Missing assets are NOT failures (fallback color / no watermark)

Thread safety:
- The engine holds no mutable state; each run() works on its own images
- Each variant writes a distinct output path
- The asset provider only reads
So the worker pool can call run() for different jobs simultaneously.
"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator

from PIL import Image

from assets.base import AbstractAssetProvider
from models.dimensions import FormatDimensions
from models.enums import VariantStatus
from models.errors import AssetLoadError, RenderError
from models.job import Job, JobReport, VariantResult
from transforms import layers
from transforms.encode import codec_for_path, encode, variant_path
from transforms.geometry import target_box, watermark_point

logger = logging.getLogger(__name__)


class TransformEngine:

    def __init__(self, asset_provider: AbstractAssetProvider, watermark_key: str, backdrop_key: str):
        self._assets = asset_provider
        self._watermark_key = watermark_key
        self._backdrop_key = backdrop_key

    def run(self, job: Job) -> JobReport:
        """
        Render all formats of a job. Never raises for per-format problems.

        Returns:
            JobReport with one VariantResult per format entry, in order.
        """
        report = JobReport(file_path=job.file_path)
        start_time = time.monotonic()

        for fmt in job.dimensions.formats:
            if not fmt.is_valid:
                logger.debug(f"Skipping invalid format {fmt!r} for {job.file_path}")
                report.variants.append(VariantResult(name=fmt.name, status=VariantStatus.SKIPPED))
                continue

            try:
                result = self.render(job, fmt)
            except RenderError as e:
                logger.error(f"{job.file_path}: {e}")
                result = VariantResult(name=fmt.name, status=VariantStatus.FAILED, error=str(e))
            except Exception as e:
                # Keep going with the remaining formats; the report carries the error
                logger.exception(f"{job.file_path}: unexpected error rendering '{fmt.name}'")
                result = VariantResult(name=fmt.name, status=VariantStatus.FAILED, error=str(e))
            report.variants.append(result)

        report.execution_time_sec = round(time.monotonic() - start_time, 3)
        logger.info(
            f"Job {job.file_path} rendered {len(report.variants)} formats "
            f"({len(report.errors)} failed) in {report.execution_time_sec:.3f}s"
        )
        return report

    def render(self, job: Job, fmt: FormatDimensions) -> VariantResult:
        """
        Render and write one variant.

        Raises:
            RenderError if the source cannot be opened, the original's
            extension has no codec, or the output cannot be created/encoded.
        """
        try:
            codec = codec_for_path(job.file_path)
        except ValueError as e:
            raise RenderError(fmt.name, "format", str(e)) from e

        width, height = target_box(fmt, job.width, job.height)
        backdrop = None

        with self._open_source(job.file_path, fmt.name) as source:
            if fmt.backdrop and not job.landscape:
                img, backdrop = self._compose_on_backdrop(source, width, height)
            else:
                img = layers.fill(source, width, height)

        watermarked = False
        if fmt.watermark is not None:
            img, watermarked = self._apply_watermark(img, fmt)

        output_path = variant_path(job.file_path, fmt.name)
        self._write(img, output_path, codec, fmt.name)

        return VariantResult(
            name=fmt.name,
            status=VariantStatus.SUCCEEDED,
            output_path=output_path,
            size=img.size,
            watermarked=watermarked,
            backdrop=backdrop,
        )

    @contextmanager
    def _open_source(self, path: str, format_name: str) -> Iterator[Image.Image]:
        """Open and decode the original; anything yielded is invalid once the block exits."""
        try:
            src = Image.open(path)
        except (OSError, Image.DecompressionBombError) as e:
            raise RenderError(format_name, "open", str(e)) from e

        with src:
            try:
                src.load()
            except OSError as e:
                raise RenderError(format_name, "open", str(e)) from e
            yield layers.normalize_mode(src)

    def _compose_on_backdrop(self, source: Image.Image, width: int, height: int) -> tuple[Image.Image, str]:
        foreground = layers.fit(source, width, height)

        try:
            back = self._assets.load_image(self._backdrop_key)
        except AssetLoadError as e:
            logger.warning(f"Backdrop unavailable, using fallback color: {e}")
            back = layers.solid(width, height, layers.FALLBACK_BACKDROP_COLOR)
            kind = "fallback"
        else:
            back = layers.fill(layers.normalize_mode(back), width, height)
            kind = "asset"

        return layers.overlay_center(back, foreground), kind

    def _apply_watermark(self, img: Image.Image, fmt: FormatDimensions) -> tuple[Image.Image, bool]:
        key = f"{self._watermark_key}:{fmt.name}"
        try:
            mark = self._assets.load_image(key)
        except AssetLoadError as e:
            logger.info(f"No watermark for '{fmt.name}', skipping: {e.reason}")
            return img, False

        point = watermark_point(img.size, mark.size, fmt.watermark)
        return layers.overlay(img, mark, point), True

    def _write(self, img: Image.Image, output_path: str, codec: str, format_name: str) -> None:
        try:
            out = open(output_path, "wb")
        except OSError as e:
            raise RenderError(format_name, "create", str(e)) from e

        with out:
            try:
                encode(img, out, codec)
            except (OSError, ValueError, KeyError) as e:
                raise RenderError(format_name, "encode", str(e)) from e
