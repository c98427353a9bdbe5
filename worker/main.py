"""
Command-line entry point.

Renders the variants for one or more stored images:

    python -m worker.main uploads/a.jpg uploads/b.png --dimensions dims.json
    python -m worker.main uploads/a.jpg --dimensions dims.json --enforce-floor

dims.json holds one ImageDimensions (see models/dimensions.py for the shape).
Every report is printed as one JSON line once its job completes. The exit
code is 1 if any file was rejected or any variant failed.

This is where the object graph is built, once:

    Settings → asset provider → TransformEngine → Dispatcher

Nothing below this module reads the settings singleton; it is all passed in.
"""

import argparse
import json
import logging
import signal
import sys

from assets.registry import create_asset_provider
from config.settings import Settings, settings
from models.dimensions import ImageDimensions
from models.errors import ValidationError
from models.job import JobReport
from scheduler.dispatcher import Dispatcher
from transforms.engine import TransformEngine

logger = logging.getLogger(__name__)


def build_dispatcher(config: Settings, on_complete=None) -> Dispatcher:
    """Wire provider → engine → dispatcher from one Settings instance."""
    provider = create_asset_provider(config)
    engine = TransformEngine(
        provider,
        watermark_key=config.WATERMARK_ASSET_KEY,
        backdrop_key=config.BACKDROP_ASSET_KEY,
    )
    logger.info(f"Assets from {provider.source_name} ({config.ENVIRONMENT.value})")
    return Dispatcher(
        engine,
        queue_size=config.ADMISSION_QUEUE_SIZE,
        pool_size=config.WORKER_POOL_SIZE,
        on_complete=on_complete,
    )


def load_dimensions(path: str) -> ImageDimensions:
    with open(path, encoding="utf-8") as f:
        return ImageDimensions.from_dict(json.load(f))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Render image variants")
    parser.add_argument("images", nargs="+", help="Paths of stored uploads")
    parser.add_argument(
        "--dimensions", type=str, default=None,
        help="JSON file with the formats to render (default: none, validate only)",
    )
    parser.add_argument(
        "--enforce-floor", action="store_true",
        help="Reject images smaller than min_width/min_height",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    dimensions = load_dimensions(args.dimensions) if args.dimensions else None
    failures = 0

    def report_done(report: JobReport) -> None:
        nonlocal failures
        if not report.ok:
            failures += 1
        print(json.dumps(report.to_dict()), flush=True)

    dispatcher = build_dispatcher(settings, on_complete=report_done)

    # ── Graceful shutdown on Ctrl+C or SIGTERM ──────────────────
    def shutdown(signum, frame):
        logger.info("Shutdown signal received, stopping...")
        raise SystemExit(1)

    signal.signal(signal.SIGTERM, shutdown)
    signal.signal(signal.SIGINT, shutdown)

    dispatcher.start()
    try:
        for path in args.images:
            try:
                with open(path, "rb") as f:
                    buf = f.read()
                dispatcher.add(buf, path, dimensions, args.enforce_floor)
            except (OSError, ValidationError) as e:
                failures += 1
                logger.error(f"Rejected {path}: {e}")
        dispatcher.join()
    finally:
        dispatcher.stop()

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
