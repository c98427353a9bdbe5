"""
Exception taxonomy.

    VariantPipelineError
    ├── ValidationError          raised synchronously from Dispatcher.add(); job never queued
    │   ├── NotAnImageError      buffer has no known image signature
    │   ├── DecodeError          header could not be parsed
    │   ├── UnsupportedTypeError decoded fine, but not jpg/jpeg/png
    │   ├── BelowMinWidthError
    │   └── BelowMinHeightError
    ├── AssetLoadError           watermark/backdrop asset missing or unreadable
    └── RenderError              one variant failed (open, create, encode)

Only ValidationError ever reaches the caller of add(). AssetLoadError is
absorbed by the engine (fallback backdrop / no watermark) and RenderError is
recorded in the JobReport delivered with the completion signal.
"""

from typing import Optional


class VariantPipelineError(Exception):
    """Base class for every error raised by this project."""


class ValidationError(VariantPipelineError):

    def __init__(self, message: str, file_path: Optional[str] = None):
        self.file_path = file_path
        super().__init__(message)


class NotAnImageError(ValidationError):
    pass


class DecodeError(ValidationError):
    pass


class UnsupportedTypeError(ValidationError):

    def __init__(self, image_type: str, file_path: Optional[str] = None):
        self.image_type = image_type
        super().__init__(f"image type {image_type} invalid", file_path)


class BelowMinWidthError(ValidationError):

    def __init__(self, width: int, min_width: int, file_path: Optional[str] = None):
        self.width = width
        self.min_width = min_width
        super().__init__(f"image width less than {min_width}px", file_path)


class BelowMinHeightError(ValidationError):

    def __init__(self, height: int, min_height: int, file_path: Optional[str] = None):
        self.height = height
        self.min_height = min_height
        super().__init__(f"image height less than {min_height}px", file_path)


class AssetLoadError(VariantPipelineError):

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"asset '{key}' could not be loaded: {reason}")


class RenderError(VariantPipelineError):
    """A single variant failed. `stage` is one of: open, format, create, encode."""

    def __init__(self, format_name: str, stage: str, reason: str):
        self.format_name = format_name
        self.stage = stage
        self.reason = reason
        super().__init__(f"variant '{format_name}' failed at {stage}: {reason}")
