"""
Job and report records.

A Job is created by the validator, consumed exactly once by the transform
engine, then discarded. It is a plain frozen dataclass and nothing about it
is persisted; jobs live only as long as the process does.

Key design decisions:
- file_path is the identity: the dispatcher deduplicates on it
- width/height come from the header decode, so the engine can apply the
  no-upscale and orientation rules without reopening the file first
- JobReport is what the completion signal carries: one VariantResult per
  requested format, including the errors the caller would otherwise never see
"""

from dataclasses import dataclass, field
from typing import Optional

from models.dimensions import ImageDimensions
from models.enums import ImageType, VariantStatus


@dataclass(frozen=True)
class Job:
    file_path: str
    width: int
    height: int
    image_type: ImageType
    dimensions: ImageDimensions

    @property
    def landscape(self) -> bool:
        """Square images are not landscape."""
        return self.height < self.width


@dataclass
class VariantResult:
    name: str
    status: VariantStatus
    output_path: Optional[str] = None
    size: Optional[tuple[int, int]] = None   # (width, height) actually written
    error: Optional[str] = None
    watermarked: bool = False
    backdrop: Optional[str] = None           # "asset", "fallback" or None (standard path)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "status": self.status.value,
            "output_path": self.output_path,
            "size": list(self.size) if self.size else None,
            "error": self.error,
            "watermarked": self.watermarked,
            "backdrop": self.backdrop,
        }


@dataclass
class JobReport:
    file_path: str
    variants: list[VariantResult] = field(default_factory=list)
    execution_time_sec: float = 0.0

    @property
    def errors(self) -> list[VariantResult]:
        return [v for v in self.variants if v.status == VariantStatus.FAILED]

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "file_path": self.file_path,
            "execution_time_sec": self.execution_time_sec,
            "variants": [v.to_dict() for v in self.variants],
        }
