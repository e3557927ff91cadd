from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ResolutionClass = Literal["low", "medium", "high", "ultra"]
Orientation = Literal["portrait", "landscape", "square"]


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int
    aspect_ratio: float  # width / height

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class QualityMetrics:
    resolution_class: ResolutionClass
    estimated_dpi: float
    file_size_bytes: int
    sharpness: float  # 0 = blurred, 1 = busy / high-frequency
    noise: float

    @property
    def is_high_resolution(self) -> bool:
        return self.resolution_class in ("high", "ultra")


@dataclass(frozen=True)
class FormatInfo:
    mime_type: str
    has_transparency: bool
    color_depth: int


@dataclass(frozen=True)
class CompatibilityNotes:
    is_optimal: bool
    recommendations: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class PerformanceInfo:
    render_complexity: float
    memory_usage_mb: float
    analysis_time_ms: float


@dataclass(frozen=True)
class ImageAnalysis:
    dimensions: Dimensions
    quality: QualityMetrics
    format: FormatInfo
    orientation: Orientation
    compatibility: CompatibilityNotes
    performance: PerformanceInfo | None = None  # diagnostic only

    @property
    def render_complexity(self) -> float:
        # Without diagnostics the image is treated as cheap to render.
        if self.performance is None:
            return 0.0
        return self.performance.render_complexity
