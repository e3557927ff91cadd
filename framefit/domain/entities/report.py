from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any

from framefit.domain.entities.optimized_config import CropRect, ToneConfig


@dataclass(frozen=True)
class ImageSection:
    width: int
    height: int
    aspect_ratio: float
    orientation: str
    resolution_class: str
    file_size_bytes: int
    file_size_mb: float
    mime_type: str
    sharpness: float
    noise: float


@dataclass(frozen=True)
class DeviceSection:
    id: str
    name: str
    viewport_width: float
    viewport_height: float
    aspect_ratio: float
    display_scale: float


@dataclass(frozen=True)
class OptimizationSection:
    requested_strategy: str
    strategy: str
    scale: float
    reasoning: str
    has_crop: bool
    crop: CropRect | None
    quality: ToneConfig


@dataclass(frozen=True)
class CompatibilitySection:
    score: int
    is_compatible: bool
    issue_count: int
    recommendation_count: int
    issues: tuple[str, ...]
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class PerformanceSection:
    estimated_render_time: float
    memory_usage_mb: float


@dataclass(frozen=True)
class OptimizationReport:
    """Audit snapshot of one optimization, serializable to a plain document."""

    image: ImageSection
    device: DeviceSection
    optimization: OptimizationSection
    compatibility: CompatibilitySection
    performance: PerformanceSection
    generated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OptimizationReport:
        opt = dict(data["optimization"])
        crop = opt.get("crop")
        opt["crop"] = CropRect(**crop) if crop is not None else None
        opt["quality"] = ToneConfig(**opt["quality"])
        compat = dict(data["compatibility"])
        compat["issues"] = tuple(compat.get("issues", ()))
        compat["recommendations"] = tuple(compat.get("recommendations", ()))
        return cls(
            image=ImageSection(**data["image"]),
            device=DeviceSection(**data["device"]),
            optimization=OptimizationSection(**opt),
            compatibility=CompatibilitySection(**compat),
            performance=PerformanceSection(**data["performance"]),
            generated_at=data.get("generated_at"),
        )

    @classmethod
    def from_json(cls, payload: str) -> OptimizationReport:
        return cls.from_dict(json.loads(payload))
