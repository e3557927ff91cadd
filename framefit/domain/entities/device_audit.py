from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from framefit.domain.entities.frame_spec import FrameSpec

IssueType = Literal["error", "warning", "info"]
IssueCategory = Literal["dimensions", "layout", "features", "compatibility", "performance"]
Impact = Literal["high", "medium", "low"]
AuditStatus = Literal["valid", "warning", "error"]


@dataclass(frozen=True)
class DeviceIssue:
    type: IssueType
    category: IssueCategory
    message: str
    impact: Impact
    suggestion: str | None = None


@dataclass(frozen=True)
class AspectRatioRange:
    min: float
    max: float
    optimal: float


@dataclass(frozen=True)
class ImageCompatibilityHints:
    supported_formats: tuple[str, ...]
    min_resolution: str
    recommended_resolution: str
    max_resolution: str
    aspect_ratio_range: AspectRatioRange


@dataclass(frozen=True)
class DeviceAuditResult:
    device_id: str
    device_name: str
    status: AuditStatus
    issues: tuple[DeviceIssue, ...]
    recommendations: tuple[str, ...]
    frame_spec: FrameSpec | None
    image_compatibility: ImageCompatibilityHints | None


@dataclass(frozen=True)
class ResolutionExtents:
    min_width: int
    min_height: int
    max_width: int
    max_height: int


@dataclass(frozen=True)
class AuditSummary:
    total_devices: int
    valid_devices: int
    devices_with_warnings: int
    devices_with_errors: int
    common_issues: tuple[str, ...]
    recommendations: tuple[str, ...]
    supported_resolutions: ResolutionExtents | None
    aspect_ratio_distribution: dict[str, int] = field(default_factory=dict)
