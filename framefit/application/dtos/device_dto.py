from __future__ import annotations

from typing import Literal

from pydantic import Field

from framefit.application.dtos.common_dto import DomainModel


class PixelSizeModel(DomainModel):
    width: int
    height: int


class DeviceSummary(DomainModel):
    id: str = Field(..., description="Catalog id", examples=["iphone-16-pro"])
    name: str = Field(..., examples=["iPhone 16 Pro"])
    category: str = Field(..., examples=["iphone"])
    variant: str = Field(..., examples=["Pro"])


class DeviceListResponse(DomainModel):
    devices: list[DeviceSummary]
    total: int = Field(..., ge=0)


class ViewportModel(DomainModel):
    width: float = Field(..., description="Screen width in physical units (mm)")
    height: float = Field(..., description="Screen height in physical units (mm)")
    aspect_ratio: float
    corner_radius: float


class BezelsModel(DomainModel):
    top: float
    bottom: float
    left: float
    right: float


class FrameGeometryModel(DomainModel):
    total_width: float
    total_height: float
    bezels: BezelsModel


class ResolutionBandsModel(DomainModel):
    min: PixelSizeModel
    recommended: PixelSizeModel
    max: PixelSizeModel


class FrameSpecModel(DomainModel):
    """Viewport and resolution expectations derived from a device descriptor."""
    id: str
    name: str
    viewport: ViewportModel
    frame: FrameGeometryModel
    display_scale: float = Field(..., description="Physical units to render-surface pixels", gt=0)
    optimal_resolutions: ResolutionBandsModel
    features: list[str] = Field(default_factory=list)
    canvas_width: float = Field(..., description="Render surface width in pixels")
    canvas_height: float = Field(..., description="Render surface height in pixels")


class DeviceIssueModel(DomainModel):
    type: Literal["error", "warning", "info"]
    category: Literal["dimensions", "layout", "features", "compatibility", "performance"]
    message: str
    impact: Literal["high", "medium", "low"]
    suggestion: str | None = None


class AspectRatioRangeModel(DomainModel):
    min: float
    max: float
    optimal: float


class ImageCompatibilityHintsModel(DomainModel):
    supported_formats: list[str]
    min_resolution: str
    recommended_resolution: str
    max_resolution: str
    aspect_ratio_range: AspectRatioRangeModel


class DeviceAuditResponse(DomainModel):
    """Audit result for a single catalog device."""
    device_id: str
    device_name: str
    status: Literal["valid", "warning", "error"]
    issues: list[DeviceIssueModel]
    recommendations: list[str]
    frame_spec: FrameSpecModel | None = None
    image_compatibility: ImageCompatibilityHintsModel | None = None


class ResolutionExtentsModel(DomainModel):
    min_width: int
    min_height: int
    max_width: int
    max_height: int


class AuditSummaryModel(DomainModel):
    total_devices: int
    valid_devices: int
    devices_with_warnings: int
    devices_with_errors: int
    common_issues: list[str]
    recommendations: list[str]
    supported_resolutions: ResolutionExtentsModel | None = None
    aspect_ratio_distribution: dict[str, int]


class CatalogAuditResponse(DomainModel):
    """Catalog-wide audit summary plus per-device results."""
    summary: AuditSummaryModel
    devices: list[DeviceAuditResponse]
