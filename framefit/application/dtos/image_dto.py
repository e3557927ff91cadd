from __future__ import annotations

from typing import Literal

from pydantic import Field

from framefit.application.dtos.common_dto import DomainModel


class DimensionsModel(DomainModel):
    width: int = Field(..., description="Width in pixels", gt=0)
    height: int = Field(..., description="Height in pixels", gt=0)
    aspect_ratio: float = Field(..., description="width / height", gt=0)


class QualityModel(DomainModel):
    resolution_class: Literal["low", "medium", "high", "ultra"] = Field(
        ..., description="Pixel count class (<0.5MP, <2MP, <8MP, above)"
    )
    estimated_dpi: float = Field(..., description="Rough DPI estimate, sqrt(pixels) / 6")
    file_size_bytes: int = Field(..., description="Encoded size of the upload", ge=0)
    sharpness: float = Field(..., description="Edge density proxy (0 blurred, 1 busy)", ge=0, le=1)
    noise: float = Field(..., description="Normalized grayscale variance of a center sample", ge=0, le=1)


class FormatModel(DomainModel):
    mime_type: str = Field(..., description="MIME type of the decoded image", examples=["image/png"])
    has_transparency: bool = Field(..., description="True when any pixel is not fully opaque")
    color_depth: int = Field(..., description="Bits per pixel (24 or 32)")


class CompatibilityNotesModel(DomainModel):
    is_optimal: bool = Field(..., description="False for low resolution or extreme aspect ratios")
    recommendations: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class PerformanceModel(DomainModel):
    render_complexity: float = Field(..., ge=0, le=1)
    memory_usage_mb: float = Field(..., ge=0)
    analysis_time_ms: float = Field(..., ge=0)


class ImageAnalysisModel(DomainModel):
    """Properties derived from the image pixels."""
    dimensions: DimensionsModel
    quality: QualityModel
    format: FormatModel
    orientation: Literal["portrait", "landscape", "square"]
    compatibility: CompatibilityNotesModel
    performance: PerformanceModel | None = None


class ImageAnalysisResponse(DomainModel):
    """Response model for image analysis."""
    image_hash: str = Field(..., description="SHA-256 of the uploaded bytes")
    analysis: ImageAnalysisModel
