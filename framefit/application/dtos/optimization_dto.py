from __future__ import annotations

from pydantic import Field

from framefit.application.dtos.common_dto import DomainModel
from framefit.application.dtos.device_dto import FrameSpecModel
from framefit.application.dtos.image_dto import ImageAnalysisModel
from framefit.domain.entities.optimized_config import Strategy


class PositionModel(DomainModel):
    x: float = Field(..., description="Anchor X in render-surface pixels")
    y: float = Field(..., description="Anchor Y in render-surface pixels")


class CropModel(DomainModel):
    x: float = Field(..., ge=0)
    y: float = Field(..., ge=0)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class TransformModel(DomainModel):
    rotation: float = 0.0
    flip_x: bool = False
    flip_y: bool = False


class ToneModel(DomainModel):
    compression: float = Field(..., description="Encoder quality hint", ge=0, le=1)
    sharpening: float = Field(..., ge=0)
    saturation: float
    brightness: float
    contrast: float


class OptimizedConfigModel(DomainModel):
    """Placement plan for a downstream renderer."""
    scale: float = Field(..., description="Uniform scale applied to the (cropped) source", gt=0)
    position: PositionModel
    crop: CropModel | None = Field(None, description="Source sub-rectangle, or null when uncropped")
    transform: TransformModel
    quality: ToneModel
    strategy: Strategy = Field(..., description="Strategy actually applied")
    requested_strategy: Strategy = Field(..., description="Strategy the caller asked for")
    reasoning: str = Field(..., description="Why this strategy was chosen")


class ValidationIssueModel(DomainModel):
    code: str
    message: str
    penalty: int
    hard: bool
    recommendation: str | None = None


class CompatibilityResponse(DomainModel):
    """Compatibility score of an image against a device viewport."""
    score: int = Field(..., ge=0, le=100)
    is_compatible: bool = Field(..., description="True only when no hard issue was found")
    issues: list[str]
    recommendations: list[str]
    findings: list[ValidationIssueModel] = Field(default_factory=list)


class OptimizationResponse(DomainModel):
    """Response model for a placement plan."""
    image_hash: str
    device_id: str
    analysis: ImageAnalysisModel
    frame_spec: FrameSpecModel
    config: OptimizedConfigModel
    compatibility: CompatibilityResponse


class ValidationResponse(DomainModel):
    image_hash: str
    device_id: str
    compatibility: CompatibilityResponse
