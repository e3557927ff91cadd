from __future__ import annotations

from datetime import datetime

from framefit.domain.entities.frame_spec import FrameSpec
from framefit.domain.entities.image_analysis import ImageAnalysis
from framefit.domain.entities.optimized_config import OptimizedConfig
from framefit.domain.entities.report import (
    CompatibilitySection,
    DeviceSection,
    ImageSection,
    OptimizationReport,
    OptimizationSection,
    PerformanceSection,
)
from framefit.domain.policy import DEFAULT_POLICY, MEGABYTE, MEGAPIXEL, OptimizationPolicy
from framefit.domain.services.compatibility_validator import CompatibilityValidator


def generate_report(
    analysis: ImageAnalysis,
    frame: FrameSpec,
    config: OptimizedConfig,
    generated_at: datetime | None = None,
    policy: OptimizationPolicy = DEFAULT_POLICY,
) -> OptimizationReport:
    """Assemble a debug/audit snapshot from an analysis, a frame and a plan.

    Pure aggregation: the timestamp is only included when the caller passes one.
    """
    compatibility = CompatibilityValidator(policy).validate(analysis, frame)
    dims = analysis.dimensions
    return OptimizationReport(
        image=ImageSection(
            width=dims.width,
            height=dims.height,
            aspect_ratio=dims.aspect_ratio,
            orientation=analysis.orientation,
            resolution_class=analysis.quality.resolution_class,
            file_size_bytes=analysis.quality.file_size_bytes,
            file_size_mb=round(analysis.quality.file_size_bytes / MEGABYTE, 2),
            mime_type=analysis.format.mime_type,
            sharpness=analysis.quality.sharpness,
            noise=analysis.quality.noise,
        ),
        device=DeviceSection(
            id=frame.id,
            name=frame.name,
            viewport_width=frame.viewport.width,
            viewport_height=frame.viewport.height,
            aspect_ratio=frame.viewport.aspect_ratio,
            display_scale=frame.display_scale,
        ),
        optimization=OptimizationSection(
            requested_strategy=config.requested_strategy.value,
            strategy=config.strategy.value,
            scale=config.scale,
            reasoning=config.reasoning,
            has_crop=config.crop is not None,
            crop=config.crop,
            quality=config.quality,
        ),
        compatibility=CompatibilitySection(
            score=compatibility.score,
            is_compatible=compatibility.is_compatible,
            issue_count=len(compatibility.issues),
            recommendation_count=len(compatibility.recommendations),
            issues=compatibility.issues,
            recommendations=compatibility.recommendations,
        ),
        performance=PerformanceSection(
            estimated_render_time=estimated_render_time(analysis, config),
            memory_usage_mb=estimated_memory_usage(analysis, frame),
        ),
        generated_at=generated_at.isoformat() if generated_at is not None else None,
    )


# Base cost per megapixel, inflated by crop, heavy upscaling and sharpening
def estimated_render_time(analysis: ImageAnalysis, config: OptimizedConfig) -> float:
    base = analysis.dimensions.pixel_count / MEGAPIXEL
    multiplier = 1.0
    if config.crop is not None:
        multiplier += 0.2
    if config.scale > 2:
        multiplier += 0.3
    if config.quality.sharpening > 0:
        multiplier += 0.1
    return round(base * multiplier, 2)


# RGBA canvas plus RGBA source, in MB
def estimated_memory_usage(analysis: ImageAnalysis, frame: FrameSpec) -> float:
    canvas_pixels = frame.canvas_width * frame.canvas_height
    image_pixels = analysis.dimensions.pixel_count
    return round((canvas_pixels + image_pixels) * 4 / MEGABYTE, 2)
