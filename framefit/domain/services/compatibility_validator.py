from __future__ import annotations

from framefit.domain.entities.compatibility import CompatibilityReport, ValidationIssue
from framefit.domain.entities.frame_spec import FrameSpec
from framefit.domain.entities.image_analysis import ImageAnalysis
from framefit.domain.policy import DEFAULT_POLICY, OptimizationPolicy


class CompatibilityValidator:
    """Scores how well an image fits a frame (0-100).

    Score and compatibility are reported separately: an image is compatible
    only when no hard issue fired, whatever its score. Inputs are assumed to
    be already validated by the analyzer and spec builder.
    """

    def __init__(self, policy: OptimizationPolicy = DEFAULT_POLICY) -> None:
        self.policy = policy

    def validate(self, analysis: ImageAnalysis, frame: FrameSpec) -> CompatibilityReport:
        findings = self.findings(analysis, frame)
        score = max(0, 100 - sum(f.penalty for f in findings))
        issues = tuple(f.message for f in findings if f.hard)
        recommendations = tuple(f.recommendation for f in findings if f.recommendation)
        return CompatibilityReport(
            score=score,
            is_compatible=not issues,
            issues=issues,
            recommendations=recommendations,
            findings=tuple(findings),
        )

    def findings(self, analysis: ImageAnalysis, frame: FrameSpec) -> list[ValidationIssue]:
        p = self.policy
        found: list[ValidationIssue] = []
        width, height = analysis.dimensions.width, analysis.dimensions.height
        bands = frame.optimal_resolutions

        if width < bands.min.width or height < bands.min.height:
            found.append(
                ValidationIssue(
                    code="resolution_below_minimum",
                    message="Image resolution is below minimum recommended for this device",
                    penalty=p.below_min_penalty,
                    hard=True,
                    recommendation=f"Use an image at least {bands.min} pixels",
                )
            )
        elif width < bands.recommended.width or height < bands.recommended.height:
            found.append(
                ValidationIssue(
                    code="resolution_below_recommended",
                    message="Image resolution is below the recommended resolution",
                    penalty=p.below_recommended_penalty,
                    hard=False,
                    recommendation=f"For best quality, use {bands.recommended} pixels or higher",
                )
            )

        aspect = analysis.dimensions.aspect_ratio
        aspect_diff = abs(aspect - frame.viewport.aspect_ratio)
        if aspect_diff > p.severe_aspect_diff:
            found.append(
                ValidationIssue(
                    code="aspect_ratio_mismatch",
                    message="Image aspect ratio differs significantly from device viewport",
                    penalty=p.severe_aspect_penalty,
                    hard=True,
                    recommendation="Consider cropping image to better match device aspect ratio",
                )
            )
        elif aspect_diff > p.moderate_aspect_diff:
            found.append(
                ValidationIssue(
                    code="aspect_ratio_drift",
                    message="Image aspect ratio could be optimized for better fit",
                    penalty=p.moderate_aspect_penalty,
                    hard=False,
                    recommendation="Image aspect ratio could be optimized for better fit",
                )
            )

        if analysis.quality.file_size_bytes > p.huge_file_bytes:
            found.append(
                ValidationIssue(
                    code="file_too_large",
                    message="Very large file size may impact performance",
                    penalty=p.huge_file_penalty,
                    hard=True,
                    recommendation="Consider compressing the image",
                )
            )

        if aspect > p.score_extreme_aspect_max or aspect < p.score_extreme_aspect_min:
            found.append(
                ValidationIssue(
                    code="extreme_aspect_ratio",
                    message="Extreme aspect ratio may not display well",
                    penalty=p.extreme_aspect_penalty,
                    hard=True,
                    recommendation="Consider using a more standard aspect ratio",
                )
            )
        return found


def validate_compatibility(
    analysis: ImageAnalysis, frame: FrameSpec, policy: OptimizationPolicy = DEFAULT_POLICY
) -> CompatibilityReport:
    return CompatibilityValidator(policy).validate(analysis, frame)
