from __future__ import annotations

from framefit.domain.entities.image_analysis import ImageAnalysis
from framefit.domain.entities.optimized_config import Strategy, ToneConfig
from framefit.domain.policy import DEFAULT_POLICY, OptimizationPolicy, clamp


class ToneAdjuster:
    """Derives tone hints (compression, sharpening, saturation, brightness, contrast).

    Every rule nudges a neutral baseline; the combined values are clamped to
    the policy's safe ranges only once, after all rules have run.
    """

    def __init__(self, policy: OptimizationPolicy = DEFAULT_POLICY) -> None:
        self.policy = policy

    def adjust(self, analysis: ImageAnalysis, scale: float, strategy: Strategy | str) -> ToneConfig:
        p = self.policy
        compression = p.neutral_compression
        sharpening = 0.0
        saturation = 1.0
        brightness = 1.0
        contrast = 1.0

        if analysis.quality.resolution_class == "low":
            sharpening += p.low_res_sharpening
            contrast += p.low_res_contrast

        if analysis.quality.sharpness < p.soft_image_sharpness:
            sharpening += p.soft_image_sharpening

        if analysis.quality.noise > p.noisy_image_level:
            sharpening -= p.noisy_sharpening_cut
            compression -= p.noisy_compression_cut

        if scale > p.upscale_threshold:
            compression += p.upscale_compression_boost
            sharpening += p.upscale_sharpening
        elif scale < p.downscale_threshold:
            compression -= p.downscale_compression_cut

        if Strategy(strategy) is Strategy.COVER:
            saturation += p.cover_saturation_boost
            contrast += p.cover_contrast_boost

        return ToneConfig(
            compression=round(clamp(compression, *p.compression_range), 4),
            sharpening=round(clamp(sharpening, *p.sharpening_range), 4),
            saturation=round(clamp(saturation, *p.saturation_range), 4),
            brightness=round(clamp(brightness, *p.brightness_range), 4),
            contrast=round(clamp(contrast, *p.contrast_range), 4),
        )


def adjust_tone(
    analysis: ImageAnalysis,
    scale: float,
    strategy: Strategy | str,
    policy: OptimizationPolicy = DEFAULT_POLICY,
) -> ToneConfig:
    return ToneAdjuster(policy).adjust(analysis, scale, strategy)
