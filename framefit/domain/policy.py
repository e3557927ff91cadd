"""Tunable heuristics for analysis, placement, tone and scoring.

Every threshold the engine uses lives on ``OptimizationPolicy`` so behavior can
be tuned (and tested) as data. ``DEFAULT_POLICY`` is the production table;
callers override single values with ``policy.with_overrides(...)``.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from framefit.domain.errors import ConfigError

MEGAPIXEL = 1_000_000
MEGABYTE = 1024 * 1024


@dataclass(frozen=True)
class OptimizationPolicy:
    # --- resolution classes (pixel count upper bounds) ---
    low_resolution_max_pixels: int = 500_000
    medium_resolution_max_pixels: int = 2_000_000
    high_resolution_max_pixels: int = 8_000_000

    # --- orientation band around 1.0 ---
    square_tolerance: float = 0.1

    # --- sharpness / noise sampling ---
    sharpness_sample_size: int = 200
    noise_sample_size: int = 100
    sharpness_divisor: float = 50.0
    noise_divisor: float = 50.0
    dpi_divisor: float = 6.0

    # --- render complexity ---
    complexity_reference_pixels: int = 16 * MEGAPIXEL
    complexity_pixel_weight: float = 0.6
    complexity_sharpness_weight: float = 0.4
    low_complexity_threshold: float = 0.5

    # --- analysis notes ---
    blur_warning_sharpness: float = 0.3
    noise_warning_level: float = 0.7
    large_file_warning_bytes: int = 10 * MEGABYTE
    extreme_aspect_min: float = 1.0 / 3.0
    extreme_aspect_max: float = 3.0
    # 19.5:9 phone held upright; aspects here are width/height, hence 9 / 19.5
    # rather than 19.5 / 9
    reference_phone_aspect: float = 9.0 / 19.5
    reference_aspect_tolerance: float = 0.5

    # --- placement ---
    contain_padding: float = 0.95
    smart_exact_match_diff: float = 0.05
    smart_close_match_diff: float = 0.1
    smart_good_match_diff: float = 0.3
    smart_good_match_padding: float = 0.98
    wide_image_factor: float = 1.5
    wide_image_padding: float = 0.9
    tall_image_factor: float = 0.7
    tall_image_padding: float = 0.95
    low_quality_padding: float = 0.92
    default_padding: float = 0.95
    high_quality_min_sharpness: float = 0.6
    high_quality_max_noise: float = 0.4

    # --- scale clamp ---
    sharp_min_scale: float = 0.1
    soft_min_scale: float = 0.2
    ultra_max_scale: float = 6.0
    default_max_scale: float = 4.0

    # --- cropping ---
    crop_aspect_diff: float = 0.15
    thirds_focus: float = 1.0 / 3.0
    tall_vertical_focus: float = 0.25

    # --- tone ---
    neutral_compression: float = 0.95
    low_res_sharpening: float = 0.25
    low_res_contrast: float = 0.05
    soft_image_sharpness: float = 0.4
    soft_image_sharpening: float = 0.15
    noisy_image_level: float = 0.6
    noisy_sharpening_cut: float = 0.15
    noisy_compression_cut: float = 0.05
    upscale_threshold: float = 2.0
    upscale_compression_boost: float = 0.03
    upscale_sharpening: float = 0.1
    downscale_threshold: float = 0.5
    downscale_compression_cut: float = 0.1
    cover_saturation_boost: float = 0.05
    cover_contrast_boost: float = 0.03
    compression_range: tuple[float, float] = (0.6, 1.0)
    sharpening_range: tuple[float, float] = (0.0, 0.4)
    saturation_range: tuple[float, float] = (0.9, 1.1)
    brightness_range: tuple[float, float] = (0.9, 1.1)
    contrast_range: tuple[float, float] = (0.9, 1.15)

    # --- compatibility scoring ---
    below_min_penalty: int = 30
    below_recommended_penalty: int = 10
    severe_aspect_diff: float = 0.5
    severe_aspect_penalty: int = 20
    moderate_aspect_diff: float = 0.3
    moderate_aspect_penalty: int = 10
    huge_file_bytes: int = 20 * MEGABYTE
    huge_file_penalty: int = 15
    score_extreme_aspect_min: float = 0.25
    score_extreme_aspect_max: float = 4.0
    extreme_aspect_penalty: int = 25

    def with_overrides(self, **overrides: Any) -> OptimizationPolicy:
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"Unknown policy keys: {', '.join(unknown)}")
        cleaned = {
            key: tuple(value) if isinstance(value, list) else value
            for key, value in overrides.items()
        }
        return replace(self, **cleaned)


DEFAULT_POLICY = OptimizationPolicy()


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))
