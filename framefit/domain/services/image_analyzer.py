from __future__ import annotations

import logging
import math
import time

import numpy as np

from framefit.domain.entities.image_analysis import (
    CompatibilityNotes,
    Dimensions,
    FormatInfo,
    ImageAnalysis,
    Orientation,
    PerformanceInfo,
    QualityMetrics,
    ResolutionClass,
)
from framefit.domain.entities.pixel_source import PixelSource
from framefit.domain.errors import DecodeError
from framefit.domain.policy import DEFAULT_POLICY, MEGABYTE, OptimizationPolicy, clamp

logger = logging.getLogger(__name__)


class ImageAnalyzer:
    """Derives an ``ImageAnalysis`` from decoded RGBA pixels.

    Sharpness and noise are cheap heuristics over small centered samples,
    not true MTF or sensor-noise measurements. Grayscale is (R + G + B) / 3
    on the 0-255 scale, which the policy divisors assume.
    """

    def __init__(self, policy: OptimizationPolicy = DEFAULT_POLICY) -> None:
        self.policy = policy

    def analyze(self, source: PixelSource) -> ImageAnalysis:
        started = time.perf_counter()
        pixels = self._read_pixels(source)
        height, width = pixels.shape[:2]
        p = self.policy

        dimensions = Dimensions(width=width, height=height, aspect_ratio=width / height)
        # grayscale only the center samples, never the full frame
        sharp_region = self.grayscale(self.center_sample(pixels, p.sharpness_sample_size))
        noise_region = self.grayscale(self.center_sample(pixels, p.noise_sample_size))
        sharpness = self.measure_sharpness(sharp_region, p.sharpness_divisor)
        noise = self.measure_noise(noise_region, p.noise_divisor)
        quality = QualityMetrics(
            resolution_class=self.classify_resolution(dimensions.pixel_count),
            estimated_dpi=math.sqrt(dimensions.pixel_count) / p.dpi_divisor,
            file_size_bytes=max(0, int(source.byte_size)),
            sharpness=sharpness,
            noise=noise,
        )
        has_transparency = bool(pixels[..., 3].min() < 255)
        fmt = FormatInfo(
            mime_type=source.mime_type or "unknown",
            has_transparency=has_transparency,
            color_depth=32 if has_transparency else 24,
        )
        compatibility = self._compatibility_notes(dimensions, quality)
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        performance = PerformanceInfo(
            render_complexity=self.render_complexity(dimensions.pixel_count, sharpness),
            memory_usage_mb=round(dimensions.pixel_count * 4 / MEGABYTE, 2),
            analysis_time_ms=round(elapsed_ms, 3),
        )
        analysis = ImageAnalysis(
            dimensions=dimensions,
            quality=quality,
            format=fmt,
            orientation=self.classify_orientation(dimensions.aspect_ratio),
            compatibility=compatibility,
            performance=performance,
        )
        logger.debug(
            "Analyzed %dx%d image: class=%s sharpness=%.3f noise=%.3f",
            width,
            height,
            quality.resolution_class,
            sharpness,
            noise,
        )
        return analysis

    # Resolution class by pixel count: <0.5MP low, <2MP medium, <8MP high, else ultra
    def classify_resolution(self, pixel_count: int) -> ResolutionClass:
        if pixel_count < self.policy.low_resolution_max_pixels:
            return "low"
        if pixel_count < self.policy.medium_resolution_max_pixels:
            return "medium"
        if pixel_count < self.policy.high_resolution_max_pixels:
            return "high"
        return "ultra"

    def classify_orientation(self, aspect_ratio: float) -> Orientation:
        tolerance = self.policy.square_tolerance
        if aspect_ratio > 1.0 + tolerance:
            return "landscape"
        if aspect_ratio < 1.0 - tolerance:
            return "portrait"
        return "square"

    def render_complexity(self, pixel_count: int, sharpness: float) -> float:
        size_term = min(pixel_count / self.policy.complexity_reference_pixels, 1.0)
        score = (
            self.policy.complexity_pixel_weight * size_term
            + self.policy.complexity_sharpness_weight * sharpness
        )
        return clamp(score, 0.0, 1.0)

    # Grayscale (Average): (R + G + B) / 3, kept on the 0-255 scale
    @staticmethod
    def grayscale(pixels: np.ndarray) -> np.ndarray:
        return np.mean(pixels[..., :3].astype(np.float32), axis=2)

    @staticmethod
    def center_sample(pixels: np.ndarray, max_side: int) -> np.ndarray:
        h, w = pixels.shape[:2]
        side = min(max_side, w, h)
        y0 = (h - side) // 2
        x0 = (w - side) // 2
        return pixels[y0 : y0 + side, x0 : x0 + side]

    # Mean gradient magnitude of a gray sample against right and lower neighbours, normalized
    @staticmethod
    def measure_sharpness(region: np.ndarray, divisor: float) -> float:
        region = region.astype(np.float64)
        if region.shape[0] < 2 or region.shape[1] < 2:
            return 0.0
        base = region[:-1, :-1]
        dx = region[:-1, 1:] - base
        dy = region[1:, :-1] - base
        magnitude = np.sqrt(dx * dx + dy * dy)
        return clamp(float(np.mean(magnitude)) / divisor, 0.0, 1.0)

    # Population standard deviation of a gray sample, normalized
    @staticmethod
    def measure_noise(region: np.ndarray, divisor: float) -> float:
        region = region.astype(np.float64)
        if region.size == 0:
            return 0.0
        return clamp(float(np.std(region)) / divisor, 0.0, 1.0)

    def _compatibility_notes(self, dimensions: Dimensions, quality: QualityMetrics) -> CompatibilityNotes:
        p = self.policy
        recommendations: list[str] = []
        warnings: list[str] = []
        is_optimal = True

        if quality.resolution_class == "low":
            warnings.append("Low resolution image may appear pixelated on high-DPI displays")
            recommendations.append("Use an image with at least 1080p resolution for best quality")
            is_optimal = False

        if quality.sharpness < p.blur_warning_sharpness:
            warnings.append("Image appears blurry; fine detail may be lost")

        if quality.noise > p.noise_warning_level:
            warnings.append("High noise level detected; artifacts may be visible")

        if abs(dimensions.aspect_ratio - p.reference_phone_aspect) > p.reference_aspect_tolerance:
            recommendations.append("Consider cropping to match device aspect ratios for better fit")

        if quality.file_size_bytes > p.large_file_warning_bytes:
            warnings.append("Large file size may impact performance")
            recommendations.append("Consider compressing the image to reduce file size")

        if dimensions.aspect_ratio > p.extreme_aspect_max or dimensions.aspect_ratio < p.extreme_aspect_min:
            warnings.append("Extreme aspect ratio may not display well on device frames")
            recommendations.append("Consider cropping to a more standard aspect ratio")
            is_optimal = False

        return CompatibilityNotes(
            is_optimal=is_optimal,
            recommendations=tuple(recommendations),
            warnings=tuple(warnings),
        )

    @staticmethod
    def _read_pixels(source: PixelSource) -> np.ndarray:
        width, height = int(source.width), int(source.height)
        if width <= 0 or height <= 0:
            raise DecodeError(f"Image has invalid dimensions {width}x{height}")
        try:
            pixels = np.asarray(source.rgba())
        except Exception as exc:
            raise DecodeError(f"Unreadable pixel data: {exc}") from exc
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise DecodeError(f"Expected RGBA pixel data, got shape {pixels.shape}")
        if pixels.shape[0] != height or pixels.shape[1] != width:
            raise DecodeError(
                f"Pixel buffer {pixels.shape[1]}x{pixels.shape[0]} does not match declared {width}x{height}"
            )
        return pixels


def analyze_image(source: PixelSource, policy: OptimizationPolicy = DEFAULT_POLICY) -> ImageAnalysis:
    return ImageAnalyzer(policy).analyze(source)
