import tracemalloc

import numpy as np
import pytest

from framefit.domain.entities.pixel_source import ArrayPixelSource
from framefit.domain.errors import DecodeError
from framefit.domain.policy import MEGABYTE
from framefit.domain.services.image_analyzer import ImageAnalyzer, analyze_image


def solid(w, h, value=128):
    return ArrayPixelSource.from_rgb(np.full((h, w, 3), value, dtype=np.uint8), byte_size=1000)


def test_uniform_image_has_no_detail():
    analysis = ImageAnalyzer().analyze(solid(100, 100))
    assert analysis.dimensions.width == 100
    assert analysis.dimensions.height == 100
    assert analysis.dimensions.aspect_ratio == 1.0
    assert analysis.orientation == "square"
    assert analysis.quality.resolution_class == "low"
    assert analysis.quality.sharpness == 0.0
    assert analysis.quality.noise == 0.0
    assert analysis.quality.estimated_dpi == pytest.approx(100 / 6)
    assert analysis.quality.file_size_bytes == 1000


def test_low_resolution_notes():
    notes = ImageAnalyzer().analyze(solid(100, 100)).compatibility
    assert notes.is_optimal is False
    assert "Low resolution image may appear pixelated on high-DPI displays" in notes.warnings
    assert "Image appears blurry; fine detail may be lost" in notes.warnings
    assert "Use an image with at least 1080p resolution for best quality" in notes.recommendations
    # square image is far from the phone reference aspect
    assert "Consider cropping to match device aspect ratios for better fit" in notes.recommendations


def test_horizontal_ramp_sharpness():
    ramp = np.tile(np.arange(100, dtype=np.uint8), (100, 1))
    rgb = np.stack([ramp, ramp, ramp], axis=-1)
    analysis = ImageAnalyzer().analyze(ArrayPixelSource.from_rgb(rgb))
    # one grey level per column, normalized by 50
    assert analysis.quality.sharpness == pytest.approx(1 / 50)


def test_checkerboard_saturates_sharpness_and_noise():
    board = (np.indices((64, 64)).sum(axis=0) % 2 * 255).astype(np.uint8)
    rgb = np.stack([board, board, board], axis=-1)
    analysis = ImageAnalyzer().analyze(ArrayPixelSource.from_rgb(rgb))
    assert analysis.quality.sharpness == 1.0
    assert analysis.quality.noise == 1.0
    assert "High noise level detected; artifacts may be visible" in analysis.compatibility.warnings


def test_transparency_detection():
    pixels = np.full((10, 10, 4), 255, dtype=np.uint8)
    opaque = ImageAnalyzer().analyze(ArrayPixelSource(pixels.copy(), mime_type="image/png"))
    assert opaque.format.has_transparency is False
    assert opaque.format.color_depth == 24

    pixels[3, 4, 3] = 0
    clear = ImageAnalyzer().analyze(ArrayPixelSource(pixels, mime_type="image/png"))
    assert clear.format.has_transparency is True
    assert clear.format.color_depth == 32
    assert clear.format.mime_type == "image/png"


def test_extreme_aspect_and_large_file():
    rgb = np.zeros((100, 400, 3), dtype=np.uint8)
    source = ArrayPixelSource.from_rgb(rgb, byte_size=11 * MEGABYTE)
    analysis = analyze_image(source)
    notes = analysis.compatibility
    assert analysis.orientation == "landscape"
    assert notes.is_optimal is False
    assert "Extreme aspect ratio may not display well on device frames" in notes.warnings
    assert "Large file size may impact performance" in notes.warnings
    assert "Consider compressing the image to reduce file size" in notes.recommendations


def test_performance_block():
    analysis = ImageAnalyzer().analyze(solid(100, 100))
    assert analysis.performance is not None
    assert analysis.performance.memory_usage_mb == round(100 * 100 * 4 / MEGABYTE, 2)
    assert analysis.performance.analysis_time_ms >= 0
    assert 0.0 <= analysis.render_complexity <= 1.0


def test_zero_dimensions_rejected():
    source = ArrayPixelSource(np.zeros((0, 0, 4), dtype=np.uint8))
    with pytest.raises(DecodeError):
        ImageAnalyzer().analyze(source)


def test_declared_size_must_match_buffer():
    class Lying:
        width = 10
        height = 10
        byte_size = 0
        mime_type = "image/png"

        def rgba(self):
            return np.zeros((5, 5, 4), dtype=np.uint8)

    with pytest.raises(DecodeError):
        ImageAnalyzer().analyze(Lying())


def test_unreadable_buffer_rejected():
    class Broken:
        width = 4
        height = 4
        byte_size = 0
        mime_type = "image/png"

        def rgba(self):
            raise OSError("truncated")

    with pytest.raises(DecodeError, match="truncated"):
        ImageAnalyzer().analyze(Broken())


def test_rgb_buffer_rejected():
    source = ArrayPixelSource(np.zeros((4, 4, 3), dtype=np.uint8))
    with pytest.raises(DecodeError):
        ImageAnalyzer().analyze(source)


@pytest.mark.parametrize(
    "pixels,expected",
    [
        (499_999, "low"),
        (500_000, "medium"),
        (1_999_999, "medium"),
        (2_000_000, "high"),
        (7_999_999, "high"),
        (8_000_000, "ultra"),
    ],
)
def test_resolution_class_boundaries(pixels, expected):
    assert ImageAnalyzer().classify_resolution(pixels) == expected


def test_resolution_class_is_monotonic():
    analyzer = ImageAnalyzer()
    rank = {"low": 0, "medium": 1, "high": 2, "ultra": 3}
    counts = [1, 10_000, 499_999, 500_000, 1_500_000, 2_000_000, 5_000_000, 8_000_000, 50_000_000]
    ranks = [rank[analyzer.classify_resolution(c)] for c in counts]
    assert ranks == sorted(ranks)


@pytest.mark.parametrize(
    "aspect,expected",
    [(1.05, "square"), (1.11, "landscape"), (0.95, "square"), (0.89, "portrait"), (1.0, "square")],
)
def test_orientation_band(aspect, expected):
    assert ImageAnalyzer().classify_orientation(aspect) == expected


def test_render_complexity_saturates():
    analyzer = ImageAnalyzer()
    assert analyzer.render_complexity(16_000_000, 1.0) == pytest.approx(1.0)
    assert analyzer.render_complexity(32_000_000, 1.0) == pytest.approx(1.0)
    assert analyzer.render_complexity(8_000_000, 0.0) == pytest.approx(0.3)


def test_grayscale_only_touches_center_samples(monkeypatch):
    shapes = []
    original = ImageAnalyzer.grayscale

    def recording(pixels):
        shapes.append(pixels.shape)
        return original(pixels)

    monkeypatch.setattr(ImageAnalyzer, "grayscale", staticmethod(recording))
    ImageAnalyzer().analyze(solid(1000, 800))
    assert shapes == [(200, 200, 4), (100, 100, 4)]


def test_large_image_analysis_stays_small_in_memory():
    source = solid(4000, 3000)  # 48MB of RGBA
    tracemalloc.start()
    try:
        ImageAnalyzer().analyze(source)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()
    assert peak < 8 * MEGABYTE


def test_center_sample_keeps_channels():
    pixels = np.zeros((50, 80, 4), dtype=np.uint8)
    sample = ImageAnalyzer.center_sample(pixels, 20)
    assert sample.shape == (20, 20, 4)
    assert ImageAnalyzer.center_sample(pixels, 500).shape == (50, 50, 4)


def test_reference_phone_aspect_is_portrait():
    analyzer = ImageAnalyzer()
    assert analyzer.policy.reference_phone_aspect == pytest.approx(1 / (19.5 / 9))
    upright = analyzer.analyze(solid(450, 975)).compatibility
    sideways = analyzer.analyze(solid(975, 450)).compatibility
    hint = "Consider cropping to match device aspect ratios for better fit"
    assert hint not in upright.recommendations
    assert hint in sideways.recommendations
