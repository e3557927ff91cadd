import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'framefit' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("FRAMEFIT_FRAME_PROFILE", "native")


@pytest.fixture(scope="session")
def client() -> TestClient:
    # lazy import after env configured
    from framefit.main import create_app

    app = create_app()
    return TestClient(app)


@pytest.fixture()
def make_analysis():
    """Factory for ImageAnalysis values without going through pixel decoding."""
    from framefit.domain.entities.image_analysis import (
        CompatibilityNotes,
        Dimensions,
        FormatInfo,
        ImageAnalysis,
        PerformanceInfo,
        QualityMetrics,
    )
    from framefit.domain.services.image_analyzer import ImageAnalyzer

    analyzer = ImageAnalyzer()

    def _make(
        width=1179,
        height=2556,
        sharpness=0.8,
        noise=0.1,
        file_size_bytes=1_000_000,
        render_complexity=None,
        resolution_class=None,
    ):
        pixels = width * height
        if render_complexity is None:
            render_complexity = analyzer.render_complexity(pixels, sharpness)
        return ImageAnalysis(
            dimensions=Dimensions(width=width, height=height, aspect_ratio=width / height),
            quality=QualityMetrics(
                resolution_class=resolution_class or analyzer.classify_resolution(pixels),
                estimated_dpi=pixels ** 0.5 / 6,
                file_size_bytes=file_size_bytes,
                sharpness=sharpness,
                noise=noise,
            ),
            format=FormatInfo(mime_type="image/png", has_transparency=False, color_depth=24),
            orientation=analyzer.classify_orientation(width / height),
            compatibility=CompatibilityNotes(is_optimal=True),
            performance=PerformanceInfo(
                render_complexity=render_complexity, memory_usage_mb=0.0, analysis_time_ms=0.0
            ),
        )

    return _make


@pytest.fixture()
def make_frame():
    """Factory for FrameSpec values with a chosen viewport and display scale."""
    from framefit.domain.entities.frame_spec import (
        Bezels,
        FrameGeometry,
        FrameSpec,
        PixelSize,
        ResolutionBands,
        Viewport,
    )

    def _make(width=1179.0, height=2556.0, display_scale=1.0, min_band=(884, 1917),
              recommended_band=(1179, 2556), max_band=(3537, 7668)):
        return FrameSpec(
            id="test-device",
            name="Test Device",
            viewport=Viewport(width=width, height=height, aspect_ratio=width / height, corner_radius=0.0),
            frame=FrameGeometry(
                total_width=width + 10,
                total_height=height + 10,
                bezels=Bezels(top=5, bottom=5, left=5, right=5),
            ),
            display_scale=display_scale,
            optimal_resolutions=ResolutionBands(
                min=PixelSize(*min_band),
                recommended=PixelSize(*recommended_band),
                max=PixelSize(*max_band),
            ),
        )

    return _make
