from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from framefit.domain.entities.compatibility import CompatibilityReport
from framefit.domain.entities.frame_spec import FrameSpec
from framefit.domain.entities.image_analysis import ImageAnalysis
from framefit.domain.entities.optimized_config import OptimizedConfig, Strategy
from framefit.domain.entities.pixel_source import PixelSource
from framefit.domain.entities.report import OptimizationReport
from framefit.domain.services.compatibility_validator import CompatibilityValidator
from framefit.domain.services.image_analyzer import ImageAnalyzer
from framefit.domain.services.placement_planner import PlacementPlanner
from framefit.domain.services.report_generator import generate_report
from framefit.domain.services.viewport_spec_builder import ViewportSpecBuilder
from framefit.infrastructure.cache.plan_cache import PlanCache
from framefit.infrastructure.catalog.device_repository import DeviceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizationResult:
    analysis: ImageAnalysis
    frame_spec: FrameSpec
    config: OptimizedConfig
    compatibility: CompatibilityReport
    report: OptimizationReport


@dataclass
class OptimizeImageUseCase:
    """
    Run the full placement pipeline for one image against one catalog device.

    Pipeline: analyze -> build frame spec -> plan placement (tone included)
    -> validate compatibility -> assemble the audit report.

    Plans are memoized by (image hash, device id, requested strategy) within
    the frame spec and planner policy they were computed for; the engine
    itself holds no state, so the cache lives here.
    """

    devices: DeviceRepository
    builder: ViewportSpecBuilder
    analyzer: ImageAnalyzer
    planner: PlacementPlanner
    validator: CompatibilityValidator
    cache: PlanCache

    def frame_spec(self, device_id: str) -> FrameSpec:
        """
        Raises:
            DeviceNotFoundError: If the device id is not in the catalog
            ConfigError: If the catalog entry is malformed
        """
        return self.builder.build(self.devices.get(device_id))

    def execute(
        self,
        source: PixelSource,
        image_hash: str,
        device_id: str,
        strategy: Strategy | str = Strategy.SMART,
    ) -> OptimizationResult:
        """
        Plan the placement of an image inside a device viewport.

        Args:
            source: Decoded pixels of the uploaded image
            image_hash: Stable identity of the encoded image (cache key part)
            device_id: Catalog id of the target device
            strategy: Requested strategy; ``fill`` runs as ``cover``

        Returns:
            OptimizationResult with analysis, frame, plan, score and report

        Raises:
            ValueError: If the strategy name is unknown
            DecodeError: If the pixel source is unreadable
            DeviceNotFoundError: If the device id is unknown
        """
        requested = Strategy(strategy)
        frame = self.frame_spec(device_id)
        analysis = self.analyzer.analyze(source)

        key = self.cache.key(image_hash, device_id, requested, context=(frame, self.planner.policy))
        config = self.cache.get(key)
        if config is None:
            config = self.planner.plan(analysis, frame, requested)
            self.cache.put(key, config)
        else:
            logger.debug("Plan cache hit for %s on %s (%s)", image_hash[:12], device_id, requested.value)

        compatibility = self.validator.validate(analysis, frame)
        report = generate_report(
            analysis, frame, config, generated_at=datetime.now(UTC), policy=self.validator.policy
        )
        logger.info(
            "Optimized image %s for %s: %s scale=%.4f score=%d",
            image_hash[:12],
            device_id,
            config.strategy.value,
            config.scale,
            compatibility.score,
        )
        return OptimizationResult(
            analysis=analysis,
            frame_spec=frame,
            config=config,
            compatibility=compatibility,
            report=report,
        )

    def validate(self, source: PixelSource, device_id: str) -> tuple[ImageAnalysis, FrameSpec, CompatibilityReport]:
        """Score an image against a device without planning a placement."""
        frame = self.frame_spec(device_id)
        analysis = self.analyzer.analyze(source)
        return analysis, frame, self.validator.validate(analysis, frame)
