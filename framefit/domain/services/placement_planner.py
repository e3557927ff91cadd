from __future__ import annotations

import logging
from dataclasses import dataclass

from framefit.domain.entities.frame_spec import FrameSpec
from framefit.domain.entities.image_analysis import ImageAnalysis
from framefit.domain.entities.optimized_config import (
    CropRect,
    OptimizedConfig,
    Position,
    Strategy,
    Transform,
)
from framefit.domain.policy import DEFAULT_POLICY, OptimizationPolicy, clamp
from framefit.domain.services.focus_point import FocusPointProvider, RuleOfThirdsFocus
from framefit.domain.services.tone_adjuster import ToneAdjuster

logger = logging.getLogger(__name__)

# Requested strategies that are executed as another strategy.
STRATEGY_ALIASES: dict[Strategy, Strategy] = {
    Strategy.FILL: Strategy.COVER,
}

# Relative tolerance when comparing a scaled edge against the canvas edge.
_OVERFLOW_TOLERANCE = 1e-9


def resolve_strategy(requested: Strategy | str) -> Strategy:
    """Parse a requested strategy and apply aliases (``fill`` runs as ``cover``).

    Raises:
        ValueError: If ``requested`` is not a known strategy name.
    """
    strategy = Strategy(requested)
    return STRATEGY_ALIASES.get(strategy, strategy)


@dataclass(frozen=True)
class PlacementDecision:
    """Outcome of strategy selection before the scale is clamped."""

    strategy: Strategy
    scale: float
    reasoning: str


class PlacementPlanner:
    """Chooses strategy, scale, crop window and anchor for an image in a frame.

    ``plan`` is pure and deterministic: identical inputs give identical
    configs. The quality block is delegated to ``ToneAdjuster``.
    """

    def __init__(
        self,
        policy: OptimizationPolicy = DEFAULT_POLICY,
        focus: FocusPointProvider | None = None,
        tone: ToneAdjuster | None = None,
    ) -> None:
        self.policy = policy
        self.focus = focus if focus is not None else RuleOfThirdsFocus(policy)
        self.tone = tone if tone is not None else ToneAdjuster(policy)

    def plan(
        self,
        analysis: ImageAnalysis,
        frame: FrameSpec,
        strategy: Strategy | str = Strategy.SMART,
    ) -> OptimizedConfig:
        requested = Strategy(strategy)
        decision = self.decide(analysis, frame, requested)
        min_scale, max_scale = self.scale_bounds(analysis)
        scale = clamp(decision.scale, min_scale, max_scale)
        if decision.strategy is Strategy.CONTAIN:
            # contain never overflows the canvas, even below the quality floor
            scale = min(scale, decision.scale)

        crop = None
        if decision.strategy is Strategy.COVER:
            crop = self.crop_window(analysis, frame, scale)

        config = OptimizedConfig(
            scale=scale,
            position=Position(x=frame.canvas_width / 2.0, y=frame.canvas_height / 2.0),
            crop=crop,
            transform=Transform(),
            quality=self.tone.adjust(analysis, scale, decision.strategy),
            strategy=decision.strategy,
            reasoning=decision.reasoning,
            requested_strategy=requested,
        )
        logger.debug(
            "Planned %s -> %s on %s: scale=%.4f crop=%s",
            requested.value,
            decision.strategy.value,
            frame.id,
            scale,
            crop,
        )
        return config

    def decide(self, analysis: ImageAnalysis, frame: FrameSpec, requested: Strategy) -> PlacementDecision:
        p = self.policy
        scale_x = frame.canvas_width / analysis.dimensions.width
        scale_y = frame.canvas_height / analysis.dimensions.height
        resolved = resolve_strategy(requested)

        if resolved is Strategy.CONTAIN:
            return PlacementDecision(
                Strategy.CONTAIN,
                min(scale_x, scale_y) * p.contain_padding,
                "Fit entire image with padding to ensure full visibility",
            )
        if resolved is Strategy.COVER:
            reasoning = "Fill entire viewport, may crop image edges"
            if requested is Strategy.FILL:
                reasoning = "Fill resolved to cover so the image scales uniformly without distortion; " + reasoning.lower()
            return PlacementDecision(Strategy.COVER, max(scale_x, scale_y), reasoning)
        return self.smart_decision(analysis, frame, scale_x, scale_y)

    # Smart strategy: first matching rule wins
    def smart_decision(
        self, analysis: ImageAnalysis, frame: FrameSpec, scale_x: float, scale_y: float
    ) -> PlacementDecision:
        p = self.policy
        image_aspect = analysis.dimensions.aspect_ratio
        viewport_aspect = frame.viewport.aspect_ratio
        aspect_diff = abs(image_aspect - viewport_aspect)
        high_res = analysis.quality.is_high_resolution
        high_quality = self.is_high_quality(analysis)
        cover = max(scale_x, scale_y)
        contain = min(scale_x, scale_y)

        if aspect_diff < p.smart_exact_match_diff and high_res and high_quality:
            return PlacementDecision(
                Strategy.COVER,
                cover,
                "Near-identical aspect ratio with sharp, clean high resolution source - cover for maximal impact",
            )
        if aspect_diff < p.smart_close_match_diff and high_res:
            return PlacementDecision(
                Strategy.COVER,
                cover,
                "Similar aspect ratios with high resolution - using cover for optimal fill",
            )
        if aspect_diff < p.smart_good_match_diff and analysis.render_complexity < p.low_complexity_threshold:
            return PlacementDecision(
                Strategy.COVER,
                cover * p.smart_good_match_padding,
                "Good aspect ratio match - using cover with minimal padding",
            )
        if image_aspect > viewport_aspect * p.wide_image_factor:
            return PlacementDecision(
                Strategy.CONTAIN,
                contain * p.wide_image_padding,
                "Wide image - using contain with extra padding to prevent cropping",
            )
        if image_aspect < viewport_aspect * p.tall_image_factor:
            return PlacementDecision(
                Strategy.CONTAIN,
                contain * p.tall_image_padding,
                "Tall image - using contain to show full height",
            )
        if not high_quality:
            return PlacementDecision(
                Strategy.CONTAIN,
                contain * p.low_quality_padding,
                "Soft or noisy source - using contain to avoid magnifying artifacts",
            )
        return PlacementDecision(
            Strategy.CONTAIN,
            contain * p.default_padding,
            "Default strategy - contain with padding for safe display",
        )

    def is_high_quality(self, analysis: ImageAnalysis) -> bool:
        return (
            analysis.quality.sharpness > self.policy.high_quality_min_sharpness
            and analysis.quality.noise < self.policy.high_quality_max_noise
        )

    # Sharp sources tolerate deeper downscaling, ultra sources deeper upscaling
    def scale_bounds(self, analysis: ImageAnalysis) -> tuple[float, float]:
        p = self.policy
        if analysis.quality.sharpness > p.high_quality_min_sharpness:
            min_scale = p.sharp_min_scale
        else:
            min_scale = p.soft_min_scale
        max_scale = p.ultra_max_scale if analysis.quality.resolution_class == "ultra" else p.default_max_scale
        return min_scale, max_scale

    def crop_window(self, analysis: ImageAnalysis, frame: FrameSpec, scale: float) -> CropRect | None:
        """Source rectangle visible in the canvas, or None when no crop is warranted.

        Only computed once the aspect ratios differ enough that cover would
        hide a meaningful part of the image.
        """
        img_w = float(analysis.dimensions.width)
        img_h = float(analysis.dimensions.height)
        canvas_w = frame.canvas_width
        canvas_h = frame.canvas_height
        aspect_diff = abs(analysis.dimensions.aspect_ratio - frame.viewport.aspect_ratio)
        if aspect_diff <= self.policy.crop_aspect_diff:
            return None

        x, y, width, height = 0.0, 0.0, img_w, img_h
        cropped = False
        if img_w * scale > canvas_w * (1.0 + _OVERFLOW_TOLERANCE):
            width = min(img_w, canvas_w / scale)
            x = clamp(self.focus.horizontal(analysis) - width / 2.0, 0.0, img_w - width)
            cropped = True
        if img_h * scale > canvas_h * (1.0 + _OVERFLOW_TOLERANCE):
            height = min(img_h, canvas_h / scale)
            y = clamp(self.focus.vertical(analysis) - height / 2.0, 0.0, img_h - height)
            cropped = True
        if not cropped:
            return None
        return CropRect(x=x, y=y, width=width, height=height)


def plan_placement(
    analysis: ImageAnalysis,
    frame: FrameSpec,
    strategy: Strategy | str = Strategy.SMART,
    policy: OptimizationPolicy = DEFAULT_POLICY,
) -> OptimizedConfig:
    return PlacementPlanner(policy).plan(analysis, frame, strategy)
