"""Focus point heuristics used to center crop windows.

Focus points are rule based (orientation class and rule of thirds) and never
look at image content. Content-aware detection can replace
``RuleOfThirdsFocus`` by implementing ``FocusPointProvider``; the planner
only depends on the protocol.
"""
from __future__ import annotations

from typing import Protocol

from framefit.domain.entities.image_analysis import ImageAnalysis
from framefit.domain.policy import DEFAULT_POLICY, OptimizationPolicy


class FocusPointProvider(Protocol):
    def horizontal(self, analysis: ImageAnalysis) -> float:
        """X coordinate (source pixels) the horizontal crop is centered on."""
        ...

    def vertical(self, analysis: ImageAnalysis) -> float:
        """Y coordinate (source pixels) the vertical crop is centered on."""
        ...


class RuleOfThirdsFocus:
    def __init__(self, policy: OptimizationPolicy = DEFAULT_POLICY) -> None:
        self.policy = policy

    # Wide images keep their center; everything else leans to the left third
    def horizontal(self, analysis: ImageAnalysis) -> float:
        width = analysis.dimensions.width
        if analysis.orientation == "landscape":
            return width / 2.0
        return width * self.policy.thirds_focus

    # Tall images (often UI screenshots) keep their upper quarter; others the upper third
    def vertical(self, analysis: ImageAnalysis) -> float:
        height = analysis.dimensions.height
        if analysis.orientation == "portrait":
            return height * self.policy.tall_vertical_focus
        return height * self.policy.thirds_focus
