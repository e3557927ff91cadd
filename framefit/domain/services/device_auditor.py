from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from framefit.domain.entities.device_audit import (
    AspectRatioRange,
    AuditStatus,
    AuditSummary,
    DeviceAuditResult,
    DeviceIssue,
    ImageCompatibilityHints,
    ResolutionExtents,
)
from framefit.domain.entities.frame_spec import DeviceDescriptor, FrameSpec
from framefit.domain.errors import ConfigError
from framefit.domain.services.viewport_spec_builder import FrameProfile, ViewportSpecBuilder

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("image/jpeg", "image/png", "image/webp", "image/gif")

KNOWN_FEATURES = frozenset(
    {
        "notch",
        "dynamic-island",
        "home-button",
        "face-id",
        "touch-id",
        "wireless-charging",
        "magsafe",
        "action-button",
        "usb-c",
        "lightning",
        "dual-camera",
        "triple-camera",
        "camera-control",
        "always-on-display",
    }
)

MAX_CANVAS_PIXELS = 16_000_000
MAX_CANVAS_MEMORY_MB = 100.0


class DeviceAuditor:
    """Checks device descriptors for data problems before they reach the planner.

    Findings are returned as data; a descriptor ``ViewportSpecBuilder`` rejects is
    reported as an error with no frame spec.
    """

    def __init__(self, profile: FrameProfile | str = FrameProfile.NATIVE) -> None:
        self.builder = ViewportSpecBuilder(profile)

    def audit(self, device: DeviceDescriptor) -> DeviceAuditResult:
        issues: list[DeviceIssue] = []
        frame: FrameSpec | None = None
        try:
            frame = self.builder.build(device)
        except ConfigError as exc:
            logger.warning("Device %s has an unusable descriptor: %s", device.id, exc)
            issues.append(
                DeviceIssue("error", "compatibility", f"Frame spec cannot be built: {exc}", "high",
                            "Fix the descriptor values reported above")
            )

        self._check_basic(device, issues)
        self._check_dimensions(device, issues)
        self._check_screen(device, issues)
        self._check_features(device, issues)
        if frame is not None:
            self._check_performance(frame, issues)

        status: AuditStatus = "valid"
        if any(i.type == "error" for i in issues):
            status = "error"
        elif any(i.type == "warning" for i in issues):
            status = "warning"

        return DeviceAuditResult(
            device_id=device.id,
            device_name=device.name,
            status=status,
            issues=tuple(issues),
            recommendations=tuple(_recommendations_for(issues)),
            frame_spec=frame,
            image_compatibility=_image_hints(frame) if frame is not None else None,
        )

    def audit_catalog(self, devices: Iterable[DeviceDescriptor]) -> AuditSummary:
        results = [self.audit(device) for device in devices]
        return summarize(results)

    @staticmethod
    def _check_basic(device: DeviceDescriptor, issues: list[DeviceIssue]) -> None:
        if not device.name or not device.name.strip():
            issues.append(DeviceIssue("error", "compatibility", "Device name is missing or empty", "high",
                                      "Provide a descriptive device name"))
        if not device.category:
            issues.append(DeviceIssue("error", "compatibility", "Device category is missing", "high",
                                      "Specify device category (iphone, ipad, etc.)"))
        if not device.variant or not device.variant.strip():
            issues.append(DeviceIssue("warning", "compatibility", "Device variant is missing", "low",
                                      "Specify device variant for better organization"))

    @staticmethod
    def _check_dimensions(device: DeviceDescriptor, issues: list[DeviceIssue]) -> None:
        if device.width <= 0 or device.height <= 0 or device.depth <= 0:
            issues.append(DeviceIssue("error", "dimensions", "Invalid or missing device dimensions", "high",
                                      "Provide valid width, height, and depth measurements"))
            return

        if device.category == "iphone":
            if not 50 <= device.width <= 100:
                issues.append(DeviceIssue("warning", "dimensions", f"Unusual device width: {device.width}mm",
                                          "medium", "Verify device width is correct (typical range: 50-100mm)"))
            if not 120 <= device.height <= 180:
                issues.append(DeviceIssue("warning", "dimensions", f"Unusual device height: {device.height}mm",
                                          "medium", "Verify device height is correct (typical range: 120-180mm)"))
            if not 6 <= device.depth <= 15:
                issues.append(DeviceIssue("warning", "dimensions", f"Unusual device depth: {device.depth}mm",
                                          "low", "Verify device depth is correct (typical range: 6-15mm)"))

        if device.width / device.height > 1:
            issues.append(DeviceIssue("warning", "dimensions", "Device appears to be in landscape orientation",
                                      "medium", "Ensure dimensions are correct for portrait orientation"))

    @staticmethod
    def _check_screen(device: DeviceDescriptor, issues: list[DeviceIssue]) -> None:
        screen = device.screen
        if screen.width <= 0 or screen.height <= 0:
            issues.append(DeviceIssue("error", "layout", "Invalid screen dimensions", "high",
                                      "Provide valid screen width and height"))
            return

        if screen.width > device.width or screen.height > device.height:
            issues.append(DeviceIssue("error", "layout", "Screen dimensions exceed device dimensions", "high",
                                      "Ensure screen fits within device frame"))

        resolution = screen.resolution
        if resolution.width <= 0 or resolution.height <= 0:
            issues.append(DeviceIssue("error", "layout", "Invalid or missing screen resolution", "high",
                                      "Provide valid screen resolution"))
            return

        if not 100 <= screen.ppi <= 600:
            issues.append(DeviceIssue("warning", "layout", f"Unusual PPI value: {screen.ppi}", "low",
                                      "Verify PPI is correct (typical range: 200-500)"))

        if not 0 <= screen.corner_radius <= 100:
            issues.append(DeviceIssue("warning", "layout", f"Unusual corner radius: {screen.corner_radius}px",
                                      "low", "Verify corner radius is appropriate"))

        screen_aspect = screen.width / screen.height
        native_aspect = resolution.width / resolution.height
        if abs(screen_aspect - native_aspect) > 0.01:
            issues.append(DeviceIssue("warning", "layout",
                                      "Screen dimensions and resolution aspect ratios do not match", "medium",
                                      "Ensure screen dimensions and resolution have matching aspect ratios"))

    @staticmethod
    def _check_features(device: DeviceDescriptor, issues: list[DeviceIssue]) -> None:
        if not device.features:
            issues.append(DeviceIssue("info", "features", "No features specified", "low",
                                      "Consider adding device features for better categorization"))
            return

        if "notch" in device.features and "dynamic-island" in device.features:
            issues.append(DeviceIssue("warning", "features", "Device has both notch and dynamic island features",
                                      "medium", "Remove conflicting features - devices typically have one or the other"))

        for feature in device.features:
            if feature not in KNOWN_FEATURES:
                issues.append(DeviceIssue("info", "features", f"Unknown feature: {feature}", "low",
                                          "Verify feature name or add to valid features list"))

    @staticmethod
    def _check_performance(frame: FrameSpec, issues: list[DeviceIssue]) -> None:
        canvas_pixels = frame.canvas_width * frame.canvas_height
        if canvas_pixels > MAX_CANVAS_PIXELS:
            issues.append(DeviceIssue("warning", "performance",
                                      "Very high canvas resolution may impact performance", "medium",
                                      "Consider optimizing display scale or resolution for better performance"))
        memory_mb = canvas_pixels * 4 / 1024 / 1024
        if memory_mb > MAX_CANVAS_MEMORY_MB:
            issues.append(DeviceIssue("warning", "performance", f"High memory usage estimated: {memory_mb:.1f}MB",
                                      "medium", "Consider reducing canvas size for better memory efficiency"))


def _plural(count: int) -> str:
    return "s" if count > 1 else ""


def _recommendations_for(issues: list[DeviceIssue]) -> list[str]:
    recommendations: list[str] = []
    errors = sum(1 for i in issues if i.type == "error")
    warnings = sum(1 for i in issues if i.type == "warning")
    if errors:
        recommendations.append(f"Fix {errors} critical error{_plural(errors)} before using this device")
    if warnings:
        recommendations.append(f"Address {warnings} warning{_plural(warnings)} to improve compatibility")

    categories = {i.category for i in issues}
    if "layout" in categories:
        recommendations.append("Verify all layout specifications are accurate")
    if "performance" in categories:
        recommendations.append("Consider performance optimizations for better user experience")
    if "dimensions" in categories:
        recommendations.append("Double-check device measurements against official specifications")
    return recommendations


def _image_hints(frame: FrameSpec) -> ImageCompatibilityHints:
    bands = frame.optimal_resolutions
    aspect = frame.viewport.aspect_ratio
    return ImageCompatibilityHints(
        supported_formats=SUPPORTED_FORMATS,
        min_resolution=str(bands.min),
        recommended_resolution=str(bands.recommended),
        max_resolution=str(bands.max),
        aspect_ratio_range=AspectRatioRange(min=aspect * 0.7, max=aspect * 1.3, optimal=aspect),
    )


def summarize(results: list[DeviceAuditResult]) -> AuditSummary:
    """Aggregate per-device audits into catalog-wide statistics."""
    valid = sum(1 for r in results if r.status == "valid")
    with_warnings = sum(1 for r in results if r.status == "warning")
    with_errors = sum(1 for r in results if r.status == "error")

    # Most frequent messages shared by more than one device, ties keep first-seen order
    counts = Counter(issue.message for r in results for issue in r.issues)
    common = [(message, count) for message, count in counts.most_common() if count > 1][:5]
    common_issues = tuple(f"{message} ({count} devices)" for message, count in common)

    frames = [r.frame_spec for r in results if r.frame_spec is not None]
    extents = None
    if frames:
        extents = ResolutionExtents(
            min_width=min(f.optimal_resolutions.min.width for f in frames),
            min_height=min(f.optimal_resolutions.min.height for f in frames),
            max_width=max(f.optimal_resolutions.max.width for f in frames),
            max_height=max(f.optimal_resolutions.max.height for f in frames),
        )

    aspects = [f.viewport.aspect_ratio for f in frames]
    distribution = {
        "portrait": sum(1 for a in aspects if a < 0.9),
        "landscape": sum(1 for a in aspects if a > 1.1),
        "square": sum(1 for a in aspects if 0.9 <= a <= 1.1),
    }

    recommendations: list[str] = []
    if with_errors:
        recommendations.append(
            f"{with_errors} device{_plural(with_errors)} have critical errors that need immediate attention"
        )
    if with_warnings:
        recommendations.append(
            f"{with_warnings} device{_plural(with_warnings)} have warnings that should be addressed"
        )
    if common_issues:
        recommendations.append("Address common issues across multiple devices for consistency")
    recommendations.append("Regularly validate device specifications against official documentation")
    recommendations.append("Test image rendering across all device frames to ensure quality")

    return AuditSummary(
        total_devices=len(results),
        valid_devices=valid,
        devices_with_warnings=with_warnings,
        devices_with_errors=with_errors,
        common_issues=common_issues,
        recommendations=tuple(recommendations),
        supported_resolutions=extents,
        aspect_ratio_distribution=distribution,
    )


def audit_device(device: DeviceDescriptor, profile: FrameProfile | str = FrameProfile.NATIVE) -> DeviceAuditResult:
    return DeviceAuditor(profile).audit(device)


def audit_catalog(
    devices: Iterable[DeviceDescriptor], profile: FrameProfile | str = FrameProfile.NATIVE
) -> AuditSummary:
    return DeviceAuditor(profile).audit_catalog(devices)
