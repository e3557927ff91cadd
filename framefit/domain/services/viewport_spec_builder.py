from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from framefit.domain.entities.frame_spec import (
    Bezels,
    DeviceDescriptor,
    FrameGeometry,
    FrameSpec,
    PixelSize,
    ResolutionBands,
    Viewport,
)
from framefit.domain.errors import ConfigError


class FrameProfile(str, Enum):
    """How display scale and resolution bands are derived.

    The two profiles are not equivalent; pick the one that matches the
    catalog the frames will be rendered against.
    """

    NATIVE = "native"  # bands are fractions/multiples of the native panel resolution
    PHYSICAL = "physical"  # bands are multiples of the physical screen size


@dataclass(frozen=True)
class ProfileRules:
    # None: render at native panel pixels, i.e. native width over physical width
    display_scale: float | None
    min_factor: float
    recommended_factor: float
    max_factor: float
    from_native: bool


PROFILE_RULES: dict[FrameProfile, ProfileRules] = {
    FrameProfile.NATIVE: ProfileRules(
        display_scale=None, min_factor=0.75, recommended_factor=1.0, max_factor=3.0, from_native=True
    ),
    FrameProfile.PHYSICAL: ProfileRules(
        display_scale=4.2, min_factor=1.5, recommended_factor=2.5, max_factor=4.0, from_native=False
    ),
}


class ViewportSpecBuilder:
    """Converts a device descriptor into a ``FrameSpec``."""

    def __init__(self, profile: FrameProfile | str = FrameProfile.NATIVE) -> None:
        try:
            self.profile = FrameProfile(profile)
        except ValueError as exc:
            raise ConfigError(f"Unknown frame profile: {profile}") from exc
        self.rules = PROFILE_RULES[self.profile]

    def build(self, device: DeviceDescriptor) -> FrameSpec:
        self.check_descriptor(device)
        screen = device.screen
        display_scale = self.display_scale(device)

        if self.rules.from_native:
            base_w, base_h = float(screen.resolution.width), float(screen.resolution.height)
        else:
            base_w, base_h = float(screen.width), float(screen.height)

        bezel_x = (device.width - screen.width) / 2
        bezel_y = (device.height - screen.height) / 2
        return FrameSpec(
            id=device.id,
            name=device.name,
            viewport=Viewport(
                width=screen.width,
                height=screen.height,
                aspect_ratio=screen.width / screen.height,
                corner_radius=screen.corner_radius,
            ),
            frame=FrameGeometry(
                total_width=device.width,
                total_height=device.height,
                bezels=Bezels(top=bezel_y, bottom=bezel_y, left=bezel_x, right=bezel_x),
            ),
            display_scale=display_scale,
            optimal_resolutions=ResolutionBands(
                min=_scaled(base_w, base_h, self.rules.min_factor),
                recommended=_scaled(base_w, base_h, self.rules.recommended_factor),
                max=_scaled(base_w, base_h, self.rules.max_factor),
            ),
            features=tuple(device.features),
        )

    def display_scale(self, device: DeviceDescriptor) -> float:
        if device.display_scale is not None:
            return device.display_scale
        if self.rules.display_scale is None:
            return device.screen.resolution.width / device.screen.width
        return self.rules.display_scale

    @staticmethod
    def check_descriptor(device: DeviceDescriptor) -> None:
        screen = device.screen
        if device.width <= 0 or device.height <= 0:
            raise ConfigError(f"{device.id}: device dimensions must be positive")
        if screen.width <= 0 or screen.height <= 0:
            raise ConfigError(f"{device.id}: screen dimensions must be positive")
        if screen.resolution.width <= 0 or screen.resolution.height <= 0:
            raise ConfigError(f"{device.id}: native resolution must be positive")
        if screen.corner_radius < 0:
            raise ConfigError(f"{device.id}: corner radius cannot be negative")
        if device.display_scale is not None and device.display_scale <= 0:
            raise ConfigError(f"{device.id}: display scale must be positive")


def _scaled(width: float, height: float, factor: float) -> PixelSize:
    return PixelSize(width=round(width * factor), height=round(height * factor))


def build_frame_spec(device: DeviceDescriptor, profile: FrameProfile | str = FrameProfile.NATIVE) -> FrameSpec:
    return ViewportSpecBuilder(profile).build(device)
