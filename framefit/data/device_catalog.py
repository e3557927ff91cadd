"""Built-in device catalog (physical sizes in mm, native panel pixels)."""
from __future__ import annotations

from framefit.domain.entities.frame_spec import DeviceDescriptor, PixelSize, ScreenSpec


def _iphone(
    device_id: str,
    name: str,
    variant: str,
    body: tuple[float, float, float],
    screen: tuple[float, float],
    resolution: tuple[int, int],
    corner_radius: float,
    features: tuple[str, ...],
) -> DeviceDescriptor:
    return DeviceDescriptor(
        id=device_id,
        name=name,
        category="iphone",
        variant=variant,
        width=body[0],
        height=body[1],
        depth=body[2],
        screen=ScreenSpec(
            width=screen[0],
            height=screen[1],
            resolution=PixelSize(*resolution),
            ppi=460,
            corner_radius=corner_radius,
        ),
        features=features,
    )


_PRO = ("dynamic-island", "action-button", "usb-c", "triple-camera", "always-on-display")
_STANDARD = ("dynamic-island", "usb-c", "dual-camera")

BUILTIN_DEVICES: tuple[DeviceDescriptor, ...] = (
    _iphone("iphone-16-pro-max", "iPhone 16 Pro Max", "Pro Max", (77.6, 163.0, 8.25), (74.24, 160.71),
            (1320, 2868), 55, _PRO + ("camera-control",)),
    _iphone("iphone-16-pro", "iPhone 16 Pro", "Pro", (71.5, 149.6, 8.25), (68.1, 147.3),
            (1200, 2600), 50, _PRO + ("camera-control",)),
    _iphone("iphone-16-plus", "iPhone 16 Plus", "Plus", (77.6, 163.0, 7.8), (74.24, 160.71),
            (1290, 2796), 55, _STANDARD),
    _iphone("iphone-16", "iPhone 16", "Standard", (71.5, 149.6, 7.8), (68.1, 147.3),
            (1179, 2556), 50, _STANDARD),
    _iphone("iphone-15-pro-max", "iPhone 15 Pro Max", "Pro Max", (76.7, 159.9, 8.25), (73.3, 157.6),
            (1290, 2796), 55, _PRO),
    _iphone("iphone-15-pro", "iPhone 15 Pro", "Pro", (70.6, 146.6, 8.25), (67.2, 144.3),
            (1179, 2556), 50, _PRO),
    _iphone("iphone-15-plus", "iPhone 15 Plus", "Plus", (77.8, 160.9, 7.8), (74.4, 158.6),
            (1290, 2796), 55, _STANDARD),
    _iphone("iphone-15", "iPhone 15", "Standard", (71.6, 147.6, 7.8), (68.2, 145.3),
            (1179, 2556), 50, _STANDARD),
)

LATEST_DEVICE_IDS = ("iphone-16-pro-max", "iphone-16-pro", "iphone-16-plus", "iphone-16")
