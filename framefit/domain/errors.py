from __future__ import annotations


class FrameFitError(Exception):
    """Base class for errors raised by the optimization engine."""


class DecodeError(FrameFitError, ValueError):
    """Pixel data cannot be interpreted (zero dimensions, unreadable buffer)."""


class ConfigError(FrameFitError, ValueError):
    """A device descriptor or policy override is malformed."""


class DeviceNotFoundError(FrameFitError, LookupError):
    def __init__(self, device_id: str) -> None:
        super().__init__(f"Device not found: {device_id}")
        self.device_id = device_id
