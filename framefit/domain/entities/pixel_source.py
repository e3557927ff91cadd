from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class PixelSource(Protocol):
    """Anything that exposes decoded RGBA pixels plus its encoded size."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    @property
    def byte_size(self) -> int: ...

    @property
    def mime_type(self) -> str: ...

    def rgba(self) -> np.ndarray:
        """Return an (H, W, 4) uint8 array."""
        ...


@dataclass(frozen=True)
class ArrayPixelSource:
    """In-memory pixel buffer. Channel convention: (H, W, 4) RGBA uint8."""

    pixels: np.ndarray = field(repr=False)
    byte_size: int = 0
    mime_type: str = "application/octet-stream"

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1]) if self.pixels.ndim >= 2 else 0

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0]) if self.pixels.ndim >= 2 else 0

    def rgba(self) -> np.ndarray:
        return self.pixels

    @classmethod
    def from_rgb(
        cls, rgb: np.ndarray, byte_size: int = 0, mime_type: str = "image/png"
    ) -> ArrayPixelSource:
        """Wrap an (H, W, 3) uint8 array, adding an opaque alpha channel."""
        arr = np.asarray(rgb, dtype=np.uint8)
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        return cls(pixels=np.concatenate([arr[..., :3], alpha], axis=2), byte_size=byte_size, mime_type=mime_type)
