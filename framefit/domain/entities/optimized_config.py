from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Strategy(str, Enum):
    CONTAIN = "contain"
    COVER = "cover"
    FILL = "fill"
    SMART = "smart"


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class CropRect:
    """Sub-rectangle of the source image, in source pixels."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Transform:
    rotation: float = 0.0
    flip_x: bool = False
    flip_y: bool = False


@dataclass(frozen=True)
class ToneConfig:
    compression: float = 0.95
    sharpening: float = 0.0
    saturation: float = 1.0
    brightness: float = 1.0
    contrast: float = 1.0


@dataclass(frozen=True)
class OptimizedConfig:
    scale: float
    position: Position
    crop: CropRect | None
    transform: Transform
    quality: ToneConfig
    strategy: Strategy
    reasoning: str
    requested_strategy: Strategy = Strategy.SMART
