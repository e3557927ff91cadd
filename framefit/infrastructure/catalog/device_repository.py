from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from framefit.data.device_catalog import BUILTIN_DEVICES, LATEST_DEVICE_IDS
from framefit.domain.entities.frame_spec import DeviceDescriptor, PixelSize, ScreenSpec
from framefit.domain.errors import ConfigError, DeviceNotFoundError


class DeviceRepository:
    """Read-only device catalog, backed by a JSON file or the built-in list."""

    def __init__(self, catalog_path: Path | None = None) -> None:
        self.catalog_path = catalog_path
        if catalog_path is None:
            devices = list(BUILTIN_DEVICES)
        else:
            devices = self._load_file(catalog_path)
        self._devices: dict[str, DeviceDescriptor] = {d.id: d for d in devices}

    def _load_file(self, path: Path) -> list[DeviceDescriptor]:
        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot read device catalog {path}: {exc}") from exc
        rows = payload.get("devices", []) if isinstance(payload, dict) else payload
        if not isinstance(rows, list):
            raise ConfigError(f"Device catalog {path} must hold a list of devices")
        return [self._row_to_entity(row) for row in rows]

    @staticmethod
    def _row_to_entity(row: dict[str, Any]) -> DeviceDescriptor:
        """Convert a catalog row (camelCase or snake_case keys) to a descriptor."""
        try:
            dims = row["dimensions"]
            screen = row["screen"]
            resolution = screen["resolution"]
            corner_radius = screen.get("corner_radius", screen.get("cornerRadius", 0))
            display_scale = row.get("display_scale", row.get("displayScale"))
            return DeviceDescriptor(
                id=str(row["id"]),
                name=str(row.get("name", "")),
                category=str(row.get("category", "")),
                variant=str(row.get("variant", "")),
                width=float(dims["width"]),
                height=float(dims["height"]),
                depth=float(dims.get("depth", 0)),
                screen=ScreenSpec(
                    width=float(screen["width"]),
                    height=float(screen["height"]),
                    resolution=PixelSize(int(resolution["width"]), int(resolution["height"])),
                    ppi=float(screen.get("ppi", 0)),
                    corner_radius=float(corner_radius),
                ),
                features=tuple(row.get("features") or ()),
                display_scale=float(display_scale) if display_scale is not None else None,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigError(f"Malformed device descriptor {row.get('id', '?')!r}: {exc}") from exc

    def list(self, category: str | None = None) -> list[DeviceDescriptor]:
        devices = list(self._devices.values())
        if category is not None:
            devices = [d for d in devices if d.category == category]
        return devices

    def latest(self) -> list[DeviceDescriptor]:
        return [self._devices[i] for i in LATEST_DEVICE_IDS if i in self._devices]

    def get(self, device_id: str) -> DeviceDescriptor:
        device = self._devices.get(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return device
