import json

import pytest

from framefit.domain.errors import ConfigError, DeviceNotFoundError
from framefit.infrastructure.catalog.device_repository import DeviceRepository

CAMEL_ROW = {
    "id": "pixel-test",
    "name": "Pixel Test",
    "category": "android",
    "variant": "Standard",
    "dimensions": {"width": 72.0, "height": 152.8, "depth": 8.9},
    "screen": {
        "width": 65.0,
        "height": 142.0,
        "resolution": {"width": 1080, "height": 2400},
        "ppi": 422,
        "cornerRadius": 40,
    },
    "features": ["usb-c"],
    "displayScale": 2.5,
}


def test_builtin_catalog():
    repo = DeviceRepository()
    assert len(repo.list()) == 8
    assert len(repo.list("iphone")) == 8
    assert repo.list("ipad") == []
    assert [d.id for d in repo.latest()] == [
        "iphone-16-pro-max",
        "iphone-16-pro",
        "iphone-16-plus",
        "iphone-16",
    ]
    assert repo.get("iphone-15").name == "iPhone 15"


def test_unknown_device():
    with pytest.raises(DeviceNotFoundError) as info:
        DeviceRepository().get("nokia-3310")
    assert info.value.device_id == "nokia-3310"
    assert str(info.value) == "Device not found: nokia-3310"


def test_loads_camel_case_file(tmp_path):
    path = tmp_path / "devices.json"
    path.write_text(json.dumps({"devices": [CAMEL_ROW]}), encoding="utf-8")
    repo = DeviceRepository(path)
    device = repo.get("pixel-test")
    assert device.screen.corner_radius == 40
    assert device.display_scale == 2.5
    assert device.features == ("usb-c",)
    assert repo.latest() == []


def test_loads_plain_list_with_snake_case(tmp_path):
    row = dict(CAMEL_ROW, display_scale=None)
    row.pop("displayScale")
    row["screen"] = dict(CAMEL_ROW["screen"], corner_radius=12)
    row["screen"].pop("cornerRadius")
    path = tmp_path / "devices.json"
    path.write_text(json.dumps([row]), encoding="utf-8")
    device = DeviceRepository(path).get("pixel-test")
    assert device.screen.corner_radius == 12
    assert device.display_scale is None


def test_malformed_row(tmp_path):
    path = tmp_path / "devices.json"
    path.write_text(json.dumps([{"id": "broken", "screen": {}}]), encoding="utf-8")
    with pytest.raises(ConfigError):
        DeviceRepository(path)


def test_unreadable_file(tmp_path):
    with pytest.raises(ConfigError):
        DeviceRepository(tmp_path / "missing.json")
