import io

import numpy as np
import pytest
from PIL import Image


def make_png_bytes(w=4, h=4, color=(128, 64, 32)) -> bytes:
    arr = np.zeros((h, w, 3), dtype=np.uint8)
    arr[:, :] = color
    img = Image.fromarray(arr)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def upload(w=400, h=300):
    return {"file": ("sample.png", make_png_bytes(w, h), "image/png")}


def test_root_and_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["service"] == "framefit"
    assert client.get("/health").json() == {"status": "healthy"}


def test_list_devices(client):
    r = client.get("/devices")
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 8
    assert {"id", "name", "category", "variant"} <= set(data["devices"][0])

    r2 = client.get("/devices", params={"category": "ipad"})
    assert r2.json()["total"] == 0


def test_frame_spec(client):
    r = client.get("/devices/iphone-16-pro/frame-spec")
    assert r.status_code == 200, r.text
    spec = r.json()
    assert spec["display_scale"] == pytest.approx(1200 / 68.1)
    assert spec["optimal_resolutions"]["recommended"] == {"width": 1200, "height": 2600}
    assert spec["canvas_width"] == pytest.approx(1200)


def test_unknown_device_is_404(client):
    r = client.get("/devices/nokia-3310/frame-spec")
    assert r.status_code == 404
    assert r.json()["detail"] == "Device not found: nokia-3310"


def test_catalog_audit(client):
    r = client.get("/devices/audit")
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["summary"]["total_devices"] == 8
    assert data["summary"]["valid_devices"] == 8
    assert len(data["devices"]) == 8

    r2 = client.get("/devices/iphone-16/audit")
    assert r2.status_code == 200
    assert r2.json()["status"] == "valid"


def test_analyze_image(client):
    r = client.post("/images/analyze", files=upload(40, 20))
    assert r.status_code == 200, r.text
    data = r.json()
    assert len(data["image_hash"]) == 64
    analysis = data["analysis"]
    assert analysis["dimensions"] == {"width": 40, "height": 20, "aspect_ratio": 2.0}
    assert analysis["orientation"] == "landscape"
    assert analysis["format"]["mime_type"] == "image/png"
    assert analysis["quality"]["resolution_class"] == "low"


def test_analyze_rejects_garbage(client):
    files = {"file": ("sample.png", b"not an image", "image/png")}
    r = client.post("/images/analyze", files=files)
    assert r.status_code == 400


def test_upload_limit(client, monkeypatch):
    monkeypatch.setenv("FRAMEFIT_MAX_UPLOAD_MB", "0.00001")
    r = client.post("/images/analyze", files=upload())
    assert r.status_code == 413


def test_plan_contain(client):
    r = client.post("/optimization/plan", files=upload(), data={"device_id": "iphone-16", "strategy": "contain"})
    assert r.status_code == 200, r.text
    data = r.json()
    config = data["config"]
    assert config["strategy"] == "contain"
    assert config["requested_strategy"] == "contain"
    assert config["crop"] is None
    assert config["scale"] == pytest.approx(1179 / 400 * 0.95)
    assert config["position"]["x"] == pytest.approx(1179 / 2)
    assert data["frame_spec"]["id"] == "iphone-16"
    assert data["compatibility"]["is_compatible"] is False


def test_plan_fill_runs_as_cover(client):
    r = client.post("/optimization/plan", files=upload(), data={"device_id": "iphone-16", "strategy": "fill"})
    assert r.status_code == 200, r.text
    config = r.json()["config"]
    assert config["strategy"] == "cover"
    assert config["requested_strategy"] == "fill"
    assert config["crop"] is not None


def test_plan_defaults_to_smart(client):
    r = client.post("/optimization/plan", files=upload(), data={"device_id": "iphone-16"})
    assert r.status_code == 200, r.text
    assert r.json()["config"]["requested_strategy"] == "smart"


def test_plan_rejects_unknown_strategy(client):
    r = client.post("/optimization/plan", files=upload(), data={"device_id": "iphone-16", "strategy": "stretch"})
    assert r.status_code == 400
    assert "stretch" in r.json()["detail"]


def test_plan_unknown_device(client):
    r = client.post("/optimization/plan", files=upload(), data={"device_id": "nokia-3310"})
    assert r.status_code == 404


def test_validate(client):
    r = client.post("/optimization/validate", files=upload(), data={"device_id": "iphone-16"})
    assert r.status_code == 200, r.text
    compat = r.json()["compatibility"]
    # below the minimum band and far from the viewport aspect
    assert compat["score"] == 50
    assert compat["is_compatible"] is False
    assert [f["code"] for f in compat["findings"]] == ["resolution_below_minimum", "aspect_ratio_mismatch"]


def test_report(client):
    r = client.post("/optimization/report", files=upload(), data={"device_id": "iphone-16", "strategy": "cover"})
    assert r.status_code == 200, r.text
    report = r.json()
    assert set(report) == {"image", "device", "optimization", "compatibility", "performance", "generated_at"}
    assert report["optimization"]["strategy"] == "cover"
    assert report["optimization"]["has_crop"] is True
    assert report["device"]["id"] == "iphone-16"
    assert report["generated_at"] is not None


def test_list_latest_devices(client):
    r = client.get("/devices", params={"latest": "true"})
    assert r.status_code == 200
    assert [d["id"] for d in r.json()["devices"]] == [
        "iphone-16-pro-max",
        "iphone-16-pro",
        "iphone-16-plus",
        "iphone-16",
    ]
