import json
import logging

import pytest

from framefit.domain.errors import ConfigError
from framefit.domain.policy import DEFAULT_POLICY
from framefit.infrastructure.config import LOCAL_DEV_ORIGINS, get_settings, load_policy
from framefit.infrastructure.logging_config import HANDLER_NAME, configure_logging

ENV_VARS = [
    "ENV",
    "LOG_LEVEL",
    "FRAMEFIT_DEFAULT_STRATEGY",
    "FRAMEFIT_FRAME_PROFILE",
    "FRAMEFIT_MAX_UPLOAD_MB",
    "FRAMEFIT_DECODE_TIMEOUT_SECONDS",
    "FRAMEFIT_DEVICE_CATALOG",
    "FRAMEFIT_POLICY_PATH",
    "FRAMEFIT_PLAN_CACHE_SIZE",
    "CORS_ORIGINS",
]


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = get_settings()
    assert settings.env == "development"
    assert settings.log_level == "INFO"
    assert settings.default_strategy == "smart"
    assert settings.frame_profile == "native"
    assert settings.max_upload_bytes == 50 * 1024 * 1024
    assert settings.decode_timeout_seconds == 10.0
    assert settings.device_catalog_path is None
    assert settings.policy_path is None
    assert settings.plan_cache_size == 256
    assert settings.cors_origins == LOCAL_DEV_ORIGINS


def test_environment_overrides(clean_env, tmp_path):
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("FRAMEFIT_MAX_UPLOAD_MB", "2")
    clean_env.setenv("FRAMEFIT_DEVICE_CATALOG", str(tmp_path / "devices.json"))
    settings = get_settings()
    assert settings.log_level == "DEBUG"
    assert settings.max_upload_bytes == 2 * 1024 * 1024
    assert settings.device_catalog_path == tmp_path / "devices.json"


def test_invalid_number(clean_env):
    clean_env.setenv("FRAMEFIT_PLAN_CACHE_SIZE", "lots")
    with pytest.raises(ConfigError):
        get_settings()


def test_policy_defaults_without_file():
    assert load_policy(None) is DEFAULT_POLICY


def test_policy_overrides_from_file(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({"contain_padding": 0.9, "compression_range": [0.5, 1.0]}), encoding="utf-8")
    policy = load_policy(path)
    assert policy.contain_padding == 0.9
    assert policy.compression_range == (0.5, 1.0)
    assert policy.cover_contrast_boost == DEFAULT_POLICY.cover_contrast_boost


def test_policy_unknown_key(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({"contain_pading": 0.9}), encoding="utf-8")
    with pytest.raises(ConfigError, match="contain_pading"):
        load_policy(path)


def test_policy_must_be_object(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_policy(path)


def test_configure_logging_is_idempotent():
    configure_logging("debug")
    configure_logging("warning")
    logger = logging.getLogger("framefit")
    owned = [h for h in logger.handlers if h.get_name() == HANDLER_NAME]
    assert len(owned) == 1
    assert logger.level == logging.WARNING


@pytest.mark.parametrize(
    "env,expected",
    [("development", LOCAL_DEV_ORIGINS), ("staging", LOCAL_DEV_ORIGINS), ("production", ("*",))],
)
def test_cors_defaults_follow_env(clean_env, env, expected):
    clean_env.setenv("ENV", env)
    assert get_settings().cors_origins == expected


def test_cors_origins_from_environment(clean_env):
    clean_env.setenv("ENV", "production")
    clean_env.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
    assert get_settings().cors_origins == ("https://a.example", "https://b.example")


def test_cors_middleware_uses_settings(clean_env):
    from fastapi.testclient import TestClient

    from framefit.main import create_app

    clean_env.setenv("ENV", "production")
    clean_env.setenv("CORS_ORIGINS", "https://frames.example")
    client = TestClient(create_app())
    headers = {"Origin": "https://frames.example", "Access-Control-Request-Method": "GET"}
    allowed = client.options("/health", headers=headers)
    assert allowed.headers["access-control-allow-origin"] == "https://frames.example"

    headers["Origin"] = "https://elsewhere.example"
    denied = client.options("/health", headers=headers)
    assert "access-control-allow-origin" not in denied.headers
