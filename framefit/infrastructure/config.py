from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from framefit.domain.errors import ConfigError
from framefit.domain.policy import DEFAULT_POLICY, OptimizationPolicy

# Front-end dev servers (CRA and Vite) allowed when CORS_ORIGINS is unset
LOCAL_DEV_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
)


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str
    default_strategy: str
    frame_profile: str
    max_upload_mb: float
    decode_timeout_seconds: float
    device_catalog_path: Path | None
    policy_path: Path | None
    plan_cache_size: int
    cors_origins: tuple[str, ...]

    @property
    def max_upload_bytes(self) -> int:
        return int(self.max_upload_mb * 1024 * 1024)


def _optional_path(name: str) -> Path | None:
    value = os.getenv(name)
    return Path(value) if value else None


def _cors_origins(env: str) -> tuple[str, ...]:
    configured = os.getenv("CORS_ORIGINS")
    if configured is not None:
        return tuple(o.strip() for o in configured.split(",") if o.strip())
    if env in ("development", "staging", "test"):
        return LOCAL_DEV_ORIGINS
    return ("*",)


def get_settings() -> Settings:
    """Read settings from the environment on every call (cheap, test friendly)."""
    env = os.getenv("ENV", "development")
    try:
        return Settings(
            env=env,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            default_strategy=os.getenv("FRAMEFIT_DEFAULT_STRATEGY", "smart"),
            frame_profile=os.getenv("FRAMEFIT_FRAME_PROFILE", "native"),
            max_upload_mb=float(os.getenv("FRAMEFIT_MAX_UPLOAD_MB", "50")),
            decode_timeout_seconds=float(os.getenv("FRAMEFIT_DECODE_TIMEOUT_SECONDS", "10")),
            device_catalog_path=_optional_path("FRAMEFIT_DEVICE_CATALOG"),
            policy_path=_optional_path("FRAMEFIT_POLICY_PATH"),
            plan_cache_size=int(os.getenv("FRAMEFIT_PLAN_CACHE_SIZE", "256")),
            cors_origins=_cors_origins(env),
        )
    except ValueError as exc:
        raise ConfigError(f"Invalid numeric setting: {exc}") from exc


def load_policy(path: Path | None) -> OptimizationPolicy:
    """Apply JSON overrides from ``path`` on top of the default policy table."""
    if path is None:
        return DEFAULT_POLICY
    try:
        overrides = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read policy overrides from {path}: {exc}") from exc
    if not isinstance(overrides, dict):
        raise ConfigError(f"Policy overrides in {path} must be a JSON object")
    return DEFAULT_POLICY.with_overrides(**overrides)
