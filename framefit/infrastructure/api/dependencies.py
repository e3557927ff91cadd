from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends

from framefit.application.use_cases.analyze_image import AnalyzeImageUseCase
from framefit.application.use_cases.audit_devices import AuditDevicesUseCase
from framefit.application.use_cases.optimize_image import OptimizeImageUseCase
from framefit.domain.policy import OptimizationPolicy
from framefit.domain.services.compatibility_validator import CompatibilityValidator
from framefit.domain.services.device_auditor import DeviceAuditor
from framefit.domain.services.image_analyzer import ImageAnalyzer
from framefit.domain.services.placement_planner import PlacementPlanner
from framefit.domain.services.viewport_spec_builder import ViewportSpecBuilder
from framefit.infrastructure.cache.plan_cache import PlanCache
from framefit.infrastructure.catalog.device_repository import DeviceRepository
from framefit.infrastructure.config import Settings, get_settings, load_policy

# Simple reusable singleton for the plan cache
_PLAN_CACHE: PlanCache | None = None


def get_plan_cache(settings: Annotated[Settings, Depends(get_settings)]) -> PlanCache:
    global _PLAN_CACHE
    if _PLAN_CACHE is None:
        _PLAN_CACHE = PlanCache(settings.plan_cache_size)
    return _PLAN_CACHE


# Policy and catalog are loaded once per configured path and shared by every request
@lru_cache(maxsize=None)
def _policy_for(path: Path | None) -> OptimizationPolicy:
    return load_policy(path)


@lru_cache(maxsize=None)
def _device_repo_for(path: Path | None) -> DeviceRepository:
    return DeviceRepository(path)


def get_policy(settings: Annotated[Settings, Depends(get_settings)]) -> OptimizationPolicy:
    return _policy_for(settings.policy_path)


def get_device_repo(settings: Annotated[Settings, Depends(get_settings)]) -> DeviceRepository:
    return _device_repo_for(settings.device_catalog_path)


def get_analyze_use_case(
    policy: Annotated[OptimizationPolicy, Depends(get_policy)],
) -> AnalyzeImageUseCase:
    return AnalyzeImageUseCase(analyzer=ImageAnalyzer(policy))


def get_optimize_use_case(
    settings: Annotated[Settings, Depends(get_settings)],
    policy: Annotated[OptimizationPolicy, Depends(get_policy)],
    devices: Annotated[DeviceRepository, Depends(get_device_repo)],
    cache: Annotated[PlanCache, Depends(get_plan_cache)],
) -> OptimizeImageUseCase:
    return OptimizeImageUseCase(
        devices=devices,
        builder=ViewportSpecBuilder(settings.frame_profile),
        analyzer=ImageAnalyzer(policy),
        planner=PlacementPlanner(policy),
        validator=CompatibilityValidator(policy),
        cache=cache,
    )


def get_audit_use_case(
    settings: Annotated[Settings, Depends(get_settings)],
    devices: Annotated[DeviceRepository, Depends(get_device_repo)],
) -> AuditDevicesUseCase:
    return AuditDevicesUseCase(devices=devices, auditor=DeviceAuditor(settings.frame_profile))
