from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from framefit.application.dtos.common_dto import ErrorResponse
from framefit.application.dtos.device_dto import (
    CatalogAuditResponse,
    DeviceAuditResponse,
    DeviceListResponse,
    DeviceSummary,
    FrameSpecModel,
)
from framefit.application.use_cases.audit_devices import AuditDevicesUseCase
from framefit.application.use_cases.optimize_image import OptimizeImageUseCase
from framefit.infrastructure.api.dependencies import (
    get_audit_use_case,
    get_device_repo,
    get_optimize_use_case,
)
from framefit.infrastructure.catalog.device_repository import DeviceRepository

router = APIRouter(
    prefix="/devices",
    tags=["Devices"],
    responses={
        404: {"model": ErrorResponse, "description": "Not Found - Device id is not in the catalog"},
        422: {"model": ErrorResponse, "description": "Unprocessable - Catalog entry is malformed"},
    },
)


@router.get(
    "",
    response_model=DeviceListResponse,
    summary="List Devices",
    description="List catalog devices, optionally filtered by category (e.g. `iphone`).",
)
def list_devices(
    category: str | None = Query(None, description="Only return devices of this category"),
    latest: bool = Query(False, description="Only return the current device generation"),
    devices: DeviceRepository = Depends(get_device_repo),
):
    found = devices.list(category)
    if latest:
        current = {d.id for d in devices.latest()}
        found = [d for d in found if d.id in current]
    items = [DeviceSummary.model_validate(d) for d in found]
    return DeviceListResponse(devices=items, total=len(items))


@router.get(
    "/audit",
    response_model=CatalogAuditResponse,
    summary="Audit Device Catalog",
    description="""
    Validate every catalog device: dimensions, screen data, features and
    render-surface cost. Returns a catalog summary plus per-device findings.
    """,
)
def audit_catalog(
    category: str | None = Query(None, description="Only audit devices of this category"),
    uc: AuditDevicesUseCase = Depends(get_audit_use_case),
):
    summary, results = uc.execute(category)
    return CatalogAuditResponse.model_validate({"summary": summary, "devices": results})


@router.get(
    "/{device_id}/frame-spec",
    response_model=FrameSpecModel,
    summary="Get Frame Spec",
    description="Viewport size, display scale and min/recommended/max resolutions for a device.",
)
def get_frame_spec(device_id: str, uc: OptimizeImageUseCase = Depends(get_optimize_use_case)):
    return FrameSpecModel.model_validate(uc.frame_spec(device_id))


@router.get(
    "/{device_id}/audit",
    response_model=DeviceAuditResponse,
    summary="Audit Device",
)
def audit_device(device_id: str, uc: AuditDevicesUseCase = Depends(get_audit_use_case)):
    return DeviceAuditResponse.model_validate(uc.audit_one(device_id))
