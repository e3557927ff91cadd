from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from framefit.application.dtos.common_dto import ErrorResponse
from framefit.application.dtos.device_dto import FrameSpecModel
from framefit.application.dtos.image_dto import ImageAnalysisModel
from framefit.application.dtos.optimization_dto import (
    CompatibilityResponse,
    OptimizationResponse,
    OptimizedConfigModel,
    ValidationResponse,
)
from framefit.application.use_cases.optimize_image import OptimizeImageUseCase
from framefit.domain.entities.optimized_config import Strategy
from framefit.infrastructure.api.dependencies import get_optimize_use_case
from framefit.infrastructure.api.uploads import decode_upload
from framefit.infrastructure.config import Settings, get_settings

router = APIRouter(
    prefix="/optimization",
    tags=["Optimization"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - Unreadable image or unknown strategy"},
        404: {"model": ErrorResponse, "description": "Not Found - Device id is not in the catalog"},
        408: {"model": ErrorResponse, "description": "Request Timeout - Decoding took too long"},
        413: {"model": ErrorResponse, "description": "Payload Too Large - File size exceeds limit"},
    },
)


def _parse_strategy(value: str | None, settings: Settings) -> Strategy:
    try:
        return Strategy((value or settings.default_strategy).lower())
    except ValueError as exc:
        allowed = ", ".join(s.value for s in Strategy)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown strategy {value!r}; expected one of: {allowed}",
        ) from exc


@router.post(
    "/plan",
    response_model=OptimizationResponse,
    summary="Plan Image Placement",
    description="""
    Compute how an image should be placed in a device viewport.

    **Strategies:**
    - `contain` - fit the whole image with 5% padding, never crops
    - `cover` - fill the viewport, may crop
    - `fill` - runs as `cover` (the image is never distorted)
    - `smart` - choose between cover and contain from aspect ratio and quality

    The response holds the scale, crop window, anchor position and tone hints
    for a downstream renderer, plus the compatibility score. Pixels are never
    modified.
    """,
)
async def plan_placement(
    file: UploadFile = File(..., description="Image to place"),
    device_id: str = Form(..., description="Catalog id of the target device"),
    strategy: str | None = Form(None, description="contain | cover | fill | smart"),
    settings: Settings = Depends(get_settings),
    uc: OptimizeImageUseCase = Depends(get_optimize_use_case),
):
    requested = _parse_strategy(strategy, settings)
    source, digest = await decode_upload(file, settings)
    result = uc.execute(source, digest, device_id, requested)
    return OptimizationResponse(
        image_hash=digest,
        device_id=device_id,
        analysis=ImageAnalysisModel.model_validate(result.analysis),
        frame_spec=FrameSpecModel.model_validate(result.frame_spec),
        config=OptimizedConfigModel.model_validate(result.config),
        compatibility=CompatibilityResponse.model_validate(result.compatibility),
    )


@router.post(
    "/validate",
    response_model=ValidationResponse,
    summary="Validate Compatibility",
    description="Score (0-100) how well an image matches a device viewport and list issues.",
)
async def validate_image(
    file: UploadFile = File(..., description="Image to score"),
    device_id: str = Form(..., description="Catalog id of the target device"),
    settings: Settings = Depends(get_settings),
    uc: OptimizeImageUseCase = Depends(get_optimize_use_case),
):
    source, digest = await decode_upload(file, settings)
    _, _, report = uc.validate(source, device_id)
    return ValidationResponse(
        image_hash=digest,
        device_id=device_id,
        compatibility=CompatibilityResponse.model_validate(report),
    )


@router.post(
    "/report",
    summary="Optimization Report",
    description="Audit snapshot of a placement decision as a plain JSON document.",
    response_description="Report document (image, device, optimization, compatibility, performance)",
)
async def optimization_report(
    file: UploadFile = File(..., description="Image to place"),
    device_id: str = Form(..., description="Catalog id of the target device"),
    strategy: str | None = Form(None, description="contain | cover | fill | smart"),
    settings: Settings = Depends(get_settings),
    uc: OptimizeImageUseCase = Depends(get_optimize_use_case),
) -> dict[str, Any]:
    requested = _parse_strategy(strategy, settings)
    source, digest = await decode_upload(file, settings)
    result = uc.execute(source, digest, device_id, requested)
    return result.report.to_dict()
