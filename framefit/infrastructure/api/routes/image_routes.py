from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from framefit.application.dtos.common_dto import ErrorResponse
from framefit.application.dtos.image_dto import ImageAnalysisModel, ImageAnalysisResponse
from framefit.application.use_cases.analyze_image import AnalyzeImageUseCase
from framefit.infrastructure.api.dependencies import get_analyze_use_case
from framefit.infrastructure.api.uploads import decode_upload
from framefit.infrastructure.config import Settings, get_settings

router = APIRouter(
    prefix="/images",
    tags=["Image Analysis"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - File is not a readable image"},
        408: {"model": ErrorResponse, "description": "Request Timeout - Decoding took too long"},
        413: {"model": ErrorResponse, "description": "Payload Too Large - File size exceeds limit"},
    },
)


@router.post(
    "/analyze",
    response_model=ImageAnalysisResponse,
    summary="Analyze Image",
    description="""
    Decode an uploaded image and report its properties:
    dimensions, resolution class, sharpness, noise, orientation, format and
    compatibility notes. The image is not stored.
    """,
)
async def analyze_image(
    file: UploadFile = File(..., description="Image file to analyze"),
    settings: Settings = Depends(get_settings),
    uc: AnalyzeImageUseCase = Depends(get_analyze_use_case),
):
    source, digest = await decode_upload(file, settings)
    analysis = uc.execute(source)
    return ImageAnalysisResponse(image_hash=digest, analysis=ImageAnalysisModel.model_validate(analysis))
