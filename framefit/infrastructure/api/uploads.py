from __future__ import annotations

from fastapi import HTTPException, UploadFile, status

from framefit.domain.entities.pixel_source import ArrayPixelSource
from framefit.domain.errors import DecodeError
from framefit.infrastructure.config import Settings
from framefit.infrastructure.imaging.pillow_decoder import DecodeTimeoutError, decode_image_async, image_hash


async def decode_upload(file: UploadFile, settings: Settings) -> tuple[ArrayPixelSource, str]:
    """Read and decode an uploaded image, mapping failures to HTTP errors."""
    data = await file.read()
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds {settings.max_upload_mb}MB upload limit",
        )
    try:
        source = await decode_image_async(data, timeout=settings.decode_timeout_seconds)
    except DecodeTimeoutError as exc:
        raise HTTPException(status_code=status.HTTP_408_REQUEST_TIMEOUT, detail=str(exc)) from exc
    except DecodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return source, image_hash(data)
