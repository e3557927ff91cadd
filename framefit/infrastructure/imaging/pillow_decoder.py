from __future__ import annotations

import asyncio
import hashlib
import logging
from io import BytesIO

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError
from starlette.concurrency import run_in_threadpool

from framefit.domain.entities.pixel_source import ArrayPixelSource
from framefit.domain.errors import DecodeError

logger = logging.getLogger(__name__)


class DecodeTimeoutError(DecodeError):
    pass


def image_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def decode_image(data: bytes) -> ArrayPixelSource:
    """Decode encoded image bytes into an RGBA pixel source.

    EXIF orientation is applied so dimensions match what a viewer shows.

    Raises:
        DecodeError: If the bytes are empty or not a readable image.
    """
    if not data:
        raise DecodeError("Empty image payload")
    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            mime = Image.MIME.get(img.format or "", "application/octet-stream")
            img = ImageOps.exif_transpose(img)
            arr = np.asarray(img.convert("RGBA"), dtype=np.uint8)
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        logger.warning("Image decode failed: %s", exc)
        raise DecodeError(f"Invalid image file: {exc}") from exc
    return ArrayPixelSource(pixels=arr, byte_size=len(data), mime_type=mime)


async def decode_image_async(data: bytes, timeout: float | None = None) -> ArrayPixelSource:
    """Decode in a worker thread; the only awaited, cancellable step of the pipeline."""
    try:
        return await asyncio.wait_for(run_in_threadpool(decode_image, data), timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.warning("Image decode timed out after %ss", timeout)
        raise DecodeTimeoutError(f"Image decode timed out after {timeout}s") from exc
