"""Photo service - filtering and presigned URL generation for product photos"""

import asyncio
import logging
from typing import Literal

from ... import storage
from ...catalog import ProductPhoto

logger = logging.getLogger(__name__)

PhotoFilter = Literal["all", "product_overview", "detail", "installation"]


def filter_photos(
    photos: list[ProductPhoto], photo_type: str = "all", actual_model_only: bool = False
) -> list[ProductPhoto]:
    if photo_type != "all":
        photos = [p for p in photos if p.type == photo_type]
    if actual_model_only:
        photos = [p for p in photos if p.isActualModel]
    return photos


async def sign_photos(photos: list[ProductPhoto], expires_in: int) -> list[dict]:
    """Presign every photo concurrently; result order follows the input"""
    urls = await asyncio.gather(
        *(asyncio.to_thread(storage.get_presigned_url, photo.s3Key, expires_in) for photo in photos)
    )
    return [
        {**photo.model_dump(), "signedUrl": url, "expiresIn": expires_in}
        for photo, url in zip(photos, urls)
    ]
