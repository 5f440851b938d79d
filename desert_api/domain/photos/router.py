"""Photos router - product photos with presigned URLs"""

import logging
from typing import Optional, get_args

from fastapi import APIRouter, Depends, Query

from ...catalog import get_photos_by_product_id
from ...exceptions import BadRequestError, DesertSolutionsError, NotFoundError
from ...security import require_api_key
from .service import PhotoFilter, filter_photos, sign_photos

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/photos", tags=["Photos"], dependencies=[Depends(require_api_key)])


@router.get("/{productId}")
async def get_product_photos(
    productId: str,
    photo_type: Optional[str] = Query(None, alias="type"),
    actualModelOnly: Optional[str] = None,
    expiresIn: int = Query(3600, gt=0),
):
    """
    Get product photos with signed URLs

    Query params:
    - type: product_overview, detail, installation or all
    - actualModelOnly: "true" to only return photos of the actual model
    - expiresIn: URL expiration time in seconds (default 1 hour)
    """
    # An empty type= means no filter
    photo_type = photo_type or "all"
    if photo_type not in get_args(PhotoFilter):
        raise BadRequestError(
            "Invalid query parameters", f"type must be one of: {', '.join(get_args(PhotoFilter))}"
        )

    photo_set = get_photos_by_product_id(productId)
    if not photo_set:
        raise NotFoundError("Product not found", productId=productId)

    try:
        photos = filter_photos(photo_set.photos, photo_type, actualModelOnly == "true")
        signed = await sign_photos(photos, expiresIn)
    except Exception as e:
        logger.error(f"Error fetching product photos for {productId}: {e}")
        raise DesertSolutionsError("Failed to fetch photos", str(e), status_code=500)

    return {
        "productId": photo_set.productId,
        "productName": photo_set.productName,
        "sku": photo_set.sku,
        "refrigerant": photo_set.refrigerant,
        "photoCount": len(signed),
        "photos": signed,
    }
