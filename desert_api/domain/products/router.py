"""Products router - catalog lookups"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from ...catalog import all_products, get_product_with_variant, get_products_by_category
from ...exceptions import BadRequestError, DesertSolutionsError, NotFoundError
from ...security import require_api_key
from .schemas import ProductListResponse, ProductResponse, ProductSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"], dependencies=[Depends(require_api_key)])


@router.get("/list", response_model=ProductListResponse)
async def list_products(category: Optional[str] = None):
    """List all products or filter by category"""
    try:
        products = get_products_by_category(category) if category else all_products()
        return ProductListResponse(
            count=len(products),
            products=[ProductSummary.from_product(p) for p in products],
        )
    except Exception as e:
        logger.error(f"Error listing products: {e}")
        raise DesertSolutionsError("Failed to list products", str(e), status_code=500)


@router.get("/get", response_model=ProductResponse)
async def get_product(id: Optional[str] = None, variantId: Optional[str] = None):
    """Get product details, with a variant applied when variantId is given"""
    if not id:
        raise BadRequestError("Missing product ID parameter")

    try:
        product = get_product_with_variant(id, variantId)
        if not product:
            raise NotFoundError("Product not found")
        return ProductResponse(product=product)
    except DesertSolutionsError:
        raise
    except Exception as e:
        logger.error(f"Error fetching product {id}: {e}")
        raise DesertSolutionsError("Failed to fetch product", str(e), status_code=500)
