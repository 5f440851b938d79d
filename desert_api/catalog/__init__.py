from .photos import ProductPhoto, ProductPhotoSet, get_photos_by_product_id
from .products import (
    CurrencyCode,
    Product,
    ProductVariant,
    all_products,
    get_product_by_id,
    get_product_price,
    get_product_with_variant,
    get_products_by_category,
)

__all__ = [
    "CurrencyCode",
    "Product",
    "ProductPhoto",
    "ProductPhotoSet",
    "ProductVariant",
    "all_products",
    "get_photos_by_product_id",
    "get_product_by_id",
    "get_product_price",
    "get_product_with_variant",
    "get_products_by_category",
]
