"""Product domain schemas"""

from typing import Optional

from pydantic import BaseModel

from ...catalog import Product


class ProductSummary(BaseModel):
    id: str
    category: str
    name: str
    shortDescription: str
    basePrice: float
    defaultWarranty: Optional[str] = None
    defaultLeadTime: Optional[str] = None
    hasVariants: bool
    variantCount: int

    @classmethod
    def from_product(cls, product: Product) -> "ProductSummary":
        return cls(
            id=product.id,
            category=product.category,
            name=product.name,
            shortDescription=product.shortDescription,
            basePrice=product.basePrice,
            defaultWarranty=product.defaultWarranty,
            defaultLeadTime=product.defaultLeadTime,
            hasVariants=len(product.variants) > 0,
            variantCount=len(product.variants),
        )


class ProductListResponse(BaseModel):
    success: bool = True
    count: int
    products: list[ProductSummary]


class ProductResponse(BaseModel):
    success: bool = True
    product: Product
