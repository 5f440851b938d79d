"""Product photo sets stored in object storage"""

from typing import Literal, Optional

from pydantic import BaseModel

PhotoType = Literal["product_overview", "detail", "installation"]


class ProductPhoto(BaseModel):
    id: str
    s3Key: str
    type: PhotoType
    caption: str
    isActualModel: bool = True


class ProductPhotoSet(BaseModel):
    productId: str
    productName: str
    sku: str
    refrigerant: str
    photos: list[ProductPhoto]


# The first photo of each set is the front view, the second the full length side view
PHOTO_SETS: list[ProductPhotoSet] = [
    ProductPhotoSet(
        productId="ds-acsc-400",
        productName="ACSC-400 Container Cooling Unit",
        sku="DS-ACSC-400",
        refrigerant="R410A",
        photos=[
            ProductPhoto(
                id="acsc-400-front",
                s3Key="desert-solutions/photos/ds-acsc-400/front.jpg",
                type="product_overview",
                caption="Front view",
            ),
            ProductPhoto(
                id="acsc-400-side",
                s3Key="desert-solutions/photos/ds-acsc-400/side.jpg",
                type="product_overview",
                caption="Full length view",
            ),
            ProductPhoto(
                id="acsc-400-controller",
                s3Key="desert-solutions/photos/ds-acsc-400/controller.jpg",
                type="detail",
                caption="Microprocessor controller and HMI",
            ),
            ProductPhoto(
                id="acsc-400-compressors",
                s3Key="desert-solutions/photos/ds-acsc-400/compressors.jpg",
                type="detail",
                caption="Dual scroll compressor bay",
            ),
            ProductPhoto(
                id="acsc-400-bess-site",
                s3Key="desert-solutions/photos/ds-acsc-400/bess-installation.jpg",
                type="installation",
                caption="Installed on a 40 ft battery storage container",
                isActualModel=False,
            ),
        ],
    ),
    ProductPhotoSet(
        productId="ds-acsc-250",
        productName="ACSC-250 Container Cooling Unit",
        sku="DS-ACSC-250",
        refrigerant="R410A",
        photos=[
            ProductPhoto(
                id="acsc-250-front",
                s3Key="desert-solutions/photos/ds-acsc-250/front.jpg",
                type="product_overview",
                caption="Front view",
            ),
            ProductPhoto(
                id="acsc-250-side",
                s3Key="desert-solutions/photos/ds-acsc-250/side.jpg",
                type="product_overview",
                caption="Full length view",
            ),
            ProductPhoto(
                id="acsc-250-filters",
                s3Key="desert-solutions/photos/ds-acsc-250/filters.jpg",
                type="detail",
                caption="Sand-trap louvres and G4 filters",
            ),
        ],
    ),
    ProductPhotoSet(
        productId="ds-shelter-12",
        productName="SW-12 Shelter Wall-Mount Air Conditioner",
        sku="DS-SW-12",
        refrigerant="R410A",
        photos=[
            ProductPhoto(
                id="sw-12-front",
                s3Key="desert-solutions/photos/ds-shelter-12/front.jpg",
                type="product_overview",
                caption="Front view",
            ),
            ProductPhoto(
                id="sw-12-site",
                s3Key="desert-solutions/photos/ds-shelter-12/telecom-site.jpg",
                type="installation",
                caption="Telecom shelter installation",
                isActualModel=False,
            ),
        ],
    ),
]

_PHOTO_SETS_BY_PRODUCT = {photo_set.productId: photo_set for photo_set in PHOTO_SETS}


def get_photos_by_product_id(product_id: str) -> Optional[ProductPhotoSet]:
    return _PHOTO_SETS_BY_PRODUCT.get(product_id)
