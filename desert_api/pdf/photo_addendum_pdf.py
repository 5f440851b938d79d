"""
Photo Addendum PDF Generator
Product photos grouped per product, attached to a quotation
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from html import escape

from reportlab.lib.units import inch
from reportlab.platypus import KeepTogether, PageBreak, Paragraph, Spacer

from .. import config
from ..utils.formatting import format_long_date
from .base import BrandedPDFGenerator
from .documents import DEFAULT_DOCUMENT_STATUS, DocumentStatus

logger = logging.getLogger(__name__)

PHOTO_TYPE_LABELS = {
    "product_overview": "Product Overview",
    "detail": "Detail",
    "installation": "Installation",
}


@dataclass
class AddendumPhoto:
    id: str
    caption: str
    type: str
    isActualModel: bool
    image: bytes


@dataclass
class AddendumProduct:
    productId: str
    productName: str
    sku: str
    refrigerant: str
    photos: list[AddendumPhoto] = field(default_factory=list)


@dataclass
class PhotoAddendumData:
    quotationNumber: str
    customerName: str
    products: list[AddendumProduct] = field(default_factory=list)

    @property
    def total_photos(self) -> int:
        return sum(len(product.photos) for product in self.products)


class PhotoAddendumPDFGenerator(BrandedPDFGenerator):
    """Generate photo addendum PDFs"""

    def __init__(self, data: PhotoAddendumData, document_status: DocumentStatus, document_hash: str):
        self.data = data
        super().__init__(
            document_status,
            document_hash,
            title=f"Photo Addendum - {data.quotationNumber}",
        )

    def generate(self) -> bytes:
        data = self.data
        logger.info(
            f"📄 Generating photo addendum PDF for {data.quotationNumber} ({data.total_photos} photos)"
        )

        story = []
        story.append(Paragraph("Product Photo Addendum", self.styles["title"]))
        story.append(Paragraph(escape(config.QUOTATION_COMPANY_NAME), self.styles["subtitle"]))
        story.append(
            self.key_value_table(
                [
                    ["Quotation Reference:", data.quotationNumber],
                    ["Customer:", data.customerName],
                    ["Date:", format_long_date(datetime.now(timezone.utc))],
                    ["Products:", str(len(data.products))],
                    ["Total Photos:", str(data.total_photos)],
                ]
            )
        )

        for index, product in enumerate(data.products):
            if index > 0:
                story.append(PageBreak())
            story.append(Paragraph(escape(product.productName), self.styles["heading"]))
            story.append(
                Paragraph(
                    f"SKU: {escape(product.sku)} | Refrigerant: {escape(product.refrigerant)}",
                    self.styles["body"],
                )
            )

            for photo in product.photos:
                image = self.scaled_image(photo.image, self.content_width, 4.2 * inch)
                if not image:
                    continue

                caption = escape(photo.caption)
                type_label = PHOTO_TYPE_LABELS.get(photo.type, photo.type)
                caption += f" ({type_label})"
                if not photo.isActualModel:
                    caption += " - representative image, not the actual model"

                story.append(
                    KeepTogether(
                        [
                            Spacer(1, 0.15 * inch),
                            image,
                            Paragraph(caption, self.styles["caption"]),
                        ]
                    )
                )

        story.append(Spacer(1, 0.3 * inch))
        story.append(
            Paragraph(
                f"Photos are property of {escape(config.QUOTATION_COMPANY_NAME)} "
                "and may not be redistributed without permission.",
                self.styles["small"],
            )
        )

        pdf_bytes = self.build(story)
        logger.info(f"✅ Generated photo addendum PDF ({len(pdf_bytes)} bytes)")
        return pdf_bytes


def render_photo_addendum_pdf(
    data: PhotoAddendumData,
    document_status: DocumentStatus = DEFAULT_DOCUMENT_STATUS,
    document_hash: str = "",
) -> bytes:
    """Render a photo addendum to PDF bytes"""
    return PhotoAddendumPDFGenerator(data, document_status, document_hash).generate()
