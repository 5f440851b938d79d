"""Datasheet service - builds datasheet data from the catalog and renders it"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from ... import config
from ...catalog import Product, get_photos_by_product_id, get_product_by_id, get_product_with_variant
from ...email_service import send_email
from ...email_templates import datasheet_email_template, datasheet_email_text
from ...exceptions import BadRequestError, NotFoundError
from ...pdf import (
    DatasheetData,
    KeySpec,
    generate_document_hash,
    get_status_color,
    get_status_label,
    render_datasheet_pdf,
    today_seed,
)
from ...storage import fetch_image_bytes
from .schemas import DatasheetRequest

logger = logging.getLogger(__name__)

# Specification key -> highlight label, in display order
KEY_SPEC_FIELDS = [
    ("Cooling Capacity", "Cooling Capacity"),
    ("Total Power Consumption", "Power Consumption"),
    ("Refrigerant", "Refrigerant"),
    ("Number of Compressors", "Compressors"),
    ("Temperature Control Range", "Temp Range"),
    ("Dimensions (L×W×H)", "Dimensions"),
]
MAX_KEY_SPECS = 4

KEY_FEATURES_MARKER = "Key Features:"
BULLET_PREFIX = re.compile(r"^[•\-*]\s*")
REFRIGERANT_SUFFIXES = ("-r407c", "-r290")
LANGUAGE_SUFFIXES = {"en": "EN", "nl": "NL"}


@dataclass
class RenderedDatasheet:
    language: str
    pdf: bytes


def photo_set_id(product_id: str) -> str:
    """Photo sets are keyed by the base product, without refrigerant suffixes"""
    for suffix in REFRIGERANT_SUFFIXES:
        product_id = product_id.replace(suffix, "")
    return product_id


def extract_features(product: Product) -> list[str]:
    """Bullets after 'Key Features:', falling back to a few specification values"""
    features = []
    if KEY_FEATURES_MARKER in product.longDescription:
        section = product.longDescription.split(KEY_FEATURES_MARKER, 1)[1]
        for line in section.split("\n"):
            cleaned = BULLET_PREFIX.sub("", line).strip()
            if cleaned:
                features.append(cleaned)

    if not features:
        specs = product.specifications
        if specs.get("Compressor Type"):
            features.append(specs["Compressor Type"])
        if specs.get("Safety Protection"):
            features.append(f"Safety: {specs['Safety Protection']}")
        if specs.get("Control System"):
            features.append(specs["Control System"])
    return features


def build_key_specs(specifications: dict[str, str]) -> list[KeySpec]:
    key_specs = []
    for spec_key, label in KEY_SPEC_FIELDS:
        value = specifications.get(spec_key)
        if not value:
            continue
        if spec_key == "Refrigerant":
            # "R410A (6.2 kg)" -> "R410A"
            value = value.split(" ")[0]
        key_specs.append(KeySpec(label=label, value=value))
    return key_specs[:MAX_KEY_SPECS]


def build_datasheet_data(
    product: Product,
    product_image: Optional[bytes] = None,
    side_view_image: Optional[bytes] = None,
) -> DatasheetData:
    return DatasheetData(
        productId=product.id,
        sku=product.specifications.get("SKU") or product.id.upper(),
        productName=product.name.replace("Desert Solutions ", ""),
        shortDescription=product.shortDescription,
        longDescription=product.longDescription.split(KEY_FEATURES_MARKER)[0].strip(),
        specifications=product.specifications,
        keySpecs=build_key_specs(product.specifications),
        features=extract_features(product),
        productImage=product_image,
        sideViewImage=side_view_image,
    )


def attachment_filename(sku: str, language: str, multiple: bool) -> str:
    if multiple:
        return f"datasheet-{sku}-{LANGUAGE_SUFFIXES[language]}.pdf"
    return f"datasheet-{sku}.pdf"


class DatasheetService:
    """Service layer for datasheet generation"""

    def find_product(self, product_id: str, variant_id: Optional[str] = None) -> Product:
        product = (
            get_product_with_variant(product_id, variant_id) if variant_id else get_product_by_id(product_id)
        )
        if not product:
            raise NotFoundError("Product not found", productId=product_id)
        return product

    async def fetch_views(self, product_id: str) -> tuple[Optional[bytes], Optional[bytes]]:
        """Front view (first photo) and full length side view (second photo)"""
        photo_set = get_photos_by_product_id(photo_set_id(product_id))
        if not photo_set:
            return None, None

        views: list[Optional[bytes]] = []
        for photo in photo_set.photos[:2]:
            views.append(await asyncio.to_thread(fetch_image_bytes, photo.s3Key))
        views.extend([None] * (2 - len(views)))
        return views[0], views[1]

    async def render(self, data: DatasheetRequest) -> tuple[DatasheetData, str, list[RenderedDatasheet]]:
        product = self.find_product(data.productId, data.variantId)
        front, side = await self.fetch_views(data.productId)
        datasheet = build_datasheet_data(product, front, side)

        document_hash = generate_document_hash(today_seed("Datasheet", datasheet.sku))
        languages = data.languages or [data.language]

        rendered = []
        for language in languages:
            pdf_bytes = await asyncio.to_thread(
                render_datasheet_pdf, datasheet, data.documentStatus, document_hash, language
            )
            rendered.append(RenderedDatasheet(language=language, pdf=pdf_bytes))
        return datasheet, document_hash, rendered

    async def send(
        self,
        data: DatasheetRequest,
        datasheet: DatasheetData,
        document_hash: str,
        rendered: list[RenderedDatasheet],
    ) -> dict[str, Any]:
        """Email the rendered datasheets to the customer"""
        customer = data.customer
        if not customer or not customer.email:
            raise BadRequestError("Customer email is required when returnPdf is false")

        status = data.documentStatus
        status_label = get_status_label(status)
        options = data.emailOptions
        message = options.message if options else None
        salutation = customer.salutation or customer.name.split(" ")[0]
        suffix = f" - {status_label}" if status_label else ""
        subject = options.subject if options and options.subject is not None else (
            f"{config.QUOTATION_COMPANY_NAME} - Product Datasheet [{datasheet.sku}]{suffix}"
        )

        summary_rows = [("Product", datasheet.productName), ("SKU", datasheet.sku)]
        summary_rows.extend((spec.label, spec.value) for spec in datasheet.keySpecs[:2])

        multiple = len(rendered) > 1
        attachments = [
            {
                "filename": attachment_filename(datasheet.sku, item.language, multiple),
                "content": item.pdf,
                "content_type": "application/pdf",
            }
            for item in rendered
        ]

        await send_email(
            to=customer.email,
            subject=subject,
            mjml_content=datasheet_email_template(
                salutation,
                datasheet.productName,
                summary_rows,
                status_label,
                get_status_color(status),
                message,
            ),
            text=datasheet_email_text(salutation, datasheet.productName, summary_rows, status_label, message),
            cc=options.cc if options else None,
            bcc=options.bcc if options else None,
            attachments=attachments,
        )
        logger.info(f"✅ Datasheet {datasheet.sku} emailed to {customer.email} ({len(attachments)} attachments)")

        return {
            "success": True,
            "message": "Datasheet email sent successfully",
            "recipient": customer.email,
            "product": {"id": datasheet.productId, "name": datasheet.productName, "sku": datasheet.sku},
            "languages": [item.language for item in rendered],
            "attachments": len(attachments),
            "documentHash": document_hash,
        }
