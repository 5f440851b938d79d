"""Quotation service - Business logic for quotation operations"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from ... import config
from ...catalog import get_photos_by_product_id, get_product_by_id, get_product_price, get_product_with_variant
from ...catalog.photos import ProductPhoto
from ...email_service import send_email
from ...email_templates import (
    photo_addendum_email_template,
    photo_addendum_email_text,
    quotation_email_template,
    quotation_email_text,
)
from ...exceptions import BadRequestError, NotFoundError
from ...integrations.database_proxy import DatabaseProxyClient
from ...pdf import (
    AddendumPhoto,
    AddendumProduct,
    PhotoAddendumData,
    generate_document_hash,
    get_status_color,
    get_status_label,
    render_photo_addendum_pdf,
    render_quotation_pdf,
    today_seed,
)
from ...storage import fetch_image_bytes
from ...utils.formatting import format_long_date
from .calculations import calculate_quotation_totals, format_currency, generate_quotation_number
from .schemas import (
    CreateQuotationRequest,
    EmailQuotationRequest,
    IncludePhotos,
    PhotoAddendumRequest,
    QuotationItemRequest,
)

logger = logging.getLogger(__name__)


def get_salutation(customer: dict) -> str:
    """Formal salutation when given, otherwise the first name"""
    return customer.get("salutation") or customer["name"].split(" ")[0]


def subject_status_suffix(status_label: str) -> str:
    return f" - {status_label}" if status_label else ""


def build_quotation_item(item: QuotationItemRequest, index: int, currency: str) -> dict:
    """Price a requested item from the catalog"""
    product = get_product_by_id(item.productId)
    if not product:
        raise ValueError(f"Product not found: {item.productId}")

    if item.variantId:
        product = get_product_with_variant(item.productId, item.variantId) or product

    pricing_id = item.variantId or item.productId
    catalog_price = get_product_price(pricing_id, currency) or product.basePrice
    unit_price = item.customPrice if item.customPrice is not None else catalog_price

    return {
        "id": f"{item.productId}-{index}",
        "productId": item.productId,
        "variantId": item.variantId,
        "name": product.name,
        "description": product.shortDescription,
        "quantity": item.quantity,
        "unitPrice": unit_price,
        "totalPrice": round(unit_price * item.quantity, 2),
        "specifications": product.specifications,
        "images": product.images,
    }


def build_quotation_summary_rows(quotation: dict, customer: dict) -> list[tuple[str, str]]:
    """Rows of the quotation summary shown in the email body"""
    currency = quotation.get("currency") or "USD"
    terms = quotation.get("terms") or {}
    customer_line = customer["name"]
    if customer.get("company"):
        customer_line += f" - {customer['company']}"

    rows = [
        ("Quotation Number", quotation["quotationNumber"]),
        ("Date", format_long_date(quotation.get("date"))),
        ("Status", (quotation.get("status") or "Draft").upper()),
        ("Valid Until", format_long_date(terms.get("validUntil"), fallback="30 days from date")),
        ("Customer", customer_line),
        ("Items", f"{len(quotation.get('items') or [])} product(s)"),
        ("Subtotal", format_currency(quotation.get("subtotal"), currency)),
    ]
    if (quotation.get("tax") or 0) > 0:
        rows.append(("Tax", format_currency(quotation["tax"], currency)))
    rows.extend(
        [
            ("Total", format_currency(quotation.get("total"), currency)),
            ("Payment Terms", terms.get("paymentTerms") or "Net 30"),
            ("Delivery Terms", terms.get("deliveryTerms") or "FOB"),
        ]
    )
    return rows


def select_addendum_photos(
    photos: list[ProductPhoto], include: Optional[IncludePhotos]
) -> list[ProductPhoto]:
    if not include:
        return photos

    selected = []
    for photo in photos:
        if include.actualModelOnly and not photo.isActualModel:
            continue
        if not include.productOverview and photo.type == "product_overview":
            continue
        if not include.detail and photo.type == "detail":
            continue
        if not include.installation and photo.type == "installation":
            continue
        selected.append(photo)
    return selected


class QuotationService:
    """Service layer for quotation business logic"""

    def __init__(self, proxy: DatabaseProxyClient):
        self.proxy = proxy

    def build_quotation(self, data: CreateQuotationRequest) -> dict[str, Any]:
        """Price the items and assemble the record stored through the proxy"""
        currency = data.currency
        items = [build_quotation_item(item, index, currency) for index, item in enumerate(data.items)]

        now = datetime.now(timezone.utc)
        validity_days = (
            data.validityDays if data.validityDays is not None else config.QUOTATION_DEFAULT_VALIDITY_DAYS
        )
        valid_until = now + timedelta(days=validity_days)

        request_terms = data.terms
        discount = request_terms.discount if request_terms else None
        shipping_cost = (request_terms.shippingCost if request_terms else None) or 0
        tax_rate = config.QUOTATION_DEFAULT_TAX_RATE

        totals = calculate_quotation_totals(
            items,
            shipping_cost=shipping_cost,
            tax_rate=tax_rate,
            discount_amount=discount.amount if discount else None,
        )

        return {
            "quotationNumber": generate_quotation_number("QDS"),
            "customerData": data.customer.model_dump(exclude_none=True),
            "items": items,
            "currency": currency,
            **totals,
            "terms": {
                "validUntil": valid_until.isoformat(),
                "paymentTerms": (request_terms.paymentTerms if request_terms else None) or "Net 30",
                "deliveryTerms": (request_terms.deliveryTerms if request_terms else None) or "FOB Origin",
                "warranty": request_terms.warranty if request_terms else None,
                "leadTime": request_terms.leadTime if request_terms else None,
                "shippingCost": shipping_cost,
                "taxRate": tax_rate,
                "discount": discount.model_dump() if discount else None,
            },
            "notes": data.notes,
            "internalNotes": data.internalNotes,
            "status": "draft",
            "date": now.isoformat(),
        }

    async def create_quotation(self, data: CreateQuotationRequest) -> dict[str, Any]:
        record = self.build_quotation(data)
        logger.info(
            f"📝 Creating quotation {record['quotationNumber']} for {record['customerData']['email']} "
            f"({len(record['items'])} items, {record['currency']} {record['total']})"
        )
        result = await self.proxy.create_quotation(record)
        return result["quotation"]

    async def get_quotation(self, quotation_id: str) -> dict[str, Any]:
        result = await self.proxy.get_quotation(quotation_id)
        if not result.get("success") or not result.get("quotation"):
            raise NotFoundError("Quotation not found")
        return result["quotation"]

    async def send_quotation_email(self, data: EmailQuotationRequest) -> dict[str, Any]:
        """Email a stored or inline quotation to its customer, PDF attached by default"""
        if data.quotation:
            quotation = data.quotation.model_dump(exclude_none=True)
        else:
            quotation = await self.get_quotation(data.quotationId)

        customer = quotation.get("customer") or quotation.get("customerData")
        if not customer or not customer.get("email"):
            raise BadRequestError("Customer data not available")

        options = data.emailOptions
        status = data.documentStatus
        status_label = get_status_label(status)
        number = quotation["quotationNumber"]

        subject = options.subject if options and options.subject is not None else (
            f"{config.QUOTATION_COMPANY_NAME} - Quotation [{number}]{subject_status_suffix(status_label)}"
        )
        salutation = get_salutation(customer)
        summary_rows = build_quotation_summary_rows(quotation, customer)
        message = options.message if options else None

        attachments = []
        if not options or options.attachPDF:
            document_hash = generate_document_hash(today_seed("Quotation", number))
            pdf_bytes = await asyncio.to_thread(
                render_quotation_pdf, {**quotation, "customer": customer}, status, document_hash
            )
            attachments.append(
                {
                    "filename": f"quotation-{number}.pdf",
                    "content": pdf_bytes,
                    "content_type": "application/pdf",
                }
            )

        await send_email(
            to=customer["email"],
            subject=subject,
            mjml_content=quotation_email_template(
                salutation, summary_rows, status_label, get_status_color(status), message
            ),
            text=quotation_email_text(salutation, summary_rows, status_label, message),
            cc=options.cc if options else None,
            attachments=attachments or None,
        )
        logger.info(f"✅ Quotation {number} emailed to {customer['email']}")

        return {
            "success": True,
            "message": "Email sent successfully",
            "recipient": customer["email"],
        }

    async def collect_addendum_products(
        self, product_ids: list[str], include: Optional[IncludePhotos]
    ) -> list[AddendumProduct]:
        """Photo sets with image bytes; unknown products and unreadable images are skipped"""
        products = []
        for product_id in product_ids:
            photo_set = get_photos_by_product_id(product_id)
            if not photo_set:
                logger.warning(f"⚠️ Product not found: {product_id}")
                continue

            photos = []
            for photo in select_addendum_photos(photo_set.photos, include):
                image = await asyncio.to_thread(fetch_image_bytes, photo.s3Key)
                if not image:
                    logger.warning(f"⚠️ Failed to fetch image: {photo.s3Key}")
                    continue
                photos.append(
                    AddendumPhoto(
                        id=photo.id,
                        caption=photo.caption,
                        type=photo.type,
                        isActualModel=photo.isActualModel,
                        image=image,
                    )
                )

            if photos:
                products.append(
                    AddendumProduct(
                        productId=photo_set.productId,
                        productName=photo_set.productName,
                        sku=photo_set.sku,
                        refrigerant=photo_set.refrigerant,
                        photos=photos,
                    )
                )
        return products

    async def send_photo_addendum(self, data: PhotoAddendumRequest) -> dict[str, Any]:
        """Render the photo addendum PDF and email it to the customer"""
        customer = data.customer.model_dump(exclude_none=True) if data.customer else None
        quotation_number = data.quotationNumber

        if data.quotationId and not customer:
            quotation = await self.get_quotation(data.quotationId)
            customer = quotation.get("customer") or quotation.get("customerData")
            quotation_number = quotation.get("quotationNumber")

        if not customer or not customer.get("email"):
            raise BadRequestError("Customer email is required")

        products = await self.collect_addendum_products(data.productIds, data.includePhotos)
        if not products:
            raise NotFoundError("No photos found for the specified products")

        status = data.documentStatus
        reference = quotation_number or "N/A"
        addendum = PhotoAddendumData(
            quotationNumber=reference,
            customerName=customer["name"],
            products=products,
        )
        document_hash = generate_document_hash(today_seed("PhotoAddendum", reference))
        pdf_bytes = await asyncio.to_thread(render_photo_addendum_pdf, addendum, status, document_hash)

        total_photos = addendum.total_photos
        product_names = ", ".join(p.productName for p in products)
        salutation = get_salutation(customer)
        status_label = get_status_label(status)

        summary_rows = []
        if quotation_number:
            summary_rows.append(("Quotation Reference", quotation_number))
        summary_rows.extend([("Products", str(len(products))), ("Total Photos", str(total_photos))])

        options = data.emailOptions
        message = options.message if options else None
        number_part = f" [{quotation_number}]" if quotation_number else ""
        subject = options.subject if options and options.subject is not None else (
            f"{config.QUOTATION_COMPANY_NAME} - Product Photos{number_part}"
            f"{subject_status_suffix(status_label)}"
        )
        filename = f"photo-addendum-{quotation_number}.pdf" if quotation_number else "photo-addendum.pdf"

        await send_email(
            to=customer["email"],
            subject=subject,
            mjml_content=photo_addendum_email_template(
                salutation, product_names, summary_rows, status_label, get_status_color(status), message
            ),
            text=photo_addendum_email_text(salutation, product_names, summary_rows, status_label, message),
            cc=options.cc if options else None,
            attachments=[{"filename": filename, "content": pdf_bytes, "content_type": "application/pdf"}],
        )
        logger.info(f"✅ Photo addendum ({total_photos} photos) emailed to {customer['email']}")

        return {
            "success": True,
            "message": "Photo addendum email sent successfully",
            "recipient": customer["email"],
            "quotationNumber": quotation_number,
            "products": [
                {"productId": p.productId, "productName": p.productName, "photoCount": len(p.photos)}
                for p in products
            ],
            "totalPhotos": total_photos,
        }
