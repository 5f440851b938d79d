"""
Quotation PDF Generator
Customer block, priced line items, totals and commercial terms
"""

import logging
from html import escape
from typing import Any, Optional

from reportlab.lib import colors
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, Spacer, Table, TableStyle

from .. import config
from ..domain.quotations.calculations import format_currency
from ..utils.formatting import format_long_date
from .base import BrandedPDFGenerator
from .documents import DEFAULT_DOCUMENT_STATUS, DocumentStatus

logger = logging.getLogger(__name__)


def _format_address(address: Optional[dict]) -> str:
    if not address:
        return ""
    parts = [
        address.get("street"),
        address.get("city"),
        " ".join(p for p in [address.get("state"), address.get("zip")] if p),
        address.get("country"),
    ]
    return ", ".join(p for p in parts if p)


class QuotationPDFGenerator(BrandedPDFGenerator):
    """Generate quotation PDFs from a stored or inline quotation dict"""

    def __init__(self, quotation: dict[str, Any], document_status: DocumentStatus, document_hash: str):
        self.quotation = quotation
        self.currency = quotation.get("currency") or "USD"
        super().__init__(
            document_status,
            document_hash,
            title=f"Quotation {quotation.get('quotationNumber', '')}",
        )

    def money(self, amount) -> str:
        return format_currency(amount, self.currency)

    def generate(self) -> bytes:
        q = self.quotation
        logger.info(f"📄 Generating quotation PDF for {q.get('quotationNumber')}")

        customer = q.get("customer") or q.get("customerData") or {}
        terms = q.get("terms") or {}
        story = []

        # Header
        story.append(Paragraph(escape(config.QUOTATION_COMPANY_NAME), self.styles["title"]))
        contact = " | ".join(
            p
            for p in [
                config.QUOTATION_COMPANY_EMAIL,
                config.QUOTATION_COMPANY_PHONE,
                config.QUOTATION_COMPANY_WEBSITE,
            ]
            if p
        )
        story.append(Paragraph(escape(contact), self.styles["subtitle"]))
        story.append(Paragraph("QUOTATION", self.styles["heading"]))

        info_rows = [
            ["Quotation Number:", q.get("quotationNumber", "")],
            ["Date:", format_long_date(q.get("date") or q.get("createdAt"))],
            ["Valid Until:", format_long_date(terms.get("validUntil"), fallback="30 days from date")],
            ["Currency:", self.currency],
        ]
        story.append(self.key_value_table(info_rows))

        # Customer
        story.append(Paragraph("Customer", self.styles["heading"]))
        customer_rows = [["Name:", customer.get("name", "")]]
        if customer.get("company"):
            customer_rows.append(["Company:", customer["company"]])
        if customer.get("email"):
            customer_rows.append(["Email:", customer["email"]])
        if customer.get("phone"):
            customer_rows.append(["Phone:", customer["phone"]])
        address = _format_address(customer.get("address"))
        if address:
            customer_rows.append(["Address:", Paragraph(escape(address), self.styles["body"])])
        story.append(self.key_value_table(customer_rows))

        # Line items
        story.append(Paragraph("Items", self.styles["heading"]))
        story.append(self._items_table(q.get("items") or []))
        story.append(Spacer(1, 0.15 * inch))
        story.append(self._totals_table())

        # Terms
        story.append(Paragraph("Terms &amp; Conditions", self.styles["heading"]))
        term_rows = [
            ["Payment Terms:", terms.get("paymentTerms") or "Net 30"],
            ["Delivery Terms:", terms.get("deliveryTerms") or "FOB Origin"],
        ]
        if terms.get("warranty"):
            term_rows.append(["Warranty:", Paragraph(escape(terms["warranty"]), self.styles["body"])])
        if terms.get("leadTime"):
            term_rows.append(["Lead Time:", terms["leadTime"]])
        story.append(self.key_value_table(term_rows))

        if q.get("notes"):
            story.append(Paragraph("Notes", self.styles["heading"]))
            story.append(Paragraph(escape(q["notes"]), self.styles["body"]))

        story.append(Spacer(1, 0.3 * inch))
        story.append(
            Paragraph(
                f"Prices are quoted in {self.currency} and exclude any duties unless stated otherwise. "
                f"Questions? Contact {escape(config.QUOTATION_SALES_CONTACT)} at "
                f"{escape(config.QUOTATION_COMPANY_EMAIL)}.",
                self.styles["small"],
            )
        )

        pdf_bytes = self.build(story)
        logger.info(f"✅ Generated quotation PDF ({len(pdf_bytes)} bytes)")
        return pdf_bytes

    def _items_table(self, items: list[dict]) -> Table:
        table_data = [["#", "Product", "Qty", "Unit Price", "Total"]]
        for index, item in enumerate(items, start=1):
            description = escape(item.get("name", ""))
            if item.get("description"):
                description += f"<br/><font size=8 color='#64748b'>{escape(item['description'])}</font>"
            quantity = item.get("quantity", 0)
            table_data.append(
                [
                    str(index),
                    Paragraph(description, self.styles["body"]),
                    f"{quantity:g}" if isinstance(quantity, (int, float)) else str(quantity),
                    self.money(item.get("unitPrice")),
                    self.money(item.get("totalPrice")),
                ]
            )

        item_table = Table(
            table_data,
            colWidths=[0.35 * inch, self.content_width - 3.65 * inch, 0.6 * inch, 1.35 * inch, 1.35 * inch],
            repeatRows=1,
        )
        item_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), self.brand_color),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONT", (0, 0), (-1, 0), "Helvetica-Bold", 9),
                    # Data rows
                    ("FONT", (0, 1), (-1, -1), "Helvetica", 9),
                    ("TEXTCOLOR", (0, 1), (-1, -1), self.dark_gray),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, self.light_gray]),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ]
            )
        )
        return item_table

    def _totals_table(self) -> Table:
        q = self.quotation
        terms = q.get("terms") or {}
        rows = [["Subtotal:", self.money(q.get("subtotal"))]]

        if q.get("discount"):
            discount_label = (terms.get("discount") or {}).get("description") or "Discount"
            rows.append([f"{discount_label}:", f"-{self.money(q['discount'])}"])
        if q.get("shipping"):
            rows.append(["Shipping:", self.money(q["shipping"])])
        if q.get("tax"):
            rows.append(["Tax:", self.money(q["tax"])])
        rows.append(["Total:", self.money(q.get("total"))])

        totals = Table(rows, colWidths=[self.content_width - 1.6 * inch, 1.6 * inch])
        totals.setStyle(
            TableStyle(
                [
                    ("FONT", (0, 0), (-1, -1), "Helvetica", 10),
                    ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                    ("FONT", (0, -1), (-1, -1), "Helvetica-Bold", 11),
                    ("TEXTCOLOR", (0, -1), (-1, -1), self.brand_color),
                    ("LINEABOVE", (0, -1), (-1, -1), 1, self.brand_color),
                ]
            )
        )
        return totals


def render_quotation_pdf(
    quotation: dict[str, Any],
    document_status: DocumentStatus = DEFAULT_DOCUMENT_STATUS,
    document_hash: str = "",
) -> bytes:
    """Render a quotation to PDF bytes"""
    return QuotationPDFGenerator(quotation, document_status, document_hash).generate()
