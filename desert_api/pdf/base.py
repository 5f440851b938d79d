"""
Shared reportlab scaffolding for Desert Solutions documents.

Every page gets the release status watermark (skipped for final documents)
and a footer with the company name, the document hash and the page number.
"""

import io
import logging
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Image, SimpleDocTemplate, Table, TableStyle

from .. import config
from .documents import DocumentStatus, get_status_color, get_status_label

logger = logging.getLogger(__name__)

BRAND_COLOR = colors.HexColor("#4338ca")
DARK_GRAY = colors.HexColor("#1e293b")
MUTED_GRAY = colors.HexColor("#64748b")
LIGHT_GRAY = colors.HexColor("#f1f5f9")


class BrandedPDFGenerator:
    """Base class for the quotation, datasheet and photo addendum PDFs"""

    def __init__(self, document_status: DocumentStatus, document_hash: str, title: str):
        self.document_status = DocumentStatus(document_status)
        self.document_hash = document_hash
        self.title = title

        # PDF settings
        self.page_width, self.page_height = A4
        self.margin = 0.7 * inch
        self.content_width = self.page_width - (2 * self.margin)

        self.brand_color = BRAND_COLOR
        self.dark_gray = DARK_GRAY
        self.light_gray = LIGHT_GRAY

        self.status_label = get_status_label(self.document_status)
        self.status_color = colors.HexColor(get_status_color(self.document_status))

        self.styles = self._build_styles()

    def _build_styles(self) -> dict[str, ParagraphStyle]:
        base = getSampleStyleSheet()
        return {
            "title": ParagraphStyle(
                "DocTitle",
                parent=base["Heading1"],
                fontSize=22,
                textColor=self.brand_color,
                spaceAfter=6,
            ),
            "subtitle": ParagraphStyle(
                "DocSubtitle",
                parent=base["Normal"],
                fontSize=11,
                textColor=MUTED_GRAY,
                spaceAfter=12,
            ),
            "heading": ParagraphStyle(
                "DocHeading",
                parent=base["Heading2"],
                fontSize=14,
                textColor=self.dark_gray,
                spaceBefore=14,
                spaceAfter=8,
            ),
            "body": ParagraphStyle(
                "DocBody",
                parent=base["Normal"],
                fontSize=10,
                leading=14,
                textColor=self.dark_gray,
                spaceAfter=6,
            ),
            "small": ParagraphStyle(
                "DocSmall",
                parent=base["Normal"],
                fontSize=8,
                leading=10,
                textColor=MUTED_GRAY,
            ),
            "caption": ParagraphStyle(
                "DocCaption",
                parent=base["Normal"],
                fontSize=9,
                textColor=MUTED_GRAY,
                alignment=1,
                spaceAfter=10,
            ),
        }

    def key_value_table(self, rows: list[list], col_widths: Optional[list[float]] = None) -> Table:
        """Two column label/value table used for customer info and specifications"""
        table = Table(rows, colWidths=col_widths or [2.2 * inch, self.content_width - 2.2 * inch])
        table.setStyle(
            TableStyle(
                [
                    ("FONT", (0, 0), (0, -1), "Helvetica-Bold", 9),
                    ("FONT", (1, 0), (1, -1), "Helvetica", 9),
                    ("TEXTCOLOR", (0, 0), (-1, -1), self.dark_gray),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("ROWBACKGROUNDS", (0, 0), (-1, -1), [colors.white, self.light_gray]),
                    ("LEFTPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        return table

    def scaled_image(self, data: bytes, max_width: float, max_height: float) -> Optional[Image]:
        """Image flowable fitted into the box, None if the bytes aren't a readable image"""
        try:
            width, height = ImageReader(io.BytesIO(data)).getSize()
        except Exception as e:
            logger.warning(f"⚠️ Skipping unreadable image: {e}")
            return None

        scale = min(max_width / width, max_height / height, 1.0)
        return Image(io.BytesIO(data), width=width * scale, height=height * scale)

    def build(self, story: list) -> bytes:
        """Render the story to PDF bytes"""
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=self.margin,
            leftMargin=self.margin,
            topMargin=self.margin,
            bottomMargin=self.margin,
            title=self.title,
            author=config.QUOTATION_COMPANY_NAME,
        )
        doc.build(story, onFirstPage=self._decorate_page, onLaterPages=self._decorate_page)

        pdf_bytes = buffer.getvalue()
        buffer.close()
        return pdf_bytes

    def _decorate_page(self, canvas_obj, doc):
        """Watermark, footer hash and page number"""
        canvas_obj.saveState()

        if self.status_label:
            canvas_obj.setFont("Helvetica-Bold", 48)
            canvas_obj.setFillColor(self.status_color, alpha=0.12)
            canvas_obj.translate(self.page_width / 2, self.page_height / 2)
            canvas_obj.rotate(45)
            canvas_obj.drawCentredString(0, 0, self.status_label)
            canvas_obj.rotate(-45)
            canvas_obj.translate(-self.page_width / 2, -self.page_height / 2)

            # Badge in the top right corner
            canvas_obj.setFillAlpha(1)
            canvas_obj.setFillColor(self.status_color)
            canvas_obj.setFont("Helvetica-Bold", 8)
            canvas_obj.drawRightString(
                self.page_width - self.margin, self.page_height - self.margin / 2, self.status_label
            )

        footer_y = self.margin / 2
        canvas_obj.setFont("Helvetica", 8)
        canvas_obj.setFillColor(colors.grey)
        canvas_obj.drawString(self.margin, footer_y, config.QUOTATION_COMPANY_NAME)
        canvas_obj.drawCentredString(self.page_width / 2, footer_y, f"Document ID: {self.document_hash}")
        canvas_obj.drawRightString(
            self.page_width - self.margin, footer_y, f"Page {canvas_obj.getPageNumber()}"
        )

        canvas_obj.restoreState()
