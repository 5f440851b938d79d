"""
Datasheet PDF Generator
Single product technical datasheet in English or Dutch
"""

import logging
from dataclasses import dataclass, field
from html import escape
from typing import Literal, Optional

from reportlab.lib import colors
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, Spacer, Table, TableStyle

from .. import config
from .base import BrandedPDFGenerator
from .documents import DEFAULT_DOCUMENT_STATUS, DocumentStatus

logger = logging.getLogger(__name__)

DatasheetLanguage = Literal["en", "nl"]
SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "nl")


@dataclass
class KeySpec:
    label: str
    value: str


@dataclass
class DatasheetData:
    productId: str
    sku: str
    productName: str
    shortDescription: str
    longDescription: str
    specifications: dict[str, str]
    keySpecs: list[KeySpec] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    productImage: Optional[bytes] = None
    sideViewImage: Optional[bytes] = None


LABELS = {
    "en": {
        "title": "Technical Datasheet",
        "overview": "Product Overview",
        "key_features": "Key Features",
        "specifications": "Technical Specifications",
        "front_view": "Front view",
        "side_view": "Side view",
        "disclaimer": "Specifications are subject to change without notice.",
        "contact": "Contact",
    },
    "nl": {
        "title": "Technisch Gegevensblad",
        "overview": "Productoverzicht",
        "key_features": "Belangrijkste Kenmerken",
        "specifications": "Technische Specificaties",
        "front_view": "Vooraanzicht",
        "side_view": "Zijaanzicht",
        "disclaimer": "Specificaties kunnen zonder voorafgaande kennisgeving worden gewijzigd.",
        "contact": "Contact",
    },
}

# Dutch names for specification and key spec labels; unknown labels are kept as is
DUTCH_SPEC_LABELS = {
    "SKU": "Artikelnummer",
    "Cooling Capacity": "Koelvermogen",
    "Total Power Consumption": "Totaal opgenomen vermogen",
    "Power Consumption": "Opgenomen vermogen",
    "Power Supply": "Voeding",
    "Refrigerant": "Koudemiddel",
    "Number of Compressors": "Aantal compressoren",
    "Compressors": "Compressoren",
    "Compressor Type": "Type compressor",
    "Temperature Control Range": "Temperatuurregelbereik",
    "Temp Range": "Temperatuurbereik",
    "Max Ambient Temperature": "Max. omgevingstemperatuur",
    "Airflow": "Luchtdebiet",
    "Control System": "Regelsysteem",
    "Safety Protection": "Beveiliging",
    "Dimensions (L×W×H)": "Afmetingen (L×B×H)",
    "Dimensions": "Afmetingen",
    "Weight": "Gewicht",
    "Noise Level": "Geluidsniveau",
    "Ingress Protection": "Beschermingsgraad",
    "Dehumidification Capacity": "Ontvochtigingscapaciteit",
}


def translate_spec_label(label: str, language: str) -> str:
    if language == "nl":
        return DUTCH_SPEC_LABELS.get(label, label)
    return label


class DatasheetPDFGenerator(BrandedPDFGenerator):
    """Generate product datasheets"""

    def __init__(
        self,
        data: DatasheetData,
        document_status: DocumentStatus,
        document_hash: str,
        language: str = "en",
    ):
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported datasheet language: {language}")
        self.data = data
        self.language = language
        self.labels = LABELS[language]
        super().__init__(
            document_status,
            document_hash,
            title=f"{self.labels['title']} - {data.productName}",
        )

    def generate(self) -> bytes:
        data = self.data
        logger.info(f"📄 Generating {self.language} datasheet PDF for {data.sku}")

        story = []
        story.append(Paragraph(escape(data.productName), self.styles["title"]))
        story.append(
            Paragraph(
                f"{self.labels['title']} | {escape(data.sku)} | {escape(config.QUOTATION_COMPANY_NAME)}",
                self.styles["subtitle"],
            )
        )

        images = self._image_row()
        if images:
            story.append(images)
            story.append(Spacer(1, 0.15 * inch))

        if data.keySpecs:
            story.append(self._key_spec_boxes())
            story.append(Spacer(1, 0.15 * inch))

        story.append(Paragraph(self.labels["overview"], self.styles["heading"]))
        story.append(Paragraph(escape(data.shortDescription), self.styles["body"]))
        if data.longDescription:
            story.append(Paragraph(escape(data.longDescription), self.styles["body"]))

        if data.features:
            story.append(Paragraph(self.labels["key_features"], self.styles["heading"]))
            for feature in data.features:
                story.append(Paragraph(f"• {escape(feature)}", self.styles["body"]))

        story.append(Paragraph(self.labels["specifications"], self.styles["heading"]))
        spec_rows = [
            [
                translate_spec_label(label, self.language),
                Paragraph(escape(value), self.styles["body"]),
            ]
            for label, value in data.specifications.items()
        ]
        if spec_rows:
            story.append(self.key_value_table(spec_rows))

        story.append(Spacer(1, 0.3 * inch))
        story.append(Paragraph(self.labels["disclaimer"], self.styles["small"]))
        story.append(
            Paragraph(
                f"{self.labels['contact']}: {escape(config.QUOTATION_COMPANY_EMAIL)} | "
                f"{escape(config.QUOTATION_COMPANY_WEBSITE)}",
                self.styles["small"],
            )
        )

        pdf_bytes = self.build(story)
        logger.info(f"✅ Generated datasheet PDF ({len(pdf_bytes)} bytes)")
        return pdf_bytes

    def _image_row(self) -> Optional[Table]:
        cells = []
        captions = []
        max_width = (self.content_width - 0.2 * inch) / 2
        for image_bytes, caption in [
            (self.data.productImage, self.labels["front_view"]),
            (self.data.sideViewImage, self.labels["side_view"]),
        ]:
            if not image_bytes:
                continue
            image = self.scaled_image(image_bytes, max_width, 2.6 * inch)
            if image:
                cells.append(image)
                captions.append(Paragraph(caption, self.styles["caption"]))

        if not cells:
            return None

        row = Table([cells, captions], colWidths=[max_width] * len(cells))
        row.setStyle(TableStyle([("ALIGN", (0, 0), (-1, -1), "CENTER"), ("VALIGN", (0, 0), (-1, -1), "MIDDLE")]))
        return row

    def _key_spec_boxes(self) -> Table:
        specs = self.data.keySpecs
        width = self.content_width / len(specs)
        values = [Paragraph(f"<b>{escape(spec.value)}</b>", self.styles["body"]) for spec in specs]
        labels = [
            Paragraph(escape(translate_spec_label(spec.label, self.language)), self.styles["small"])
            for spec in specs
        ]

        boxes = Table([values, labels], colWidths=[width] * len(specs))
        boxes.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, -1), self.light_gray),
                    ("LINEABOVE", (0, 0), (-1, 0), 2, self.brand_color),
                    ("BOX", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("INNERGRID", (0, 0), (-1, -1), 0.25, colors.white),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ]
            )
        )
        return boxes


def render_datasheet_pdf(
    data: DatasheetData,
    document_status: DocumentStatus = DEFAULT_DOCUMENT_STATUS,
    document_hash: str = "",
    language: str = "en",
) -> bytes:
    """Render a product datasheet to PDF bytes"""
    return DatasheetPDFGenerator(data, document_status, document_hash, language).generate()
