from .datasheet_pdf import DatasheetData, KeySpec, render_datasheet_pdf
from .documents import (
    DEFAULT_DOCUMENT_STATUS,
    DocumentStatus,
    generate_document_hash,
    get_status_color,
    get_status_label,
    today_seed,
)
from .photo_addendum_pdf import AddendumPhoto, AddendumProduct, PhotoAddendumData, render_photo_addendum_pdf
from .quotation_pdf import render_quotation_pdf

__all__ = [
    "DEFAULT_DOCUMENT_STATUS",
    "AddendumPhoto",
    "AddendumProduct",
    "DatasheetData",
    "DocumentStatus",
    "KeySpec",
    "PhotoAddendumData",
    "generate_document_hash",
    "get_status_color",
    "get_status_label",
    "render_datasheet_pdf",
    "render_photo_addendum_pdf",
    "render_quotation_pdf",
    "today_seed",
]
