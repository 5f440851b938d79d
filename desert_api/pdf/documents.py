"""Document release status and audit hash helpers shared by PDFs and emails"""

import hashlib
from datetime import datetime, timezone
from enum import Enum


class DocumentStatus(str, Enum):
    WIP = "WIP"
    RC = "RC"
    FINAL = "FINAL"


DEFAULT_DOCUMENT_STATUS = DocumentStatus.WIP

STATUS_LABELS = {
    DocumentStatus.WIP: "WORK IN PROGRESS",
    DocumentStatus.RC: "RELEASE CANDIDATE",
    # Final releases carry no badge
    DocumentStatus.FINAL: "",
}

STATUS_COLORS = {
    DocumentStatus.WIP: "#f59e0b",
    DocumentStatus.RC: "#3b82f6",
    DocumentStatus.FINAL: "#10b981",
}


def is_valid_document_status(value: str) -> bool:
    return value in DocumentStatus._value2member_map_


def get_status_label(status: DocumentStatus) -> str:
    return STATUS_LABELS[DocumentStatus(status)]


def get_status_color(status: DocumentStatus) -> str:
    return STATUS_COLORS[DocumentStatus(status)]


def today_seed(prefix: str, reference: str) -> str:
    """Hash seed for a document generated today, e.g. Quotation-QDS-1-2026-10-19"""
    return f"{prefix}-{reference}-{datetime.now(timezone.utc).date().isoformat()}"


def generate_document_hash(seed: str) -> str:
    """Short audit hash printed in document footers"""
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()[:16].upper()
