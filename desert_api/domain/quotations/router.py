"""Quotations router - FastAPI endpoints for quotation operations"""

import asyncio
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Response

from ...exceptions import BadRequestError, DesertSolutionsError
from ...integrations.database_proxy import DatabaseProxyClient, get_proxy_client
from ...pdf import (
    DEFAULT_DOCUMENT_STATUS,
    DocumentStatus,
    generate_document_hash,
    render_quotation_pdf,
    today_seed,
)
from ...pdf.documents import is_valid_document_status
from ...security import require_api_key
from .schemas import CreateQuotationRequest, EmailQuotationRequest, PhotoAddendumRequest
from .service import QuotationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotation", tags=["Quotations"], dependencies=[Depends(require_api_key)])


def get_quotation_service(proxy: DatabaseProxyClient = Depends(get_proxy_client)) -> QuotationService:
    """Dependency injection for QuotationService"""
    return QuotationService(proxy)


@router.post("/create", status_code=201)
async def create_quotation(
    data: CreateQuotationRequest,
    service: QuotationService = Depends(get_quotation_service),
):
    """Price the requested items and store a draft quotation"""
    try:
        quotation = await service.create_quotation(data)
        return {"success": True, "quotation": quotation}
    except DesertSolutionsError:
        raise
    except Exception as e:
        logger.error(f"Error creating quotation: {e}")
        raise DesertSolutionsError("Failed to create quotation", str(e), status_code=500)


@router.get("/get")
async def get_quotation(
    id: Optional[str] = None,
    service: QuotationService = Depends(get_quotation_service),
):
    """Get a stored quotation by id"""
    if not id:
        raise BadRequestError("Missing quotation ID parameter")

    try:
        quotation = await service.get_quotation(id)
        return {"success": True, "quotation": quotation}
    except DesertSolutionsError:
        raise
    except Exception as e:
        logger.error(f"Error fetching quotation {id}: {e}")
        raise DesertSolutionsError("Failed to fetch quotation", str(e), status_code=500)


@router.post("/pdf")
async def generate_quotation_pdf(quotation: dict[str, Any] = Body(...)):
    """Render a quotation sent in the body to PDF"""
    if (
        not quotation.get("quotationNumber")
        or quotation.get("customer") is None
        or quotation.get("items") is None
    ):
        raise BadRequestError("Invalid quotation data")

    number = quotation["quotationNumber"]
    status = quotation.get("documentStatus")
    if not isinstance(status, str) or not is_valid_document_status(status):
        status = DEFAULT_DOCUMENT_STATUS

    try:
        document_hash = generate_document_hash(today_seed("Quotation", number))
        pdf_bytes = await asyncio.to_thread(
            render_quotation_pdf, quotation, DocumentStatus(status), document_hash
        )
    except Exception as e:
        logger.error(f"Error generating PDF for quotation {number}: {e}")
        raise DesertSolutionsError("Failed to generate PDF", str(e), status_code=500)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="quotation-{number}.pdf"'},
    )


@router.post("/email")
async def email_quotation(
    data: EmailQuotationRequest,
    service: QuotationService = Depends(get_quotation_service),
):
    """Email a quotation to the customer"""
    try:
        return await service.send_quotation_email(data)
    except DesertSolutionsError:
        raise
    except Exception as e:
        logger.error(f"Error sending quotation email: {e}")
        raise DesertSolutionsError("Failed to send email", str(e), status_code=500)


@router.post("/photo-addendum")
async def send_photo_addendum(
    data: PhotoAddendumRequest,
    service: QuotationService = Depends(get_quotation_service),
):
    """Email a product photo addendum PDF"""
    try:
        return await service.send_photo_addendum(data)
    except DesertSolutionsError:
        raise
    except Exception as e:
        logger.error(f"Error sending photo addendum email: {e}")
        raise DesertSolutionsError("Failed to send photo addendum email", str(e), status_code=500)
