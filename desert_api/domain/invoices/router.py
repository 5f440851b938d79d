"""Invoice router - invoicing through the payment provider"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from ...exceptions import BadRequestError, DesertSolutionsError
from ...integrations.mercury import MercuryClient, get_mercury_client
from ...security import require_api_key
from .schemas import CreateInvoiceRequest, CreateInvoiceResponse, InvoiceStatusResponse
from .service import InvoiceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoice", tags=["Invoices"], dependencies=[Depends(require_api_key)])


def get_invoice_service(mercury: MercuryClient = Depends(get_mercury_client)) -> InvoiceService:
    """Dependency injection for InvoiceService"""
    return InvoiceService(mercury)


@router.post("/create", response_model=CreateInvoiceResponse, status_code=201)
async def create_invoice(
    data: CreateInvoiceRequest,
    service: InvoiceService = Depends(get_invoice_service),
):
    """Create an invoice from a quotation"""
    try:
        invoice = await service.create_invoice(data)
        return CreateInvoiceResponse(invoice=invoice)
    except Exception as e:
        logger.error(f"Error creating invoice: {e}")
        raise DesertSolutionsError("Failed to create invoice", str(e), status_code=500)


@router.get("/status", response_model=InvoiceStatusResponse)
async def get_invoice_status(
    invoiceId: Optional[str] = None,
    service: InvoiceService = Depends(get_invoice_service),
):
    """Current invoice status from the payment provider"""
    if not invoiceId:
        raise BadRequestError("Missing invoiceId parameter")

    try:
        invoice = await service.get_invoice_status(invoiceId)
        return InvoiceStatusResponse(invoice=invoice)
    except Exception as e:
        logger.error(f"Error fetching invoice status for {invoiceId}: {e}")
        raise DesertSolutionsError("Failed to fetch invoice status", str(e), status_code=500)
