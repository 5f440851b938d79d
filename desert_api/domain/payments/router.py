"""
Payment webhook router

Authenticated by the webhook signature, not by API key.
"""

import json
import logging

from fastapi import APIRouter, Depends

from ...exceptions import DesertSolutionsError
from ...integrations.mercury import MercuryClient, get_mercury_client
from ...webhook_security import verify_mercury_webhook
from .service import PaymentEventService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payment", tags=["Webhooks"])


def get_payment_event_service(
    mercury: MercuryClient = Depends(get_mercury_client),
) -> PaymentEventService:
    """Dependency injection for PaymentEventService"""
    return PaymentEventService(mercury)


@router.post("/webhook")
async def handle_payment_webhook(
    raw_body: bytes = Depends(verify_mercury_webhook),
    service: PaymentEventService = Depends(get_payment_event_service),
):
    """
    Handle payment provider webhook events

    Events handled:
    - invoice.paid - payment confirmation email
    - invoice.payment_failed - failure notification with pay link
    - invoice.overdue - overdue reminder
    """
    try:
        event = json.loads(raw_body.decode("utf-8"))
        await service.handle_event(event)
    except Exception as e:
        logger.error(f"❌ Error processing payment webhook: {e}")
        raise DesertSolutionsError("Failed to process webhook", str(e), status_code=500)

    return {"received": True}
