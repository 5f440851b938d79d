"""Payment event service - customer notifications for payment provider webhooks"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Optional

from ...email_service import send_email
from ...email_templates import (
    payment_confirmed_template,
    payment_confirmed_text,
    payment_failed_template,
    payment_failed_text,
    payment_overdue_template,
    payment_overdue_text,
)
from ...integrations.mercury import MercuryClient, MercuryCustomer, MercuryInvoice
from ...utils.formatting import format_short_date, parse_date
from ..quotations.calculations import format_currency

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_REASON = "Payment method declined"
SECONDS_PER_DAY = 60 * 60 * 24


def days_past_due(due_date: str, now: Optional[datetime] = None) -> int:
    """Whole days elapsed since the due date"""
    parsed = parse_date(due_date)
    if not parsed:
        return 0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return math.floor((now - parsed).total_seconds() / SECONDS_PER_DAY)


class PaymentEventService:
    """Dispatches webhook events to their handlers"""

    def __init__(self, mercury: MercuryClient):
        self.mercury = mercury
        self.handlers = {
            "invoice.paid": self.handle_invoice_paid,
            "invoice.payment_failed": self.handle_payment_failed,
            "invoice.overdue": self.handle_invoice_overdue,
        }

    async def handle_event(self, event: dict[str, Any]) -> None:
        event_type = event.get("type")
        data = event.get("data") or {}
        logger.info(
            f"📥 Received payment webhook: {event_type} "
            f"(invoiceId={data.get('invoiceId')}, status={data.get('status')})"
        )

        handler = self.handlers.get(event_type)
        if not handler:
            logger.warning(f"⚠️ Unhandled webhook event type: {event_type}")
            return

        try:
            await handler(data)
        except Exception as e:
            logger.error(f"❌ Error handling {event_type} event: {e}")
            raise

    async def _load(self, invoice_id: str) -> tuple[MercuryInvoice, MercuryCustomer]:
        invoice = await self.mercury.get_invoice(invoice_id)
        customer = await self.mercury.get_customer(invoice.customer_id)
        return invoice, customer

    async def handle_invoice_paid(self, data: dict[str, Any]) -> None:
        logger.info(f"Processing invoice.paid event for {data.get('invoiceId')}")
        invoice, customer = await self._load(data["invoiceId"])

        amount = format_currency(invoice.total, "USD")
        payment_date = format_short_date(data.get("paidAt") or datetime.now(timezone.utc))

        await send_email(
            to=customer.email,
            subject=f"Payment Received - Invoice {invoice.number}",
            mjml_content=payment_confirmed_template(customer.name, invoice.number, amount, payment_date),
            text=payment_confirmed_text(customer.name, invoice.number, amount, payment_date),
        )
        logger.info(f"✅ Invoice paid confirmation sent to {customer.email} ({invoice.id})")

    async def handle_payment_failed(self, data: dict[str, Any]) -> None:
        logger.info(f"Processing invoice.payment_failed event for {data.get('invoiceId')}")
        invoice, customer = await self._load(data["invoiceId"])

        amount = format_currency(invoice.total, "USD")
        reason = data.get("failureReason") or DEFAULT_FAILURE_REASON

        await send_email(
            to=customer.email,
            subject=f"Payment Failed - Invoice {invoice.number}",
            mjml_content=payment_failed_template(
                customer.name, invoice.number, amount, reason, invoice.payment_url
            ),
            text=payment_failed_text(customer.name, invoice.number, amount, reason, invoice.payment_url),
        )
        logger.info(f"✅ Payment failure notification sent to {customer.email} ({invoice.id})")

    async def handle_invoice_overdue(self, data: dict[str, Any]) -> None:
        logger.info(f"Processing invoice.overdue event for {data.get('invoiceId')}")
        invoice, customer = await self._load(data["invoiceId"])

        overdue_days = days_past_due(invoice.due_date)
        amount = format_currency(invoice.total, "USD")
        due_date = format_short_date(invoice.due_date)

        await send_email(
            to=customer.email,
            subject=f"Payment Reminder - Invoice {invoice.number} is Overdue",
            mjml_content=payment_overdue_template(
                customer.name, invoice.number, overdue_days, amount, due_date, invoice.payment_url
            ),
            text=payment_overdue_text(
                customer.name, invoice.number, overdue_days, amount, due_date, invoice.payment_url
            ),
        )
        logger.info(
            f"✅ Overdue reminder sent to {customer.email} ({invoice.id}, {overdue_days} days past due)"
        )
