"""Invoice service - creates provider invoices from quotations"""

import logging
from datetime import datetime, timedelta, timezone

from ...integrations.mercury import MercuryClient
from .schemas import CreateInvoiceRequest, InvoiceCreated, InvoiceStatus

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service layer for invoicing; the payment provider stays behind MercuryClient"""

    def __init__(self, mercury: MercuryClient):
        self.mercury = mercury

    async def create_invoice(self, data: CreateInvoiceRequest) -> InvoiceCreated:
        quotation = data.quotation
        logger.info(f"🧾 Creating invoice for quotation {quotation.quotationNumber}")

        customer = await self.mercury.create_customer(
            name=quotation.customer.name,
            email=quotation.customer.email,
            phone=quotation.customer.phone,
            address=quotation.customer.address.model_dump() if quotation.customer.address else None,
        )

        due_date = datetime.now(timezone.utc).date() + timedelta(days=data.dueInDays)
        invoice = await self.mercury.create_invoice(
            customer_id=customer.id,
            due_date=due_date,
            line_items=[
                {
                    "description": f"{item.name} - {item.description}",
                    "quantity": item.quantity,
                    "unitPrice": item.unitPrice,
                    "amount": item.totalPrice,
                }
                for item in quotation.items
            ],
            subtotal=quotation.subtotal,
            tax=quotation.tax,
            shipping=quotation.shipping,
            discount=quotation.discount,
            total=quotation.total,
            notes=quotation.notes,
            send_email=data.sendEmail,
        )

        return InvoiceCreated(
            id=invoice.id,
            invoiceNumber=invoice.number,
            status=invoice.status,
            total=invoice.total,
            dueDate=invoice.due_date,
            paymentUrl=invoice.payment_url,
            customerId=customer.id,
        )

    async def get_invoice_status(self, invoice_id: str) -> InvoiceStatus:
        invoice = await self.mercury.get_invoice(invoice_id)
        amount_paid = invoice.paid_amount or 0
        return InvoiceStatus(
            id=invoice.id,
            invoiceNumber=invoice.number,
            status=invoice.status,
            total=invoice.total,
            amountPaid=amount_paid,
            amountDue=round(invoice.total - amount_paid, 2),
            dueDate=invoice.due_date,
            paidDate=invoice.paid_at,
            paymentUrl=invoice.payment_url,
            customerId=invoice.customer_id,
        )
