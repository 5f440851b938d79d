"""
Mercury client - Integration with the Mercury accounts receivable API

Customers and invoices are created on Mercury; the routes only ever see the
MercuryCustomer / MercuryInvoice shapes below, so swapping the payment
provider doesn't change the HTTP contract.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from .. import config
from ..exceptions import MercuryAPIError
from ..utils.sanitization import quote_path_segment

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class MercuryCustomer(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "MercuryCustomer":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone"),
        )


class MercuryInvoice(BaseModel):
    id: str
    number: str
    status: str
    total: float
    due_date: str
    customer_id: str
    payment_url: Optional[str] = None
    paid_amount: Optional[float] = None
    paid_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "MercuryInvoice":
        return cls(
            id=str(data["id"]),
            number=str(data.get("invoiceNumber") or data.get("number") or data["id"]),
            status=str(data.get("status", "unknown")).lower(),
            total=float(data.get("amount", data.get("total", 0)) or 0),
            due_date=str(data.get("dueDate", "")),
            customer_id=str(data.get("customerId", "")),
            payment_url=data.get("paymentUrl") or data.get("payUrl"),
            paid_amount=data.get("amountPaid", data.get("paidAmount")),
            paid_at=data.get("paidAt") or data.get("paymentDate"),
        )


def build_customer_payload(
    name: str,
    email: str,
    phone: Optional[str] = None,
    address: Optional[dict] = None,
) -> dict:
    payload: dict[str, Any] = {"name": name, "email": email}
    if phone:
        payload["phone"] = phone
    if address:
        payload["address"] = {
            "address1": address.get("street"),
            "city": address.get("city"),
            "region": address.get("state"),
            "postalCode": address.get("zip"),
            "country": address.get("country"),
        }
    return payload


def build_invoice_payload(
    customer_id: str,
    due_date: date,
    line_items: list[dict],
    subtotal: float,
    tax: float,
    shipping: float,
    discount: float,
    total: float,
    notes: Optional[str] = None,
    send_email: bool = False,
    account_id: Optional[str] = None,
) -> dict:
    payload: dict[str, Any] = {
        "customerId": customer_id,
        "destinationAccountId": account_id,
        "invoiceDate": datetime.now(timezone.utc).date().isoformat(),
        "dueDate": due_date.isoformat(),
        "lineItems": [
            {
                "name": item["description"],
                "quantity": item["quantity"],
                "unitPrice": item["unitPrice"],
                "amount": item["amount"],
            }
            for item in line_items
        ],
        "subtotal": subtotal,
        "tax": tax,
        "shipping": shipping,
        "discount": discount,
        "amount": total,
        "sendEmailOption": "SendNow" if send_email else "DontSend",
    }
    if notes:
        payload["payerMemo"] = notes
    return payload


class MercuryClient:
    """Async client for Mercury customers and invoices"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        account_id: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else config.MERCURY_API_KEY
        self.base_url = (base_url or config.MERCURY_API_URL).rstrip("/")
        self.account_id = account_id if account_id is not None else config.MERCURY_ACCOUNT_ID
        self._transport = transport

        if not self.api_key:
            logger.warning("MERCURY_API_KEY not set; invoice endpoints will fail until configured")

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> dict:
        if not self.api_key:
            raise MercuryAPIError("Mercury client not configured")

        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=DEFAULT_TIMEOUT, transport=self._transport
        ) as http_client:
            try:
                response = await http_client.request(
                    method,
                    path,
                    json=json,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Accept": "application/json",
                    },
                )
            except httpx.HTTPError as e:
                logger.error(f"Mercury request {method} {path} failed: {e}")
                raise MercuryAPIError(f"Mercury request failed: {e}") from e

        if response.status_code not in (200, 201):
            logger.error(f"Mercury API error {response.status_code} on {method} {path}: {response.text}")
            raise MercuryAPIError(
                f"Mercury API error ({response.status_code}): {response.text}",
                status_code=response.status_code,
            )

        return response.json()

    async def create_customer(
        self,
        name: str,
        email: str,
        phone: Optional[str] = None,
        address: Optional[dict] = None,
    ) -> MercuryCustomer:
        """Create a receivables customer"""
        data = await self._request(
            "POST", "/ar/customers", json=build_customer_payload(name, email, phone, address)
        )
        customer = MercuryCustomer.from_api(data)
        logger.info(f"✅ Mercury customer ready: {customer.id}")
        return customer

    async def get_customer(self, customer_id: str) -> MercuryCustomer:
        data = await self._request("GET", f"/ar/customers/{quote_path_segment(customer_id)}")
        return MercuryCustomer.from_api(data)

    async def create_invoice(
        self,
        customer_id: str,
        due_date: date,
        line_items: list[dict],
        subtotal: float,
        tax: float,
        shipping: float,
        discount: float,
        total: float,
        notes: Optional[str] = None,
        send_email: bool = False,
    ) -> MercuryInvoice:
        """Create an invoice for a customer"""
        payload = build_invoice_payload(
            customer_id=customer_id,
            due_date=due_date,
            line_items=line_items,
            subtotal=subtotal,
            tax=tax,
            shipping=shipping,
            discount=discount,
            total=total,
            notes=notes,
            send_email=send_email,
            account_id=self.account_id,
        )
        data = await self._request("POST", "/ar/invoices", json=payload)
        invoice = MercuryInvoice.from_api(data)
        logger.info(f"✅ Mercury invoice created: {invoice.id} ({invoice.number})")
        return invoice

    async def get_invoice(self, invoice_id: str) -> MercuryInvoice:
        data = await self._request("GET", f"/ar/invoices/{quote_path_segment(invoice_id)}")
        return MercuryInvoice.from_api(data)


# Singleton instance
mercury_client = MercuryClient()


def get_mercury_client() -> MercuryClient:
    """Dependency injection for MercuryClient"""
    return mercury_client
