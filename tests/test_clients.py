"""
Outbound HTTP client tests - Mercury and the database proxy via httpx.MockTransport
"""

import json
from datetime import date

import httpx
import pytest

from desert_api.exceptions import DatabaseProxyError, MercuryAPIError
from desert_api.integrations.database_proxy import DatabaseProxyClient
from desert_api.integrations.mercury import MercuryClient, MercuryInvoice


class TestMercuryClient:
    def setup_method(self):
        self.requests: list[httpx.Request] = []

    def make_client(self, handler, api_key="mercury-key"):
        def recorder(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        return MercuryClient(
            api_key=api_key,
            base_url="https://mercury.test/api/v1/",
            account_id="acct_1",
            transport=httpx.MockTransport(recorder),
        )

    async def test_create_customer(self):
        client = self.make_client(
            lambda r: httpx.Response(201, json={"id": "cus_9", "name": "Jan", "email": "jan@example.com"})
        )
        customer = await client.create_customer(
            "Jan", "jan@example.com", address={"street": "Kade 1", "city": "Rotterdam"}
        )

        assert customer.id == "cus_9"
        request = self.requests[0]
        assert request.url.path == "/api/v1/ar/customers"
        assert request.headers["Authorization"] == "Bearer mercury-key"
        body = json.loads(request.content)
        assert body["address"]["address1"] == "Kade 1"
        assert body["address"]["city"] == "Rotterdam"

    async def test_create_invoice_payload(self):
        client = self.make_client(
            lambda r: httpx.Response(
                200,
                json={
                    "id": "inv_1",
                    "invoiceNumber": "INV-1",
                    "status": "Unpaid",
                    "amount": 110.0,
                    "dueDate": "2026-11-18",
                    "customerId": "cus_9",
                    "paymentUrl": "https://pay.test/inv_1",
                },
            )
        )
        invoice = await client.create_invoice(
            customer_id="cus_9",
            due_date=date(2026, 11, 18),
            line_items=[{"description": "Unit", "quantity": 1, "unitPrice": 100.0, "amount": 100.0}],
            subtotal=100.0,
            tax=10.0,
            shipping=0,
            discount=0,
            total=110.0,
            notes="Thanks",
            send_email=True,
        )

        assert invoice.status == "unpaid"
        assert invoice.number == "INV-1"
        assert invoice.payment_url == "https://pay.test/inv_1"
        body = json.loads(self.requests[0].content)
        assert body["dueDate"] == "2026-11-18"
        assert body["sendEmailOption"] == "SendNow"
        assert body["destinationAccountId"] == "acct_1"
        assert body["payerMemo"] == "Thanks"
        assert body["lineItems"][0]["name"] == "Unit"

    async def test_api_error(self):
        client = self.make_client(lambda r: httpx.Response(422, text="bad customer"))
        with pytest.raises(MercuryAPIError) as exc_info:
            await client.get_invoice("inv_1")
        assert exc_info.value.status_code == 422

    async def test_transport_error(self):
        def fail(request):
            raise httpx.ConnectError("boom", request=request)

        client = self.make_client(fail)
        with pytest.raises(MercuryAPIError):
            await client.get_customer("cus_9")

    async def test_not_configured(self):
        client = self.make_client(lambda r: httpx.Response(200, json={}), api_key="")
        with pytest.raises(MercuryAPIError):
            await client.get_invoice("inv_1")
        assert self.requests == []

    async def test_ids_escaped_into_single_segment(self):
        client = self.make_client(lambda r: httpx.Response(200, json={"id": "x"}))
        await client.get_invoice("../customers/cus_1")
        await client.get_customer("a?b=c")

        invoice_url, customer_url = self.requests[0].url, self.requests[1].url
        assert invoice_url.raw_path == b"/api/v1/ar/invoices/%2E%2E%2Fcustomers%2Fcus_1"
        assert customer_url.raw_path == b"/api/v1/ar/customers/a%3Fb%3Dc"
        assert customer_url.query == b""


class TestMercuryInvoiceParsing:
    def test_number_falls_back_to_id(self):
        invoice = MercuryInvoice.from_api({"id": "inv_7", "amount": "12.5"})
        assert invoice.number == "inv_7"
        assert invoice.total == 12.5
        assert invoice.status == "unknown"


class TestDatabaseProxyClient:
    def make_client(self, handler):
        return DatabaseProxyClient(
            base_url="https://proxy.test", api_key="proxy-key", transport=httpx.MockTransport(handler)
        )

    async def test_create_quotation(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(201, json={"quotation": {"id": "q1", "quotationNumber": "QDS-1"}})

        result = await self.make_client(handler).create_quotation({"quotationNumber": "QDS-1"})

        assert result == {"success": True, "quotation": {"id": "q1", "quotationNumber": "QDS-1"}}
        assert seen["path"] == "/desert-solutions/quotations"
        assert seen["auth"] == "Bearer proxy-key"

    async def test_create_quotation_failure(self):
        client = self.make_client(lambda r: httpx.Response(500, text="db down"))
        with pytest.raises(DatabaseProxyError):
            await client.create_quotation({})

    async def test_quotation_id_escaped(self):
        seen = []

        def handler(request):
            seen.append(request.url)
            return httpx.Response(404)

        client = self.make_client(handler)
        await client.get_quotation("../../admin/users?drop=1")
        await client.get_quotation("..")

        assert seen[0].raw_path == (
            b"/desert-solutions/quotations/%2E%2E%2F%2E%2E%2Fadmin%2Fusers%3Fdrop%3D1"
        )
        assert seen[0].query == b""
        assert seen[1].raw_path == b"/desert-solutions/quotations/%2E%2E"

    async def test_get_quotation(self):
        client = self.make_client(lambda r: httpx.Response(200, json={"quotation": {"id": "q1"}}))
        assert await client.get_quotation("q1") == {"success": True, "quotation": {"id": "q1"}}

    async def test_get_quotation_missing(self):
        """A proxy 404 is a miss rather than an error"""
        client = self.make_client(lambda r: httpx.Response(404, json={"error": "not found"}))
        assert await client.get_quotation("q1") == {"success": False, "quotation": None}

    async def test_get_quotation_server_error(self):
        client = self.make_client(lambda r: httpx.Response(503, text="unavailable"))
        with pytest.raises(DatabaseProxyError) as exc_info:
            await client.get_quotation("q1")
        assert exc_info.value.status_code == 503
