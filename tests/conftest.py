"""
Desert Solutions API - Test Configuration (conftest.py)

Shared fixtures for the test suite:
    ├── test_client: HTTPX AsyncClient bound to the FastAPI app
    ├── auth_headers: API key headers accepted by the secured routes
    ├── mock_proxy / mock_mercury: collaborators swapped in via dependency_overrides
    ├── mock_send_email: Resend never gets called
    └── sample_png_bytes: tiny valid PNG for PDF embedding
"""

import os
import struct
import zlib
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["DESERT_SOLUTIONS_API_KEYS"] = "test-api-key,second-test-key"
os.environ["MERCURY_WEBHOOK_SECRET"] = "test-webhook-secret"
os.environ["MERCURY_API_KEY"] = "test-mercury-key"
os.environ["RESEND_API_KEY"] = "re_test_not_real"
os.environ["DATABASE_PROXY_API_KEY"] = "test-proxy-key"
os.environ["LOG_LEVEL"] = "WARNING"

from desert_api.integrations.database_proxy import DatabaseProxyClient, get_proxy_client  # noqa: E402
from desert_api.integrations.mercury import (  # noqa: E402
    MercuryClient,
    MercuryCustomer,
    MercuryInvoice,
    get_mercury_client,
)
from desert_api.main import app  # noqa: E402

API_KEY = "test-api-key"
WEBHOOK_SECRET = "test-webhook-secret"

SEND_EMAIL_TARGETS = [
    "desert_api.domain.quotations.service.send_email",
    "desert_api.domain.datasheets.service.send_email",
    "desert_api.domain.payments.service.send_email",
]


def make_png(width: int = 4, height: int = 3) -> bytes:
    """Build a minimal RGB PNG without any imaging library"""

    def chunk(tag: bytes, data: bytes) -> bytes:
        return (
            struct.pack(">I", len(data))
            + tag
            + data
            + struct.pack(">I", zlib.crc32(tag + data) & 0xFFFFFFFF)
        )

    raw = b"".join(b"\x00" + b"\x43\x38\xca" * width for _ in range(height))
    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(raw))
        + chunk(b"IEND", b"")
    )


@pytest.fixture
def sample_png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def auth_headers() -> dict:
    return {"X-API-Key": API_KEY}


@pytest_asyncio.fixture
async def test_client():
    """HTTPX AsyncClient talking to the app in-process"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_proxy():
    """Database proxy client replaced for every route that depends on it"""
    proxy = MagicMock(spec=DatabaseProxyClient)
    proxy.create_quotation = AsyncMock()
    proxy.get_quotation = AsyncMock(return_value={"success": False, "quotation": None})
    app.dependency_overrides[get_proxy_client] = lambda: proxy
    yield proxy
    app.dependency_overrides.pop(get_proxy_client, None)


@pytest.fixture
def mock_mercury():
    """Mercury client replaced for the invoice and webhook routes"""
    mercury = MagicMock(spec=MercuryClient)
    mercury.create_customer = AsyncMock(
        return_value=MercuryCustomer(id="cus_123", name="Jan de Vries", email="jan@example.com")
    )
    mercury.get_customer = AsyncMock(
        return_value=MercuryCustomer(id="cus_123", name="Jan de Vries", email="jan@example.com")
    )
    mercury.create_invoice = AsyncMock(
        return_value=MercuryInvoice(
            id="inv_123",
            number="INV-0042",
            status="unpaid",
            total=37000.0,
            due_date="2026-11-18",
            customer_id="cus_123",
            payment_url="https://pay.example.com/inv_123",
        )
    )
    mercury.get_invoice = AsyncMock(
        return_value=MercuryInvoice(
            id="inv_123",
            number="INV-0042",
            status="unpaid",
            total=37000.0,
            due_date="2026-11-18",
            customer_id="cus_123",
            payment_url="https://pay.example.com/inv_123",
        )
    )
    app.dependency_overrides[get_mercury_client] = lambda: mercury
    yield mercury
    app.dependency_overrides.pop(get_mercury_client, None)


@pytest.fixture
def mock_send_email():
    """One AsyncMock standing in for send_email wherever it is used"""
    sender = AsyncMock(return_value={"id": "email_123"})
    patchers = [patch(target, new=sender) for target in SEND_EMAIL_TARGETS]
    for patcher in patchers:
        patcher.start()
    yield sender
    for patcher in patchers:
        patcher.stop()


@pytest.fixture
def sample_quotation() -> dict:
    """A quotation as stored by the database proxy"""
    return {
        "id": "6f1c2f0e-8d0a-4a57-9a55-3f0b6e3f0c11",
        "quotationNumber": "QDS-20261019-AB12",
        "customerData": {
            "name": "Jan de Vries",
            "company": "Noordzee Energy BV",
            "email": "jan@example.com",
        },
        "items": [
            {
                "id": "ds-acsc-400-0",
                "name": "Desert Solutions ACSC-400 Container Cooling Unit",
                "description": "40 kW packaged cooling unit for battery and data containers",
                "quantity": 2,
                "unitPrice": 18500.0,
                "totalPrice": 37000.0,
            }
        ],
        "currency": "USD",
        "subtotal": 37000.0,
        "tax": 0,
        "shipping": 0,
        "discount": 0,
        "total": 37000.0,
        "terms": {
            "validUntil": "2026-11-18T00:00:00Z",
            "paymentTerms": "Net 30",
            "deliveryTerms": "FOB Origin",
        },
        "status": "draft",
        "date": "2026-10-19T09:30:00Z",
    }
