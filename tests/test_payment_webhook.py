"""
Payment webhook tests - signed events dispatched to customer notifications
"""

import json
import time
from datetime import datetime, timezone

import pytest

from desert_api.domain.payments.service import days_past_due
from desert_api.webhook_security import create_webhook_signature

WEBHOOK_SECRET = "test-webhook-secret"

URL = "/api/desert-solutions/payment/webhook"


def signed(event: dict) -> tuple[bytes, dict]:
    body = json.dumps(event).encode("utf-8")
    timestamp = str(int(time.time()))
    return body, {
        "X-Webhook-Signature": create_webhook_signature(WEBHOOK_SECRET, timestamp, body),
        "X-Webhook-Timestamp": timestamp,
        "Content-Type": "application/json",
    }


class TestPaymentWebhook:
    async def test_invoice_paid(self, test_client, mock_mercury, mock_send_email):
        body, headers = signed(
            {"type": "invoice.paid", "data": {"invoiceId": "inv_123", "paidAt": "2026-10-19T10:00:00Z"}}
        )
        response = await test_client.post(URL, content=body, headers=headers)

        assert response.status_code == 200
        assert response.json() == {"received": True}
        mock_mercury.get_customer.assert_awaited_once_with("cus_123")
        kwargs = mock_send_email.call_args.kwargs
        assert kwargs["to"] == "jan@example.com"
        assert kwargs["subject"] == "Payment Received - Invoice INV-0042"
        assert "$37,000.00" in kwargs["text"]

    async def test_payment_failed_default_reason(self, test_client, mock_mercury, mock_send_email):
        body, headers = signed({"type": "invoice.payment_failed", "data": {"invoiceId": "inv_123"}})
        response = await test_client.post(URL, content=body, headers=headers)

        assert response.status_code == 200
        kwargs = mock_send_email.call_args.kwargs
        assert kwargs["subject"] == "Payment Failed - Invoice INV-0042"
        assert "Payment method declined" in kwargs["text"]
        assert "https://pay.example.com/inv_123" in kwargs["text"]

    async def test_payment_failed_reason(self, test_client, mock_mercury, mock_send_email):
        body, headers = signed(
            {
                "type": "invoice.payment_failed",
                "data": {"invoiceId": "inv_123", "failureReason": "Insufficient funds"},
            }
        )
        await test_client.post(URL, content=body, headers=headers)
        assert "Insufficient funds" in mock_send_email.call_args.kwargs["text"]

    async def test_overdue(self, test_client, mock_mercury, mock_send_email):
        body, headers = signed({"type": "invoice.overdue", "data": {"invoiceId": "inv_123"}})
        response = await test_client.post(URL, content=body, headers=headers)

        assert response.status_code == 200
        assert (
            mock_send_email.call_args.kwargs["subject"]
            == "Payment Reminder - Invoice INV-0042 is Overdue"
        )

    async def test_unknown_event_acknowledged(self, test_client, mock_mercury, mock_send_email):
        body, headers = signed({"type": "invoice.created", "data": {"invoiceId": "inv_123"}})
        response = await test_client.post(URL, content=body, headers=headers)

        assert response.status_code == 200
        assert response.json() == {"received": True}
        mock_send_email.assert_not_called()
        mock_mercury.get_invoice.assert_not_called()

    async def test_no_api_key_needed(self, test_client, mock_mercury, mock_send_email):
        """Webhooks authenticate by signature only"""
        body, headers = signed({"type": "invoice.created", "data": {}})
        response = await test_client.post(URL, content=body, headers=headers)
        assert response.status_code == 200

    async def test_handler_failure(self, test_client, mock_mercury, mock_send_email):
        mock_send_email.side_effect = RuntimeError("resend down")
        body, headers = signed({"type": "invoice.paid", "data": {"invoiceId": "inv_123"}})
        response = await test_client.post(URL, content=body, headers=headers)

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to process webhook"

    async def test_malformed_json(self, test_client, mock_mercury):
        timestamp = str(int(time.time()))
        body = b"{not json"
        response = await test_client.post(
            URL,
            content=body,
            headers={
                "X-Webhook-Signature": create_webhook_signature(WEBHOOK_SECRET, timestamp, body),
                "X-Webhook-Timestamp": timestamp,
            },
        )
        assert response.status_code == 500


class TestDaysPastDue:
    @pytest.mark.parametrize(
        "due_date,expected",
        [
            ("2026-10-01", 18),
            ("2026-10-19", 0),
            ("2026-10-25", -6),
        ],
    )
    def test_whole_days(self, due_date, expected):
        now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
        assert days_past_due(due_date, now) == expected

    def test_unparseable(self):
        assert days_past_due("someday") == 0
