"""
Quotation route tests - create, get, PDF, email and photo addendum
"""

import re
from unittest.mock import patch

import pytest

BASE = "/api/desert-solutions/quotation"
SERVICE = "desert_api.domain.quotations.service"


@pytest.fixture
def stored_quotation(mock_proxy, sample_quotation):
    mock_proxy.get_quotation.return_value = {"success": True, "quotation": sample_quotation}
    return sample_quotation


class TestCreateQuotation:
    def setup_method(self):
        self.payload = {
            "customer": {
                "name": "Jan de Vries",
                "company": "Noordzee Energy BV",
                "email": "jan@example.com",
            },
            "items": [{"productId": "ds-acsc-400", "quantity": 2}],
        }

    async def test_create(self, test_client, auth_headers, mock_proxy):
        mock_proxy.create_quotation.side_effect = lambda record: {
            "success": True,
            "quotation": {"id": "q-1", **record},
        }

        response = await test_client.post(f"{BASE}/create", json=self.payload, headers=auth_headers)

        assert response.status_code == 201
        quotation = response.json()["quotation"]
        assert quotation["id"] == "q-1"
        assert re.fullmatch(r"QDS-\d{8}-[A-Z0-9]{4}", quotation["quotationNumber"])
        assert quotation["status"] == "draft"
        assert quotation["items"][0]["unitPrice"] == 18500.0
        assert quotation["items"][0]["totalPrice"] == 37000.0
        assert quotation["total"] == 37000.0
        assert quotation["terms"]["paymentTerms"] == "Net 30"
        assert quotation["terms"]["deliveryTerms"] == "FOB Origin"

    async def test_custom_price_variant_and_discount(self, test_client, auth_headers, mock_proxy):
        mock_proxy.create_quotation.side_effect = lambda record: {"success": True, "quotation": record}
        self.payload["items"] = [
            {"productId": "ds-acsc-400", "variantId": "ds-acsc-400-r290", "quantity": 1},
            {"productId": "ds-shelter-12", "quantity": 3, "customPrice": 5000},
        ]
        self.payload["terms"] = {
            "shippingCost": 1200,
            "discount": {"amount": 800, "description": "Framework agreement"},
        }
        self.payload["currency"] = "USD"

        response = await test_client.post(f"{BASE}/create", json=self.payload, headers=auth_headers)

        quotation = response.json()["quotation"]
        assert [i["unitPrice"] for i in quotation["items"]] == [19800.0, 5000]
        assert quotation["subtotal"] == 34800.0
        assert quotation["discount"] == 800
        assert quotation["shipping"] == 1200
        assert quotation["total"] == 34800.0 - 800 + 1200
        assert quotation["terms"]["discount"]["description"] == "Framework agreement"

    async def test_validation_error(self, test_client, auth_headers, mock_proxy):
        self.payload["customer"]["email"] = "not-an-email"
        response = await test_client.post(f"{BASE}/create", json=self.payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request data"
        assert response.json()["details"]
        mock_proxy.create_quotation.assert_not_called()

    async def test_zero_quantity_rejected(self, test_client, auth_headers, mock_proxy):
        self.payload["items"][0]["quantity"] = 0
        response = await test_client.post(f"{BASE}/create", json=self.payload, headers=auth_headers)
        assert response.status_code == 400

    async def test_unsupported_currency_rejected(self, test_client, auth_headers, mock_proxy):
        self.payload["currency"] = "GBP"
        response = await test_client.post(f"{BASE}/create", json=self.payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["details"][0]["loc"] == ["body", "currency"]
        mock_proxy.create_quotation.assert_not_called()

    async def test_unknown_product(self, test_client, auth_headers, mock_proxy):
        self.payload["items"][0]["productId"] = "ds-nothing"
        response = await test_client.post(f"{BASE}/create", json=self.payload, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to create quotation",
            "message": "Product not found: ds-nothing",
        }

    async def test_requires_api_key(self, test_client, mock_proxy):
        response = await test_client.post(f"{BASE}/create", json=self.payload)
        assert response.status_code == 401


class TestGetQuotation:
    async def test_missing_id(self, test_client, auth_headers, mock_proxy):
        response = await test_client.get(f"{BASE}/get", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing quotation ID parameter"

    async def test_found(self, test_client, auth_headers, stored_quotation):
        response = await test_client.get(
            f"{BASE}/get", params={"id": stored_quotation["id"]}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "quotation": stored_quotation}

    async def test_not_found(self, test_client, auth_headers, mock_proxy):
        response = await test_client.get(f"{BASE}/get", params={"id": "missing"}, headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Quotation not found"

    async def test_proxy_failure(self, test_client, auth_headers, mock_proxy):
        mock_proxy.get_quotation.side_effect = RuntimeError("proxy down")
        response = await test_client.get(f"{BASE}/get", params={"id": "q"}, headers=auth_headers)
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch quotation"


class TestQuotationPdf:
    def setup_method(self):
        self.quotation = {
            "quotationNumber": "QDS-20261019-AB12",
            "customer": {"name": "Jan de Vries", "email": "jan@example.com"},
            "items": [
                {"name": "ACSC-400", "description": "Cooling", "quantity": 1, "unitPrice": 10, "totalPrice": 10}
            ],
            "subtotal": 10,
            "total": 10,
        }

    async def test_pdf_response(self, test_client, auth_headers):
        response = await test_client.post(f"{BASE}/pdf", json=self.quotation, headers=auth_headers)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="quotation-QDS-20261019-AB12.pdf"'
        )
        assert response.content.startswith(b"%PDF")

    async def test_status_passed_through(self, test_client, auth_headers):
        self.quotation["documentStatus"] = "FINAL"
        with patch(
            "desert_api.domain.quotations.router.render_quotation_pdf", return_value=b"%PDF-fake"
        ) as render:
            response = await test_client.post(f"{BASE}/pdf", json=self.quotation, headers=auth_headers)

        assert response.content == b"%PDF-fake"
        assert render.call_args.args[1].value == "FINAL"

    async def test_unknown_status_falls_back(self, test_client, auth_headers):
        self.quotation["documentStatus"] = "SHIPPED"
        with patch(
            "desert_api.domain.quotations.router.render_quotation_pdf", return_value=b"%PDF-fake"
        ) as render:
            await test_client.post(f"{BASE}/pdf", json=self.quotation, headers=auth_headers)

        assert render.call_args.args[1].value == "WIP"

    async def test_missing_items(self, test_client, auth_headers):
        del self.quotation["items"]
        response = await test_client.post(f"{BASE}/pdf", json=self.quotation, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid quotation data"

    async def test_empty_items_and_minimal_customer(self, test_client, auth_headers):
        self.quotation["items"] = []
        self.quotation["customer"] = {"name": "A"}
        response = await test_client.post(f"{BASE}/pdf", json=self.quotation, headers=auth_headers)

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")

    async def test_render_failure(self, test_client, auth_headers):
        with patch(
            "desert_api.domain.quotations.router.render_quotation_pdf", side_effect=RuntimeError("boom")
        ):
            response = await test_client.post(f"{BASE}/pdf", json=self.quotation, headers=auth_headers)
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate PDF"


class TestEmailQuotation:
    async def test_email_stored_quotation(self, test_client, auth_headers, stored_quotation, mock_send_email):
        with patch(f"{SERVICE}.render_quotation_pdf", return_value=b"%PDF-fake"):
            response = await test_client.post(
                f"{BASE}/email", json={"quotationId": stored_quotation["id"]}, headers=auth_headers
            )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Email sent successfully",
            "recipient": "jan@example.com",
        }
        kwargs = mock_send_email.call_args.kwargs
        assert kwargs["to"] == "jan@example.com"
        assert kwargs["subject"].endswith("Quotation [QDS-20261019-AB12] - WORK IN PROGRESS")
        assert "Dear Jan," in kwargs["text"]
        assert kwargs["attachments"][0]["filename"] == "quotation-QDS-20261019-AB12.pdf"
        assert kwargs["attachments"][0]["content"] == b"%PDF-fake"

    async def test_final_status_has_no_suffix(
        self, test_client, auth_headers, stored_quotation, mock_send_email
    ):
        with patch(f"{SERVICE}.render_quotation_pdf", return_value=b"%PDF-fake"):
            await test_client.post(
                f"{BASE}/email",
                json={"quotationId": stored_quotation["id"], "documentStatus": "FINAL"},
                headers=auth_headers,
            )
        assert mock_send_email.call_args.kwargs["subject"].endswith("Quotation [QDS-20261019-AB12]")

    async def test_inline_quotation_without_pdf(self, test_client, auth_headers, mock_proxy, mock_send_email):
        payload = {
            "quotation": {
                "quotationNumber": "QDS-INLINE",
                "customer": {
                    "name": "Pieter Aldewereld",
                    "email": "pieter@example.com",
                    "salutation": "Mr. Aldewereld",
                },
                "items": [],
            },
            "emailOptions": {
                "subject": "Your quote",
                "message": "As discussed on the phone.",
                "attachPDF": False,
                "cc": ["sales@example.com"],
            },
        }
        response = await test_client.post(f"{BASE}/email", json=payload, headers=auth_headers)

        assert response.status_code == 200
        kwargs = mock_send_email.call_args.kwargs
        assert kwargs["subject"] == "Your quote"
        assert kwargs["attachments"] is None
        assert kwargs["cc"] == ["sales@example.com"]
        assert "Dear Mr. Aldewereld," in kwargs["text"]
        assert "As discussed on the phone." in kwargs["text"]
        mock_proxy.get_quotation.assert_not_called()

    async def test_empty_subject_kept(self, test_client, auth_headers, mock_proxy, mock_send_email):
        payload = {
            "quotation": {
                "quotationNumber": "QDS-INLINE",
                "customer": {"name": "Pieter Aldewereld", "email": "pieter@example.com"},
                "items": [],
            },
            "emailOptions": {"subject": "", "attachPDF": False},
        }
        response = await test_client.post(f"{BASE}/email", json=payload, headers=auth_headers)

        assert response.status_code == 200
        assert mock_send_email.call_args.kwargs["subject"] == ""

    async def test_requires_source(self, test_client, auth_headers, mock_send_email):
        response = await test_client.post(f"{BASE}/email", json={}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request data"

    async def test_inline_requires_customer(self, test_client, auth_headers, mock_send_email):
        response = await test_client.post(
            f"{BASE}/email", json={"quotation": {"quotationNumber": "Q-1"}}, headers=auth_headers
        )
        assert response.status_code == 400

    async def test_stored_quotation_missing(self, test_client, auth_headers, mock_proxy, mock_send_email):
        response = await test_client.post(f"{BASE}/email", json={"quotationId": "nope"}, headers=auth_headers)
        assert response.status_code == 404
        mock_send_email.assert_not_called()

    async def test_delivery_failure(self, test_client, auth_headers, stored_quotation, mock_send_email):
        mock_send_email.side_effect = RuntimeError("resend down")
        with patch(f"{SERVICE}.render_quotation_pdf", return_value=b"%PDF-fake"):
            response = await test_client.post(
                f"{BASE}/email", json={"quotationId": stored_quotation["id"]}, headers=auth_headers
            )
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to send email", "message": "resend down"}


class TestPhotoAddendum:
    def setup_method(self):
        self.payload = {
            "quotationNumber": "QDS-20261019-AB12",
            "productIds": ["ds-acsc-400"],
            "customer": {"name": "Jan de Vries", "email": "jan@example.com"},
        }

    async def test_send_addendum(self, test_client, auth_headers, mock_send_email, sample_png_bytes):
        with patch(f"{SERVICE}.fetch_image_bytes", return_value=sample_png_bytes), patch(
            f"{SERVICE}.render_photo_addendum_pdf", return_value=b"%PDF-fake"
        ) as render:
            response = await test_client.post(
                f"{BASE}/photo-addendum", json=self.payload, headers=auth_headers
            )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Photo addendum email sent successfully"
        assert data["totalPhotos"] == 5
        assert data["products"] == [
            {"productId": "ds-acsc-400", "productName": "ACSC-400 Container Cooling Unit", "photoCount": 5}
        ]
        addendum = render.call_args.args[0]
        assert addendum.customerName == "Jan de Vries"
        kwargs = mock_send_email.call_args.kwargs
        assert kwargs["attachments"][0]["filename"] == "photo-addendum-QDS-20261019-AB12.pdf"
        assert "Product Photos [QDS-20261019-AB12]" in kwargs["subject"]

    async def test_empty_subject_kept(self, test_client, auth_headers, mock_send_email, sample_png_bytes):
        self.payload["emailOptions"] = {"subject": ""}
        with patch(f"{SERVICE}.fetch_image_bytes", return_value=sample_png_bytes), patch(
            f"{SERVICE}.render_photo_addendum_pdf", return_value=b"%PDF-fake"
        ):
            response = await test_client.post(
                f"{BASE}/photo-addendum", json=self.payload, headers=auth_headers
            )

        assert response.status_code == 200
        assert mock_send_email.call_args.kwargs["subject"] == ""

    async def test_include_filters(self, test_client, auth_headers, mock_send_email, sample_png_bytes):
        self.payload["includePhotos"] = {"installation": False, "detail": False}
        with patch(f"{SERVICE}.fetch_image_bytes", return_value=sample_png_bytes), patch(
            f"{SERVICE}.render_photo_addendum_pdf", return_value=b"%PDF-fake"
        ):
            response = await test_client.post(
                f"{BASE}/photo-addendum", json=self.payload, headers=auth_headers
            )
        assert response.json()["totalPhotos"] == 2

    async def test_customer_from_stored_quotation(
        self, test_client, auth_headers, stored_quotation, mock_send_email, sample_png_bytes
    ):
        payload = {"quotationId": stored_quotation["id"], "productIds": ["ds-acsc-250"]}
        with patch(f"{SERVICE}.fetch_image_bytes", return_value=sample_png_bytes), patch(
            f"{SERVICE}.render_photo_addendum_pdf", return_value=b"%PDF-fake"
        ):
            response = await test_client.post(f"{BASE}/photo-addendum", json=payload, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["recipient"] == "jan@example.com"
        assert response.json()["quotationNumber"] == "QDS-20261019-AB12"

    async def test_unknown_products_skipped(self, test_client, auth_headers, mock_send_email, sample_png_bytes):
        self.payload["productIds"] = ["ds-nothing", "ds-shelter-12"]
        with patch(f"{SERVICE}.fetch_image_bytes", return_value=sample_png_bytes), patch(
            f"{SERVICE}.render_photo_addendum_pdf", return_value=b"%PDF-fake"
        ):
            response = await test_client.post(
                f"{BASE}/photo-addendum", json=self.payload, headers=auth_headers
            )
        assert [p["productId"] for p in response.json()["products"]] == ["ds-shelter-12"]

    async def test_no_photos_found(self, test_client, auth_headers, mock_send_email):
        with patch(f"{SERVICE}.fetch_image_bytes", return_value=None):
            response = await test_client.post(
                f"{BASE}/photo-addendum", json=self.payload, headers=auth_headers
            )
        assert response.status_code == 404
        assert response.json()["error"] == "No photos found for the specified products"
        mock_send_email.assert_not_called()

    async def test_requires_reference(self, test_client, auth_headers):
        response = await test_client.post(
            f"{BASE}/photo-addendum", json={"productIds": ["ds-acsc-400"]}, headers=auth_headers
        )
        assert response.status_code == 400

    async def test_requires_customer_email(self, test_client, auth_headers, mock_send_email):
        response = await test_client.post(
            f"{BASE}/photo-addendum",
            json={"quotationNumber": "Q-1", "productIds": ["ds-acsc-400"]},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Customer email is required"
