"""
API key authentication and response header tests
"""

from desert_api import security
from desert_api.security import mask_sensitive_data

PRODUCTS_URL = "/api/desert-solutions/products/list"


class TestApiKey:
    async def test_missing_key(self, test_client):
        response = await test_client.get(PRODUCTS_URL)
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"

    async def test_wrong_key(self, test_client):
        response = await test_client.get(PRODUCTS_URL, headers={"X-API-Key": "wrong"})
        assert response.status_code == 401

    async def test_x_api_key_header(self, test_client, auth_headers):
        response = await test_client.get(PRODUCTS_URL, headers=auth_headers)
        assert response.status_code == 200

    async def test_bearer_token(self, test_client):
        response = await test_client.get(
            PRODUCTS_URL, headers={"Authorization": "Bearer second-test-key"}
        )
        assert response.status_code == 200

    async def test_non_bearer_scheme(self, test_client):
        response = await test_client.get(PRODUCTS_URL, headers={"Authorization": "Basic test-api-key"})
        assert response.status_code == 401

    async def test_no_keys_configured_rejects_everything(self, test_client, auth_headers, monkeypatch):
        """With no configured keys every secured request fails closed."""
        monkeypatch.setattr(security.config, "DESERT_SOLUTIONS_API_KEYS", [])
        response = await test_client.get(PRODUCTS_URL, headers=auth_headers)
        assert response.status_code == 401

    async def test_health_is_public(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestSecurityHeaders:
    async def test_headers_on_api_responses(self, test_client, auth_headers):
        response = await test_client.get(PRODUCTS_URL, headers=auth_headers)
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "no-store" in response.headers["Cache-Control"]

    async def test_health_excluded(self, test_client):
        response = await test_client.get("/health")
        assert "X-Frame-Options" not in response.headers


class TestMasking:
    def test_mask_keeps_last_chars(self):
        assert mask_sensitive_data("abcdefgh") == "****efgh"

    def test_mask_short_value(self):
        assert mask_sensitive_data("abc") == "***"
