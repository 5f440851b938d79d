"""Database proxy client - quotation storage for Desert Solutions"""

import logging
from typing import Any, Optional

import httpx

from .. import config
from ..exceptions import DatabaseProxyError
from ..utils.sanitization import quote_path_segment

logger = logging.getLogger(__name__)


class DatabaseProxyClient:
    """Async client for the database proxy's desert-solutions namespace"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or config.DATABASE_PROXY_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else config.DATABASE_PROXY_API_KEY
        self.timeout = timeout or config.DATABASE_PROXY_TIMEOUT
        self._transport = transport

        if not self.api_key:
            logger.warning("DATABASE_PROXY_API_KEY not set; proxy requests are unauthenticated")

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        ) as http_client:
            try:
                return await http_client.request(method, path, json=json, headers=self._headers())
            except httpx.HTTPError as e:
                logger.error(f"Database proxy request {method} {path} failed: {e}")
                raise DatabaseProxyError(f"Database proxy request failed: {e}") from e

    async def create_quotation(self, record: dict[str, Any]) -> dict[str, Any]:
        """
        Store a quotation.

        Returns:
            {"success": True, "quotation": <stored quotation>}
        """
        response = await self._request("POST", "/desert-solutions/quotations", json=record)
        if response.status_code not in (200, 201):
            logger.error(f"Failed to store quotation: {response.status_code} {response.text}")
            raise DatabaseProxyError(
                f"Failed to store quotation ({response.status_code}): {response.text}",
                status_code=response.status_code,
            )

        data = response.json()
        quotation = data.get("quotation", data)
        logger.info(f"✅ Quotation stored: {quotation.get('quotationNumber')}")
        return {"success": True, "quotation": quotation}

    async def get_quotation(self, quotation_id: str) -> dict[str, Any]:
        """
        Fetch a quotation by id.

        Returns:
            {"success": bool, "quotation": dict | None}; a proxy 404 is a miss, not an error
        """
        path = f"/desert-solutions/quotations/{quote_path_segment(quotation_id)}"
        response = await self._request("GET", path)
        if response.status_code == 404:
            return {"success": False, "quotation": None}
        if response.status_code != 200:
            logger.error(
                f"Failed to fetch quotation {quotation_id}: {response.status_code} {response.text}"
            )
            raise DatabaseProxyError(
                f"Failed to fetch quotation ({response.status_code}): {response.text}",
                status_code=response.status_code,
            )

        data = response.json()
        quotation = data.get("quotation", data) if isinstance(data, dict) else None
        return {"success": bool(quotation), "quotation": quotation or None}


# Singleton instance
proxy_client = DatabaseProxyClient()


def get_proxy_client() -> DatabaseProxyClient:
    """Dependency injection for DatabaseProxyClient"""
    return proxy_client
