"""
API key authentication for the Desert Solutions routes.

Clients send either `X-API-Key: <key>` or `Authorization: Bearer <key>`.
Keys are compared in constant time against DESERT_SOLUTIONS_API_KEYS.
"""

import logging
import secrets
from typing import Optional

from fastapi import Request

from . import config
from .exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def constant_time_compare(a: str, b: str) -> bool:
    """
    Compare two strings in constant time to prevent timing attacks

    Args:
        a: First string
        b: Second string

    Returns:
        True if strings are equal, False otherwise
    """
    if not a or not b:
        return False
    return secrets.compare_digest(a.encode(), b.encode())


def mask_sensitive_data(data: str, visible_chars: int = 4) -> str:
    """Mask a secret for logging, keeping only the last few characters"""
    if len(data) <= visible_chars:
        return "*" * len(data)

    return "*" * (len(data) - visible_chars) + data[-visible_chars:]


def extract_api_key(request: Request) -> Optional[str]:
    """Read the API key from X-API-Key or a Bearer Authorization header"""
    api_key = request.headers.get("x-api-key")
    if api_key:
        return api_key.strip()

    authorization = request.headers.get("authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()

    return None


def is_valid_api_key(api_key: Optional[str]) -> bool:
    if not api_key:
        return False
    # Check every key so the comparison time doesn't depend on which one matched
    matches = [constant_time_compare(api_key, key) for key in config.DESERT_SOLUTIONS_API_KEYS]
    return any(matches)


async def require_api_key(request: Request) -> str:
    """FastAPI dependency guarding the Desert Solutions endpoints"""
    if not config.DESERT_SOLUTIONS_API_KEYS:
        logger.error("DESERT_SOLUTIONS_API_KEYS not configured, rejecting request")
        raise UnauthorizedError("Unauthorized", "API access is not configured")

    api_key = extract_api_key(request)
    if not api_key:
        logger.warning(f"Missing API key for {request.method} {request.url.path}")
        raise UnauthorizedError("Unauthorized", "Missing API key")

    if not is_valid_api_key(api_key):
        logger.warning(
            f"Invalid API key {mask_sensitive_data(api_key)} for {request.method} {request.url.path}"
        )
        raise UnauthorizedError("Unauthorized", "Invalid API key")

    return api_key
