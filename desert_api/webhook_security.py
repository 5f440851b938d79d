"""
Webhook Security Module

Signature verification for payment provider webhooks:
- HMAC-SHA256 hex digest over "{timestamp}.{raw_body}"
- Constant-time signature comparison
- Optional timestamp window against replays
"""

import hashlib
import hmac
import logging
import time
from typing import Optional

from fastapi import Request

from . import config
from .exceptions import DesertSolutionsError, UnauthorizedError

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Webhook-Signature"
TIMESTAMP_HEADER = "X-Webhook-Timestamp"


def constant_time_compare(a: str, b: str) -> bool:
    """
    Compare two strings in constant time to prevent timing attacks.
    Uses hmac.compare_digest which is designed for this purpose.
    """
    if not a or not b:
        return False
    # Headers arrive latin-1 decoded; compare bytes so non-ASCII input is a mismatch
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def compute_hmac_sha256(secret: str, payload: bytes) -> str:
    """Compute HMAC-SHA256 signature of payload"""
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def build_signed_payload(timestamp: str, raw_body: bytes) -> bytes:
    """Signed message format: timestamp.payload"""
    return timestamp.encode("utf-8") + b"." + raw_body


def create_webhook_signature(secret: str, timestamp: str, payload: bytes) -> str:
    """Create a webhook signature for testing or tooling"""
    return compute_hmac_sha256(secret, build_signed_payload(timestamp, payload))


def verify_timestamp(timestamp: Optional[str], max_age: int) -> bool:
    """
    Verify webhook timestamp is within acceptable range.

    Args:
        timestamp: Unix timestamp as string
        max_age: Maximum age in seconds, 0 disables the check

    Returns:
        True if timestamp is valid, False otherwise
    """
    if max_age <= 0:
        return True

    try:
        webhook_time = int(timestamp)
        age = abs(int(time.time()) - webhook_time)

        if age > max_age:
            logger.warning(f"🚫 Webhook timestamp too old: {age}s (max: {max_age}s)")
            return False

        return True
    except (ValueError, TypeError):
        logger.warning(f"🚫 Invalid webhook timestamp format: {timestamp}")
        return False


def verify_signature(secret: str, timestamp: str, raw_body: bytes, signature: str) -> bool:
    expected_signature = create_webhook_signature(secret, timestamp, raw_body)
    return constant_time_compare(expected_signature, signature.strip().lower())


async def verify_mercury_webhook(request: Request) -> bytes:
    """
    Verify a payment provider webhook and return the raw body.

    Raises:
        UnauthorizedError: missing headers, stale timestamp or bad signature
        DesertSolutionsError: webhook secret not configured
    """
    signature = request.headers.get(SIGNATURE_HEADER)
    timestamp = request.headers.get(TIMESTAMP_HEADER)

    if not signature or not timestamp:
        logger.error("❌ Missing webhook signature headers")
        raise UnauthorizedError("Missing webhook signature headers")

    # Get raw body BEFORE any parsing
    raw_body = await request.body()

    secret = config.MERCURY_WEBHOOK_SECRET
    if not secret:
        logger.error("❌ MERCURY_WEBHOOK_SECRET not configured, cannot verify webhook")
        raise DesertSolutionsError(
            "Failed to process webhook", "Webhook secret not configured", status_code=500
        )

    if not verify_timestamp(timestamp, config.MERCURY_WEBHOOK_MAX_AGE_SECONDS):
        raise UnauthorizedError("Webhook timestamp expired")

    if not verify_signature(secret, timestamp, raw_body, signature):
        logger.error(
            f"❌ Invalid webhook signature (timestamp={timestamp}, signatureLength={len(signature)})"
        )
        raise UnauthorizedError("Invalid webhook signature")

    logger.info(f"✅ Webhook signature verified (timestamp={timestamp})")
    return raw_body
