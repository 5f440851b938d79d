"""
Object storage utilities for product photos.
Photos live in a private DigitalOcean Spaces bucket; clients get presigned
URLs, PDFs embed the raw bytes.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from . import config
from .exceptions import StorageError

logger = logging.getLogger(__name__)

# Presigned URL expiration time (1 hour)
PRESIGNED_URL_EXPIRATION = 3600

MISSING_KEY_ERROR_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass
class StoredFile:
    body: bytes
    content_type: str


def get_spaces_client():
    """Get configured boto3 client for DigitalOcean Spaces"""
    return boto3.client(
        "s3",
        endpoint_url=config.DO_SPACES_ENDPOINT,
        aws_access_key_id=config.DO_SPACES_KEY,
        aws_secret_access_key=config.DO_SPACES_SECRET,
        config=Config(signature_version="s3v4"),
        region_name=config.DO_SPACES_REGION,
    )


def get_presigned_url(key: str, expires_in: int = PRESIGNED_URL_EXPIRATION) -> str:
    """Generate a presigned URL for accessing a private object."""
    client = get_spaces_client()

    params = {"Bucket": config.DO_SPACES_BUCKET, "Key": key}

    # Serve images inline so browsers render them instead of downloading
    if any(key.lower().endswith(ext) for ext in [".jpg", ".jpeg", ".png", ".webp"]):
        params["ResponseContentDisposition"] = "inline"

    try:
        url = client.generate_presigned_url(
            "get_object",
            Params=params,
            ExpiresIn=expires_in,
        )
        logger.debug(f"Generated presigned URL for key: {key}")
        return url
    except (BotoCoreError, ClientError) as e:
        logger.error(f"❌ Failed to generate presigned URL for key {key}: {e}")
        raise StorageError(f"Failed to generate presigned URL for {key}") from e


def get_file(key: str) -> Optional[StoredFile]:
    """
    Download an object.

    Returns:
        StoredFile, or None when the key does not exist
    """
    client = get_spaces_client()
    try:
        response = client.get_object(Bucket=config.DO_SPACES_BUCKET, Key=key)
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "")
        if error_code in MISSING_KEY_ERROR_CODES:
            logger.warning(f"⚠️ Object not found in storage: {key}")
            return None
        raise StorageError(f"Failed to fetch {key}: {e}") from e
    except BotoCoreError as e:
        raise StorageError(f"Failed to fetch {key}: {e}") from e

    body = response["Body"].read()
    return StoredFile(body=body, content_type=response.get("ContentType") or "image/jpeg")


def fetch_image_bytes(key: str) -> Optional[bytes]:
    """Fetch an image for PDF embedding, None if it can't be read"""
    try:
        stored = get_file(key)
    except StorageError as e:
        logger.error(f"Failed to fetch image {key}: {e}")
        return None

    if not stored or not stored.body:
        return None
    return stored.body
