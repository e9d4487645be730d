"""
AWS S3 client for advisor and visitor document uploads.

Usage:
    from src.utils.s3_client import S3DocumentClient

    client = S3DocumentClient()
    if client.is_configured():
        client.upload_file('licenses/uid123/1700000000000-adv.pdf', data, 'application/pdf')
        url = client.get_download_url('licenses/uid123/1700000000000-adv.pdf')
"""

import logging
from io import BytesIO
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the document bucket cannot be reached or written."""


class S3DocumentClient:
    """Client for storing uploaded documents in S3."""

    def __init__(self, bucket_name: Optional[str] = None):
        """Initialize the S3 client with configuration from secrets.

        Args:
            bucket_name: Optional bucket override; defaults to ``uploads.bucket_name``.
        """
        from src.utils.config import get_api_config, is_api_enabled

        self.config = get_api_config("s3")
        self.enabled = is_api_enabled("s3")
        self.bucket_name = bucket_name or self.config.get("bucket_name", "")
        self._client = None

    def is_configured(self) -> bool:
        """Check if S3 is properly configured."""
        return self.enabled and bool(self.bucket_name)

    def _get_client(self):
        """Lazy initialization of boto3 client."""
        if self._client is None:
            if not self.is_configured():
                raise StorageError("Document storage is not configured")
            import boto3

            self._client = boto3.client(
                "s3",
                aws_access_key_id=self.config["aws_access_key_id"],
                aws_secret_access_key=self.config["aws_secret_access_key"],
                region_name=self.config["region_name"],
            )
        return self._client

    def upload_file(self, key: str, data: bytes, content_type: str) -> str:
        """
        Upload ``data`` under ``key``.

        Returns:
            The key that was written

        Raises:
            StorageError: If the upload fails
        """
        client = self._get_client()
        try:
            client.upload_fileobj(
                BytesIO(data),
                self.bucket_name,
                key,
                ExtraArgs={"ContentType": content_type},
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to upload '{key}' to S3: {e}")
            raise StorageError(str(e)) from e

        logger.info(f"Uploaded '{key}' to bucket '{self.bucket_name}' ({len(data)} bytes)")
        return key

    def get_download_url(self, key: str, expires_in: Optional[int] = None) -> str:
        """Presigned GET URL for an uploaded document."""
        client = self._get_client()
        expires_in = expires_in or int(self.config.get("url_expiry_seconds", 3600))
        try:
            return client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket_name, "Key": key},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to create download URL for '{key}': {e}")
            raise StorageError(str(e)) from e
