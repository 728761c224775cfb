import logging
import re
import uuid
import mimetypes
from datetime import date
from typing import Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")
MAX_NAME_LENGTH = 50
IMAGE_CACHE_CONTROL = "max-age=31536000"


class StorageError(Exception):
    """Raised when the object store rejects or fails an operation"""


class S3Service:
    """S3 service for storing uploaded images"""

    def __init__(
        self,
        client=None,
        bucket: Optional[str] = None,
        region: str = "eu-north-1",
        cdn_domain: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
    ):
        self.region = region
        self.bucket = bucket
        self.cdn_domain = cdn_domain
        self.s3 = client or boto3.client(
            "s3",
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
        )

    @classmethod
    def from_config(cls, config, client=None) -> "S3Service":
        return cls(
            client=client,
            bucket=config.get("S3_BUCKET_NAME"),
            region=config.get("S3_REGION") or "eu-north-1",
            cdn_domain=config.get("CDN_DOMAIN"),
            access_key=config.get("S3_ACCESS_KEY"),
            secret_key=config.get("S3_SECRET_KEY"),
        )

    def put_object(
        self,
        body: bytes,
        s3_key: str,
        content_type: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> str:
        """
        Store ``body`` under ``s3_key`` with server-side encryption

        Args:
            body: Raw object bytes
            s3_key: S3 object key
            content_type: MIME type of the object
            metadata: User metadata stored alongside the object

        Returns:
            Public URL of the stored object
        """
        params = {
            "Bucket": self.bucket,
            "Key": s3_key,
            "Body": body,
            "ContentType": content_type or self.get_content_type(s3_key),
            "ServerSideEncryption": "AES256",
            "CacheControl": IMAGE_CACHE_CONTROL,
            "Metadata": metadata or {},
        }
        try:
            self.s3.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to upload {s3_key}: {e}")
            raise StorageError(str(e)) from e

        url = self._generate_url(s3_key)
        logger.info(f"Successfully uploaded object to {url}")
        return url

    def delete_file(self, s3_key: str) -> bool:
        try:
            self.s3.delete_object(Bucket=self.bucket, Key=s3_key)
            logger.info(f"Successfully deleted {s3_key} from {self.bucket}")
            return True
        except ClientError as e:
            logger.error(f"Failed to delete {s3_key}: {e}")
            return False

    def _generate_url(self, s3_key: str) -> str:
        if self.cdn_domain:
            return f"https://{self.cdn_domain}/{s3_key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{s3_key}"

    @staticmethod
    def generate_s3_key(folder: str, filename: str, today: Optional[date] = None) -> str:
        """``<folder>/<YYYY-MM-DD>/<uuid>_<sanitized name>``"""
        today = today or date.today()
        sanitized = UNSAFE_NAME_CHARS.sub("_", filename).lower()[:MAX_NAME_LENGTH]
        return f"{folder}/{today.isoformat()}/{uuid.uuid4()}_{sanitized}"

    @staticmethod
    def get_content_type(filename: str) -> str:
        content_type, _ = mimetypes.guess_type(filename)
        return content_type or "application/octet-stream"
