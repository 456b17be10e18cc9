"""S3-compatible object storage gateway for media files.

Objects are stored under a flat key ``<uuid4>.<ext>`` and served from
``S3_PUBLIC_URL``. boto3 is blocking, so every call runs in a worker thread.
There are no retries: any failure surfaces as StorageError.
"""

import asyncio
from typing import BinaryIO
from uuid import uuid4

import boto3
import structlog
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from galerie.core.config import Settings
from galerie.services.exceptions import StorageError

logger = structlog.get_logger()

DEFAULT_EXTENSION = "bin"


def build_key(filename: str | None) -> str:
    """Build a unique storage key keeping the client file's extension.

    Example:
        >>> build_key("portrait.final.JPG")  # doctest: +SKIP
        '3f0c...e1.JPG'
        >>> build_key("README")  # doctest: +SKIP
        '9a41...7c.bin'
    """
    extension = ""
    if filename and "." in filename:
        extension = filename.rsplit(".", 1)[1]
    return f"{uuid4()}.{extension or DEFAULT_EXTENSION}"


class ObjectStorage:
    """Upload and delete media objects in one bucket.

    Args:
        settings: Provides endpoint, region, credentials, bucket and public URL
    """

    def __init__(self, settings: Settings):
        self.bucket = settings.s3_bucket
        self.public_url = settings.s3_public_url.rstrip("/")
        self.client = boto3.client(
            "s3",
            endpoint_url=settings.s3_endpoint or None,
            region_name=settings.s3_region,
            aws_access_key_id=settings.s3_access_key,
            aws_secret_access_key=settings.s3_secret_key,
            config=Config(s3={"addressing_style": "path"}),
        )

    def public_url_for(self, key: str) -> str:
        return f"{self.public_url}/{key}"

    async def put(self, key: str, fileobj: BinaryIO, content_type: str) -> str:
        """Stream an object to the bucket.

        Args:
            key: Storage key from build_key()
            fileobj: Readable binary file object
            content_type: MIME type stored with the object

        Returns:
            Public URL of the stored object

        Raises:
            StorageError: If the upload fails
        """
        try:
            await asyncio.to_thread(
                self.client.upload_fileobj,
                fileobj,
                self.bucket,
                key,
                ExtraArgs={"ContentType": content_type},
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("storage.upload_failed", key=key, error=str(e), error_type=type(e).__name__)
            raise StorageError("upload", str(e)) from e

        logger.info("storage.uploaded", key=key, content_type=content_type)
        return self.public_url_for(key)

    async def delete(self, key: str) -> None:
        """Delete an object from the bucket.

        Raises:
            StorageError: If the delete fails
        """
        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error("storage.delete_failed", key=key, error=str(e), error_type=type(e).__name__)
            raise StorageError("delete", str(e)) from e

        logger.info("storage.deleted", key=key)
