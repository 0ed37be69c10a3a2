"""
Blob store adapter - media storage on S3.

Provides:
- Upload of avatars, cover images, videos and thumbnails
- Deletion by public id (the object key)
- Public URL construction

Calls are synchronous (boto3); services run them with asyncio.to_thread.
Any S3 failure surfaces as UpstreamFailureError so callers can stop before
writing entity rows.
"""

from dataclasses import dataclass
import logging
import mimetypes
import os
from typing import Optional, Protocol
import uuid

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from vidshare.config.settings import Settings
from vidshare.shared.core.exceptions import UpstreamFailureError
from vidshare.shared.models.enums import MediaKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredBlob:
    """An uploaded object."""

    public_id: str
    url: str


class BlobStore(Protocol):
    """What services need from media storage."""

    def upload(
        self,
        data: bytes,
        filename: str,
        kind: MediaKind,
        content_type: Optional[str] = None,
    ) -> StoredBlob: ...

    def delete(self, public_id: str) -> None: ...


class S3BlobStore:
    """
    Adapter for S3 media storage.

    Objects are keyed "<kind>/<random hex><extension>", e.g.
    "thumbnail/3f2a9c....jpg"; the key doubles as the public id.
    """

    def __init__(self, config: Settings) -> None:
        """
        Initialize the blob store.

        Args:
            config: Settings carrying the bucket, region and credentials
        """
        self.bucket = config.S3_BUCKET_NAME
        self.region = config.AWS_REGION
        self.endpoint_url = config.S3_ENDPOINT_URL
        self.public_base_url = config.S3_PUBLIC_BASE_URL
        self.aws_access_key_id = config.AWS_ACCESS_KEY_ID
        self.aws_secret_access_key = config.AWS_SECRET_ACCESS_KEY
        self._client = None

    @property
    def client(self):
        """Lazy-loaded S3 client."""
        if self._client is None:
            kwargs = {"region_name": self.region}
            if self.endpoint_url:
                kwargs["endpoint_url"] = self.endpoint_url
            if self.aws_access_key_id and self.aws_secret_access_key:
                kwargs["aws_access_key_id"] = self.aws_access_key_id
                kwargs["aws_secret_access_key"] = self.aws_secret_access_key
            # Without explicit keys boto3 falls back to IAM role / environment
            self._client = boto3.client("s3", **kwargs)
        return self._client

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def upload(
        self,
        data: bytes,
        filename: str,
        kind: MediaKind,
        content_type: Optional[str] = None,
    ) -> StoredBlob:
        """
        Upload bytes as a new object.

        Args:
            data: File contents
            filename: Client-side name (only its extension is kept)
            kind: Media kind, used as the key prefix
            content_type: MIME type; guessed from filename when missing

        Returns:
            StoredBlob with the object key and its public URL

        Raises:
            UpstreamFailureError: If S3 rejects or is unreachable
        """
        extension = os.path.splitext(filename or "")[1].lower()
        key = f"{kind.value}/{uuid.uuid4().hex}{extension}"
        content_type = content_type or mimetypes.guess_type(filename or "")[0] or "application/octet-stream"

        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to upload {kind.value} to s3://{self.bucket}/{key}: {e}")
            raise UpstreamFailureError("blob_store", f"Failed to upload {kind.value}")

        logger.info(f"Uploaded {len(data)} bytes to s3://{self.bucket}/{key}")
        return StoredBlob(public_id=key, url=self.public_url(key))

    def delete(self, public_id: str) -> None:
        """
        Delete an object by key.

        Raises:
            UpstreamFailureError: If S3 rejects or is unreachable
        """
        try:
            self.client.delete_object(Bucket=self.bucket, Key=public_id)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to delete s3://{self.bucket}/{public_id}: {e}")
            raise UpstreamFailureError("blob_store", "Failed to delete media")

        logger.info(f"Deleted s3://{self.bucket}/{public_id}")
