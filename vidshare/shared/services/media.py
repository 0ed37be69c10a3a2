"""
Media helpers shared by services that upload files.

Uploads always happen before entity rows are written. When an operation
uploads several files and a later step fails, the blobs it already stored
are discarded again so no orphan media is left behind.

    async with MediaBatch(blob_store) as batch:
        video = await batch.upload(video_file, MediaKind.VIDEO)
        thumb = await batch.upload(thumbnail_file, MediaKind.THUMBNAIL)
        ... write rows ...
    # an exception inside the block deletes both blobs, then propagates
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from vidshare.shared.adapters.blob_store import BlobStore, StoredBlob
from vidshare.shared.core.exceptions import ValidationError
from vidshare.shared.core.logging import get_logger
from vidshare.shared.models.enums import MediaKind


logger = get_logger(__name__)


@dataclass(frozen=True)
class MediaUpload:
    """A file received from the client."""

    data: bytes
    filename: str
    content_type: Optional[str] = None


async def discard_blobs(blob_store: BlobStore, public_ids: list[Optional[str]]) -> None:
    """
    Delete blobs that are no longer referenced.

    Runs after the owning row is already updated or deleted. A failure only
    leaves an orphan object behind, so it is logged rather than raised.
    """
    for public_id in public_ids:
        if not public_id:
            continue
        try:
            await asyncio.to_thread(blob_store.delete, public_id)
        except Exception as e:
            logger.warning("Failed to discard blob", public_id=public_id, error=str(e))


class MediaBatch:
    """Uploads that are rolled back together if the surrounding block fails."""

    def __init__(self, blob_store: BlobStore) -> None:
        self.blob_store = blob_store
        self.stored: list[StoredBlob] = []

    async def upload(self, upload: MediaUpload, kind: MediaKind) -> StoredBlob:
        """
        Upload one file.

        Raises:
            ValidationError: Empty file
            UpstreamFailureError: Blob store failure
        """
        if not upload.data:
            raise ValidationError(f"{kind.value} file is required", details={"field": kind.value})

        blob = await asyncio.to_thread(
            self.blob_store.upload,
            upload.data,
            upload.filename,
            kind,
            upload.content_type,
        )
        self.stored.append(blob)
        return blob

    async def __aenter__(self) -> "MediaBatch":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None and self.stored:
            logger.info("Discarding uploads after failure", count=len(self.stored))
            await discard_blobs(self.blob_store, [blob.public_id for blob in self.stored])
