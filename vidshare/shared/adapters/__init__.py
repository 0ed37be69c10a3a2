"""
Adapters Package

External service integrations.

Contents:
=========
- blob_store: Media storage on S3 (avatars, covers, videos, thumbnails)

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from vidshare.shared.adapters import S3BlobStore
    store = S3BlobStore(settings)
    blob = store.upload(data, "clip.mp4", MediaKind.VIDEO)
"""

from vidshare.shared.adapters.blob_store import BlobStore, S3BlobStore, StoredBlob

__all__ = [
    "BlobStore",
    "S3BlobStore",
    "StoredBlob",
]
