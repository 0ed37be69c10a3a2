"""
Multipart upload conversion.

Handlers receive Starlette UploadFile objects; services only see MediaUpload
(bytes plus name and content type), so they never depend on the web layer.
"""

from typing import Optional

from fastapi import UploadFile

from vidshare.shared.services.media import MediaUpload


async def read_upload(file: Optional[UploadFile]) -> Optional[MediaUpload]:
    """Read an optional form file; an absent or empty part becomes None."""
    if file is None or not file.filename:
        return None
    data = await file.read()
    if not data:
        return None
    return MediaUpload(data=data, filename=file.filename, content_type=file.content_type)
