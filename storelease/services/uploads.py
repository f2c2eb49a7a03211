from datetime import datetime
from typing import Optional

from storelease.clients.storage import StorageClient
from storelease.func import build_upload_key


def create_presigned_url(
    storage: StorageClient,
    filename: str,
    content_type: str,
    expires_in: int,
    now: Optional[datetime] = None,
) -> dict:
    """
    Issue a write-only URL for a direct upload plus the URL the object will
    be served from. Nothing is stored; the caller puts the public URL on a
    listing afterwards.
    """
    key = build_upload_key(filename, now)
    upload_url = storage.presign_put(key, content_type, expires_in)
    return {"upload_url": upload_url, "public_url": storage.public_url(upload_url)}
