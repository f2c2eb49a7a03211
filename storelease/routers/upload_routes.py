from fastapi import APIRouter, Depends, Query

from storelease.clients.storage import StorageClient
from storelease.dependencies import get_settings, get_storage
from storelease.middleware.rbac import Principal, require_capability
from storelease.schemas.upload import PresignedUrlResponse
from storelease.services import uploads as upload_service
from storelease.settings import Settings
from storelease.vars import UPLOADS_CREATE

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.get("/presigned-url", response_model=PresignedUrlResponse)
def create_presigned_url(
    filename: str = Query(min_length=1),
    filetype: str = Query(min_length=1),
    storage: StorageClient = Depends(get_storage),
    settings: Settings = Depends(get_settings),
    admin: Principal = Depends(require_capability(UPLOADS_CREATE)),
):
    """
    Pre-signed S3 PUT URL for a direct browser upload
    """
    return upload_service.create_presigned_url(
        storage, filename, filetype, settings.upload_url_expires_seconds
    )
