from storelease.schemas.listing import CamelModel


class PresignedUrlResponse(CamelModel):
    upload_url: str
    public_url: str
