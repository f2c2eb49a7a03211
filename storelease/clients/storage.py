import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from storelease.errors import UpstreamError
from storelease.settings import Settings

logger = logging.getLogger(__name__)


class StorageClient:
    """
    S3 bucket access limited to issuing pre-signed upload URLs.
    """

    def __init__(self, s3_client, bucket_name: str):
        self.s3 = s3_client
        self.bucket_name = bucket_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageClient":
        s3_client = boto3.client(
            "s3",
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_s3_region,
        )
        return cls(s3_client, settings.aws_s3_bucket_name)

    def presign_put(self, key: str, content_type: str, expires_in: int) -> str:
        try:
            return self.s3.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.bucket_name,
                    "Key": key,
                    "ContentType": content_type,
                },
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Could not presign upload for %s: %s", key, e)
            raise UpstreamError()

    @staticmethod
    def public_url(upload_url: str) -> str:
        # the object lives at the signed URL minus its signature
        return upload_url.split("?")[0]
