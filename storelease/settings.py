"""
Application settings read from the environment (or a .env file).
"""

from typing import List, Optional
from pydantic import BaseModel
from decouple import config, Csv


class Settings(BaseModel):
    db_url: str = "sqlite:///./storelease.db"
    sql_echo: bool = False

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_hours: int = 24

    aws_s3_region: str = "ap-northeast-2"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_s3_bucket_name: str = ""
    upload_url_expires_seconds: int = 60

    coolsms_api_key: str = ""
    coolsms_api_secret: str = ""
    coolsms_sender_phone: str = ""

    kakao_client_id: str = ""
    kakao_client_secret: str = ""
    kakao_redirect_uri: str = ""

    web_origin: str = "http://localhost:3000"
    port: int = 4000
    log_level: str = "INFO"

    admin_emails: List[str] = []
    allow_unpublished_preview: bool = True


def load_settings() -> Settings:
    """
    Build Settings from environment variables.
    """
    return Settings(
        db_url=config("DB_URL", default="sqlite:///./storelease.db"),
        sql_echo=config("SQL_ECHO", default=False, cast=bool),
        jwt_secret=config("JWT_SECRET", default="change-me"),
        jwt_algorithm=config("JWT_ALGORITHM", default="HS256"),
        access_token_expire_hours=config(
            "ACCESS_TOKEN_EXPIRE_HOURS", default=24, cast=int
        ),
        aws_s3_region=config("AWS_S3_REGION", default="ap-northeast-2"),
        aws_access_key_id=config("AWS_ACCESS_KEY_ID", default=None),
        aws_secret_access_key=config("AWS_SECRET_ACCESS_KEY", default=None),
        aws_s3_bucket_name=config("AWS_S3_BUCKET_NAME", default=""),
        upload_url_expires_seconds=config(
            "UPLOAD_URL_EXPIRES_SECONDS", default=60, cast=int
        ),
        coolsms_api_key=config("COOLSMS_API_KEY", default=""),
        coolsms_api_secret=config("COOLSMS_API_SECRET", default=""),
        coolsms_sender_phone=config("COOLSMS_SENDER_PHONE", default=""),
        kakao_client_id=config("KAKAO_CLIENT_ID", default=""),
        kakao_client_secret=config("KAKAO_CLIENT_SECRET", default=""),
        kakao_redirect_uri=config("KAKAO_REDIRECT_URI", default=""),
        web_origin=config("WEB_ORIGIN", default="http://localhost:3000"),
        port=config("PORT", default=4000, cast=int),
        log_level=config("LOG_LEVEL", default="INFO"),
        admin_emails=config("ADMIN_EMAILS", default="", cast=Csv()),
        allow_unpublished_preview=config(
            "ALLOW_UNPUBLISHED_PREVIEW", default=True, cast=bool
        ),
    )
