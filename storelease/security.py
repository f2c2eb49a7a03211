import jwt
from datetime import datetime, timedelta, timezone
from passlib.context import CryptContext

from storelease.errors import UnauthorizedError
from storelease.settings import Settings
from storelease.vars import MESSAGES

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash plain password with Argon2."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: str, role: str, settings: Settings) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        hours=settings.access_token_expire_hours
    )
    payload = {"userId": user_id, "role": role, "exp": expire, "type": "access"}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> dict:
    try:
        decoded = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError(MESSAGES["token_expired"])
    except jwt.InvalidTokenError:
        raise UnauthorizedError(MESSAGES["token_invalid"])

    if decoded.get("type") != "access" or not decoded.get("userId"):
        raise UnauthorizedError(MESSAGES["token_invalid"])
    return decoded
