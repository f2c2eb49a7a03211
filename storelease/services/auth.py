import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storelease.clients.kakao import KakaoClient
from storelease.errors import ConflictError, NotFoundError, UnauthorizedError
from storelease.models import User
from storelease.schemas.auth import LoginSchema, RegisterSchema
from storelease.security import create_access_token, hash_password, verify_password
from storelease.settings import Settings
from storelease.vars import (
    KAKAO_DEFAULT_NAME,
    KAKAO_PROVIDER,
    MESSAGES,
    ROLE_ADMIN,
    ROLE_USER,
)

logger = logging.getLogger(__name__)


def _find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.lower()).first()


def _find_by_provider(db: Session, provider_id: str) -> User | None:
    return (
        db.query(User)
        .filter(User.provider == KAKAO_PROVIDER, User.provider_id == provider_id)
        .first()
    )


def register(db: Session, data: RegisterSchema, settings: Settings) -> User:
    email = data.email.lower()
    if _find_by_email(db, email):
        raise ConflictError(MESSAGES["email_taken"])

    admin_emails = {e.strip().lower() for e in settings.admin_emails}
    user = User(
        email=email,
        name=data.name,
        password=hash_password(data.password),
        role=ROLE_ADMIN if email in admin_emails else ROLE_USER,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(MESSAGES["email_taken"])
    db.refresh(user)
    logger.info("User %s registered (role=%s)", user.id, user.role)
    return user


def login(db: Session, data: LoginSchema, settings: Settings) -> str:
    user = _find_by_email(db, data.email)
    # social-only accounts have no password and can never match
    if not user or not verify_password(data.password, user.password):
        logger.warning("Rejected login attempt")
        raise UnauthorizedError(MESSAGES["bad_credentials"])
    return create_access_token(user.id, user.role, settings)


def get_me(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError(MESSAGES["user_not_found"])
    return user


def handle_social_login(
    db: Session, kakao: KakaoClient, code: str, settings: Settings
) -> str:
    """
    Resolve a Kakao authorization code to a local user, creating one on
    first login, and issue the same kind of token as a password login.
    """
    provider_token = kakao.exchange_code(code)
    profile = kakao.fetch_profile(provider_token)

    user = _find_by_provider(db, profile["id"])
    if not user:
        email = profile.get("email")
        if email and _find_by_email(db, email):
            # the address already belongs to a local account
            email = None
        user = User(
            email=email.lower() if email else None,
            name=profile.get("nickname") or KAKAO_DEFAULT_NAME,
            role=ROLE_USER,
            provider=KAKAO_PROVIDER,
            provider_id=profile["id"],
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # a concurrent first login for the same account got there first
            db.rollback()
            user = _find_by_provider(db, profile["id"])
            if not user:
                raise ConflictError(MESSAGES["social_login_conflict"])
        except SQLAlchemyError:
            db.rollback()
            raise
        else:
            db.refresh(user)
            logger.info("User %s created from Kakao login", user.id)

    return create_access_token(user.id, user.role, settings)
