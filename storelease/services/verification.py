import hmac
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storelease.clients.sms import SmsClient
from storelease.errors import ExpiredCodeError, InvalidCodeError
from storelease.func import generate_code
from storelease.models import Verification
from storelease.vars import (
    SMS_TEMPLATE,
    VERIFICATION_TTL_SECONDS,
    VERIFICATION_TYPE_PHONE,
)

logger = logging.getLogger(__name__)


def _find(db: Session, phone: str) -> Optional[Verification]:
    return (
        db.query(Verification)
        .filter(
            Verification.type == VERIFICATION_TYPE_PHONE,
            Verification.target == phone,
        )
        .first()
    )


def _upsert(db: Session, phone: str, code: str, expires_at: datetime) -> None:
    record = _find(db, phone)
    if record:
        record.code = code
        record.expires_at = expires_at
    else:
        db.add(
            Verification(
                type=VERIFICATION_TYPE_PHONE,
                target=phone,
                code=code,
                expires_at=expires_at,
            )
        )
    db.commit()


def send_code(
    db: Session, sms: SmsClient, phone: str, now: Optional[datetime] = None
) -> str:
    """
    Store a fresh 6-digit code for the phone (replacing any previous one)
    and text it. The stored code survives a failed send.
    """
    now = now or datetime.now()
    code = generate_code()
    expires_at = now + timedelta(seconds=VERIFICATION_TTL_SECONDS)

    try:
        _upsert(db, phone, code, expires_at)
    except IntegrityError:
        # another request created the row between our read and insert
        db.rollback()
        _upsert(db, phone, code, expires_at)
    except SQLAlchemyError:
        db.rollback()
        raise

    sms.send(phone, SMS_TEMPLATE.format(code=code))
    logger.info("Verification code sent to %s", phone[:3] + "****" + phone[-4:])
    return code


def check_code(
    db: Session, phone: str, code: str, now: Optional[datetime] = None
) -> None:
    now = now or datetime.now()
    record = _find(db, phone)
    if not record or not hmac.compare_digest(record.code.encode(), code.encode()):
        raise InvalidCodeError()
    if now > record.expires_at:
        raise ExpiredCodeError()

    db.delete(record)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
