import logging
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storelease.errors import NotFoundError
from storelease.models import ConsultationRequest
from storelease.schemas.consultation import ConsultationCreate
from storelease.vars import MESSAGES

logger = logging.getLogger(__name__)


def create(db: Session, data: ConsultationCreate) -> ConsultationRequest:
    request = ConsultationRequest(**data.model_dump())
    db.add(request)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(request)
    logger.info("Consultation request %s received", request.id)
    return request


def get_all(db: Session) -> List[ConsultationRequest]:
    return (
        db.query(ConsultationRequest)
        .order_by(ConsultationRequest.created_at.desc(), ConsultationRequest.id)
        .all()
    )


def remove(db: Session, request_id: str) -> None:
    request = db.get(ConsultationRequest, request_id)
    if not request:
        raise NotFoundError(MESSAGES["consultation_not_found"])
    db.delete(request)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("Consultation request %s deleted", request_id)
