"""
Routes for consultation requests
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storelease.database import get_db
from storelease.middleware.rbac import Principal, require_capability
from storelease.schemas.common import MessageResponse
from storelease.schemas.consultation import ConsultationCreate, ConsultationResponse
from storelease.services import consultations as consultation_service
from storelease.vars import CONSULTATIONS_DELETE, CONSULTATIONS_READ, MESSAGES

router = APIRouter(prefix="/consultations", tags=["consultations"])


@router.post(
    "", response_model=ConsultationResponse, status_code=status.HTTP_201_CREATED
)
def create_request(payload: ConsultationCreate, db: Session = Depends(get_db)):
    """
    Submit a consultation request; no account needed
    """
    return consultation_service.create(db, payload)


@router.get("", response_model=List[ConsultationResponse])
def get_all_requests(
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_capability(CONSULTATIONS_READ)),
):
    return consultation_service.get_all(db)


@router.delete("/{request_id}", response_model=MessageResponse)
def delete_request(
    request_id: str,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_capability(CONSULTATIONS_DELETE)),
):
    consultation_service.remove(db, request_id)
    return {"message": MESSAGES["consultation_deleted"]}
