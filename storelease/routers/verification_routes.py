from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storelease.clients.sms import SmsClient
from storelease.database import get_db
from storelease.dependencies import get_sms
from storelease.schemas.common import MessageResponse
from storelease.schemas.verification import CheckCodeSchema, PhoneSchema
from storelease.services import verification as verification_service
from storelease.vars import MESSAGES

router = APIRouter(prefix="/verification", tags=["verification"])


@router.post("/send", response_model=MessageResponse)
def send_code(
    payload: PhoneSchema,
    db: Session = Depends(get_db),
    sms: SmsClient = Depends(get_sms),
):
    verification_service.send_code(db, sms, payload.phone)
    return {"message": MESSAGES["code_sent"]}


@router.post("/check", response_model=MessageResponse)
def check_code(payload: CheckCodeSchema, db: Session = Depends(get_db)):
    verification_service.check_code(db, payload.phone, payload.code)
    return {"message": MESSAGES["code_verified"]}
