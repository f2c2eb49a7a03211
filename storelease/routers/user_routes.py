from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storelease.database import get_db
from storelease.middleware.rbac import Principal, get_current_user
from storelease.schemas.listing import ListingResponse
from storelease.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me/likes", response_model=List[ListingResponse])
def get_my_liked_listings(
    db: Session = Depends(get_db), user: Principal = Depends(get_current_user)
):
    """
    Published listings the caller has liked
    """
    return user_service.get_liked_listings(db, user.user_id)
