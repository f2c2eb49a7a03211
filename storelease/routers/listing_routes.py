"""
Routes for listings: browse, detail, likes and admin management
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storelease.database import get_db
from storelease.dependencies import get_settings
from storelease.errors import NotFoundError
from storelease.middleware.rbac import (
    Principal,
    get_current_user,
    get_optional_user,
    require_capability,
)
from storelease.schemas.common import MessageResponse
from storelease.schemas.listing import (
    Category,
    LikeResponse,
    ListingCreate,
    ListingFilters,
    ListingResponse,
    ListingStats,
    ListingUpdate,
    Region,
    SortField,
    SortOrder,
    Status,
)
from storelease.services import listings as listing_service
from storelease.settings import Settings
from storelease.vars import LISTINGS_WRITE, MESSAGES

router = APIRouter(prefix="/listings", tags=["listings"])


def _role(user: Optional[Principal]) -> Optional[str]:
    return user.role if user else None


@router.get("/featured", response_model=List[ListingResponse])
def get_featured_listings(
    db: Session = Depends(get_db),
    user: Optional[Principal] = Depends(get_optional_user),
):
    """
    Weekly-best listings currently inside their feature window (max 3)
    """
    return listing_service.get_featured(db, _role(user))


@router.get("/stats", response_model=ListingStats)
def get_listing_stats(db: Session = Depends(get_db)):
    """
    Published listing totals: overall and created since the start of this week
    """
    return listing_service.get_stats(db)


@router.get("", response_model=List[ListingResponse])
def get_listings(
    region: Optional[Region] = None,
    category: Optional[Category] = None,
    key_money_lte: Optional[int] = Query(default=None, alias="keyMoneyLte", ge=0),
    sort_by: SortField = Query(default="createdAt", alias="sortBy"),
    order: SortOrder = "desc",
    status_filter: Optional[Status] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    user: Optional[Principal] = Depends(get_optional_user),
):
    """
    Get all listings matching the filters. Non-admin callers only ever see
    published listings; the status filter is honoured for admins only.
    """
    filters = ListingFilters(
        region=region,
        category=category,
        key_money_lte=key_money_lte,
        status=status_filter,
        sort_by=sort_by,
        order=order,
    )
    return listing_service.get_all(db, filters, _role(user))


@router.get("/{listing_id}", response_model=ListingResponse)
def get_listing(
    listing_id: str,
    db: Session = Depends(get_db),
    user: Optional[Principal] = Depends(get_optional_user),
    settings: Settings = Depends(get_settings),
):
    """
    Get a single listing; counts one view
    """
    listing = listing_service.get_by_id(
        db,
        listing_id,
        role=_role(user),
        allow_unpublished=settings.allow_unpublished_preview,
    )
    if not listing:
        raise NotFoundError(MESSAGES["listing_not_found"])
    return listing


@router.post(
    "", response_model=ListingResponse, status_code=status.HTTP_201_CREATED
)
def create_listing(
    payload: ListingCreate,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_capability(LISTINGS_WRITE)),
):
    return listing_service.create(db, payload)


@router.post("/{listing_id}/like", response_model=LikeResponse)
def like_listing(
    listing_id: str,
    db: Session = Depends(get_db),
    user: Principal = Depends(get_current_user),
):
    """
    Toggle the caller's like on a listing
    """
    liked, like_count = listing_service.like(db, user.user_id, listing_id)
    return LikeResponse(
        message=MESSAGES["liked"] if liked else MESSAGES["unliked"],
        liked=liked,
        like_count=like_count,
    )


@router.patch("/{listing_id}", response_model=ListingResponse)
def update_listing(
    listing_id: str,
    payload: ListingUpdate,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_capability(LISTINGS_WRITE)),
):
    return listing_service.update_listing(db, listing_id, payload)


@router.delete("/{listing_id}", response_model=MessageResponse)
def delete_listing(
    listing_id: str,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_capability(LISTINGS_WRITE)),
):
    listing_service.remove(db, listing_id)
    return {"message": MESSAGES["listing_deleted"]}
