"""
Listing queries, counters and the like toggle.

view_count and like_count are caches kept next to the row they describe:
- view_count only grows, one step per detail read, inside the read's transaction.
- like_count always equals the number of listing_likes rows for the listing;
  every statement that adds or removes an edge adjusts it in the same
  transaction.
Both are changed with SQL-side arithmetic so concurrent writers never lose
an update.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storelease.errors import ConflictError, InvalidInputError, NotFoundError
from storelease.func import start_of_week
from storelease.middleware.rbac import has_capability
from storelease.models import Listing, User, listing_likes
from storelease.schemas.listing import ListingCreate, ListingFilters, ListingUpdate
from storelease.vars import (
    FEATURED_LIMIT,
    LISTINGS_READ_ALL,
    MESSAGES,
    STATUS_PUBLISHED,
)

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "createdAt": Listing.created_at,
    "keyMoney": Listing.key_money,
    "monthlyRent": Listing.monthly_rent,
    "viewCount": Listing.view_count,
    "likeCount": Listing.like_count,
}


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def _get_or_404(db: Session, listing_id: str) -> Listing:
    listing = db.get(Listing, listing_id)
    if not listing:
        raise NotFoundError(MESSAGES["listing_not_found"])
    return listing


def create(db: Session, data: ListingCreate) -> Listing:
    listing = Listing(**data.model_dump())
    db.add(listing)
    _commit(db)
    db.refresh(listing)
    logger.info("Listing %s created (status=%s)", listing.id, listing.status)
    return listing


def get_by_id(
    db: Session,
    listing_id: str,
    role: Optional[str] = None,
    allow_unpublished: bool = True,
) -> Optional[Listing]:
    """
    Count a view and return the listing as read in the same transaction.
    Returns None when the listing does not exist, or when it is hidden from
    the caller because previews of unpublished listings are disabled.
    """
    try:
        status = db.execute(
            select(Listing.status).where(Listing.id == listing_id)
        ).scalar_one_or_none()
        if status is None:
            db.rollback()
            return None
        if (
            not allow_unpublished
            and status != STATUS_PUBLISHED
            and not has_capability(role, LISTINGS_READ_ALL)
        ):
            db.rollback()
            return None

        db.execute(
            update(Listing)
            .where(Listing.id == listing_id)
            .values(view_count=Listing.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        listing = db.execute(
            select(Listing)
            .where(Listing.id == listing_id)
            .execution_options(populate_existing=True)
        ).scalar_one()
        # keep the loaded state; commit would otherwise expire it
        db.expunge(listing)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return listing


def get_all(
    db: Session, filters: ListingFilters, role: Optional[str] = None
) -> List[Listing]:
    can_see_all = has_capability(role, LISTINGS_READ_ALL)
    query = db.query(Listing)

    # visibility
    if not can_see_all:
        query = query.filter(Listing.status == STATUS_PUBLISHED)
    elif filters.status:
        query = query.filter(Listing.status == filters.status)

    if filters.region:
        query = query.filter(Listing.region == filters.region)
    if filters.category:
        query = query.filter(Listing.category == filters.category)
    if filters.key_money_lte is not None:
        query = query.filter(Listing.key_money <= filters.key_money_lte)

    column = SORT_COLUMNS[filters.sort_by]
    ordering = column.asc() if filters.order == "asc" else column.desc()
    if can_see_all:
        query = query.order_by(Listing.is_weekly_best.desc(), ordering, Listing.id)
    else:
        query = query.order_by(ordering, Listing.id)

    listings = query.all()
    logger.debug("Listing query %s matched %d rows", filters, len(listings))
    return listings


def like(db: Session, user_id: str, listing_id: str) -> Tuple[bool, int]:
    """
    Toggle the like edge between a user and a listing.
    Returns (liked, like_count) as of the end of the toggle.
    """
    _get_or_404(db, listing_id)
    if not db.get(User, user_id):
        raise NotFoundError(MESSAGES["user_not_found"])

    edge = (listing_likes.c.user_id == user_id) & (
        listing_likes.c.listing_id == listing_id
    )
    try:
        removed = db.execute(delete(listing_likes).where(edge)).rowcount
        if removed:
            liked, delta = False, -1
        else:
            db.execute(
                insert(listing_likes).values(user_id=user_id, listing_id=listing_id)
            )
            liked, delta = True, 1

        db.execute(
            update(Listing)
            .where(Listing.id == listing_id)
            .values(like_count=Listing.like_count + delta)
            .execution_options(synchronize_session=False)
        )
        like_count = db.execute(
            select(Listing.like_count).where(Listing.id == listing_id)
        ).scalar_one()
        db.commit()
    except IntegrityError:
        # a concurrent toggle by the same user inserted the edge first
        db.rollback()
        raise ConflictError(MESSAGES["like_conflict"])
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(
        "User %s %s listing %s (likes=%d)",
        user_id,
        "liked" if liked else "unliked",
        listing_id,
        like_count,
    )
    return liked, like_count


def update_listing(db: Session, listing_id: str, data: ListingUpdate) -> Listing:
    listing = _get_or_404(db, listing_id)
    changes = data.model_dump(exclude_unset=True)

    # the window is checked as it will be stored, not just as sent
    start = changes.get("featured_start", listing.featured_start)
    end = changes.get("featured_end", listing.featured_end)
    if start and end and end < start:
        raise InvalidInputError(
            MESSAGES["validation"], {"featuredEnd": [MESSAGES["feature_window"]]}
        )

    for key, value in changes.items():
        setattr(listing, key, value)
    _commit(db)
    db.refresh(listing)
    logger.info("Listing %s updated (%s)", listing_id, ", ".join(sorted(changes)))
    return listing


def remove(db: Session, listing_id: str) -> None:
    listing = _get_or_404(db, listing_id)
    try:
        db.execute(delete(listing_likes).where(listing_likes.c.listing_id == listing_id))
        db.delete(listing)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("Listing %s deleted", listing_id)


def get_featured(
    db: Session, role: Optional[str] = None, now: Optional[datetime] = None
) -> List[Listing]:
    """
    Weekly-best listings whose feature window contains `now` (both ends
    inclusive). At most FEATURED_LIMIT are returned, soonest-ending first.
    """
    now = now or datetime.now()
    query = db.query(Listing).filter(
        Listing.is_weekly_best.is_(True),
        Listing.featured_start <= now,
        Listing.featured_end >= now,
    )
    if not has_capability(role, LISTINGS_READ_ALL):
        query = query.filter(Listing.status == STATUS_PUBLISHED)

    return (
        query.order_by(
            Listing.featured_end.asc(), Listing.created_at.desc(), Listing.id
        )
        .limit(FEATURED_LIMIT)
        .all()
    )


def get_stats(db: Session, now: Optional[datetime] = None) -> dict:
    week_start = start_of_week(now or datetime.now())
    published = db.query(func.count(Listing.id)).filter(
        Listing.status == STATUS_PUBLISHED
    )
    total_count = published.scalar()
    new_this_week_count = published.filter(Listing.created_at >= week_start).scalar()
    return {
        "total_count": total_count or 0,
        "new_this_week_count": new_this_week_count or 0,
    }
