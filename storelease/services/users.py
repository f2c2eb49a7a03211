from typing import List
from sqlalchemy.orm import Session

from storelease.errors import NotFoundError
from storelease.models import Listing, User, listing_likes
from storelease.vars import MESSAGES, STATUS_PUBLISHED


def get_liked_listings(db: Session, user_id: str) -> List[Listing]:
    """
    Published listings the user has liked, newest first.
    """
    if not db.get(User, user_id):
        raise NotFoundError(MESSAGES["user_not_found"])

    return (
        db.query(Listing)
        .join(listing_likes, listing_likes.c.listing_id == Listing.id)
        .filter(
            listing_likes.c.user_id == user_id,
            Listing.status == STATUS_PUBLISHED,
        )
        .order_by(Listing.created_at.desc(), Listing.id)
        .all()
    )
