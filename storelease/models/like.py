from sqlalchemy import Column, String, Table, TIMESTAMP, ForeignKey
from datetime import datetime
from storelease.models.base import Base


# A row here is the source of truth for "user liked listing";
# Listing.like_count mirrors the number of rows per listing.
listing_likes = Table(
    "listing_likes",
    Base.metadata,
    Column(
        "user_id",
        String,
        ForeignKey("user.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "listing_id",
        String,
        ForeignKey("listing.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("created_at", TIMESTAMP, default=datetime.now),
)
