from sqlalchemy import (
    Column,
    String,
    Text,
    TIMESTAMP,
    Boolean,
    Integer,
    BigInteger,
    JSON,
    Index,
)
import uuid
from datetime import datetime
from storelease.models.base import Base
from storelease.vars import STATUS_DRAFT


class Listing(Base):
    __tablename__ = "listing"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = Column(TIMESTAMP, default=datetime.now, index=True)
    updated_at = Column(TIMESTAMP, default=datetime.now, onupdate=datetime.now)

    name = Column(String, nullable=False)
    summary = Column(String, nullable=False)
    address = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    cover_image = Column(Text, nullable=False)
    image_urls = Column(JSON, nullable=False, default=list)

    region = Column(String, nullable=False)
    category = Column(String, nullable=False)

    deposit = Column(BigInteger, nullable=False)
    monthly_rent = Column(BigInteger, nullable=False)
    key_money = Column(BigInteger, nullable=False)
    monthly_revenue = Column(BigInteger, nullable=False)
    material_cost = Column(BigInteger, nullable=False)
    personnel_cost = Column(BigInteger, nullable=False)
    utility_cost = Column(BigInteger, nullable=True)
    other_cost = Column(BigInteger, nullable=True)
    delivery_percent = Column(Integer, nullable=True)
    net_profit = Column(BigInteger, nullable=False)

    is_automated = Column(Boolean, nullable=False, default=False)
    has_parking = Column(Boolean, nullable=False, default=False)
    is_first_floor = Column(Boolean, nullable=False, default=False)
    is_near_station = Column(Boolean, nullable=False, default=False)

    status = Column(String, nullable=False, default=STATUS_DRAFT)
    is_best = Column(Boolean, nullable=False, default=False)
    best_until = Column(TIMESTAMP, nullable=True)
    is_weekly_best = Column(Boolean, nullable=False, default=False)
    featured_start = Column(TIMESTAMP, nullable=True)
    featured_end = Column(TIMESTAMP, nullable=True)

    # counters, only ever changed with SQL-side arithmetic
    view_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_listing_status_region_category", "status", "region", "category"),
        Index("idx_listing_featured", "is_weekly_best", "featured_start", "featured_end"),
    )

    def __repr__(self):
        return f"<Listing id='{self.id}' name='{self.name}' status='{self.status}'/>"
