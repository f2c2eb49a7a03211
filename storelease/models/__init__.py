from storelease.models.base import Base
from storelease.models.like import listing_likes
from storelease.models.user import User
from storelease.models.listing import Listing
from storelease.models.consultation import ConsultationRequest
from storelease.models.verification import Verification

__all__ = [
    "Base",
    "listing_likes",
    "User",
    "Listing",
    "ConsultationRequest",
    "Verification",
]
