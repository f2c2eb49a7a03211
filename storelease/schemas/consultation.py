from datetime import datetime
from typing import Optional
from pydantic import Field

from storelease.schemas.listing import CamelModel


class ConsultationCreate(CamelModel):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=10)
    age: int = Field(ge=1)
    gender: str
    desired_category: str = Field(min_length=1)
    desired_location: str = Field(min_length=1)
    investment_amount: int = Field(ge=0)
    details: Optional[str] = Field(default=None, max_length=200)


class ConsultationResponse(CamelModel):
    id: str
    created_at: datetime
    name: str
    phone: str
    age: int
    gender: str
    desired_category: str
    desired_location: str
    investment_amount: int
    details: Optional[str] = None
