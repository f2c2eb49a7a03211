from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from storelease.schemas.listing import CamelModel


class RegisterSchema(BaseModel):
    email: EmailStr
    name: str = Field(min_length=2)
    password: str = Field(min_length=6)


class LoginSchema(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str


class UserOut(CamelModel):
    id: str
    email: Optional[str] = None
    name: str
    role: str
    created_at: datetime
    updated_at: Optional[datetime] = None
