import re
from pydantic import BaseModel, Field, field_validator

from storelease.func import normalize_phone

PHONE_RE = re.compile(r"^\d{9,11}$")


class PhoneSchema(BaseModel):
    phone: str = Field(min_length=1)

    @field_validator("phone")
    @classmethod
    def _normalize(cls, value: str) -> str:
        value = normalize_phone(value)
        if not PHONE_RE.match(value):
            raise ValueError("올바른 핸드폰 번호를 입력해주세요.")
        return value


class CheckCodeSchema(PhoneSchema):
    code: str = Field(min_length=1)
