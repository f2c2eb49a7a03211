import re
from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from storelease.func import to_local_naive

Region = Literal["METROPOLITAN", "NON_METROPOLITAN"]
Category = Literal["CAFE_BAKERY", "RESTAURANT_BAR", "RETAIL_ETC"]
Status = Literal["DRAFT", "PUBLISHED", "ARCHIVED"]
SortField = Literal["createdAt", "keyMoney", "monthlyRent", "viewCount", "likeCount"]
SortOrder = Literal["asc", "desc"]

URL_RE = re.compile(r"^https?://\S+$")


def _check_url(value: str) -> str:
    if not URL_RE.match(value):
        raise ValueError("유효한 URL을 입력해주세요.")
    return value


NonEmptyStr = Annotated[str, Field(min_length=1)]
Money = Annotated[int, Field(ge=0)]
Percent = Annotated[int, Field(ge=0, le=100)]
Url = Annotated[str, AfterValidator(_check_url)]

DATETIME_FIELDS = ("best_until", "featured_start", "featured_end")

# columns that may be omitted from an update but never set to null
NON_NULLABLE_FIELDS = (
    "name",
    "summary",
    "address",
    "description",
    "cover_image",
    "image_urls",
    "region",
    "category",
    "deposit",
    "monthly_rent",
    "key_money",
    "monthly_revenue",
    "material_cost",
    "personnel_cost",
    "net_profit",
    "is_automated",
    "has_parking",
    "is_first_floor",
    "is_near_station",
    "status",
    "is_best",
    "is_weekly_best",
)


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ListingFeatureWindow(CamelModel):
    """Datetime handling shared by create and update payloads."""

    @field_validator(*DATETIME_FIELDS, mode="after", check_fields=False)
    @classmethod
    def _local_time(cls, value):
        return to_local_naive(value)

    @model_validator(mode="after")
    def _window_order(self):
        start = getattr(self, "featured_start", None)
        end = getattr(self, "featured_end", None)
        if start and end and end < start:
            raise ValueError("featuredEnd must not be earlier than featuredStart")
        return self


class ListingCreate(ListingFeatureWindow):
    name: NonEmptyStr
    summary: NonEmptyStr
    address: NonEmptyStr

    region: Region
    category: Category

    deposit: Money
    monthly_rent: Money
    key_money: Money
    monthly_revenue: Money
    material_cost: Money
    personnel_cost: Money
    utility_cost: Optional[Money] = None
    other_cost: Optional[Money] = None
    delivery_percent: Optional[Percent] = None
    net_profit: Money

    is_automated: bool = False
    has_parking: bool = False
    is_first_floor: bool = False
    is_near_station: bool = False

    description: NonEmptyStr
    cover_image: Url
    image_urls: List[Url]

    status: Status = "DRAFT"
    is_best: bool = False
    best_until: Optional[datetime] = None
    is_weekly_best: bool = False
    featured_start: Optional[datetime] = None
    featured_end: Optional[datetime] = None


class ListingUpdate(ListingFeatureWindow):
    name: Optional[NonEmptyStr] = None
    summary: Optional[NonEmptyStr] = None
    address: Optional[NonEmptyStr] = None

    region: Optional[Region] = None
    category: Optional[Category] = None

    deposit: Optional[Money] = None
    monthly_rent: Optional[Money] = None
    key_money: Optional[Money] = None
    monthly_revenue: Optional[Money] = None
    material_cost: Optional[Money] = None
    personnel_cost: Optional[Money] = None
    utility_cost: Optional[Money] = None
    other_cost: Optional[Money] = None
    delivery_percent: Optional[Percent] = None
    net_profit: Optional[Money] = None

    is_automated: Optional[bool] = None
    has_parking: Optional[bool] = None
    is_first_floor: Optional[bool] = None
    is_near_station: Optional[bool] = None

    description: Optional[NonEmptyStr] = None
    cover_image: Optional[Url] = None
    image_urls: Optional[List[Url]] = None

    status: Optional[Status] = None
    is_best: Optional[bool] = None
    best_until: Optional[datetime] = None
    is_weekly_best: Optional[bool] = None
    featured_start: Optional[datetime] = None
    featured_end: Optional[datetime] = None

    @model_validator(mode="after")
    def _no_null_for_required(self):
        for field in NON_NULLABLE_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{to_camel(field)} may not be null")
        return self


class ListingResponse(CamelModel):
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    name: str
    summary: str
    address: str
    region: str
    category: str

    deposit: int
    monthly_rent: int
    key_money: int
    monthly_revenue: int
    material_cost: int
    personnel_cost: int
    utility_cost: Optional[int] = None
    other_cost: Optional[int] = None
    delivery_percent: Optional[int] = None
    net_profit: int

    is_automated: bool
    has_parking: bool
    is_first_floor: bool
    is_near_station: bool

    description: str
    cover_image: str
    image_urls: List[str]

    status: str
    is_best: bool
    best_until: Optional[datetime] = None
    is_weekly_best: bool
    featured_start: Optional[datetime] = None
    featured_end: Optional[datetime] = None

    view_count: int
    like_count: int


class ListingFilters(BaseModel):
    region: Optional[Region] = None
    category: Optional[Category] = None
    key_money_lte: Optional[int] = Field(default=None, ge=0)
    status: Optional[Status] = None
    sort_by: SortField = "createdAt"
    order: SortOrder = "desc"


class LikeResponse(CamelModel):
    message: str
    liked: bool
    like_count: int


class ListingStats(CamelModel):
    total_count: int
    new_this_week_count: int
