from typing import Any, List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from shared.core.schemas import CamelInput, CamelModel, TimestampedRecord
from ..util.pricing import parse_price


NON_NULLABLE_FIELDS = (
    "name", "description", "price", "currency", "image", "photos", "category", "is_active")


def _check_price(value: Optional[str]):
    if value is not None and parse_price(value) is None:
        raise ValueError("price must start with a whole number")
    return value


# ---------------- Activity Output ----------------
class ActivityOut(TimestampedRecord):
    name: str
    description: str
    price: str
    currency: str = "MAD"
    image: str
    photos: List[str] = []
    category: str
    is_active: bool = True
    seasonal_pricing: Optional[Any] = None
    getyourguide_price: Optional[int] = None
    availability: Optional[str] = None
    duration: Optional[str] = None

    @field_validator("photos", mode="before")
    @classmethod
    def default_photos(cls, value):
        return value or []


# ---------------- Activity Create/Update ----------------
class ActivityCreate(CamelInput):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    price: str = Field(min_length=1, max_length=32)
    currency: str = "MAD"
    image: str = Field(min_length=1)
    photos: List[str] = []
    category: str = Field(min_length=1, max_length=64)
    is_active: bool = True
    seasonal_pricing: Optional[Any] = None
    getyourguide_price: Optional[int] = Field(default=None, ge=0)
    availability: Optional[str] = None
    duration: Optional[str] = None

    @field_validator("price")
    @classmethod
    def price_starts_with_number(cls, value):
        return _check_price(value)


class ActivityUpdate(CamelInput):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    price: Optional[str] = Field(default=None, min_length=1, max_length=32)
    currency: Optional[str] = None
    image: Optional[str] = Field(default=None, min_length=1)
    photos: Optional[List[str]] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=64)
    is_active: Optional[bool] = None
    seasonal_pricing: Optional[Any] = None
    getyourguide_price: Optional[int] = Field(default=None, ge=0)
    availability: Optional[str] = None
    duration: Optional[str] = None

    @field_validator("price")
    @classmethod
    def price_starts_with_number(cls, value):
        return _check_price(value)

    @model_validator(mode="after")
    def required_fields_not_null(self):
        nulls = [to_camel(name) for name in NON_NULLABLE_FIELDS
                 if name in self.model_fields_set and getattr(self, name) is None]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self


class GetYourGuidePriceUpdate(CamelInput):
    getyourguide_price: int = Field(ge=0)


class ActivityRatingOut(CamelModel):
    average_rating: float
    total_reviews: int
