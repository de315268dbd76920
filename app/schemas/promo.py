"""Promotion schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.base import ApiModel


class PromoCreate(ApiModel):
    restaurant_id: str = Field(min_length=1)
    restaurant_name: str | None = None
    title: str = Field(min_length=3, max_length=255)
    description: str = ""
    discount_percent: int = Field(ge=1, le=100)
    code: str = Field(min_length=3, max_length=32)
    valid_until: datetime


class PromoUpdate(ApiModel):
    restaurant_name: str | None = None
    title: str | None = Field(default=None, min_length=3, max_length=255)
    description: str | None = None
    discount_percent: int | None = Field(default=None, ge=1, le=100)
    code: str | None = Field(default=None, min_length=3, max_length=32)
    valid_until: datetime | None = None
    active: bool | None = None


class PromoRead(ApiModel):
    id: str
    restaurant_id: str
    restaurant_name: str | None = None
    title: str
    description: str
    discount_percent: int
    code: str
    valid_until: datetime
    active: bool
    created_at: datetime
    updated_at: datetime


class PromoResponse(ApiModel):
    message: str
    promo: PromoRead


class PromoListResponse(ApiModel):
    promos: list[PromoRead]
    count: int
