"""Restaurant schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field

from app.schemas.base import ApiModel


class Coordinates(ApiModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class RestaurantCreate(ApiModel):
    name: str = Field(min_length=1)
    cuisine: str | None = None
    description: str | None = None
    owner_id: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    delivery_time: str = "30-45 min"
    menu: list[dict[str, Any]] = Field(default_factory=list)
    location: Coordinates | None = None
    is_local_legend: bool = False
    is_active: bool = True


class RestaurantUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1)
    cuisine: str | None = None
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    delivery_time: str | None = None
    location: Coordinates | None = None
    is_local_legend: bool | None = None
    is_active: bool | None = None


class MenuUpdate(ApiModel):
    menu: list[dict[str, Any]]


class RestaurantRead(ApiModel):
    id: str
    name: str
    cuisine: str | None = None
    description: str | None = None
    owner_id: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    delivery_time: str
    menu: list[dict[str, Any]]
    location: Coordinates | None = None
    geohash: str | None = None
    rating: float
    rating_count: int
    is_local_legend: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime


class NearbyRestaurant(RestaurantRead):
    distance_km: float


class RestaurantEnvelope(ApiModel):
    restaurant: RestaurantRead


class RestaurantListResponse(ApiModel):
    restaurants: list[RestaurantRead]
    count: int


class NearbyRestaurantListResponse(ApiModel):
    restaurants: list[NearbyRestaurant]
    count: int
