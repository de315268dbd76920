"""Delivery location schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.base import ApiModel


class LocationUpdate(ApiModel):
    """Rider fix pushed from the delivery app."""

    rider_id: str | None = None
    order_id: str | None = None
    lat: float | None = Field(default=None, ge=-90, le=90)
    lng: float | None = Field(default=None, ge=-180, le=180)


class LocationRead(ApiModel):
    rider_id: str
    order_id: str | None = None
    lat: float
    lng: float
    updated_at: datetime


class LocationEnvelope(ApiModel):
    location: LocationRead | None
