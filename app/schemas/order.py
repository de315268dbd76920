"""Order API schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, Field

from app.schemas.base import ApiModel
from app.schemas.location import LocationRead


class OrderItemPayload(ApiModel):
    """Single order line as sent by the client."""

    item_id: str | None = Field(default=None, validation_alias=AliasChoices("itemId", "item_id", "id"))
    name: str | None = None
    price: Decimal = Field(default=Decimal("0"), ge=0)
    quantity: int = Field(default=1, ge=1)


class OrderCreate(ApiModel):
    customer_id: str = Field(min_length=1)
    restaurant_id: str = Field(min_length=1)
    items: list[OrderItemPayload]
    total_amount: Decimal = Field(ge=0)
    delivery_address: dict[str, Any] = Field(min_length=1)


class OrderStatusUpdate(ApiModel):
    status: str | None = None


class DeliveryAssignment(ApiModel):
    delivery_partner_id: str | None = None


class OrderRatingCreate(ApiModel):
    rating: int = Field(ge=1, le=5)
    review: str | None = None
    customer_id: str | None = None


class CustomerRatingCreate(ApiModel):
    rating: int = Field(ge=1, le=5)
    review: str | None = None
    restaurant_id: str | None = None


class OrderItemRead(ApiModel):
    item_id: str | None = None
    name: str | None = None
    price: float
    quantity: int


class RatingRead(ApiModel):
    rating: int
    review: str
    rated_at: datetime


class OrderRead(ApiModel):
    id: str
    customer_id: str
    restaurant_id: str
    delivery_partner_id: str | None = None
    items: list[OrderItemRead]
    total_amount: float
    delivery_address: dict[str, Any]
    status: str
    created_at: datetime
    updated_at: datetime
    delivered_at: datetime | None = None
    ratings: dict[str, RatingRead] = Field(default_factory=dict)


class OrderEnvelope(ApiModel):
    order: OrderRead


class OrderDetailResponse(ApiModel):
    order: OrderRead
    live_location: LocationRead | None = None


class OrderListResponse(ApiModel):
    orders: list[OrderRead]
    count: int


class AssignmentResponse(ApiModel):
    message: str
    order: OrderRead


class RatingResponse(ApiModel):
    message: str
    rating: RatingRead
    restaurant_rating: float | None = None
