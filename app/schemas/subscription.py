"""Meal subscription schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field

from app.schemas.base import ApiModel


class SubscriptionCreate(ApiModel):
    customer_id: str = Field(min_length=1)
    plan_type: str
    preferences: dict[str, Any] = Field(default_factory=dict)
    meal_plan: list[Any] = Field(default_factory=list)


class SubscriptionUpdate(ApiModel):
    plan_type: str | None = None
    preferences: dict[str, Any] | None = None


class MealPlanUpdate(ApiModel):
    meal_plan: list[Any]


class SubscriptionRead(ApiModel):
    customer_id: str
    plan_type: str
    preferences: dict[str, Any]
    meal_plan: list[Any]
    active: bool
    next_delivery_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class SubscriptionEnvelope(ApiModel):
    subscription: SubscriptionRead | None


class SubscriptionResponse(ApiModel):
    message: str
    subscription: SubscriptionRead


class SubscriptionListResponse(ApiModel):
    subscriptions: list[SubscriptionRead]
    count: int
