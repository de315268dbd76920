"""Meal subscription endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.endpoints.serializers import serialize_subscription
from app.db.session import get_db
from app.schemas.base import MessageResponse
from app.schemas.subscription import (
    MealPlanUpdate,
    SubscriptionCreate,
    SubscriptionEnvelope,
    SubscriptionListResponse,
    SubscriptionResponse,
    SubscriptionUpdate,
)
from app.services import subscription_service

logger = logging.getLogger(__name__)
router: APIRouter = APIRouter()


@router.get("/admin/all-active", response_model=SubscriptionListResponse)
def get_all_active_subscriptions(db: Session = Depends(get_db)) -> SubscriptionListResponse:
    subscriptions = subscription_service.list_active_subscriptions(db)
    return SubscriptionListResponse(
        subscriptions=[serialize_subscription(subscription) for subscription in subscriptions],
        count=len(subscriptions),
    )


@router.get("/{customer_id}", response_model=SubscriptionEnvelope)
def get_subscription(customer_id: str, db: Session = Depends(get_db)) -> SubscriptionEnvelope:
    """Return the customer's subscription, or null when they have none."""
    subscription = subscription_service.get_subscription(db, customer_id)
    return SubscriptionEnvelope(subscription=serialize_subscription(subscription))


@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
def create_subscription(payload: SubscriptionCreate, db: Session = Depends(get_db)) -> SubscriptionResponse:
    subscription = subscription_service.create_subscription(
        db,
        customer_id=payload.customer_id,
        plan_type=payload.plan_type,
        preferences=payload.preferences,
        meal_plan=payload.meal_plan,
    )
    logger.info("Customer %s subscribed to %s plan", subscription.customer_id, subscription.plan_type)
    return SubscriptionResponse(
        message="Subscription created successfully",
        subscription=serialize_subscription(subscription),
    )


@router.put("/{customer_id}", response_model=SubscriptionResponse)
def update_subscription(
    customer_id: str,
    payload: SubscriptionUpdate,
    db: Session = Depends(get_db),
) -> SubscriptionResponse:
    subscription = subscription_service.require_subscription(db, customer_id)
    subscription = subscription_service.update_subscription(
        db,
        subscription,
        plan_type=payload.plan_type,
        preferences=payload.preferences,
    )
    return SubscriptionResponse(
        message="Subscription updated successfully",
        subscription=serialize_subscription(subscription),
    )


@router.put("/{customer_id}/meal-plan", response_model=SubscriptionResponse)
def update_meal_plan(
    customer_id: str,
    payload: MealPlanUpdate,
    db: Session = Depends(get_db),
) -> SubscriptionResponse:
    subscription = subscription_service.require_subscription(db, customer_id)
    subscription = subscription_service.update_meal_plan(db, subscription, payload.meal_plan)
    return SubscriptionResponse(
        message="Meal plan updated successfully",
        subscription=serialize_subscription(subscription),
    )


@router.patch("/{customer_id}/toggle", response_model=SubscriptionResponse)
def toggle_subscription(customer_id: str, db: Session = Depends(get_db)) -> SubscriptionResponse:
    subscription = subscription_service.require_subscription(db, customer_id)
    subscription = subscription_service.toggle_active(db, subscription)
    state = "resumed" if subscription.active else "paused"
    return SubscriptionResponse(
        message=f"Subscription {state} successfully",
        subscription=serialize_subscription(subscription),
    )


@router.delete("/{customer_id}", response_model=MessageResponse)
def delete_subscription(customer_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    subscription_service.delete_subscription(db, subscription_service.require_subscription(db, customer_id))
    return MessageResponse(message="Subscription deleted successfully")
