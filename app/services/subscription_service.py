"""Recurring meal subscriptions, one per customer."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.models.subscription import Subscription
from app.utils.time import utcnow

PLAN_INTERVALS: dict[str, timedelta] = {
    "weekly": timedelta(days=7),
    "biweekly": timedelta(days=14),
    "monthly": timedelta(days=30),
}


def parse_plan_type(plan_type: str | None) -> str:
    normalized = (plan_type or "").strip().lower()
    if normalized not in PLAN_INTERVALS:
        raise ValidationError(f"Invalid plan type: {plan_type}. Expected one of {', '.join(PLAN_INTERVALS)}")
    return normalized


def next_delivery(plan_type: str, now: datetime | None = None) -> datetime:
    return (now or utcnow()) + PLAN_INTERVALS[plan_type]


def get_subscription(db: Session, customer_id: str) -> Subscription | None:
    return db.get(Subscription, customer_id)


def require_subscription(db: Session, customer_id: str) -> Subscription:
    subscription = get_subscription(db, customer_id)
    if subscription is None:
        raise NotFoundError("Subscription not found")
    return subscription


def create_subscription(
    db: Session,
    customer_id: str,
    plan_type: str,
    preferences: dict[str, Any] | None = None,
    meal_plan: list[Any] | None = None,
) -> Subscription:
    plan = parse_plan_type(plan_type)
    if get_subscription(db, customer_id) is not None:
        raise ConflictError("Subscription already exists")

    now = utcnow()
    subscription = Subscription(
        customer_id=customer_id,
        plan_type=plan,
        preferences=dict(preferences or {}),
        meal_plan=list(meal_plan or []),
        active=True,
        next_delivery_at=next_delivery(plan, now),
        created_at=now,
        updated_at=now,
    )
    db.add(subscription)
    db.commit()
    db.refresh(subscription)
    return subscription


def update_subscription(
    db: Session,
    subscription: Subscription,
    plan_type: str | None = None,
    preferences: dict[str, Any] | None = None,
) -> Subscription:
    """Change plan and/or preferences; a plan change reschedules the next delivery."""
    now = utcnow()
    if plan_type is not None:
        plan = parse_plan_type(plan_type)
        if plan != subscription.plan_type:
            subscription.plan_type = plan
            if subscription.active:
                subscription.next_delivery_at = next_delivery(plan, now)
    if preferences is not None:
        subscription.preferences = dict(preferences)
    subscription.updated_at = now
    db.commit()
    db.refresh(subscription)
    return subscription


def update_meal_plan(db: Session, subscription: Subscription, meal_plan: list[Any]) -> Subscription:
    subscription.meal_plan = list(meal_plan)
    subscription.updated_at = utcnow()
    db.commit()
    db.refresh(subscription)
    return subscription


def toggle_active(db: Session, subscription: Subscription) -> Subscription:
    """Pause or resume; a paused subscription has no scheduled delivery."""
    now = utcnow()
    subscription.active = not subscription.active
    subscription.next_delivery_at = next_delivery(subscription.plan_type, now) if subscription.active else None
    subscription.updated_at = now
    db.commit()
    db.refresh(subscription)
    return subscription


def delete_subscription(db: Session, subscription: Subscription) -> None:
    db.delete(subscription)
    db.commit()


def list_active_subscriptions(db: Session) -> list[Subscription]:
    return (
        db.query(Subscription)
        .filter(Subscription.active.is_(True))
        .order_by(Subscription.created_at.asc())
        .all()
    )
