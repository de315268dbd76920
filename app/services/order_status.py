"""Order status state machine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from app.core.errors import InvalidStatusError, InvalidTransitionError
from app.models.order import Order


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


ORDER_STATUSES: list[str] = [status.value for status in OrderStatus]

ALLOWED_TRANSITIONS: dict[OrderStatus, set[OrderStatus]] = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.OUT_FOR_DELIVERY, OrderStatus.CANCELLED},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}

TERMINAL_STATUSES: frozenset[OrderStatus] = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)
ACTIVE_STATUSES: frozenset[OrderStatus] = frozenset(OrderStatus) - TERMINAL_STATUSES


def parse_status(value: str | None) -> OrderStatus:
    """Return the enum member for value or raise InvalidStatusError."""
    try:
        return OrderStatus(str(value or "").strip().lower())
    except ValueError as exc:
        raise InvalidStatusError(f"Invalid status: {value}") from exc


def is_active(status: str) -> bool:
    """Return whether an order in this status is still being fulfilled."""
    return status in {item.value for item in ACTIVE_STATUSES}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    """Return whether order can move from current to new status."""
    return new in ALLOWED_TRANSITIONS.get(current, set())


def set_status(order: Order, new_status: OrderStatus, now: datetime) -> bool:
    """Apply new_status to order and update timestamps.

    Returns False when the order is already in new_status; repeating a status
    is a no-op so timestamps such as delivered_at are only set once.
    """
    current: OrderStatus = parse_status(order.status)
    if current == new_status:
        return False
    if not can_transition(current, new_status):
        raise InvalidTransitionError(f"Cannot change status from {current.value} to {new_status.value}")

    order.status = new_status.value
    order.updated_at = now
    if new_status == OrderStatus.DELIVERED:
        order.delivered_at = now
    return True
