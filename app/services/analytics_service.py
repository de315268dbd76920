"""Aggregate analytics over orders, ratings and users.

All figures are computed from a full scan of the matching orders; the
optional range narrows the scan to orders created in the last week, month or
year.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models.order import Order, OrderRating
from app.models.restaurant import Restaurant
from app.models.user import User
from app.services import quest_service
from app.services.order_status import ORDER_STATUSES, OrderStatus, is_active
from app.utils.time import as_utc, range_start

ORDER_HISTORY_LIMIT = 5
TOP_LIMIT = 5


def _resolve_start(range_name: str | None) -> datetime | None:
    try:
        return range_start(range_name)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


def _orders(db: Session, range_name: str | None, *criteria) -> list[Order]:
    start = _resolve_start(range_name)
    query = db.query(Order).filter(*criteria)
    orders: list[Order] = query.order_by(Order.created_at.desc()).all()
    if start is None:
        return orders
    return [order for order in orders if as_utc(order.created_at) >= start]


def _billable(orders: list[Order]) -> list[Order]:
    return [order for order in orders if order.status != OrderStatus.CANCELLED.value]


def _money(value: Decimal) -> float:
    return float(round(value, 2))


def _revenue(orders: list[Order]) -> Decimal:
    return sum((order.total_amount for order in _billable(orders)), Decimal("0.00"))


def _status_counts(orders: list[Order]) -> dict[str, int]:
    counts = Counter(order.status for order in orders)
    return {status: counts.get(status, 0) for status in ORDER_STATUSES}


def restaurant_analytics(db: Session, restaurant_id: str, range_name: str | None = None) -> dict[str, Any]:
    orders = _orders(db, range_name, Order.restaurant_id == restaurant_id)
    billable = _billable(orders)
    revenue = _revenue(orders)

    ratings = [
        rating.rating
        for order in orders
        for rating in order.ratings
        if rating.role == "customer"
    ]
    distribution = Counter(ratings)

    popularity: Counter[str] = Counter()
    revenue_by_day: dict[str, Decimal] = defaultdict(lambda: Decimal("0.00"))
    for order in billable:
        for item in order.items:
            popularity[item.name or item.item_id or "unknown"] += item.quantity
        revenue_by_day[as_utc(order.created_at).date().isoformat()] += order.total_amount

    return {
        "totalOrders": len(orders),
        "totalRevenue": _money(revenue),
        "avgOrderValue": _money(revenue / len(billable)) if billable else 0.0,
        "avgRating": round(sum(ratings) / len(ratings), 1) if ratings else 0.0,
        "ratingDistribution": {score: distribution.get(score, 0) for score in range(5, 0, -1)},
        "ordersByStatus": _status_counts(orders),
        "menuPopularity": [{"name": name, "quantity": qty} for name, qty in popularity.most_common(TOP_LIMIT)],
        "revenueOverTime": [
            {"date": day, "revenue": _money(amount)} for day, amount in sorted(revenue_by_day.items())
        ],
    }


def customer_analytics(db: Session, customer_id: str, range_name: str | None = None) -> dict[str, Any]:
    orders = _orders(db, range_name, Order.customer_id == customer_id)
    billable = _billable(orders)
    spent = _revenue(orders)

    restaurant_counts = Counter(order.restaurant_id for order in billable)
    names: dict[str, str] = {
        restaurant.id: restaurant.name
        for restaurant in db.query(Restaurant).filter(Restaurant.id.in_(list(restaurant_counts))).all()
    } if restaurant_counts else {}

    return {
        "totalOrders": len(orders),
        "totalSpent": _money(spent),
        "avgOrderValue": _money(spent / len(billable)) if billable else 0.0,
        "favoriteRestaurants": [
            {"restaurantId": rid, "name": names.get(rid, "Unknown"), "orders": count}
            for rid, count in restaurant_counts.most_common(TOP_LIMIT)
        ],
        "orderHistory": [
            {
                "orderId": order.id,
                "date": as_utc(order.created_at).date().isoformat(),
                "restaurant": names.get(order.restaurant_id, "Unknown"),
                "items": sum(item.quantity for item in order.items),
                "total": _money(order.total_amount),
                "status": order.status,
            }
            for order in orders[:ORDER_HISTORY_LIMIT]
        ],
        "questsCompleted": quest_service.count_completed_quests(db, customer_id),
    }


def delivery_analytics(db: Session, rider_id: str, range_name: str | None = None) -> dict[str, Any]:
    orders = _orders(db, range_name, Order.delivery_partner_id == rider_id)
    delivered = [order for order in orders if order.status == OrderStatus.DELIVERED.value and order.delivered_at]
    minutes = [
        (as_utc(order.delivered_at) - as_utc(order.created_at)).total_seconds() / 60 for order in delivered
    ]
    return {
        "totalDeliveries": len(delivered),
        "activeDeliveries": sum(1 for order in orders if is_active(order.status)),
        "avgDeliveryMinutes": round(sum(minutes) / len(minutes), 1) if minutes else 0.0,
        "deliveredValue": _money(sum((order.total_amount for order in delivered), Decimal("0.00"))),
    }


def admin_analytics(db: Session, range_name: str | None = None) -> dict[str, Any]:
    orders = _orders(db, range_name)
    return {
        "totalOrders": len(orders),
        "totalRevenue": _money(_revenue(orders)),
        "totalRestaurants": db.query(Restaurant).filter(Restaurant.is_active.is_(True)).count(),
        "totalCustomers": len({order.customer_id for order in orders}),
        "totalRiders": db.query(User).filter(User.role == "DELIVERY").count(),
        "totalRatings": db.query(OrderRating).filter(OrderRating.role == "customer").count(),
        "ordersByStatus": _status_counts(orders),
    }
