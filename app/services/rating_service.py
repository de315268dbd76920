"""Restaurant rating aggregation."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.order import Order, OrderRating
from app.models.restaurant import Restaurant
from app.utils.time import utcnow

logger = logging.getLogger(__name__)


def _customer_ratings_query(db: Session, restaurant_id: str):
    return (
        db.query(OrderRating)
        .join(Order, Order.id == OrderRating.order_id)
        .filter(Order.restaurant_id == restaurant_id, OrderRating.role == "customer")
    )


def get_restaurant_ratings(db: Session, restaurant_id: str) -> list[OrderRating]:
    """Return customer ratings for restaurant, newest first."""
    return _customer_ratings_query(db, restaurant_id).order_by(OrderRating.rated_at.desc()).all()


def get_restaurant_rating_stats(db: Session, restaurant_id: str) -> dict[str, Any]:
    distribution: dict[int, int] = {score: 0 for score in range(5, 0, -1)}
    rows = (
        db.query(OrderRating.rating, func.count(OrderRating.id))
        .join(Order, Order.id == OrderRating.order_id)
        .filter(Order.restaurant_id == restaurant_id, OrderRating.role == "customer")
        .group_by(OrderRating.rating)
        .all()
    )
    for score, count in rows:
        distribution[int(score)] = int(count)

    total: int = sum(distribution.values())
    average: float = round(sum(score * count for score, count in distribution.items()) / total, 1) if total else 0.0
    return {"averageRating": average, "totalRatings": total, "ratingDistribution": distribution}


def update_restaurant_rating(db: Session, restaurant_id: str) -> dict[str, Any]:
    """Recompute the restaurant's aggregate from all customer ratings."""
    stats = get_restaurant_rating_stats(db, restaurant_id)
    restaurant: Restaurant | None = db.get(Restaurant, restaurant_id)
    if restaurant is None:
        logger.info("Restaurant %s not found; aggregate rating not stored", restaurant_id)
    else:
        restaurant.rating = stats["averageRating"]
        restaurant.rating_count = stats["totalRatings"]
        restaurant.updated_at = utcnow()
        db.commit()
    return {"averageRating": stats["averageRating"], "totalRatings": stats["totalRatings"]}
