"""Restaurant catalogue and proximity search helpers."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.restaurant import Restaurant
from app.utils.geo import encode_geohash, haversine_km, is_valid_coordinate
from app.utils.time import utcnow

LOCATION_FIELD = "location"


def _apply_location(restaurant: Restaurant, location: dict[str, float] | None) -> None:
    """Store coordinates and derived geohash, or clear both for invalid input."""
    lat = location.get("lat") if location else None
    lng = location.get("lng") if location else None
    if is_valid_coordinate(lat, lng):
        restaurant.lat = lat
        restaurant.lng = lng
        restaurant.geohash = encode_geohash(lat, lng)
    else:
        restaurant.lat = None
        restaurant.lng = None
        restaurant.geohash = None


def create_restaurant(db: Session, data: dict[str, Any]) -> Restaurant:
    values = dict(data)
    location = values.pop(LOCATION_FIELD, None)
    now = utcnow()
    restaurant = Restaurant(**values, created_at=now, updated_at=now)
    _apply_location(restaurant, location)
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def get_restaurant(db: Session, restaurant_id: str) -> Restaurant | None:
    return db.get(Restaurant, restaurant_id)


def require_restaurant(db: Session, restaurant_id: str) -> Restaurant:
    restaurant = get_restaurant(db, restaurant_id)
    if restaurant is None:
        raise NotFoundError("Restaurant not found")
    return restaurant


def list_active_restaurants(db: Session) -> list[Restaurant]:
    return db.query(Restaurant).filter(Restaurant.is_active.is_(True)).order_by(Restaurant.name.asc()).all()


def list_restaurants_for_owner(db: Session, owner_id: str) -> list[Restaurant]:
    return db.query(Restaurant).filter(Restaurant.owner_id == owner_id).order_by(Restaurant.name.asc()).all()


def update_restaurant(db: Session, restaurant: Restaurant, data: dict[str, Any]) -> Restaurant:
    """Apply a partial update; geohash follows any location change."""
    values = dict(data)
    if LOCATION_FIELD in values:
        _apply_location(restaurant, values.pop(LOCATION_FIELD))
    for field, value in values.items():
        setattr(restaurant, field, value)
    restaurant.updated_at = utcnow()
    db.commit()
    db.refresh(restaurant)
    return restaurant


def update_menu(db: Session, restaurant: Restaurant, menu_items: list[dict[str, Any]]) -> Restaurant:
    restaurant.menu = list(menu_items)
    restaurant.updated_at = utcnow()
    db.commit()
    db.refresh(restaurant)
    return restaurant


def find_nearby_restaurants(db: Session, lat: float, lng: float, radius_km: float) -> list[tuple[Restaurant, float]]:
    """Return active restaurants within radius_km of a point, nearest first."""
    matches: list[tuple[Restaurant, float]] = []
    for restaurant in db.query(Restaurant).filter(Restaurant.is_active.is_(True), Restaurant.geohash.is_not(None)).all():
        distance = haversine_km(lat, lng, restaurant.lat, restaurant.lng)
        if distance <= radius_km:
            matches.append((restaurant, distance))
    matches.sort(key=lambda match: match[1])
    return matches
