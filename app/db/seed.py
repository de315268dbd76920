"""Database seeding helpers."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.models.restaurant import Restaurant
from app.services.restaurant_service import create_restaurant

logger = logging.getLogger(__name__)

DEMO_RESTAURANTS: list[dict[str, Any]] = [
    {
        "name": "Spice Route",
        "cuisine": "Indian",
        "description": "Curries and tandoor classics",
        "address": "12 Market Street",
        "location": {"lat": 35.7796, "lng": -78.6382},
        "is_local_legend": True,
        "menu": [
            {"id": "butter-chicken", "name": "Butter Chicken", "price": 13.99},
            {"id": "paneer-tikka", "name": "Paneer Tikka", "price": 10.5},
        ],
    },
    {
        "name": "Pasta Palace",
        "cuisine": "Italian",
        "description": "Fresh pasta made daily",
        "address": "48 Oak Avenue",
        "location": {"lat": 35.7871, "lng": -78.6441},
        "menu": [
            {"id": "margherita", "name": "Margherita Pizza", "price": 11.0},
            {"id": "pesto-pasta", "name": "Pesto Pasta", "price": 12.75},
        ],
    },
]


def ensure_seed_data(session: Session) -> int:
    """Create demo restaurants when the catalogue is empty; return how many were added."""
    if session.query(Restaurant).count() > 0:
        return 0

    for data in DEMO_RESTAURANTS:
        create_restaurant(session, data)
    logger.info("Seeded %d demo restaurants", len(DEMO_RESTAURANTS))
    return len(DEMO_RESTAURANTS)
