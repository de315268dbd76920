"""API v1 router composition."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    analytics,
    delivery,
    orders,
    promos,
    quests,
    ratings,
    restaurants,
    subscriptions,
    users,
    wishlist,
)

api_router: APIRouter = APIRouter()
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(delivery.router, prefix="/delivery", tags=["delivery"])
api_router.include_router(ratings.router, prefix="/ratings", tags=["ratings"])
api_router.include_router(restaurants.router, prefix="/restaurants", tags=["restaurants"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(quests.router, prefix="/quests", tags=["quests"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(promos.router, prefix="/promos", tags=["promos"])
api_router.include_router(subscriptions.router, prefix="/subscriptions", tags=["subscriptions"])
api_router.include_router(wishlist.router, prefix="/wishlist", tags=["wishlist"])
