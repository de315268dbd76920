"""Schema exports."""

from app.schemas.location import LocationEnvelope, LocationRead, LocationUpdate
from app.schemas.order import (
    AssignmentResponse,
    CustomerRatingCreate,
    DeliveryAssignment,
    OrderCreate,
    OrderDetailResponse,
    OrderEnvelope,
    OrderItemPayload,
    OrderListResponse,
    OrderRatingCreate,
    OrderRead,
    OrderStatusUpdate,
    RatingResponse,
)
from app.schemas.promo import PromoCreate, PromoRead, PromoUpdate
from app.schemas.rating import QuestListResponse, RatingStatsResponse, RestaurantRatingListResponse
from app.schemas.restaurant import RestaurantCreate, RestaurantRead, RestaurantUpdate
from app.schemas.subscription import SubscriptionCreate, SubscriptionRead, SubscriptionUpdate
from app.schemas.user import UserCreate, UserRead
from app.schemas.wishlist import WishlistItemCreate, WishlistRead

__all__ = [
    "AssignmentResponse",
    "CustomerRatingCreate",
    "DeliveryAssignment",
    "LocationEnvelope",
    "LocationRead",
    "LocationUpdate",
    "OrderCreate",
    "OrderDetailResponse",
    "OrderEnvelope",
    "OrderItemPayload",
    "OrderListResponse",
    "OrderRatingCreate",
    "OrderRead",
    "OrderStatusUpdate",
    "PromoCreate",
    "PromoRead",
    "PromoUpdate",
    "QuestListResponse",
    "RatingResponse",
    "RatingStatsResponse",
    "RestaurantCreate",
    "RestaurantRatingListResponse",
    "RestaurantRead",
    "RestaurantUpdate",
    "SubscriptionCreate",
    "SubscriptionRead",
    "SubscriptionUpdate",
    "UserCreate",
    "UserRead",
    "WishlistItemCreate",
    "WishlistRead",
]
