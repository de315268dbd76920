"""Application models package."""

from app.models.location import DeliveryLocation
from app.models.order import Order, OrderItem, OrderRating
from app.models.promo import Promo
from app.models.quest import QuestProgress
from app.models.restaurant import Restaurant
from app.models.subscription import Subscription
from app.models.user import User
from app.models.wishlist import WishlistItem

__all__ = [
    "DeliveryLocation",
    "Order",
    "OrderItem",
    "OrderRating",
    "Promo",
    "QuestProgress",
    "Restaurant",
    "Subscription",
    "User",
    "WishlistItem",
]
