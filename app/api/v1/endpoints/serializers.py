"""Conversions from ORM rows to API schemas."""

from app.models.location import DeliveryLocation
from app.models.order import Order
from app.models.promo import Promo
from app.models.restaurant import Restaurant
from app.models.subscription import Subscription
from app.models.wishlist import WishlistItem
from app.schemas.location import LocationRead
from app.schemas.order import OrderItemRead, OrderRead, RatingRead
from app.schemas.promo import PromoRead
from app.schemas.restaurant import Coordinates, RestaurantRead
from app.schemas.subscription import SubscriptionRead
from app.schemas.wishlist import WishlistItemRead, WishlistRead
from app.utils.time import as_utc


def serialize_order(order: Order) -> OrderRead:
    return OrderRead(
        id=order.id,
        customer_id=order.customer_id,
        restaurant_id=order.restaurant_id,
        delivery_partner_id=order.delivery_partner_id,
        items=[
            OrderItemRead(item_id=item.item_id, name=item.name, price=item.price, quantity=item.quantity)
            for item in order.items
        ],
        total_amount=order.total_amount,
        delivery_address=order.delivery_address or {},
        status=order.status,
        created_at=as_utc(order.created_at),
        updated_at=as_utc(order.updated_at),
        delivered_at=as_utc(order.delivered_at),
        ratings={
            rating.role: RatingRead(rating=rating.rating, review=rating.review, rated_at=as_utc(rating.rated_at))
            for rating in order.ratings
        },
    )


def serialize_location(location: DeliveryLocation | None) -> LocationRead | None:
    if location is None:
        return None
    return LocationRead(
        rider_id=location.rider_id,
        order_id=location.order_id,
        lat=location.lat,
        lng=location.lng,
        updated_at=as_utc(location.updated_at),
    )


def serialize_restaurant(restaurant: Restaurant) -> RestaurantRead:
    location = None
    if restaurant.lat is not None and restaurant.lng is not None:
        location = Coordinates(lat=restaurant.lat, lng=restaurant.lng)
    return RestaurantRead(
        id=restaurant.id,
        name=restaurant.name,
        cuisine=restaurant.cuisine,
        description=restaurant.description,
        owner_id=restaurant.owner_id,
        address=restaurant.address,
        phone=restaurant.phone,
        email=restaurant.email,
        delivery_time=restaurant.delivery_time,
        menu=restaurant.menu or [],
        location=location,
        geohash=restaurant.geohash,
        rating=restaurant.rating,
        rating_count=restaurant.rating_count,
        is_local_legend=restaurant.is_local_legend,
        is_active=restaurant.is_active,
        created_at=as_utc(restaurant.created_at),
        updated_at=as_utc(restaurant.updated_at),
    )


def serialize_promo(promo: Promo) -> PromoRead:
    return PromoRead(
        id=promo.id,
        restaurant_id=promo.restaurant_id,
        restaurant_name=promo.restaurant_name,
        title=promo.title,
        description=promo.description,
        discount_percent=promo.discount_percent,
        code=promo.code,
        valid_until=as_utc(promo.valid_until),
        active=promo.active,
        created_at=as_utc(promo.created_at),
        updated_at=as_utc(promo.updated_at),
    )


def serialize_subscription(subscription: Subscription | None) -> SubscriptionRead | None:
    if subscription is None:
        return None
    return SubscriptionRead(
        customer_id=subscription.customer_id,
        plan_type=subscription.plan_type,
        preferences=subscription.preferences or {},
        meal_plan=subscription.meal_plan or [],
        active=subscription.active,
        next_delivery_at=as_utc(subscription.next_delivery_at),
        created_at=as_utc(subscription.created_at),
        updated_at=as_utc(subscription.updated_at),
    )


def serialize_wishlist(customer_id: str, items: list[WishlistItem]) -> WishlistRead:
    return WishlistRead(
        customer_id=customer_id,
        items=[
            WishlistItemRead(
                item_type=item.item_type,
                item_id=item.item_id,
                name=item.name,
                details=item.details or {},
                added_at=as_utc(item.added_at),
            )
            for item in items
        ],
    )
