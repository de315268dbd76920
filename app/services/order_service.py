"""Order storage and lifecycle operations."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import AlreadyRatedError, NotFoundError, ValidationError
from app.models.location import DeliveryLocation
from app.models.order import Order, OrderItem, OrderRating
from app.services import location_service
from app.services.order_status import OrderStatus, set_status
from app.utils.time import utcnow

RATING_ROLES: tuple[str, ...] = ("customer", "restaurant")
REQUIRED_ORDER_FIELDS: tuple[str, ...] = ("customer_id", "restaurant_id", "items", "total_amount", "delivery_address")
CENT = Decimal("0.01")


def _to_money(value: Any, field: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field} must be a number") from exc
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field} must be a non-negative number")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _quantity(item: dict[str, Any]) -> int:
    quantity = item.get("quantity")
    return 1 if quantity is None else int(quantity)


def calculate_items_total(items: list[dict[str, Any]]) -> Decimal:
    """Return sum(price * quantity) over order line items."""
    total = Decimal("0.00")
    for item in items:
        price = _to_money(item.get("price") or 0, "price")
        total += price * _quantity(item)
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def create_order(
    db: Session,
    *,
    customer_id: str | None,
    restaurant_id: str | None,
    items: list[dict[str, Any]] | None,
    total_amount: Any,
    delivery_address: dict[str, Any] | None,
) -> Order:
    """Validate and persist a new pending order."""
    values: dict[str, Any] = {
        "customer_id": customer_id,
        "restaurant_id": restaurant_id,
        "items": items,
        "total_amount": total_amount,
        "delivery_address": delivery_address,
    }
    missing: list[str] = [
        field for field in REQUIRED_ORDER_FIELDS if values[field] is None or values[field] == "" or values[field] == {}
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    amount: Decimal = _to_money(total_amount, "totalAmount")
    items_total: Decimal = calculate_items_total(items or [])
    if items_total != amount:
        raise ValidationError(f"totalAmount {amount} does not match items total {items_total}")

    now = utcnow()
    order = Order(
        customer_id=customer_id,
        restaurant_id=restaurant_id,
        status=OrderStatus.PENDING.value,
        total_amount=amount,
        delivery_address=dict(delivery_address or {}),
        created_at=now,
        updated_at=now,
    )
    for position, item in enumerate(items or []):
        quantity = _quantity(item)
        if quantity < 1:
            raise ValidationError("Quantity must be >= 1")
        order.items.append(
            OrderItem(
                position=position,
                item_id=item.get("item_id"),
                name=item.get("name"),
                price=_to_money(item.get("price") or 0, "price"),
                quantity=quantity,
            )
        )

    db.add(order)
    db.commit()
    db.refresh(order)
    return order


def get_order(db: Session, order_id: str) -> Order | None:
    return db.get(Order, order_id)


def require_order(db: Session, order_id: str) -> Order:
    order: Order | None = get_order(db, order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return order


def list_orders_for_customer(db: Session, customer_id: str) -> list[Order]:
    return db.query(Order).filter(Order.customer_id == customer_id).order_by(Order.created_at.desc()).all()


def list_orders_for_restaurant(db: Session, restaurant_id: str) -> list[Order]:
    return db.query(Order).filter(Order.restaurant_id == restaurant_id).order_by(Order.created_at.desc()).all()


def list_orders_for_partner(db: Session, partner_id: str) -> list[Order]:
    return db.query(Order).filter(Order.delivery_partner_id == partner_id).order_by(Order.created_at.desc()).all()


def get_pending_orders(db: Session) -> list[Order]:
    """Return orders waiting to be picked up by restaurants and riders."""
    return (
        db.query(Order)
        .filter(Order.status == OrderStatus.PENDING.value)
        .order_by(Order.created_at.asc())
        .all()
    )


def update_status(db: Session, order: Order, new_status: OrderStatus) -> Order:
    """Move order to new_status following the allowed transition table."""
    if set_status(order, new_status, utcnow()):
        db.commit()
        db.refresh(order)
    return order


def assign_delivery_partner(db: Session, order: Order, partner_id: str) -> Order:
    if not partner_id or not partner_id.strip():
        raise ValidationError("Delivery partner ID required")
    order.delivery_partner_id = partner_id.strip()
    order.updated_at = utcnow()
    db.commit()
    db.refresh(order)
    return order


def get_rating(order: Order, role: str) -> OrderRating | None:
    return next((rating for rating in order.ratings if rating.role == role), None)


def add_rating(db: Session, order: Order, role: str, rating: int, review: str | None = None) -> OrderRating:
    """Attach a rating for role; a second rating for the same role is rejected.

    The (order_id, role) unique constraint turns the duplicate check into a
    single conditional insert.
    """
    if role not in RATING_ROLES:
        raise ValidationError(f"Invalid rating role: {role}")
    if not isinstance(rating, int) or not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")

    now = utcnow()
    order_rating = OrderRating(order_id=order.id, role=role, rating=rating, review=review or "", rated_at=now)
    db.add(order_rating)
    order.updated_at = now
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise AlreadyRatedError(f"Order already rated by {role}") from exc
    db.refresh(order_rating)
    return order_rating


def get_delivery_partner_location(db: Session, order: Order) -> DeliveryLocation | None:
    return location_service.get_location_by_rider_id(db, order.delivery_partner_id)
