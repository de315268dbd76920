"""Order endpoints."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.v1.endpoints.serializers import serialize_location, serialize_order
from app.core.errors import AlreadyRatedError, AuthorizationError, StateError
from app.db import session as db_session
from app.db.session import get_db
from app.models.location import DeliveryLocation
from app.models.order import Order
from app.schemas.order import (
    AssignmentResponse,
    CustomerRatingCreate,
    DeliveryAssignment,
    OrderCreate,
    OrderDetailResponse,
    OrderEnvelope,
    OrderListResponse,
    OrderRatingCreate,
    OrderStatusUpdate,
    RatingRead,
    RatingResponse,
)
from app.services import order_service, quest_service, rating_service
from app.services.order_status import OrderStatus, is_active, parse_status
from app.utils.time import as_utc

logger = logging.getLogger(__name__)
router: APIRouter = APIRouter()


def _order_list(orders: list[Order]) -> OrderListResponse:
    return OrderListResponse(orders=[serialize_order(order) for order in orders], count=len(orders))


def advance_quest_progress(customer_id: str) -> None:
    """Best-effort quest update run after the order response is sent."""
    db: Session = db_session.SessionLocal()
    try:
        quest_service.update_quest_progress(db, customer_id)
    except Exception:
        logger.exception("Quest progress update failed for customer %s", customer_id)
        db.rollback()
    finally:
        db.close()


def refresh_restaurant_rating(db: Session, restaurant_id: str) -> float | None:
    """Recalculate the restaurant aggregate; failures are logged, not raised."""
    try:
        return rating_service.update_restaurant_rating(db, restaurant_id)["averageRating"]
    except Exception:
        logger.exception("Rating recalculation failed for restaurant %s", restaurant_id)
        db.rollback()
        return None


@router.post("", response_model=OrderEnvelope, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
) -> OrderEnvelope:
    """Place a new pending order."""
    order: Order = order_service.create_order(
        db,
        customer_id=payload.customer_id,
        restaurant_id=payload.restaurant_id,
        items=[item.model_dump() for item in payload.items],
        total_amount=payload.total_amount,
        delivery_address=payload.delivery_address,
    )
    logger.info("Order %s created for customer %s", order.id, order.customer_id)
    background_tasks.add_task(advance_quest_progress, order.customer_id)
    return OrderEnvelope(order=serialize_order(order))


@router.get("/customer", response_model=OrderListResponse)
def get_customer_orders(
    customer_id: str | None = Query(default=None, alias="customerId"),
    db: Session = Depends(get_db),
) -> OrderListResponse:
    if not customer_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Customer ID required")
    return _order_list(order_service.list_orders_for_customer(db, customer_id))


@router.get("/restaurant", response_model=OrderListResponse)
def get_restaurant_orders(
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    db: Session = Depends(get_db),
) -> OrderListResponse:
    if not restaurant_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Restaurant ID required")
    return _order_list(order_service.list_orders_for_restaurant(db, restaurant_id))


@router.get("/delivery", response_model=OrderListResponse)
def get_delivery_partner_orders(
    delivery_partner_id: str | None = Query(default=None, alias="deliveryPartnerId"),
    db: Session = Depends(get_db),
) -> OrderListResponse:
    """Return orders assigned to a delivery partner."""
    if not delivery_partner_id:
        return _order_list([])
    return _order_list(order_service.list_orders_for_partner(db, delivery_partner_id))


@router.get("/pending", response_model=OrderListResponse)
def get_pending_orders(db: Session = Depends(get_db)) -> OrderListResponse:
    return _order_list(order_service.get_pending_orders(db))


@router.get("/{order_id}", response_model=OrderDetailResponse)
def get_order(order_id: str, db: Session = Depends(get_db)) -> OrderDetailResponse:
    """Return the order joined with the rider's latest fix while delivery is active."""
    order: Order = order_service.require_order(db, order_id)
    live_location: DeliveryLocation | None = None
    if order.delivery_partner_id and is_active(order.status):
        live_location = order_service.get_delivery_partner_location(db, order)
    return OrderDetailResponse(order=serialize_order(order), live_location=serialize_location(live_location))


@router.put("/{order_id}/status", response_model=OrderEnvelope)
def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
) -> OrderEnvelope:
    new_status: OrderStatus = parse_status(payload.status)
    order: Order = order_service.require_order(db, order_id)
    previous: str = order.status
    order = order_service.update_status(db, order, new_status)
    logger.info("Order %s status %s -> %s", order.id, previous, order.status)
    return OrderEnvelope(order=serialize_order(order))


@router.put("/{order_id}/assign-delivery", response_model=AssignmentResponse)
def assign_delivery_partner(
    order_id: str,
    payload: DeliveryAssignment,
    db: Session = Depends(get_db),
) -> AssignmentResponse:
    partner_id: str = (payload.delivery_partner_id or "").strip()
    if not partner_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Delivery partner ID required")
    order: Order = order_service.require_order(db, order_id)
    order = order_service.assign_delivery_partner(db, order, partner_id)
    return AssignmentResponse(message="Delivery partner assigned successfully", order=serialize_order(order))


def _check_ratable(order: Order, role: str) -> None:
    if order.status != OrderStatus.DELIVERED.value:
        raise StateError("Can only rate delivered orders")
    if order_service.get_rating(order, role) is not None:
        raise AlreadyRatedError


@router.post("/{order_id}/rate", response_model=RatingResponse)
def rate_order(
    order_id: str,
    payload: OrderRatingCreate,
    db: Session = Depends(get_db),
) -> RatingResponse:
    """Customer rates a delivered order, then the restaurant aggregate is refreshed."""
    order: Order = order_service.require_order(db, order_id)
    if payload.customer_id != order.customer_id:
        raise AuthorizationError("Only the ordering customer can rate this order")
    _check_ratable(order, "customer")

    rating = order_service.add_rating(db, order, "customer", payload.rating, payload.review)
    restaurant_rating = refresh_restaurant_rating(db, order.restaurant_id)
    return RatingResponse(
        message="Rating submitted successfully",
        rating=RatingRead(rating=rating.rating, review=rating.review, rated_at=as_utc(rating.rated_at)),
        restaurant_rating=restaurant_rating,
    )


@router.post("/{order_id}/rate-customer", response_model=RatingResponse)
def rate_customer(
    order_id: str,
    payload: CustomerRatingCreate,
    db: Session = Depends(get_db),
) -> RatingResponse:
    """Restaurant rates the customer of a delivered order."""
    order: Order = order_service.require_order(db, order_id)
    if payload.restaurant_id != order.restaurant_id:
        raise AuthorizationError("Only the fulfilling restaurant can rate this customer")
    _check_ratable(order, "restaurant")

    rating = order_service.add_rating(db, order, "restaurant", payload.rating, payload.review)
    return RatingResponse(
        message="Rating submitted successfully",
        rating=RatingRead(rating=rating.rating, review=rating.review, rated_at=as_utc(rating.rated_at)),
    )
