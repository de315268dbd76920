"""Delivery partner endpoints: location updates, tracking and order pickup."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field
from sqlalchemy.orm import Session

from app.api.v1.endpoints.serializers import serialize_location, serialize_order
from app.core.errors import NotFoundError, StateError
from app.db.session import get_db
from app.models.order import Order
from app.schemas.base import ApiModel
from app.schemas.location import LocationEnvelope, LocationUpdate
from app.schemas.order import AssignmentResponse, OrderListResponse
from app.schemas.user import UserListResponse, UserRead
from app.services import location_service, order_service, user_service
from app.services.order_status import is_active

logger = logging.getLogger(__name__)
router: APIRouter = APIRouter()


class AcceptOrderRequest(ApiModel):
    rider_id: str = Field(min_length=1)


@router.put("/location", response_model=LocationEnvelope)
def update_location(payload: LocationUpdate, db: Session = Depends(get_db)) -> LocationEnvelope:
    """Store the rider's latest fix, optionally tagged with the order being served."""
    location = location_service.set_location(
        db,
        rider_id=payload.rider_id,
        lat=payload.lat,
        lng=payload.lng,
        order_id=payload.order_id,
    )
    return LocationEnvelope(location=serialize_location(location))


@router.get("/location/{rider_id}", response_model=LocationEnvelope)
def get_rider_location(rider_id: str, db: Session = Depends(get_db)) -> LocationEnvelope:
    location = location_service.get_location_by_rider_id(db, rider_id)
    if location is None:
        raise NotFoundError("Location not found")
    return LocationEnvelope(location=serialize_location(location))


@router.get("/track/{order_id}", response_model=LocationEnvelope)
def track_order(order_id: str, db: Session = Depends(get_db)) -> LocationEnvelope:
    """Return the current fix of the rider delivering order_id."""
    order: Order = order_service.require_order(db, order_id)
    if not order.delivery_partner_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No delivery partner assigned")
    location = order_service.get_delivery_partner_location(db, order)
    if location is None:
        location = location_service.get_location_by_order_id(db, order.id)
    return LocationEnvelope(location=serialize_location(location))


@router.get("/available-orders", response_model=OrderListResponse)
def get_available_orders(db: Session = Depends(get_db)) -> OrderListResponse:
    orders = [order for order in order_service.get_pending_orders(db) if order.delivery_partner_id is None]
    return OrderListResponse(orders=[serialize_order(order) for order in orders], count=len(orders))


@router.get("/riders/free", response_model=UserListResponse)
def get_free_riders(db: Session = Depends(get_db)) -> UserListResponse:
    riders = user_service.find_free_riders(db)
    return UserListResponse(users=[UserRead.model_validate(rider) for rider in riders], count=len(riders))


@router.post("/orders/{order_id}/accept", response_model=AssignmentResponse)
def accept_order(order_id: str, payload: AcceptOrderRequest, db: Session = Depends(get_db)) -> AssignmentResponse:
    """Assign order to the requesting rider when the rider has no other active delivery."""
    order: Order = order_service.require_order(db, order_id)
    if not is_active(order.status):
        raise StateError(f"Order is already {order.status}")
    if order.delivery_partner_id and order.delivery_partner_id != payload.rider_id:
        raise StateError("Order already has a delivery partner")
    if order.delivery_partner_id != payload.rider_id and user_service.is_rider_busy(db, payload.rider_id):
        raise StateError("Rider already has an active delivery")

    order = order_service.assign_delivery_partner(db, order, payload.rider_id)
    logger.info("Rider %s accepted order %s", payload.rider_id, order.id)
    return AssignmentResponse(message="Order accepted", order=serialize_order(order))
