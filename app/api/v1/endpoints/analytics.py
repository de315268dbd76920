"""Analytics endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services import analytics_service

router: APIRouter = APIRouter()


@router.get("/restaurant/{restaurant_id}")
def get_restaurant_analytics(
    restaurant_id: str,
    range_name: str | None = Query(default=None, alias="range"),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return analytics_service.restaurant_analytics(db, restaurant_id, range_name)


@router.get("/customer/{customer_id}")
def get_customer_analytics(
    customer_id: str,
    range_name: str | None = Query(default=None, alias="range"),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return analytics_service.customer_analytics(db, customer_id, range_name)


@router.get("/delivery/{rider_id}")
def get_delivery_analytics(
    rider_id: str,
    range_name: str | None = Query(default=None, alias="range"),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return analytics_service.delivery_analytics(db, rider_id, range_name)


@router.get("/admin")
def get_admin_analytics(
    range_name: str | None = Query(default=None, alias="range"),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return analytics_service.admin_analytics(db, range_name)
