"""Restaurant catalogue endpoints."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.endpoints.serializers import serialize_restaurant
from app.db.session import get_db
from app.schemas.restaurant import (
    MenuUpdate,
    NearbyRestaurant,
    NearbyRestaurantListResponse,
    RestaurantCreate,
    RestaurantEnvelope,
    RestaurantListResponse,
    RestaurantUpdate,
)
from app.services import restaurant_service

router: APIRouter = APIRouter()


@router.post("", response_model=RestaurantEnvelope, status_code=status.HTTP_201_CREATED)
def create_restaurant(payload: RestaurantCreate, db: Session = Depends(get_db)) -> RestaurantEnvelope:
    restaurant = restaurant_service.create_restaurant(db, payload.model_dump(by_alias=False))
    return RestaurantEnvelope(restaurant=serialize_restaurant(restaurant))


@router.get("", response_model=RestaurantListResponse)
def list_restaurants(
    owner_id: str | None = Query(default=None, alias="ownerId"),
    db: Session = Depends(get_db),
) -> RestaurantListResponse:
    """Return active restaurants, or every restaurant owned by ownerId."""
    if owner_id:
        restaurants = restaurant_service.list_restaurants_for_owner(db, owner_id)
    else:
        restaurants = restaurant_service.list_active_restaurants(db)
    return RestaurantListResponse(
        restaurants=[serialize_restaurant(restaurant) for restaurant in restaurants],
        count=len(restaurants),
    )


@router.get("/nearby", response_model=NearbyRestaurantListResponse)
def list_nearby_restaurants(
    lat: float = Query(ge=-90, le=90),
    lng: float = Query(ge=-180, le=180),
    radius_km: float = Query(default=5.0, gt=0, alias="radiusKm"),
    db: Session = Depends(get_db),
) -> NearbyRestaurantListResponse:
    matches = restaurant_service.find_nearby_restaurants(db, lat, lng, radius_km)
    restaurants = [
        NearbyRestaurant(**serialize_restaurant(restaurant).model_dump(), distance_km=round(distance, 2))
        for restaurant, distance in matches
    ]
    return NearbyRestaurantListResponse(restaurants=restaurants, count=len(restaurants))


@router.get("/{restaurant_id}", response_model=RestaurantEnvelope)
def get_restaurant(restaurant_id: str, db: Session = Depends(get_db)) -> RestaurantEnvelope:
    restaurant = restaurant_service.require_restaurant(db, restaurant_id)
    return RestaurantEnvelope(restaurant=serialize_restaurant(restaurant))


@router.put("/{restaurant_id}", response_model=RestaurantEnvelope)
def update_restaurant(
    restaurant_id: str,
    payload: RestaurantUpdate,
    db: Session = Depends(get_db),
) -> RestaurantEnvelope:
    """Apply the fields present in the body; an explicit null location clears it."""
    restaurant = restaurant_service.require_restaurant(db, restaurant_id)
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True, by_alias=False).items()
        if value is not None or field == "location"
    }
    restaurant = restaurant_service.update_restaurant(db, restaurant, changes)
    return RestaurantEnvelope(restaurant=serialize_restaurant(restaurant))


@router.put("/{restaurant_id}/menu", response_model=RestaurantEnvelope)
def update_restaurant_menu(
    restaurant_id: str,
    payload: MenuUpdate,
    db: Session = Depends(get_db),
) -> RestaurantEnvelope:
    restaurant = restaurant_service.require_restaurant(db, restaurant_id)
    restaurant = restaurant_service.update_menu(db, restaurant, payload.menu)
    return RestaurantEnvelope(restaurant=serialize_restaurant(restaurant))
