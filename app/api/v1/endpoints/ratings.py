"""Restaurant rating endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.rating import (
    RatingStatsResponse,
    RecalculateResponse,
    RestaurantRatingListResponse,
    RestaurantRatingRead,
)
from app.services import rating_service
from app.utils.time import as_utc

router: APIRouter = APIRouter()


@router.get("/restaurant/{restaurant_id}", response_model=RestaurantRatingListResponse)
def get_restaurant_ratings(restaurant_id: str, db: Session = Depends(get_db)) -> RestaurantRatingListResponse:
    ratings = [
        RestaurantRatingRead(
            order_id=rating.order_id,
            rating=rating.rating,
            review=rating.review,
            rated_at=as_utc(rating.rated_at),
        )
        for rating in rating_service.get_restaurant_ratings(db, restaurant_id)
    ]
    return RestaurantRatingListResponse(ratings=ratings, count=len(ratings))


@router.get("/restaurant/{restaurant_id}/stats", response_model=RatingStatsResponse)
def get_restaurant_rating_stats(restaurant_id: str, db: Session = Depends(get_db)) -> RatingStatsResponse:
    return RatingStatsResponse.model_validate(rating_service.get_restaurant_rating_stats(db, restaurant_id))


@router.post("/restaurant/{restaurant_id}/recalculate", response_model=RecalculateResponse)
def recalculate_restaurant_rating(restaurant_id: str, db: Session = Depends(get_db)) -> RecalculateResponse:
    result = rating_service.update_restaurant_rating(db, restaurant_id)
    return RecalculateResponse(message="Restaurant rating recalculated successfully", **result)
