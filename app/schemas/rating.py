"""Restaurant rating and quest schemas."""

from datetime import datetime

from app.schemas.base import ApiModel


class RestaurantRatingRead(ApiModel):
    order_id: str
    rating: int
    review: str
    rated_at: datetime


class RestaurantRatingListResponse(ApiModel):
    ratings: list[RestaurantRatingRead]
    count: int


class RatingStatsResponse(ApiModel):
    average_rating: float
    total_ratings: int
    rating_distribution: dict[int, int]


class RecalculateResponse(ApiModel):
    message: str
    average_rating: float
    total_ratings: int


class QuestRead(ApiModel):
    key: str
    title: str
    target: int
    progress: int
    completed: bool
    completed_at: datetime | None = None


class QuestListResponse(ApiModel):
    quests: list[QuestRead]
