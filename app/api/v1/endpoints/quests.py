"""Quest progress endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.rating import QuestListResponse, QuestRead
from app.services import quest_service
from app.utils.time import as_utc

router: APIRouter = APIRouter()


@router.get("/{customer_id}", response_model=QuestListResponse)
def get_quests(customer_id: str, db: Session = Depends(get_db)) -> QuestListResponse:
    quests = [
        QuestRead(**{**quest, "completed_at": as_utc(quest["completed_at"])})
        for quest in quest_service.list_quest_progress(db, customer_id)
    ]
    return QuestListResponse(quests=quests)
