"""Customer quest progress tracking."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.order import Order
from app.models.quest import QuestProgress
from app.services.order_status import OrderStatus
from app.utils.time import utcnow


@dataclass(frozen=True)
class Quest:
    key: str
    title: str
    target: int
    metric: str


QUESTS: tuple[Quest, ...] = (
    Quest(key="first_order", title="Place your first order", target=1, metric="orders"),
    Quest(key="regular", title="Place five orders", target=5, metric="orders"),
    Quest(key="explorer", title="Order from three different restaurants", target=3, metric="restaurants"),
)


def _customer_metrics(db: Session, customer_id: str) -> dict[str, int]:
    base = db.query(Order).filter(
        Order.customer_id == customer_id,
        Order.status != OrderStatus.CANCELLED.value,
    )
    return {
        "orders": base.count(),
        "restaurants": base.with_entities(func.count(func.distinct(Order.restaurant_id))).scalar() or 0,
    }


def update_quest_progress(db: Session, customer_id: str) -> list[QuestProgress]:
    """Recompute every quest for customer; completion is stamped once."""
    metrics = _customer_metrics(db, customer_id)
    existing: dict[str, QuestProgress] = {
        row.quest_key: row
        for row in db.query(QuestProgress).filter(QuestProgress.customer_id == customer_id).all()
    }
    now = utcnow()
    rows: list[QuestProgress] = []
    for quest in QUESTS:
        row = existing.get(quest.key)
        if row is None:
            row = QuestProgress(customer_id=customer_id, quest_key=quest.key, target=quest.target, progress=0)
            db.add(row)
        row.progress = min(metrics[quest.metric], quest.target)
        if row.progress >= quest.target and row.completed_at is None:
            row.completed_at = now
        rows.append(row)
    db.commit()
    return rows


def list_quest_progress(db: Session, customer_id: str) -> list[dict[str, object]]:
    rows: dict[str, QuestProgress] = {
        row.quest_key: row
        for row in db.query(QuestProgress).filter(QuestProgress.customer_id == customer_id).all()
    }
    result: list[dict[str, object]] = []
    for quest in QUESTS:
        row = rows.get(quest.key)
        result.append(
            {
                "key": quest.key,
                "title": quest.title,
                "target": quest.target,
                "progress": row.progress if row else 0,
                "completed": bool(row and row.completed_at),
                "completed_at": row.completed_at if row else None,
            }
        )
    return result


def count_completed_quests(db: Session, customer_id: str) -> int:
    return (
        db.query(QuestProgress)
        .filter(QuestProgress.customer_id == customer_id, QuestProgress.completed_at.is_not(None))
        .count()
    )
