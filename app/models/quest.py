"""Gamification quest progress model."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class QuestProgress(Base):
    """Per-customer progress towards one quest."""

    __tablename__ = "quest_progress"
    __table_args__ = (
        UniqueConstraint("customer_id", "quest_key", name="uq_quest_progress_customer_quest"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    quest_key: Mapped[str] = mapped_column(String(32), nullable=False)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    target: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
