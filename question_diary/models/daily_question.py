from datetime import datetime, date
from sqlalchemy import Integer, String, DateTime, Date, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from question_diary.db.base import Base


class DailyQuestion(Base):
    """One question per calendar day. Written by the external scheduler."""

    __tablename__ = "daily_questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    question_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("questions.id"), nullable=False, index=True
    )
    assigned_date: Mapped[date] = mapped_column(Date, nullable=False, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
