"""
Response: a user's answer for one calendar day.

The (user_id, response_date) unique constraint is the one-answer-per-day
invariant. Inserts rely on it instead of a prior existence check, so two
concurrent submissions for the same day resolve to exactly one row.
"""
from datetime import datetime, date
from sqlalchemy import (
    Integer, String, Text, DateTime, Date, ForeignKey, func,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from question_diary.db.base import Base

MOOD_MIN = 1
MOOD_MAX = 10


class Response(Base):
    __tablename__ = "responses"
    __table_args__ = (
        UniqueConstraint("user_id", "response_date", name="uq_response_user_date"),
        CheckConstraint(
            f"mood_rating IS NULL OR (mood_rating >= {MOOD_MIN} AND mood_rating <= {MOOD_MAX})",
            name="ck_response_mood_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    question_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("questions.id"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    word_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    mood_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    response_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
