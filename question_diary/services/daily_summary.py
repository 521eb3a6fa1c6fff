"""
DailySummaryView: the canonical per-day row.

Joins a day's Question with the user's Response (if any). Never persisted;
rebuilt from the owning tables on every read. Used by the "today" screen,
history and every statistics function.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from question_diary.models.question import Question
from question_diary.models.response import Response


def _ev(v) -> str:
    """Extract bare string value from a str-enum or plain str."""
    return v.value if hasattr(v, "value") else str(v)


@dataclass(frozen=True)
class DailySummaryView:
    assigned_date: date
    question_id: str
    question_text: str
    category: str
    difficulty: str
    # Response fields; all None when the day has not been answered.
    response_id: Optional[int] = None
    response_content: Optional[str] = None
    word_count: Optional[int] = None
    mood_rating: Optional[int] = None
    response_created_at: Optional[datetime] = None
    response_updated_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return bool(self.response_content and self.response_content.strip())


def build_view(day: date, question: Question, response: Optional[Response]) -> DailySummaryView:
    if response is None:
        return DailySummaryView(
            assigned_date=day,
            question_id=question.id,
            question_text=question.text,
            category=_ev(question.category),
            difficulty=_ev(question.difficulty),
        )
    return DailySummaryView(
        assigned_date=day,
        question_id=question.id,
        question_text=question.text,
        category=_ev(question.category),
        difficulty=_ev(question.difficulty),
        response_id=response.id,
        response_content=response.content,
        word_count=response.word_count,
        mood_rating=response.mood_rating,
        response_created_at=response.created_at,
        response_updated_at=response.updated_at,
    )
