"""
ORM / service result → response schema mapping shared by the routers.
"""
from datetime import datetime
from typing import Optional

from question_diary.models.question import Question
from question_diary.models.response import Response
from question_diary.schemas.question import DailySummaryOut, QuestionOut
from question_diary.schemas.response import ResponseOut
from question_diary.services.daily_summary import DailySummaryView, _ev


def _iso(ts: Optional[datetime]) -> Optional[str]:
    return ts.isoformat() if ts else None


def view_to_out(view: DailySummaryView) -> DailySummaryOut:
    return DailySummaryOut(
        assigned_date=str(view.assigned_date),
        question_id=view.question_id,
        question_text=view.question_text,
        category=view.category,
        difficulty=view.difficulty,
        response_id=view.response_id,
        response_content=view.response_content,
        word_count=view.word_count,
        mood_rating=view.mood_rating,
        response_created_at=_iso(view.response_created_at),
        response_updated_at=_iso(view.response_updated_at),
        is_completed=view.is_completed,
    )


def question_to_out(q: Question) -> QuestionOut:
    return QuestionOut(
        id=q.id,
        text=q.text,
        category=_ev(q.category),
        difficulty=_ev(q.difficulty),
        created_at=_iso(q.created_at) or "",
    )


def response_to_out(r: Response) -> ResponseOut:
    return ResponseOut(
        id=r.id,
        question_id=r.question_id,
        content=r.content,
        word_count=r.word_count,
        mood_rating=r.mood_rating,
        response_date=str(r.response_date),
        created_at=_iso(r.created_at) or "",
        updated_at=_iso(r.updated_at) or "",
    )
