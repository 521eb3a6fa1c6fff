"""
Question assignment: which question belongs to a day, and has the user answered it.

Public API
----------
resolve_today(db, user_id, reference_date)  -> DailySummaryView | NotAssigned
resolve_day(db, user_id, day)               -> DailySummaryView | NotAssigned
list_active_questions(db, limit, offset)    -> (total, list[Question])

All reads. No caching: the store may change between two calls, and two
calls with no write in between return equal values.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from question_diary.db.base import store_errors
from question_diary.models.daily_question import DailyQuestion
from question_diary.models.question import Question
from question_diary.models.response import Response
from question_diary.services.daily_summary import DailySummaryView, build_view

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotAssigned:
    """No question scheduled for `day`. An expected state, not a failure."""
    day: date


Resolution = Union[DailySummaryView, NotAssigned]


def resolve_day(db: Session, user_id: str, day: date) -> Resolution:
    with store_errors("resolve_day", db):
        row = db.execute(
            select(DailyQuestion, Question)
            .join(Question, Question.id == DailyQuestion.question_id)
            .where(DailyQuestion.assigned_date == day)
        ).first()
        if row is None:
            logger.info("No question assigned for %s", day)
            return NotAssigned(day=day)

        response = db.execute(
            select(Response).where(
                Response.user_id == user_id,
                Response.response_date == day,
            )
        ).scalar_one_or_none()

    _, question = row
    return build_view(day, question, response)


def resolve_today(db: Session, user_id: str, reference_date: date) -> Resolution:
    """Resolve the canonical reference date supplied by the caller."""
    return resolve_day(db, user_id, reference_date)


def list_active_questions(
    db: Session,
    limit: int = 10,
    offset: int = 0,
    category: Optional[str] = None,
) -> tuple[int, list[Question]]:
    """Return (total, page) of active catalog questions, newest first."""
    with store_errors("list_active_questions", db):
        q = db.query(Question).filter(Question.is_active.is_(True))
        if category:
            q = q.filter(Question.category == category)
        total = q.count()
        items = (
            q.order_by(Question.created_at.desc(), Question.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
    return total, items
