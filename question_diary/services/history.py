"""
History reads: a user's answered days as DailySummaryView rows.

load_history(db, user_id, start, end)               -> list[DailySummaryView]  (oldest first)
search_history(db, user_id, filters, limit, offset) -> (total, list[DailySummaryView])  (newest first)

Both are plain range queries joining responses to their questions; the
statistics module consumes `load_history` output without touching the store.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from question_diary.db.base import store_errors
from question_diary.models.question import Question
from question_diary.models.response import Response
from question_diary.services.daily_summary import DailySummaryView, build_view


@dataclass
class HistoryFilters:
    """Search criteria; every field is optional and they combine with AND."""
    query: Optional[str] = None
    category: Optional[str] = None
    mood_min: Optional[int] = None
    mood_max: Optional[int] = None
    start: Optional[date] = None
    end: Optional[date] = None


def _base_query(user_id: str, *columns):
    return (
        select(*(columns or (Response, Question)))
        .select_from(Response)
        .join(Question, Question.id == Response.question_id)
        .where(Response.user_id == user_id)
    )


def load_history(
    db: Session,
    user_id: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[DailySummaryView]:
    """Return the user's responses in [start, end] (either bound optional), oldest first."""
    stmt = _base_query(user_id)
    if start is not None:
        stmt = stmt.where(Response.response_date >= start)
    if end is not None:
        stmt = stmt.where(Response.response_date <= end)
    stmt = stmt.order_by(Response.response_date.asc())

    with store_errors("load_history", db):
        rows = db.execute(stmt).all()
    return [build_view(r.response_date, q, r) for r, q in rows]


def _like_pattern(query: str) -> str:
    """Substring pattern with LIKE metacharacters taken literally."""
    escaped = (
        query.strip().lower()
        .replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
    return f"%{escaped}%"


def _apply_filters(stmt, filters: HistoryFilters):
    if filters.query:
        pattern = _like_pattern(filters.query)
        stmt = stmt.where(or_(
            func.lower(Response.content).like(pattern, escape="\\"),
            func.lower(Question.text).like(pattern, escape="\\"),
        ))
    if filters.category:
        stmt = stmt.where(Question.category == filters.category)
    if filters.mood_min is not None:
        stmt = stmt.where(Response.mood_rating >= filters.mood_min)
    if filters.mood_max is not None:
        stmt = stmt.where(Response.mood_rating <= filters.mood_max)
    if filters.start is not None:
        stmt = stmt.where(Response.response_date >= filters.start)
    if filters.end is not None:
        stmt = stmt.where(Response.response_date <= filters.end)
    return stmt


def search_history(
    db: Session,
    user_id: str,
    filters: Optional[HistoryFilters] = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[int, list[DailySummaryView]]:
    """Return (total, page) of matching days, newest first."""
    filters = filters or HistoryFilters()
    stmt = _apply_filters(_base_query(user_id), filters)
    count_stmt = _apply_filters(_base_query(user_id, func.count(Response.id)), filters)
    page_stmt = (
        stmt.order_by(Response.response_date.desc())
        .offset(offset)
        .limit(limit)
    )

    with store_errors("search_history", db):
        total = db.execute(count_stmt).scalar_one()
        rows = db.execute(page_stmt).all()
    return total, [build_view(r.response_date, q, r) for r, q in rows]
