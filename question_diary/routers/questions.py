"""
Questions router.

GET /questions/today       : today's question + the caller's answer, if any
GET /questions/day/{day}   : same resolution for any date
GET /questions             : active catalog questions (paginated)
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from question_diary.db.base import get_db
from question_diary.models.question import QuestionCategory
from question_diary.routers.dependencies import get_current_user_id, get_reference_date
from question_diary.routers.serialization import question_to_out, view_to_out
from question_diary.schemas.common import ErrorResponse
from question_diary.schemas.question import QuestionListResponse, TodayResponse
from question_diary.services.question_assignment import (
    NotAssigned,
    Resolution,
    list_active_questions,
    resolve_day,
    resolve_today,
)

router = APIRouter(prefix="/questions", tags=["questions"])


def _resolution_to_response(result: Resolution) -> TodayResponse:
    if isinstance(result, NotAssigned):
        return TodayResponse(day=str(result.day), assigned=False, summary=None)
    return TodayResponse(
        day=str(result.assigned_date),
        assigned=True,
        summary=view_to_out(result),
    )


@router.get(
    "/today",
    response_model=TodayResponse,
    summary="Today's question and the caller's answer",
    responses={
        200: {"description": "Resolution for the reference date. `assigned=false` when nothing is scheduled."},
        401: {"model": ErrorResponse, "description": "Missing X-User-Id header."},
    },
)
def today(
    reference_date: date = Depends(get_reference_date),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Resolve the question scheduled for the reference date.

    - No assignment → `assigned=false`, `summary=null` (not an error).
    - Assigned but unanswered → `summary` with null response fields.
    - Answered → `summary` carries the stored answer.
    """
    return _resolution_to_response(resolve_today(db, user_id, reference_date))


@router.get(
    "/day/{day}",
    response_model=TodayResponse,
    summary="Question and answer for a specific date",
)
def day_summary(
    day: date,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return _resolution_to_response(resolve_day(db, user_id, day))


@router.get(
    "",
    response_model=QuestionListResponse,
    summary="List active questions (newest first)",
)
def list_questions(
    category: Optional[QuestionCategory] = Query(default=None, description="Filter by category."),
    limit: int = Query(default=10, ge=1, le=100, description="Page size."),
    offset: int = Query(default=0, ge=0, description="Skip N items."),
    db: Session = Depends(get_db),
):
    total, items = list_active_questions(
        db=db,
        limit=limit,
        offset=offset,
        category=category.value if category else None,
    )
    return QuestionListResponse(total=total, items=[question_to_out(q) for q in items])
