"""
Responses router.

POST   /responses                 : answer a day (one per user per day)
GET    /responses                 : search the caller's history
GET    /responses/by-date/{day}   : the caller's answer for a date
PUT    /responses/{response_id}   : edit an owned answer
DELETE /responses/{response_id}   : delete an owned answer
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response as HTTPResponse, status
from sqlalchemy.orm import Session

from question_diary.core.clock import reference_today
from question_diary.core.errors import ResponseNotFoundError
from question_diary.db.base import get_db
from question_diary.models.question import QuestionCategory
from question_diary.routers.dependencies import get_current_user_id
from question_diary.routers.serialization import response_to_out, view_to_out
from question_diary.schemas.common import ErrorResponse
from question_diary.schemas.response import (
    HistoryListResponse,
    ResponseCreate,
    ResponseOut,
    ResponseUpdate,
)
from question_diary.services.history import HistoryFilters, search_history
from question_diary.services.response_writer import (
    create_response,
    delete_response,
    get_response_by_date,
    update_response,
)

router = APIRouter(prefix="/responses", tags=["responses"])


# ---------------------------------------------------------------------------
# POST /responses
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=ResponseOut,
    status_code=status.HTTP_201_CREATED,
    summary="Answer a day's question",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown question_id."},
        409: {"model": ErrorResponse, "description": "Already answered that day; edit instead."},
        422: {"model": ErrorResponse, "description": "Blank content or mood rating outside 1–10."},
    },
)
def create(
    payload: ResponseCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Store the caller's answer. `word_count` is computed from the content;
    any client-supplied value is ignored.

    Two submissions for the same day (double-click, two tabs) produce one
    201 and one **409 DUPLICATE_RESPONSE**, never two rows.
    """
    response = create_response(
        db=db,
        user_id=user_id,
        question_id=payload.question_id,
        response_date=payload.response_date or reference_today(),
        content=payload.content,
        mood_rating=payload.mood_rating,
    )
    return response_to_out(response)


# ---------------------------------------------------------------------------
# GET /responses
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=HistoryListResponse,
    summary="Search answered days (newest first)",
)
def search(
    q: Optional[str] = Query(default=None, max_length=200, description="Keyword in answer or question text."),
    category: Optional[QuestionCategory] = Query(default=None),
    mood_min: Optional[int] = Query(default=None, ge=1, le=10),
    mood_max: Optional[int] = Query(default=None, ge=1, le=10),
    start: Optional[date] = Query(default=None, description="Earliest date, inclusive."),
    end: Optional[date] = Query(default=None, description="Latest date, inclusive."),
    limit: int = Query(default=20, ge=1, le=200, description="Page size."),
    offset: int = Query(default=0, ge=0, description="Skip N items."),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    filters = HistoryFilters(
        query=q,
        category=category.value if category else None,
        mood_min=mood_min,
        mood_max=mood_max,
        start=start,
        end=end,
    )
    total, items = search_history(db, user_id, filters, limit=limit, offset=offset)
    return HistoryListResponse(total=total, items=[view_to_out(v) for v in items])


# ---------------------------------------------------------------------------
# GET /responses/by-date/{day}
# ---------------------------------------------------------------------------

@router.get(
    "/by-date/{day}",
    response_model=ResponseOut,
    summary="The caller's answer for a date",
    responses={404: {"model": ErrorResponse, "description": "No answer for that date."}},
)
def by_date(
    day: date,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    response = get_response_by_date(db, user_id, day)
    if response is None:
        raise ResponseNotFoundError(day=day)
    return response_to_out(response)


# ---------------------------------------------------------------------------
# PUT /responses/{response_id}
# ---------------------------------------------------------------------------

@router.put(
    "/{response_id}",
    response_model=ResponseOut,
    summary="Edit an owned answer",
    responses={
        404: {"model": ErrorResponse, "description": "No such answer owned by the caller."},
        422: {"model": ErrorResponse, "description": "Blank content or mood rating outside 1–10."},
    },
)
def update(
    response_id: int,
    payload: ResponseUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Replace content and mood. Date and identity are preserved."""
    response = update_response(
        db=db,
        user_id=user_id,
        response_id=response_id,
        content=payload.content,
        mood_rating=payload.mood_rating,
    )
    return response_to_out(response)


# ---------------------------------------------------------------------------
# DELETE /responses/{response_id}
# ---------------------------------------------------------------------------

@router.delete(
    "/{response_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an owned answer",
    responses={404: {"model": ErrorResponse, "description": "No such answer owned by the caller (including a repeated delete)."}},
)
def remove(
    response_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    delete_response(db=db, user_id=user_id, response_id=response_id)
    return HTTPResponse(status_code=status.HTTP_204_NO_CONTENT)
