"""
Response writer: create, update and delete a user's daily answer.

Public API
----------
create_response(db, user_id, question_id, response_date, content, mood_rating) -> Response
update_response(db, user_id, response_id, content, mood_rating)                -> Response
delete_response(db, user_id, response_id)                                      -> None
get_response_by_date(db, user_id, day)                                         -> Response | None

Invariants
----------
* One response per (user_id, response_date). Enforced by the
  `uq_response_user_date` constraint: create inserts directly and maps the
  store's unique violation to DuplicateResponseError. There is no
  existence check before the insert.
* Update and delete carry the ownership predicate in the statement itself
  (WHERE id = :id AND user_id = :uid). Zero affected rows means
  "not found", whether the row is missing or belongs to someone else.
* word_count is always recomputed from the stored content.
* Validation runs before any store round-trip.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from question_diary.core.errors import (
    ConstraintViolationError,
    DuplicateResponseError,
    InvalidContentError,
    InvalidMoodRatingError,
    QuestionNotFoundError,
    ResponseNotFoundError,
)
from question_diary.db.base import is_unique_violation, store_errors
from question_diary.models.question import Question
from question_diary.models.response import MOOD_MAX, MOOD_MIN, Response

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation helpers (pure)
# ---------------------------------------------------------------------------

def count_words(content: str) -> int:
    """Number of whitespace-delimited tokens."""
    return len(content.split())


def validate_content(content: Optional[str]) -> str:
    """Return the trimmed content or raise InvalidContentError."""
    stripped = content.strip() if isinstance(content, str) else ""
    if not stripped:
        raise InvalidContentError()
    return stripped


def validate_mood_rating(value: Any) -> Optional[int]:
    """None passes through; anything else must be an int in [MOOD_MIN, MOOD_MAX]."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidMoodRatingError(value, MOOD_MIN, MOOD_MAX)
    if not MOOD_MIN <= value <= MOOD_MAX:
        raise InvalidMoodRatingError(value, MOOD_MIN, MOOD_MAX)
    return value


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def create_response(
    db: Session,
    user_id: str,
    question_id: str,
    response_date: date,
    content: str,
    mood_rating: Optional[int] = None,
) -> Response:
    text = validate_content(content)
    mood = validate_mood_rating(mood_rating)

    with store_errors("create_response", db):
        if db.get(Question, question_id) is None:
            raise QuestionNotFoundError(question_id)

        response = Response(
            user_id=user_id,
            question_id=question_id,
            content=text,
            word_count=count_words(text),
            mood_rating=mood,
            response_date=response_date,
        )
        db.add(response)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if is_unique_violation(exc):
                logger.info("Duplicate response rejected user=%s day=%s", user_id, response_date)
                raise DuplicateResponseError(response_date) from exc
            logger.warning(
                "Constraint violation on create user=%s day=%s question=%s: %s",
                user_id, response_date, question_id, exc.orig,
            )
            raise ConstraintViolationError("create_response") from exc
        db.refresh(response)

    logger.info(
        "Response created id=%s user=%s day=%s words=%s",
        response.id, user_id, response_date, response.word_count,
    )
    return response


def update_response(
    db: Session,
    user_id: str,
    response_id: int,
    content: str,
    mood_rating: Optional[int] = None,
) -> Response:
    text = validate_content(content)
    mood = validate_mood_rating(mood_rating)

    with store_errors("update_response", db):
        result = db.execute(
            update(Response)
            .where(Response.id == response_id, Response.user_id == user_id)
            .values(
                content=text,
                word_count=count_words(text),
                mood_rating=mood,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            db.rollback()
            logger.info("Update matched no owned response id=%s user=%s", response_id, user_id)
            raise ResponseNotFoundError(response_id=response_id)
        db.commit()
        response = db.get(Response, response_id, populate_existing=True)
        if response is None:
            # deleted by another request after our commit
            raise ResponseNotFoundError(response_id=response_id)

    logger.info("Response updated id=%s user=%s", response_id, user_id)
    return response


def delete_response(db: Session, user_id: str, response_id: int) -> None:
    """Delete an owned response. A second delete of the same id raises ResponseNotFoundError."""
    with store_errors("delete_response", db):
        result = db.execute(
            delete(Response)
            .where(Response.id == response_id, Response.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount == 0:
            db.rollback()
            logger.info("Delete matched no owned response id=%s user=%s", response_id, user_id)
            raise ResponseNotFoundError(response_id=response_id)
        db.commit()

    logger.info("Response deleted id=%s user=%s", response_id, user_id)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_response_by_date(db: Session, user_id: str, day: date) -> Optional[Response]:
    with store_errors("get_response_by_date", db):
        return db.execute(
            select(Response).where(
                Response.user_id == user_id,
                Response.response_date == day,
            )
        ).scalar_one_or_none()
