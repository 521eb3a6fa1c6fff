"""
Response request / response schemas.

POST /responses              → ResponseCreate → ResponseOut
PUT  /responses/{id}         → ResponseUpdate → ResponseOut
GET  /responses              → HistoryListResponse

Content emptiness and mood range are checked by the response writer (so
they surface as INVALID_CONTENT / INVALID_MOOD_RATING), not here. Unknown
fields such as a client-computed `word_count` are ignored.
"""
from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from question_diary.schemas.question import DailySummaryOut

CONTENT_MAX_LENGTH = 10_000


class ResponseCreate(BaseModel):
    question_id: str = Field(min_length=1, max_length=64)
    content: Annotated[str, Field(
        max_length=CONTENT_MAX_LENGTH,
        description="Answer text. Trimmed; must not be blank.",
        examples=["I'm grateful for a long walk with my sister."],
    )]
    mood_rating: Optional[int] = Field(
        default=None,
        description="Optional self-reported mood, 1–10.",
        examples=[7],
    )
    response_date: Optional[date] = Field(
        default=None,
        description="Day being answered. Defaults to today in the reference timezone.",
        examples=["2026-02-20"],
    )


class ResponseUpdate(BaseModel):
    content: Annotated[str, Field(max_length=CONTENT_MAX_LENGTH)]
    mood_rating: Optional[int] = None


class ResponseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    question_id: str
    content: str
    word_count: int
    mood_rating: Optional[int]
    response_date: str
    created_at: str
    updated_at: str


class HistoryListResponse(BaseModel):
    total: int
    items: list[DailySummaryOut]
