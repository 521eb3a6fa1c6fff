"""
Question / daily summary schemas.

GET /questions/today       → TodayResponse
GET /questions/day/{day}   → TodayResponse
GET /questions             → QuestionListResponse
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    category: str
    difficulty: str
    created_at: str


class QuestionListResponse(BaseModel):
    total: int
    items: list[QuestionOut]


class DailySummaryOut(BaseModel):
    """A day's question joined with the caller's answer (response fields null if unanswered)."""
    assigned_date: str
    question_id: str
    question_text: str
    category: str
    difficulty: str
    response_id: Optional[int] = None
    response_content: Optional[str] = None
    word_count: Optional[int] = None
    mood_rating: Optional[int] = None
    response_created_at: Optional[str] = None
    response_updated_at: Optional[str] = None
    is_completed: bool


class TodayResponse(BaseModel):
    """Resolution of a day. `assigned=false` means no question is scheduled; not an error."""
    day: str
    assigned: bool = Field(description="False when no question is scheduled for the day.")
    summary: Optional[DailySummaryOut] = Field(
        default=None,
        description="Populated when assigned=true, whether or not the day is answered.",
    )
