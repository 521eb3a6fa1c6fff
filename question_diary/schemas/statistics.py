"""
Statistics schemas.

GET /statistics/mood-trend   → MoodTrendResponse
GET /statistics/categories   → CategoryStatsResponse
GET /statistics/monthly      → MonthlyStatsResponse
GET /statistics/weekly       → WeeklyActivityResponse
GET /statistics/overview     → OverallSummaryResponse
"""
from pydantic import BaseModel, Field


class MoodTrendPointOut(BaseModel):
    date: str
    mood_rating: float = Field(description="Mean mood that day, one decimal.")
    count: int = Field(description="Rated responses that day.")


class MoodTrendResponse(BaseModel):
    end_date: str
    window_days: int
    points: list[MoodTrendPointOut] = Field(description="Only days with a rated response, oldest first.")


class CategoryStatOut(BaseModel):
    category: str
    count: int
    avg_mood: float = Field(description="0 when no response in the category is rated.")


class CategoryStatsResponse(BaseModel):
    items: list[CategoryStatOut]


class MonthlyStatOut(BaseModel):
    month: str = Field(examples=["2026-02"])
    total_responses: int
    avg_mood: float
    avg_word_count: int


class MonthlyStatsResponse(BaseModel):
    reference_date: str
    months: int
    items: list[MonthlyStatOut] = Field(description="Newest month first.")


class WeeklyStatOut(BaseModel):
    week_start: str = Field(description="Monday of the week.")
    total_responses: int
    avg_mood: float


class WeeklyActivityResponse(BaseModel):
    reference_date: str
    weeks: int
    items: list[WeeklyStatOut] = Field(description="Oldest week first.")


class OverallSummaryResponse(BaseModel):
    reference_date: str
    total_responses: int
    total_days: int
    mood_rating_count: int
    avg_mood: float
    avg_word_count: int
    current_streak: int
    longest_streak: int
