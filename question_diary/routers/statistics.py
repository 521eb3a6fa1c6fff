"""
Statistics router.

GET /statistics/mood-trend  : mean mood per day over a trailing window
GET /statistics/categories  : answers and mean mood per category
GET /statistics/monthly     : per-month rollup (last N months)
GET /statistics/weekly      : per-week activity (last N weeks)
GET /statistics/overview    : totals, means and streaks

Each endpoint does one history read bounded to the window it needs, then
hands the rows to the pure functions in `services.statistics`.
"""
from __future__ import annotations

from datetime import date, timedelta

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from question_diary.core.config import settings
from question_diary.db.base import get_db
from question_diary.routers.dependencies import get_current_user_id, get_reference_date
from question_diary.schemas.statistics import (
    CategoryStatOut,
    CategoryStatsResponse,
    MonthlyStatOut,
    MonthlyStatsResponse,
    MoodTrendPointOut,
    MoodTrendResponse,
    OverallSummaryResponse,
    WeeklyActivityResponse,
    WeeklyStatOut,
)
from question_diary.services import statistics as stats
from question_diary.services.history import load_history

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("/mood-trend", response_model=MoodTrendResponse, summary="Mood trend")
def mood_trend(
    days: int = Query(default=settings.MOOD_TREND_DAYS, ge=1, le=366, description="Window size in days."),
    reference_date: date = Depends(get_reference_date),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Mean mood per day for the `days` days ending on the reference date. Unrated days are omitted."""
    start = reference_date - timedelta(days=days - 1)
    history = load_history(db, user_id, start=start, end=reference_date)
    points = stats.mood_trend(history, reference_date, days)
    return MoodTrendResponse(
        end_date=str(reference_date),
        window_days=days,
        points=[
            MoodTrendPointOut(date=str(p.day), mood_rating=p.mood_rating, count=p.count)
            for p in points
        ],
    )


@router.get("/categories", response_model=CategoryStatsResponse, summary="Per-category breakdown")
def categories(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    items = stats.category_stats(load_history(db, user_id))
    return CategoryStatsResponse(
        items=[CategoryStatOut(category=s.category, count=s.count, avg_mood=s.avg_mood) for s in items]
    )


@router.get("/monthly", response_model=MonthlyStatsResponse, summary="Monthly rollup")
def monthly(
    months: int = Query(default=settings.MONTHLY_WINDOW_MONTHS, ge=1, le=120),
    reference_date: date = Depends(get_reference_date),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    start = stats.monthly_window_start(reference_date, months)
    history = load_history(db, user_id, start=start)
    items = stats.monthly_stats(history, reference_date, months)
    return MonthlyStatsResponse(
        reference_date=str(reference_date),
        months=months,
        items=[
            MonthlyStatOut(
                month=m.month,
                total_responses=m.total_responses,
                avg_mood=m.avg_mood,
                avg_word_count=m.avg_word_count,
            )
            for m in items
        ],
    )


@router.get("/weekly", response_model=WeeklyActivityResponse, summary="Weekly activity")
def weekly(
    weeks: int = Query(default=settings.WEEKLY_WINDOW_WEEKS, ge=1, le=104),
    reference_date: date = Depends(get_reference_date),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    start = stats.weekly_window_start(reference_date, weeks)
    history = load_history(db, user_id, start=start, end=reference_date)
    items = stats.weekly_activity(history, reference_date, weeks)
    return WeeklyActivityResponse(
        reference_date=str(reference_date),
        weeks=weeks,
        items=[
            WeeklyStatOut(
                week_start=str(w.week_start),
                total_responses=w.total_responses,
                avg_mood=w.avg_mood,
            )
            for w in items
        ],
    )


@router.get("/overview", response_model=OverallSummaryResponse, summary="Overall summary and streaks")
def overview(
    reference_date: date = Depends(get_reference_date),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Totals and means over all answers, plus:

    - **current_streak**: consecutive answered days ending today; if today
      is not answered yet, counted from yesterday.
    - **longest_streak**: longest run of consecutive answered days.
    """
    s = stats.overall_summary(load_history(db, user_id), reference_date)
    return OverallSummaryResponse(
        reference_date=str(reference_date),
        total_responses=s.total_responses,
        total_days=s.total_days,
        mood_rating_count=s.mood_rating_count,
        avg_mood=s.avg_mood,
        avg_word_count=s.avg_word_count,
        current_streak=s.current_streak,
        longest_streak=s.longest_streak,
    )
