"""
Statistics over a user's response history.

Pure functions: input is a sequence of DailySummaryView rows (as returned by
`history.load_history`), output is frozen dataclasses. No store access, no
clock reads; the reference date is always passed in. Safe to call
concurrently.

Public API
----------
mood_trend(history, end_date, window_days)        -> list[MoodTrendPoint]   (oldest first)
category_stats(history)                           -> list[CategoryStat]     (count desc)
monthly_stats(history, reference_date, months)    -> list[MonthlyStat]      (newest first)
weekly_activity(history, reference_date, weeks)   -> list[WeeklyStat]       (oldest first)
overall_summary(history, reference_date)          -> OverallSummary
current_streak(dates, reference_date)             -> int
longest_streak(dates, reference_date)             -> int

Rounding
--------
Mood means: half-up to one decimal. Word-count means: half-up to an integer.
A group with nothing to average reports 0, never None.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence

from question_diary.models.question import QuestionCategory
from question_diary.services.daily_summary import DailySummaryView

_CATEGORY_ORDER = {c.value: i for i, c in enumerate(QuestionCategory)}


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MoodTrendPoint:
    day: date
    mood_rating: float   # mean of rated responses that day
    count: int           # rated responses that day


@dataclass(frozen=True)
class CategoryStat:
    category: str
    count: int
    avg_mood: float


@dataclass(frozen=True)
class MonthlyStat:
    month: str           # "YYYY-MM"
    total_responses: int
    avg_mood: float
    avg_word_count: int


@dataclass(frozen=True)
class WeeklyStat:
    week_start: date     # Monday
    total_responses: int
    avg_mood: float


@dataclass(frozen=True)
class OverallSummary:
    total_responses: int
    total_days: int
    mood_rating_count: int
    avg_mood: float
    avg_word_count: int
    current_streak: int
    longest_streak: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _mean(values: Sequence[int], places: str = "0.1") -> Decimal:
    if not values:
        return Decimal(0).quantize(Decimal(places))
    raw = Decimal(sum(values)) / Decimal(len(values))
    return raw.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def _mood_mean(values: Sequence[int]) -> float:
    return float(_mean(values, "0.1"))


def _word_mean(values: Sequence[int]) -> int:
    return int(_mean(values, "1"))


def _completed(history: Iterable[DailySummaryView]) -> list[DailySummaryView]:
    return [row for row in history if row.is_completed]


def _ratings(rows: Iterable[DailySummaryView]) -> list[int]:
    return [row.mood_rating for row in rows if row.mood_rating is not None]


def _month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


# ---------------------------------------------------------------------------
# Mood trend
# ---------------------------------------------------------------------------

def mood_trend(
    history: Iterable[DailySummaryView],
    end_date: date,
    window_days: int = 30,
) -> list[MoodTrendPoint]:
    """
    Mean mood per day over the `window_days` days ending on `end_date`
    inclusive. Days without a rated response are left out.
    """
    start = end_date - timedelta(days=window_days - 1)
    by_day: dict[date, list[int]] = defaultdict(list)
    for row in history:
        if row.mood_rating is None:
            continue
        if start <= row.assigned_date <= end_date:
            by_day[row.assigned_date].append(row.mood_rating)

    return [
        MoodTrendPoint(day=day, mood_rating=_mood_mean(ratings), count=len(ratings))
        for day, ratings in sorted(by_day.items())
    ]


# ---------------------------------------------------------------------------
# Category breakdown
# ---------------------------------------------------------------------------

def category_stats(history: Iterable[DailySummaryView]) -> list[CategoryStat]:
    """Completed responses per category. Ties on count keep the catalog order."""
    groups: dict[str, list[DailySummaryView]] = defaultdict(list)
    for row in _completed(history):
        groups[row.category].append(row)

    stats = [
        CategoryStat(
            category=category,
            count=len(rows),
            avg_mood=_mood_mean(_ratings(rows)),
        )
        for category, rows in groups.items()
    ]
    stats.sort(key=lambda s: (-s.count, _CATEGORY_ORDER.get(s.category, len(_CATEGORY_ORDER)), s.category))
    return stats


# ---------------------------------------------------------------------------
# Monthly rollup
# ---------------------------------------------------------------------------

def monthly_window_start(reference_date: date, months: int = 12) -> date:
    """First day of the oldest month in the window ending with reference_date's month."""
    year, month = _shift_month(reference_date.year, reference_date.month, -(months - 1))
    return date(year, month, 1)


def monthly_stats(
    history: Iterable[DailySummaryView],
    reference_date: date,
    months: int = 12,
) -> list[MonthlyStat]:
    """Per-month counts and means for the last `months` calendar months, newest first."""
    first = _month_key(monthly_window_start(reference_date, months))
    last = _month_key(reference_date)

    groups: dict[str, list[DailySummaryView]] = defaultdict(list)
    for row in _completed(history):
        key = _month_key(row.assigned_date)
        if first <= key <= last:
            groups[key].append(row)

    return [
        MonthlyStat(
            month=key,
            total_responses=len(rows),
            avg_mood=_mood_mean(_ratings(rows)),
            avg_word_count=_word_mean([r.word_count for r in rows if r.word_count is not None]),
        )
        for key, rows in sorted(groups.items(), reverse=True)
    ]


# ---------------------------------------------------------------------------
# Weekly activity
# ---------------------------------------------------------------------------

def weekly_window_start(reference_date: date, weeks: int = 12) -> date:
    return reference_date - timedelta(days=weeks * 7 - 1)


def weekly_activity(
    history: Iterable[DailySummaryView],
    reference_date: date,
    weeks: int = 12,
) -> list[WeeklyStat]:
    """Responses per Monday-based week within the trailing `weeks * 7` days, oldest first."""
    start = weekly_window_start(reference_date, weeks)
    groups: dict[date, list[DailySummaryView]] = defaultdict(list)
    for row in _completed(history):
        d = row.assigned_date
        if start <= d <= reference_date:
            groups[d - timedelta(days=d.weekday())].append(row)

    return [
        WeeklyStat(
            week_start=week_start,
            total_responses=len(rows),
            avg_mood=_mood_mean(_ratings(rows)),
        )
        for week_start, rows in sorted(groups.items())
    ]


# ---------------------------------------------------------------------------
# Streaks
# ---------------------------------------------------------------------------

def current_streak(dates: Iterable[date], reference_date: date) -> int:
    """
    Consecutive answered days ending at reference_date.

    If reference_date itself is unanswered the count starts from the day
    before: an unanswered "today" does not break a run that is still alive,
    it just does not add to it. Dates after reference_date are ignored.
    """
    answered = {d for d in dates if d <= reference_date}
    if not answered:
        return 0

    cursor = reference_date if reference_date in answered else reference_date - timedelta(days=1)
    streak = 0
    while cursor in answered:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def longest_streak(dates: Iterable[date], reference_date: Optional[date] = None) -> int:
    """Longest run of consecutive answered days (exact scan, not an estimate)."""
    answered = sorted({d for d in dates if reference_date is None or d <= reference_date})
    longest = 0
    run = 0
    previous: Optional[date] = None
    for d in answered:
        run = run + 1 if previous is not None and d - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = d
    return longest


# ---------------------------------------------------------------------------
# Overall summary
# ---------------------------------------------------------------------------

def overall_summary(
    history: Iterable[DailySummaryView],
    reference_date: date,
) -> OverallSummary:
    rows = _completed(history)
    ratings = _ratings(rows)
    days = [row.assigned_date for row in rows]
    return OverallSummary(
        total_responses=len(rows),
        total_days=len(set(days)),
        mood_rating_count=len(ratings),
        avg_mood=_mood_mean(ratings),
        avg_word_count=_word_mean([row.word_count or 0 for row in rows]),
        current_streak=current_streak(days, reference_date),
        longest_streak=longest_streak(days, reference_date),
    )
