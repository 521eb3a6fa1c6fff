"""
Tests for the statistics functions (pure, no database).

Covered scenarios:
  A) mood trend    : per-day mean, unrated days left out, trailing window
  B) category stats: count over all answers, mean over rated answers only
  C) streaks       : 3 with today, 2 when today is missing, 0 when empty

Additional:
  - Half-up rounding of means
  - Tie-breaking on category order
  - Monthly / weekly windows and ordering
  - Overall summary totals and longest streak
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

import pytest

from question_diary.services.daily_summary import DailySummaryView
from question_diary.services.statistics import (
    category_stats,
    current_streak,
    longest_streak,
    monthly_stats,
    monthly_window_start,
    mood_trend,
    overall_summary,
    weekly_activity,
    weekly_window_start,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_ids = iter(range(1, 100_000))


def _row(
    day: date,
    mood: Optional[int] = None,
    category: str = "reflection",
    content: Optional[str] = "some words here",
) -> DailySummaryView:
    answered = content is not None
    return DailySummaryView(
        assigned_date=day,
        question_id=f"q-{category}",
        question_text="?",
        category=category,
        difficulty="medium",
        response_id=next(_ids) if answered else None,
        response_content=content,
        word_count=len(content.split()) if answered else None,
        mood_rating=mood,
    )


D = date


# ---------------------------------------------------------------------------
# Mood trend
# ---------------------------------------------------------------------------

class TestMoodTrend:

    def test_three_day_window_skips_unrated_day(self):
        history = [
            _row(D(2024, 1, 1), mood=8),
            _row(D(2024, 1, 2), mood=4),
            _row(D(2024, 1, 3), mood=None),
        ]
        points = mood_trend(history, end_date=D(2024, 1, 3), window_days=3)
        assert [(p.day, p.mood_rating) for p in points] == [
            (D(2024, 1, 1), 8.0),
            (D(2024, 1, 2), 4.0),
        ]

    def test_empty_history_is_empty(self):
        assert mood_trend([], end_date=D(2024, 1, 3), window_days=30) == []

    def test_window_excludes_days_before_start_and_after_end(self):
        history = [
            _row(D(2023, 12, 31), mood=9),   # one day before a 3-day window
            _row(D(2024, 1, 1), mood=5),
            _row(D(2024, 1, 4), mood=7),     # after end_date
        ]
        points = mood_trend(history, end_date=D(2024, 1, 3), window_days=3)
        assert [p.day for p in points] == [D(2024, 1, 1)]

    def test_output_is_sorted_even_if_input_is_not(self):
        history = [
            _row(D(2024, 1, 3), mood=3),
            _row(D(2024, 1, 1), mood=1),
            _row(D(2024, 1, 2), mood=2),
        ]
        points = mood_trend(history, end_date=D(2024, 1, 3), window_days=7)
        assert [p.day for p in points] == [D(2024, 1, 1), D(2024, 1, 2), D(2024, 1, 3)]

    def test_same_day_rows_are_averaged_half_up(self):
        # Only possible across users / merged histories, but the maths must hold.
        history = [_row(D(2024, 1, 1), mood=7), _row(D(2024, 1, 1), mood=8)]
        (point,) = mood_trend(history, end_date=D(2024, 1, 1), window_days=1)
        assert point.mood_rating == 7.5
        assert point.count == 2

    def test_mean_rounds_to_one_decimal(self):
        history = [
            _row(D(2024, 1, 1), mood=7),
            _row(D(2024, 1, 1), mood=8),
            _row(D(2024, 1, 1), mood=8),
        ]
        (point,) = mood_trend(history, end_date=D(2024, 1, 1), window_days=1)
        assert point.mood_rating == 7.7


# ---------------------------------------------------------------------------
# Category stats
# ---------------------------------------------------------------------------

class TestCategoryStats:

    def test_gratitude_and_goals_example(self):
        history = [
            _row(D(2024, 1, 1), mood=10, category="gratitude"),
            _row(D(2024, 1, 2), mood=8, category="gratitude"),
            _row(D(2024, 1, 3), mood=None, category="gratitude"),
            _row(D(2024, 1, 4), mood=6, category="goals"),
        ]
        stats = category_stats(history)
        assert [(s.category, s.count, s.avg_mood) for s in stats] == [
            ("gratitude", 3, 9.0),
            ("goals", 1, 6.0),
        ]

    def test_unrated_category_reports_zero(self):
        stats = category_stats([_row(D(2024, 1, 1), category="creativity")])
        assert stats[0].avg_mood == 0.0
        assert stats[0].avg_mood is not None

    def test_ties_follow_category_order(self):
        history = [
            _row(D(2024, 1, 1), category="gratitude"),
            _row(D(2024, 1, 2), category="relationships"),
            _row(D(2024, 1, 3), category="personal_growth"),
        ]
        assert [s.category for s in category_stats(history)] == [
            "personal_growth", "relationships", "gratitude",
        ]

    def test_unanswered_days_are_not_counted(self):
        history = [
            _row(D(2024, 1, 1), category="goals"),
            _row(D(2024, 1, 2), category="goals", content=None),
            _row(D(2024, 1, 3), category="goals", content="   "),
        ]
        (stat,) = category_stats(history)
        assert stat.count == 1

    def test_empty(self):
        assert category_stats([]) == []


# ---------------------------------------------------------------------------
# Monthly stats
# ---------------------------------------------------------------------------

class TestMonthlyStats:

    def test_window_start_crosses_year(self):
        assert monthly_window_start(D(2024, 1, 10), 12) == D(2023, 2, 1)
        assert monthly_window_start(D(2024, 3, 31), 1) == D(2024, 3, 1)

    def test_groups_by_month_newest_first(self):
        history = [
            _row(D(2024, 1, 31), mood=5),                       # outside 2-month window
            _row(D(2024, 2, 1), mood=4, content="one two"),
            _row(D(2024, 2, 2), mood=None, content="one two three"),
            _row(D(2024, 3, 5), mood=9, content="a"),
        ]
        items = monthly_stats(history, reference_date=D(2024, 3, 15), months=2)
        assert [m.month for m in items] == ["2024-03", "2024-02"]

        feb = items[1]
        assert feb.total_responses == 2
        assert feb.avg_mood == 4.0
        assert feb.avg_word_count == 3  # (2 + 3) / 2 = 2.5 → half-up

    def test_month_without_ratings_reports_zero_mood(self):
        (item,) = monthly_stats([_row(D(2024, 3, 1))], reference_date=D(2024, 3, 1))
        assert item.avg_mood == 0.0
        assert item.avg_word_count == 3

    def test_empty(self):
        assert monthly_stats([], reference_date=D(2024, 3, 1)) == []


# ---------------------------------------------------------------------------
# Weekly activity
# ---------------------------------------------------------------------------

class TestWeeklyActivity:

    def test_groups_by_monday(self):
        ref = D(2024, 1, 17)  # Wednesday
        assert weekly_window_start(ref, 2) == D(2024, 1, 4)
        history = [
            _row(D(2024, 1, 3), mood=1),    # before the window
            _row(D(2024, 1, 10), mood=6),
            _row(D(2024, 1, 15), mood=8),
            _row(D(2024, 1, 17), mood=None),
        ]
        items = weekly_activity(history, reference_date=ref, weeks=2)
        assert [(w.week_start, w.total_responses, w.avg_mood) for w in items] == [
            (D(2024, 1, 8), 1, 6.0),
            (D(2024, 1, 15), 2, 8.0),
        ]


# ---------------------------------------------------------------------------
# Streaks
# ---------------------------------------------------------------------------

class TestCurrentStreak:
    TODAY = D(2024, 3, 10)

    def _days_ago(self, *offsets: int) -> list[date]:
        return [self.TODAY - timedelta(days=o) for o in offsets]

    def test_today_yesterday_day_before_then_gap(self):
        dates = self._days_ago(0, 1, 2, 4, 5)
        assert current_streak(dates, self.TODAY) == 3

    def test_missing_today_counts_from_yesterday(self):
        dates = self._days_ago(1, 2, 4)
        assert current_streak(dates, self.TODAY) == 2

    def test_empty_history_is_zero(self):
        assert current_streak([], self.TODAY) == 0

    def test_gap_yesterday_breaks_streak(self):
        assert current_streak(self._days_ago(2, 3, 4), self.TODAY) == 0

    def test_only_today(self):
        assert current_streak(self._days_ago(0), self.TODAY) == 1

    def test_unsorted_and_duplicated_input(self):
        dates = self._days_ago(2, 0, 1, 1, 0, 2)
        assert current_streak(dates, self.TODAY) == 3

    def test_future_dates_are_ignored(self):
        dates = self._days_ago(-1, -2, 0, 1)
        assert current_streak(dates, self.TODAY) == 2

    def test_crosses_month_boundary(self):
        dates = [D(2024, 3, 1), D(2024, 2, 29), D(2024, 2, 28)]
        assert current_streak(dates, D(2024, 3, 1)) == 3


class TestLongestStreak:

    def test_finds_longest_run(self):
        dates = [D(2024, 1, d) for d in (1, 2, 3, 4, 10, 11, 20)]
        assert longest_streak(dates) == 4

    def test_empty(self):
        assert longest_streak([]) == 0

    def test_never_below_current_streak(self):
        ref = D(2024, 1, 20)
        dates = [D(2024, 1, d) for d in (1, 18, 19, 20)]
        assert longest_streak(dates, ref) >= current_streak(dates, ref) == 3


# ---------------------------------------------------------------------------
# Overall summary
# ---------------------------------------------------------------------------

class TestOverallSummary:

    def test_summary_fields(self):
        ref = D(2024, 5, 10)
        history = [
            _row(D(2024, 5, 1), mood=6, content="one two"),
            _row(D(2024, 5, 2), mood=None, content="one two three four"),
            _row(D(2024, 5, 9), mood=9, content="one two three"),
            _row(D(2024, 5, 10), mood=None, content="one two three four five six"),
        ]
        s = overall_summary(history, ref)
        assert s.total_responses == 4
        assert s.total_days == 4
        assert s.mood_rating_count == 2
        assert s.avg_mood == 7.5
        assert s.avg_word_count == 4   # 15 / 4 = 3.75
        assert s.current_streak == 2
        assert s.longest_streak == 2

    def test_empty_history(self):
        s = overall_summary([], D(2024, 5, 10))
        assert (s.total_responses, s.avg_mood, s.avg_word_count, s.current_streak, s.longest_streak) == (
            0, 0.0, 0, 0, 0,
        )

    @pytest.mark.parametrize("content", [None, ""])
    def test_unanswered_rows_are_ignored(self, content):
        s = overall_summary([_row(D(2024, 5, 10), mood=None, content=content)], D(2024, 5, 10))
        assert s.total_responses == 0
        assert s.current_streak == 0
