"""
Tests for history reads (load_history / search_history).
"""
from __future__ import annotations

from datetime import date

import pytest

from question_diary.services.history import HistoryFilters, load_history, search_history
from question_diary.services.response_writer import create_response


@pytest.fixture()
def seeded(db, user_id, other_user_id):
    """Five answers for `user_id`, one for someone else."""
    rows = [
        ("q-gratitude", date(2024, 2, 1), "Grateful for sunshine", 9),
        ("q-goals", date(2024, 2, 3), "Finish the marathon plan", 6),
        ("q-gratitude", date(2024, 2, 4), "Grateful for friends", None),
        ("q-creativity", date(2024, 2, 10), "Painted with watercolor", 3),
        ("q-reflection", date(2024, 3, 1), "Quiet week overall", 5),
    ]
    for qid, day, text, mood in rows:
        create_response(db, user_id, qid, day, text, mood)
    create_response(db, other_user_id, "q-gratitude", date(2024, 2, 1), "Grateful too", 8)
    return rows


class TestLoadHistory:

    def test_oldest_first_and_scoped_to_user(self, db, user_id, seeded):
        history = load_history(db, user_id)
        assert [v.assigned_date for v in history] == sorted(d for _, d, _, _ in seeded)
        assert all(v.response_content != "Grateful too" for v in history)

    def test_range_bounds_are_inclusive(self, db, user_id, seeded):
        history = load_history(db, user_id, start=date(2024, 2, 3), end=date(2024, 2, 10))
        assert [v.assigned_date for v in history] == [
            date(2024, 2, 3), date(2024, 2, 4), date(2024, 2, 10),
        ]

    def test_rows_carry_question_category(self, db, user_id, seeded):
        categories = {v.assigned_date: v.category for v in load_history(db, user_id)}
        assert categories[date(2024, 2, 10)] == "creativity"

    def test_unknown_user_is_empty(self, db, seeded):
        assert load_history(db, "nobody") == []


class TestSearchHistory:

    def test_no_filters_newest_first(self, db, user_id, seeded):
        total, items = search_history(db, user_id)
        assert total == 5
        assert items[0].assigned_date == date(2024, 3, 1)

    def test_keyword_is_case_insensitive(self, db, user_id, seeded):
        total, items = search_history(db, user_id, HistoryFilters(query="GRATEFUL"))
        assert total == 2
        assert {v.assigned_date for v in items} == {date(2024, 2, 1), date(2024, 2, 4)}

    def test_keyword_matches_question_text(self, db, user_id, seeded):
        total, _ = search_history(db, user_id, HistoryFilters(query="creativity question"))
        assert total == 1

    def test_category_filter(self, db, user_id, seeded):
        total, items = search_history(db, user_id, HistoryFilters(category="goals"))
        assert total == 1
        assert items[0].response_content == "Finish the marathon plan"

    def test_mood_range_excludes_unrated(self, db, user_id, seeded):
        total, items = search_history(db, user_id, HistoryFilters(mood_min=5, mood_max=9))
        assert total == 3
        assert all(v.mood_rating is not None and 5 <= v.mood_rating <= 9 for v in items)

    def test_date_range(self, db, user_id, seeded):
        total, _ = search_history(
            db, user_id, HistoryFilters(start=date(2024, 2, 2), end=date(2024, 2, 28))
        )
        assert total == 3

    def test_pagination_total_is_unpaged(self, db, user_id, seeded):
        total, items = search_history(db, user_id, limit=2, offset=1)
        assert total == 5
        assert [v.assigned_date for v in items] == [date(2024, 2, 10), date(2024, 2, 4)]

    def test_like_wildcards_are_literal(self, db, user_id):
        create_response(db, user_id, "q-goals", date(2024, 4, 1), "plain words only", 5)
        for query in ("_", "%"):
            total, _ = search_history(db, user_id, HistoryFilters(query=query))
            assert total == 0, query

    def test_percent_in_text_matches_itself(self, db, user_id):
        create_response(db, user_id, "q-goals", date(2024, 4, 2), "Saved 50% of budget", 5)
        create_response(db, user_id, "q-goals", date(2024, 4, 3), "Saved 500 coins", 5)
        total, items = search_history(db, user_id, HistoryFilters(query="50%"))
        assert total == 1
        assert items[0].assigned_date == date(2024, 4, 2)
