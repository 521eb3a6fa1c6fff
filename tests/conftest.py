"""
Shared pytest fixtures.

Uses a file-backed SQLite database so no Postgres is required for tests.
A file (rather than :memory:) lets several sessions, and threads, share the
same data, which the concurrent-create tests rely on.

Isolation: every test gets its own user id, and tests that need a schedule
entry draw a fresh date from `fresh_day`, so rows from one test never show
up in another's assertions.
"""
import itertools
import os
import uuid
from datetime import date, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_diary.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from question_diary.db.base import Base, get_db
from question_diary.main import app
from question_diary.models.daily_question import DailyQuestion
from question_diary.models.question import Question, QuestionCategory, QuestionDifficulty

SQLITE_URL = "sqlite:///./test_diary.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False, "timeout": 15})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# One catalog question per category: id "q-<category>"
_SEED_QUESTIONS = [
    (f"q-{c.value}", f"A {c.value.replace('_', ' ')} question?", c, QuestionDifficulty.medium)
    for c in QuestionCategory
]

# Schedule dates handed out to tests, one per call, never reused.
_day_counter = itertools.count()
_DAY_BASE = date(2080, 1, 1)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    # Seed the catalog (normally done by the external seeding job)
    db = TestingSessionLocal()
    try:
        for qid, text, category, difficulty in _SEED_QUESTIONS:
            db.add(Question(id=qid, text=text, category=category, difficulty=difficulty, is_active=True))
        db.add(Question(
            id="q-retired",
            text="A retired question",
            category=QuestionCategory.reflection,
            difficulty=QuestionDifficulty.easy,
            is_active=False,
        ))
        db.commit()
    finally:
        db.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def session_factory():
    return TestingSessionLocal


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def user_id() -> str:
    return f"user-{uuid.uuid4().hex}"


@pytest.fixture()
def other_user_id() -> str:
    return f"user-{uuid.uuid4().hex}"


@pytest.fixture()
def question_ids() -> dict[str, str]:
    """category value → seeded question id"""
    return {c.value: f"q-{c.value}" for c in QuestionCategory}


@pytest.fixture()
def fresh_day():
    """Return a callable producing a schedule date no other test uses."""
    def _next() -> date:
        return _DAY_BASE + timedelta(days=next(_day_counter))
    return _next


@pytest.fixture()
def assign(db):
    """Schedule `question_id` on `day` (what the external scheduler would do)."""
    def _assign(day: date, question_id: str) -> DailyQuestion:
        row = DailyQuestion(question_id=question_id, assigned_date=day)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    return _assign
