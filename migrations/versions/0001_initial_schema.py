"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17 00:00:00.000000

questions and daily_questions are written by the external catalog /
scheduling jobs; responses are owned by this service. The
(user_id, response_date) unique constraint is the one-answer-per-day rule.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_CATEGORIES = (
    "personal_growth", "relationships", "goals", "creativity", "reflection", "gratitude",
)
_DIFFICULTIES = ("easy", "medium", "hard")


def upgrade() -> None:
    # --- ENUM types ---
    category_enum = sa.Enum(*_CATEGORIES, name="question_category_enum")
    category_enum.create(op.get_bind(), checkfirst=True)

    difficulty_enum = sa.Enum(*_DIFFICULTIES, name="question_difficulty_enum")
    difficulty_enum.create(op.get_bind(), checkfirst=True)

    # --- questions ---
    op.create_table(
        "questions",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("category", sa.Enum(
            *_CATEGORIES, name="question_category_enum", create_type=False,
        ), nullable=False),
        sa.Column("difficulty", sa.Enum(
            *_DIFFICULTIES, name="question_difficulty_enum", create_type=False,
        ), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_questions_category", "questions", ["category"])

    # --- daily_questions ---
    op.create_table(
        "daily_questions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("question_id", sa.String(64), sa.ForeignKey("questions.id"), nullable=False),
        sa.Column("assigned_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_daily_questions_id", "daily_questions", ["id"])
    op.create_index("ix_daily_questions_question_id", "daily_questions", ["question_id"])
    op.create_index("ix_daily_questions_assigned_date", "daily_questions", ["assigned_date"], unique=True)

    # --- responses ---
    op.create_table(
        "responses",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("question_id", sa.String(64), sa.ForeignKey("questions.id"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("word_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("mood_rating", sa.Integer(), nullable=True),
        sa.Column("response_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "response_date", name="uq_response_user_date"),
        sa.CheckConstraint(
            "mood_rating IS NULL OR (mood_rating >= 1 AND mood_rating <= 10)",
            name="ck_response_mood_range",
        ),
    )
    op.create_index("ix_responses_id", "responses", ["id"])
    op.create_index("ix_responses_user_id", "responses", ["user_id"])
    op.create_index("ix_responses_question_id", "responses", ["question_id"])
    op.create_index("ix_responses_response_date", "responses", ["response_date"])


def downgrade() -> None:
    op.drop_index("ix_responses_response_date", table_name="responses")
    op.drop_index("ix_responses_question_id", table_name="responses")
    op.drop_index("ix_responses_user_id", table_name="responses")
    op.drop_index("ix_responses_id", table_name="responses")
    op.drop_table("responses")

    op.drop_index("ix_daily_questions_assigned_date", table_name="daily_questions")
    op.drop_index("ix_daily_questions_question_id", table_name="daily_questions")
    op.drop_index("ix_daily_questions_id", table_name="daily_questions")
    op.drop_table("daily_questions")

    op.drop_index("ix_questions_category", table_name="questions")
    op.drop_table("questions")

    sa.Enum(name="question_difficulty_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="question_category_enum").drop(op.get_bind(), checkfirst=True)
