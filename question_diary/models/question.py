from datetime import datetime
from sqlalchemy import String, Text, Boolean, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column
import enum

from question_diary.db.base import Base


class QuestionCategory(str, enum.Enum):
    # Declaration order is the natural order used to break ties in statistics.
    personal_growth = "personal_growth"
    relationships = "relationships"
    goals = "goals"
    creativity = "creativity"
    reflection = "reflection"
    gratitude = "gratitude"


class QuestionDifficulty(str, enum.Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class Question(Base):
    """Catalog entry. Seeded externally; read-only for this service."""

    __tablename__ = "questions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(
        Enum(QuestionCategory, name="question_category_enum"), nullable=False, index=True
    )
    difficulty: Mapped[str] = mapped_column(
        Enum(QuestionDifficulty, name="question_difficulty_enum"),
        nullable=False,
        default=QuestionDifficulty.medium,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
