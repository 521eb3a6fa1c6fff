from .question import Question, QuestionCategory, QuestionDifficulty
from .daily_question import DailyQuestion
from .response import Response

__all__ = [
    "Question",
    "QuestionCategory",
    "QuestionDifficulty",
    "DailyQuestion",
    "Response",
]
