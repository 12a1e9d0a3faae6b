"""
Quiz service - timed quizzes, answer accumulation and grading results.
"""

from .models import (
    DifficultyLevel,
    QuizStatus,
    QuizQuestion,
    Quiz,
    QuizAnswer,
    AnswerResult,
    QuizResult,
    AnswerSheet
)
from .quiz_api import QuizAPI
from .quiz_controller import QuizController

__all__ = [
    'DifficultyLevel',
    'QuizStatus',
    'QuizQuestion',
    'Quiz',
    'QuizAnswer',
    'AnswerResult',
    'QuizResult',
    'AnswerSheet',
    'QuizAPI',
    'QuizController'
]
