"""
Quiz service data models for quizzes, answers and grading results.
"""

from collections import OrderedDict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from pydantic import Field

from infrastructure.transport.envelope import ApiModel


class DifficultyLevel(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuizStatus(str, Enum):
    """Lifecycle of the controller's current quiz"""
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"


DIFFICULTY_LABELS = {
    DifficultyLevel.EASY: "Easy",
    DifficultyLevel.MEDIUM: "Medium",
    DifficultyLevel.HARD: "Hard",
}

# Tag colours used by the UI
DIFFICULTY_TYPES = {
    DifficultyLevel.EASY: "success",
    DifficultyLevel.MEDIUM: "warning",
    DifficultyLevel.HARD: "danger",
}


class QuizQuestion(ApiModel):
    """A generated question; ``correct_answer`` must not be shown before submission"""
    question_id: int
    question: str
    options: List[str] = Field(default_factory=list)
    correct_answer: Optional[str] = Field(default=None, repr=False)

    @property
    def prompt(self) -> str:
        return self.question

    def public_view(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"correct_answer"})


class Quiz(ApiModel):
    id: int
    user_id: Optional[int] = None
    difficulty: DifficultyLevel
    target_lang: Optional[str] = None
    questions: List[QuizQuestion] = Field(default_factory=list)
    total_score: int = 0
    user_score: Optional[int] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class QuizAnswer(ApiModel):
    question_id: int
    answer: str


class AnswerResult(ApiModel):
    question_id: int
    question: str = ""
    user_answer: Optional[str] = None
    correct_answer: str = ""
    is_correct: bool = False


class QuizResult(ApiModel):
    """Grading outcome, only ever produced by the server"""
    quiz_id: int
    user_score: int
    total_score: int
    difficulty: Optional[str] = None
    answer_results: List[AnswerResult] = Field(default_factory=list)
    completed_at: Optional[datetime] = None


class AnswerSheet:
    """
    In-progress answers keyed by question id.

    Setting an answer for a question that already has one overwrites it
    (last write wins) without changing its position.
    """

    def __init__(self):
        self._answers: "OrderedDict[int, str]" = OrderedDict()

    def set(self, question_id: int, answer: str):
        self._answers[question_id] = answer

    def get(self, question_id: int) -> Optional[str]:
        return self._answers.get(question_id)

    def clear(self):
        self._answers.clear()

    def snapshot(self) -> List[QuizAnswer]:
        """Freeze the current answers into submission order"""
        return [QuizAnswer(question_id=qid, answer=answer) for qid, answer in self._answers.items()]

    def __len__(self) -> int:
        return len(self._answers)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._answers

    def __iter__(self) -> Iterator[int]:
        return iter(self._answers)
