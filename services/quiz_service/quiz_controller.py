"""
Quiz session controller - generation, answer accumulation and atomic submission.
"""

from datetime import datetime
from typing import Any, Dict, List, MutableMapping, Optional, Union

from infrastructure.transport.errors import ApiError, NoActiveQuizError, OperationInProgressError
from infrastructure.transport.pipeline import RequestPipeline
from services.base_controller import SessionStateController
from services.quiz_service.models import (
    DIFFICULTY_LABELS,
    DIFFICULTY_TYPES,
    AnswerSheet,
    DifficultyLevel,
    Quiz,
    QuizResult,
    QuizStatus,
)
from services.quiz_service.quiz_api import QuizAPI
from utils.logging_config import log_session_event


class QuizController(SessionStateController):
    """
    States: IDLE -> IN_PROGRESS -> SUBMITTED.

    Submission is not idempotent: calling ``submit_quiz`` again after a result
    exists grades the quiz a second time. Only overlapping submissions are refused.
    """

    namespace = "quiz"
    state_defaults = {
        "current_quiz": lambda: None,
        "result": lambda: None,
        "history": list,
        "answers": AnswerSheet,
        "status": lambda: QuizStatus.IDLE,
        "loading": lambda: False,
        "submitting": lambda: False,
        "history_loading": lambda: False,
        "error": lambda: None,
    }

    def __init__(
        self,
        pipeline: RequestPipeline,
        state: Optional[MutableMapping[str, Any]] = None,
        api: Optional[QuizAPI] = None,
    ):
        super().__init__(pipeline, state)
        self.api = api or QuizAPI(pipeline)

    # ------------------------------------------------------------------ state

    @property
    def current_quiz(self) -> Optional[Quiz]:
        return self._get("current_quiz")

    @property
    def quiz_result(self) -> Optional[QuizResult]:
        return self._get("result")

    @property
    def history(self) -> List[Quiz]:
        return list(self._get("history"))

    @property
    def answers(self) -> AnswerSheet:
        return self._get("answers")

    @property
    def status(self) -> QuizStatus:
        return self._get("status")

    @property
    def submitting(self) -> bool:
        return self._get("submitting")

    @property
    def history_loading(self) -> bool:
        return self._get("history_loading")

    @property
    def has_active_quiz(self) -> bool:
        return self.status == QuizStatus.IN_PROGRESS

    @property
    def is_quiz_completed(self) -> bool:
        quiz = self.current_quiz
        return (
            self.status == QuizStatus.SUBMITTED
            or self.quiz_result is not None
            or (quiz is not None and quiz.completed_at is not None)
        )

    @property
    def question_count(self) -> int:
        quiz = self.current_quiz
        return len(quiz.questions) if quiz else 0

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    @property
    def all_questions_answered(self) -> bool:
        if self.current_quiz is None:
            return False
        return self.answered_count == self.question_count

    @property
    def history_count(self) -> int:
        return len(self._get("history"))

    def visible_questions(self) -> List[Dict[str, Any]]:
        """Questions as the UI may show them; correct answers only after grading"""
        quiz = self.current_quiz
        if quiz is None:
            return []
        if self.is_quiz_completed:
            return [question.model_dump() for question in quiz.questions]
        return [question.public_view() for question in quiz.questions]

    # --------------------------------------------------------------- actions

    async def generate_quiz(self, difficulty: Union[DifficultyLevel, str]) -> Quiz:
        """Generate a new quiz, discarding any previous quiz, result and answers"""
        level = DifficultyLevel(difficulty)

        self._set("loading", True)
        self.reset_state("current_quiz", "result", "answers", "status", "error")

        try:
            quiz = await self.api.generate_quiz(level)
            self._set("current_quiz", quiz)
            self._set("status", QuizStatus.IN_PROGRESS)
            log_session_event(self.logger, "quiz_generated", quiz_id=quiz.id,
                              difficulty=level.value, questions=len(quiz.questions))
            return quiz
        except ApiError as e:
            self._set("error", e.message or "Failed to generate quiz")
            raise
        finally:
            self._set("loading", False)

    def set_answer(self, question_id: int, answer: str):
        """Record or revise the answer to one question of the quiz in progress"""
        if self.status != QuizStatus.IN_PROGRESS:
            raise NoActiveQuizError()
        self.answers.set(question_id, answer)

    def get_answer(self, question_id: int) -> Optional[str]:
        return self.answers.get(question_id)

    def answer_key(self, question_id: int) -> str:
        """Widget key for one question, unique per quiz so a regenerated quiz starts blank"""
        quiz = self.current_quiz
        return f"{self.namespace}.{quiz.id if quiz else 'none'}.answer.{question_id}"

    async def submit_quiz(self) -> QuizResult:
        """
        Submit every accumulated answer in one call and return the graded result.

        A successful submission refreshes the quiz history; a failed refresh
        does not affect the returned result.

        Raises:
            NoActiveQuizError: no current quiz (no remote call)
            OperationInProgressError: a submission is already in flight
            ApiError: the submission failed; quiz and answers are left untouched
        """
        quiz = self.current_quiz
        if quiz is None:
            error = NoActiveQuizError()
            self._set("error", error.message)
            raise error
        if self.submitting:
            raise OperationInProgressError("Quiz submission already in progress")

        answers = self.answers.snapshot()
        self._set("submitting", True)
        self._set("error", None)

        try:
            result = await self.api.submit_answers(quiz.id, answers)
        except ApiError as e:
            self._set("error", e.message or "Failed to submit quiz")
            raise
        finally:
            self._set("submitting", False)

        current = self.current_quiz
        if current is not None and current.id == quiz.id:
            self._set("result", result)
            self._set("current_quiz", current.model_copy(update={
                "user_score": result.user_score,
                "completed_at": result.completed_at or datetime.now(),
            }))
            self._set("status", QuizStatus.SUBMITTED)
        else:
            self.logger.info(f"Quiz {quiz.id} was replaced while its submission was in flight")

        log_session_event(self.logger, "quiz_submitted", quiz_id=quiz.id, answered=len(answers),
                          score=result.user_score, total=result.total_score)

        await self.fetch_history()
        return result

    async def fetch_history(self) -> List[Quiz]:
        """Refresh the quiz history; failures are logged and yield an empty list"""
        self._set("history_loading", True)
        try:
            history = await self.api.get_history()
            self._set("history", history)
            return list(history)
        except ApiError as e:
            self.logger.error(f"Failed to fetch quiz history: {e.message}")
            return []
        finally:
            self._set("history_loading", False)

    def clear_quiz(self):
        self.reset_state("current_quiz", "result", "answers", "status", "error")

    def clear_all(self):
        self.reset_state("current_quiz", "result", "history", "answers", "status", "error")

    @staticmethod
    def get_difficulty_label(difficulty: Union[DifficultyLevel, str]) -> str:
        try:
            return DIFFICULTY_LABELS[DifficultyLevel(difficulty)]
        except ValueError:
            return str(difficulty)

    @staticmethod
    def get_difficulty_type(difficulty: Union[DifficultyLevel, str]) -> str:
        try:
            return DIFFICULTY_TYPES[DifficultyLevel(difficulty)]
        except ValueError:
            return "info"
