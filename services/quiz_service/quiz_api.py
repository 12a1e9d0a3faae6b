"""
Remote quiz endpoints.
"""

from typing import List

from infrastructure.transport.pipeline import RequestPipeline
from services.quiz_service.models import DifficultyLevel, Quiz, QuizAnswer, QuizResult


class QuizAPI:
    """Typed wrappers over the /quiz endpoints"""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    async def generate_quiz(self, difficulty: DifficultyLevel) -> Quiz:
        data = await self.pipeline.post("/quiz/generate", json={"difficulty": difficulty.value})
        return self.pipeline.parse(Quiz, data, "POST /quiz/generate")

    async def submit_answers(self, quiz_id: int, answers: List[QuizAnswer]) -> QuizResult:
        payload = {"answers": [answer.to_payload() for answer in answers]}
        path = f"/quiz/{quiz_id}/submit"
        data = await self.pipeline.post(path, json=payload)
        return self.pipeline.parse(QuizResult, data, f"POST {path}")

    async def get_history(self) -> List[Quiz]:
        data = await self.pipeline.get("/quiz/history")
        return self.pipeline.parse_list(Quiz, data, "GET /quiz/history")
