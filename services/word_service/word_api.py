"""
Remote word lookup endpoints.
"""

from typing import List

from infrastructure.transport.pipeline import RequestPipeline
from services.word_service.models import Word, WordHistory, WordQueryRequest


class WordAPI:
    """Typed wrappers over the /words endpoints"""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    async def query_word(self, request: WordQueryRequest) -> Word:
        data = await self.pipeline.post("/words/query", json=request.to_payload())
        return self.pipeline.parse(Word, data, "POST /words/query")

    async def get_history(self) -> List[WordHistory]:
        data = await self.pipeline.get("/words/history")
        return self.pipeline.parse_list(WordHistory, data, "GET /words/history")
