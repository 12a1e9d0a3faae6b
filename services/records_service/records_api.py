"""
Remote learning-record endpoints.
"""

from infrastructure.transport.pipeline import RequestPipeline
from services.records_service.models import LearningRecordsPage, LearningStatistics, RecordQuery


class RecordsAPI:
    """Typed wrappers over the /records endpoints"""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    async def get_records(self, query: RecordQuery) -> LearningRecordsPage:
        data = await self.pipeline.get("/records", params=query.to_payload())
        return self.pipeline.parse(LearningRecordsPage, data or {}, "GET /records")

    async def get_statistics(self) -> LearningStatistics:
        data = await self.pipeline.get("/records/statistics")
        return self.pipeline.parse(LearningStatistics, data or {}, "GET /records/statistics")
