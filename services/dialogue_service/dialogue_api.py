"""
Remote dialogue endpoints.
"""

from typing import List

from infrastructure.transport.pipeline import RequestPipeline
from services.dialogue_service.models import (
    CreateScenarioRequest,
    DialogueMessage,
    DialogueSession,
    Scenario,
)


class DialogueAPI:
    """Typed wrappers over the /dialogue endpoints"""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    async def get_scenarios(self) -> List[Scenario]:
        data = await self.pipeline.get("/dialogue/scenarios")
        return self.pipeline.parse_list(Scenario, data, "GET /dialogue/scenarios")

    async def create_scenario(self, request: CreateScenarioRequest) -> Scenario:
        data = await self.pipeline.post("/dialogue/scenarios", json=request.to_payload())
        return self.pipeline.parse(Scenario, data, "POST /dialogue/scenarios")

    async def start_session(self, scenario_id: int, target_lang: str = "en") -> DialogueSession:
        data = await self.pipeline.post(
            "/dialogue/sessions", json={"scenarioId": scenario_id, "targetLang": target_lang}
        )
        return self.pipeline.parse(DialogueSession, data, "POST /dialogue/sessions")

    async def send_message(self, session_id: int, message: str) -> DialogueMessage:
        path = f"/dialogue/sessions/{session_id}/messages"
        data = await self.pipeline.post(path, json={"message": message})
        return self.pipeline.parse(DialogueMessage, data, f"POST {path}")

    async def end_session(self, session_id: int) -> None:
        await self.pipeline.delete(f"/dialogue/sessions/{session_id}")
