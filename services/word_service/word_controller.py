"""
Word lookup controller - translation queries and the lookup history.
"""

from typing import Any, List, MutableMapping, Optional

from infrastructure.transport.errors import ApiError
from infrastructure.transport.pipeline import RequestPipeline
from services.base_controller import SessionStateController
from services.word_service.models import Word, WordHistory, WordQueryRequest
from services.word_service.word_api import WordAPI


class WordController(SessionStateController):
    """Looks words up and keeps the user's lookup history in sync"""

    namespace = "word"
    state_defaults = {
        "current_word": lambda: None,
        "history": list,
        "loading": lambda: False,
        "history_loading": lambda: False,
        "error": lambda: None,
        "source_lang": lambda: None,
        "target_lang": lambda: None,
    }

    def __init__(
        self,
        pipeline: RequestPipeline,
        state: Optional[MutableMapping[str, Any]] = None,
        source_lang: str = "en",
        target_lang: str = "zh",
        api: Optional[WordAPI] = None,
    ):
        super().__init__(pipeline, state)
        self.api = api or WordAPI(pipeline)
        if self._get("source_lang") is None:
            self._set("source_lang", source_lang)
        if self._get("target_lang") is None:
            self._set("target_lang", target_lang)

    @property
    def current_word(self) -> Optional[Word]:
        return self._get("current_word")

    @property
    def history(self) -> List[WordHistory]:
        return list(self._get("history"))

    @property
    def source_lang(self) -> str:
        return self._get("source_lang")

    @property
    def target_lang(self) -> str:
        return self._get("target_lang")

    @property
    def has_current_word(self) -> bool:
        return self.current_word is not None

    @property
    def history_count(self) -> int:
        return len(self._get("history"))

    async def query_word(self, word: str, source: Optional[str] = None, target: Optional[str] = None) -> Word:
        """Look a word up; a successful lookup refreshes the history"""
        request = WordQueryRequest(
            word=word.strip(),
            source_lang=source or self.source_lang,
            target_lang=target or self.target_lang,
        )
        if not request.word:
            raise ValueError("Word must not be empty")

        self._set("loading", True)
        self._set("error", None)
        try:
            result = await self.api.query_word(request)
            self._set("current_word", result)
        except ApiError as e:
            self._set("error", e.message or "Failed to query word")
            raise
        finally:
            self._set("loading", False)

        await self.fetch_history()
        return result

    async def fetch_history(self) -> List[WordHistory]:
        """Refresh lookup history; failures are logged and yield an empty list"""
        self._set("history_loading", True)
        try:
            history = await self.api.get_history()
            self._set("history", history)
            return list(history)
        except ApiError as e:
            self.logger.error(f"Failed to fetch word history: {e.message}")
            return []
        finally:
            self._set("history_loading", False)

    def set_source_lang(self, lang: str):
        self._set("source_lang", lang)

    def set_target_lang(self, lang: str):
        self._set("target_lang", lang)

    def clear_current_word(self):
        self.reset_state("current_word", "error")

    def clear_all(self):
        self.reset_state("current_word", "history", "error")
