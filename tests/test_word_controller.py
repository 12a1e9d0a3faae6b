"""
Tests for the word lookup controller
"""

import json

import httpx
import pytest

from infrastructure.transport.errors import NotFoundError
from services.word_service import WordController

WORD = {
    "id": 3,
    "word": "apple",
    "sourceLang": "en",
    "targetLang": "zh",
    "definition": "A round fruit",
    "translation": "苹果",
    "examples": "An apple a day.",
}

HISTORY = [
    {"id": 1, "wordId": 3, "word": "apple", "sourceLang": "en", "targetLang": "zh",
     "translation": "苹果", "queryTime": "2024-05-01T10:00:00"},
]


@pytest.fixture
def words(pipeline, state):
    return WordController(pipeline, state, source_lang="en", target_lang="zh")


class TestQueryWord:
    """Lookup and history refresh"""

    @pytest.mark.asyncio
    async def test_query_trims_and_refreshes_history(self, words, server):
        server.reply("POST", "/words/query", WORD)
        server.reply("GET", "/words/history", HISTORY)

        word = await words.query_word("  apple ")

        body = json.loads(server.calls("POST", "/words/query")[0].content)
        assert body == {"word": "apple", "sourceLang": "en", "targetLang": "zh"}
        assert word.translation == "苹果"
        assert words.has_current_word is True
        assert words.history_count == 1

    @pytest.mark.asyncio
    async def test_explicit_languages_win(self, words, server):
        server.reply("POST", "/words/query", WORD)
        server.reply("GET", "/words/history", [])

        await words.query_word("pomme", source="fr", target="en")

        body = json.loads(server.calls("POST", "/words/query")[0].content)
        assert body["sourceLang"] == "fr"
        assert body["targetLang"] == "en"

    @pytest.mark.asyncio
    async def test_blank_word_is_rejected_locally(self, words, server):
        with pytest.raises(ValueError):
            await words.query_word("   ")

        assert server.requests == []

    @pytest.mark.asyncio
    async def test_failed_lookup_skips_history(self, words, server):
        with pytest.raises(NotFoundError):
            await words.query_word("apple")

        assert words.error is not None
        assert words.has_current_word is False
        assert server.calls("GET", "/words/history") == []

    @pytest.mark.asyncio
    async def test_history_failure_is_swallowed(self, words, server):
        server.route("GET", "/words/history", lambda request: httpx.Response(500))

        assert await words.fetch_history() == []


class TestLanguages:
    """Remembered language pair"""

    def test_language_setters_persist_in_state(self, words, pipeline, state):
        words.set_source_lang("de")
        words.set_target_lang("en")

        rerun = WordController(pipeline, state)

        assert rerun.source_lang == "de"
        assert rerun.target_lang == "en"

    @pytest.mark.asyncio
    async def test_clear_current_word(self, words, server):
        server.reply("POST", "/words/query", WORD)
        server.reply("GET", "/words/history", HISTORY)
        await words.query_word("apple")

        words.clear_current_word()

        assert words.has_current_word is False
        assert words.history_count == 1
