"""
Word lookup models.
"""

from datetime import datetime
from typing import Optional

from infrastructure.transport.envelope import ApiModel


class Word(ApiModel):
    id: int
    word: str
    source_lang: str
    target_lang: str
    definition: str = ""
    translation: str = ""
    examples: str = ""
    pronunciation: Optional[str] = None
    created_at: Optional[datetime] = None


class WordQueryRequest(ApiModel):
    word: str
    source_lang: str
    target_lang: str


class WordHistory(ApiModel):
    id: int
    word_id: Optional[int] = None
    word: str
    source_lang: str
    target_lang: str
    translation: str = ""
    query_time: Optional[datetime] = None
