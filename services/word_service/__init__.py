"""
Word service - dictionary lookups and lookup history.
"""

from .models import Word, WordQueryRequest, WordHistory
from .word_api import WordAPI
from .word_controller import WordController

__all__ = [
    'Word',
    'WordQueryRequest',
    'WordHistory',
    'WordAPI',
    'WordController'
]
