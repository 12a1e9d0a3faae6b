"""
Records service - learning history pages and statistics.
"""

from .models import (
    ActivityType,
    LearningRecord,
    LearningRecordsPage,
    LearningStatistics,
    RecordQuery
)
from .records_api import RecordsAPI
from .records_controller import RecordsController

__all__ = [
    'ActivityType',
    'LearningRecord',
    'LearningRecordsPage',
    'LearningStatistics',
    'RecordQuery',
    'RecordsAPI',
    'RecordsController'
]
