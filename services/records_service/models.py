"""
Learning record and statistics models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from infrastructure.transport.envelope import ApiModel


class ActivityType(str, Enum):
    WORD_QUERY = "WORD_QUERY"
    DIALOGUE = "DIALOGUE"
    QUIZ = "QUIZ"


ACTIVITY_TYPE_LABELS = {
    ActivityType.WORD_QUERY: "Word Query",
    ActivityType.DIALOGUE: "Dialogue",
    ActivityType.QUIZ: "Quiz",
}

ACTIVITY_TYPE_ICONS = {
    ActivityType.WORD_QUERY: "🔍",
    ActivityType.DIALOGUE: "💬",
    ActivityType.QUIZ: "📝",
}

ACTIVITY_TYPE_COLORS = {
    ActivityType.WORD_QUERY: "primary",
    ActivityType.DIALOGUE: "success",
    ActivityType.QUIZ: "warning",
}


class LearningRecord(ApiModel):
    id: int
    activity_type: ActivityType
    activity_id: Optional[int] = None
    activity_time: Optional[datetime] = None
    # Shape depends on activity_type
    activity_details: Optional[Dict[str, Any]] = None


class LearningRecordsPage(ApiModel):
    records: List[LearningRecord] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20
    total_pages: int = 0


class LearningStatistics(ApiModel):
    total_word_queries: int = 0
    total_dialogue_sessions: int = 0
    total_quizzes: int = 0
    average_quiz_score: float = 0.0
    total_activities: int = 0
    first_activity_date: Optional[datetime] = None
    last_activity_date: Optional[datetime] = None
    activities_last7_days: int = Field(default=0, alias="activitiesLast7Days")
    activities_last30_days: int = Field(default=0, alias="activitiesLast30Days")


class RecordQuery(ApiModel):
    """Query string of GET /records; unset fields are omitted"""
    page: int = 1
    page_size: int = 20
    activity_type: Optional[ActivityType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
