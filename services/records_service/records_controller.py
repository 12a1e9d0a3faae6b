"""
Records controller - paginated, filterable view over learning history.
"""

from datetime import datetime
from typing import Any, List, MutableMapping, Optional, Union

from infrastructure.transport.errors import ApiError
from infrastructure.transport.pipeline import RequestPipeline
from services.base_controller import SessionStateController
from services.records_service.models import (
    ACTIVITY_TYPE_COLORS,
    ACTIVITY_TYPE_ICONS,
    ACTIVITY_TYPE_LABELS,
    ActivityType,
    LearningRecord,
    LearningStatistics,
    RecordQuery,
)
from services.records_service.records_api import RecordsAPI


class RecordsController(SessionStateController):
    """
    Every fetch replaces records, totals and page wholesale; nothing is cached
    across pages. After a successful fetch ``current_page`` lies in
    ``[1, max(total_pages, 1)]``.
    """

    namespace = "records"
    state_defaults = {
        "records": list,
        "statistics": lambda: None,
        "loading": lambda: False,
        "statistics_loading": lambda: False,
        "error": lambda: None,
        "current_page": lambda: 1,
        "page_size": lambda: None,
        "total": lambda: 0,
        "total_pages": lambda: 0,
        "active_filter": lambda: None,
    }

    def __init__(
        self,
        pipeline: RequestPipeline,
        state: Optional[MutableMapping[str, Any]] = None,
        page_size: int = 20,
        api: Optional[RecordsAPI] = None,
    ):
        super().__init__(pipeline, state)
        self.api = api or RecordsAPI(pipeline)
        if self._get("page_size") is None:
            self._set("page_size", page_size)

    @property
    def records(self) -> List[LearningRecord]:
        return list(self._get("records"))

    @property
    def statistics(self) -> Optional[LearningStatistics]:
        return self._get("statistics")

    @property
    def current_page(self) -> int:
        return self._get("current_page")

    @property
    def page_size(self) -> int:
        return self._get("page_size")

    @property
    def total(self) -> int:
        return self._get("total")

    @property
    def total_pages(self) -> int:
        return self._get("total_pages")

    @property
    def active_filter(self) -> Optional[ActivityType]:
        return self._get("active_filter")

    @property
    def has_records(self) -> bool:
        return len(self._get("records")) > 0

    @property
    def record_count(self) -> int:
        return len(self._get("records"))

    @property
    def has_statistics(self) -> bool:
        return self.statistics is not None

    @property
    def has_more_pages(self) -> bool:
        return self.current_page < self.total_pages

    async def fetch_records(
        self,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        activity_type: Optional[Union[ActivityType, str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[LearningRecord]:
        """
        Fetch one page of records.

        Explicit arguments win; otherwise the remembered page, page size and
        activity filter are reused. Dates are never remembered.
        """
        query = RecordQuery(
            page=page if page is not None else self.current_page,
            page_size=page_size if page_size is not None else self.page_size,
            activity_type=activity_type if activity_type is not None else self.active_filter,
            start_date=start_date,
            end_date=end_date,
        )

        self._set("loading", True)
        self._set("error", None)

        try:
            result = await self.api.get_records(query)
            self._set("records", list(result.records))
            self._set("total", result.total)
            self._set("page_size", result.page_size)
            self._set("total_pages", result.total_pages)
            self._set("current_page", min(max(result.page, 1), max(result.total_pages, 1)))
            self.logger.debug(f"Loaded records page {result.page}/{result.total_pages}")
            return list(result.records)
        except ApiError as e:
            self._set("error", e.message or "Failed to fetch records")
            raise
        finally:
            self._set("loading", False)

    async def fetch_statistics(self) -> Optional[LearningStatistics]:
        """Refresh the statistics summary; failures are logged and yield None"""
        self._set("statistics_loading", True)
        try:
            statistics = await self.api.get_statistics()
            self._set("statistics", statistics)
            return statistics
        except ApiError as e:
            self.logger.error(f"Failed to fetch statistics: {e.message}")
            return None
        finally:
            self._set("statistics_loading", False)

    async def set_filter(self, activity_type: Optional[Union[ActivityType, str]] = None) -> List[LearningRecord]:
        """Filter by activity type (None clears the filter) and reload from page 1"""
        self._set("active_filter", ActivityType(activity_type) if activity_type is not None else None)
        self._set("current_page", 1)
        return await self.fetch_records()

    async def go_to_page(self, page: int) -> Optional[List[LearningRecord]]:
        """Load a page; out-of-range pages are ignored without a remote call"""
        if page < 1 or page > self.total_pages:
            self.logger.debug(f"Ignoring out-of-range page {page} (total {self.total_pages})")
            return None
        self._set("current_page", page)
        return await self.fetch_records()

    async def change_page_size(self, size: int) -> List[LearningRecord]:
        if size < 1:
            raise ValueError("Page size must be at least 1")
        self._set("page_size", size)
        self._set("current_page", 1)
        return await self.fetch_records()

    def clear_all(self):
        self.reset_state("records", "statistics", "error", "current_page", "total", "total_pages", "active_filter")

    @staticmethod
    def get_activity_type_label(activity_type: Union[ActivityType, str]) -> str:
        try:
            return ACTIVITY_TYPE_LABELS[ActivityType(activity_type)]
        except ValueError:
            return str(activity_type)

    @staticmethod
    def get_activity_type_icon(activity_type: Union[ActivityType, str]) -> str:
        try:
            return ACTIVITY_TYPE_ICONS[ActivityType(activity_type)]
        except ValueError:
            return "📄"

    @staticmethod
    def get_activity_type_color(activity_type: Union[ActivityType, str]) -> str:
        try:
            return ACTIVITY_TYPE_COLORS[ActivityType(activity_type)]
        except ValueError:
            return "info"
