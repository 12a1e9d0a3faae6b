"""
Tests for the records and statistics controller
"""

from datetime import datetime

import httpx
import pytest

from infrastructure.transport.errors import ServerError
from services.records_service import ActivityType, RecordsController


def records_page(page=1, total=45, page_size=20, total_pages=3, records=None):
    return {
        "records": records if records is not None else [
            {
                "id": 100 + n,
                "activityType": "QUIZ",
                "activityId": n,
                "activityTime": "2024-05-01T10:00:00",
                "activityDetails": {"score": 20},
            }
            for n in range(3)
        ],
        "total": total,
        "page": page,
        "pageSize": page_size,
        "totalPages": total_pages,
    }


@pytest.fixture
def controller(pipeline, state):
    return RecordsController(pipeline, state, page_size=20)


class TestFetchRecords:
    """Paginated fetch"""

    @pytest.mark.asyncio
    async def test_fetch_replaces_page_state(self, controller, server):
        server.reply("GET", "/records", records_page())

        records = await controller.fetch_records()

        params = dict(server.calls("GET", "/records")[0].url.params)
        assert params == {"page": "1", "pageSize": "20"}
        assert len(records) == 3
        assert records[0].activity_type == ActivityType.QUIZ
        assert controller.total == 45
        assert controller.total_pages == 3
        assert controller.current_page == 1
        assert controller.has_more_pages is True
        assert controller.loading is False

    @pytest.mark.asyncio
    async def test_filters_and_dates_are_sent(self, controller, server):
        server.reply("GET", "/records", records_page())

        await controller.fetch_records(
            page=2,
            activity_type="WORD_QUERY",
            start_date=datetime(2024, 5, 1),
            end_date=datetime(2024, 5, 31),
        )

        params = dict(server.calls("GET", "/records")[0].url.params)
        assert params["page"] == "2"
        assert params["activityType"] == "WORD_QUERY"
        assert params["startDate"].startswith("2024-05-01")
        assert params["endDate"].startswith("2024-05-31")

    @pytest.mark.asyncio
    async def test_empty_result_keeps_page_at_one(self, controller, server):
        server.reply("GET", "/records", records_page(page=1, total=0, total_pages=0, records=[]))

        await controller.fetch_records()

        assert controller.current_page == 1
        assert controller.total_pages == 0
        assert controller.has_records is False

    @pytest.mark.asyncio
    async def test_page_is_clamped_to_total_pages(self, controller, server):
        server.reply("GET", "/records", records_page(page=9, total_pages=3))

        await controller.fetch_records(page=9)

        assert controller.current_page == 3

    @pytest.mark.asyncio
    async def test_failure_records_error(self, controller, server):
        server.route("GET", "/records", lambda request: httpx.Response(500))

        with pytest.raises(ServerError):
            await controller.fetch_records()

        assert controller.error is not None
        assert controller.loading is False

    @pytest.mark.asyncio
    async def test_invalid_activity_type_does_not_stick_loading(self, controller, server):
        with pytest.raises(ValueError):
            await controller.fetch_records(activity_type="GARDENING")

        assert controller.loading is False
        assert server.requests == []


class TestNavigation:
    """go_to_page, set_filter, change_page_size"""

    @pytest.mark.asyncio
    async def test_go_to_page(self, controller, server):
        server.reply("GET", "/records", records_page())
        await controller.fetch_records()
        server.reply("GET", "/records", records_page(page=2))

        await controller.go_to_page(2)

        assert dict(server.calls("GET", "/records")[1].url.params)["page"] == "2"
        assert controller.current_page == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", [0, 4])
    async def test_go_to_page_out_of_range_is_ignored(self, controller, server, page):
        server.reply("GET", "/records", records_page())
        await controller.fetch_records()

        assert await controller.go_to_page(page) is None

        assert len(server.calls("GET", "/records")) == 1
        assert controller.current_page == 1

    @pytest.mark.asyncio
    async def test_set_filter_resets_to_first_page(self, controller, server):
        server.reply("GET", "/records", records_page(page=2))
        await controller.fetch_records(page=2)
        server.reply("GET", "/records", records_page())

        await controller.set_filter(ActivityType.DIALOGUE)

        params = dict(server.calls("GET", "/records")[1].url.params)
        assert params == {"page": "1", "pageSize": "20", "activityType": "DIALOGUE"}
        assert controller.active_filter == ActivityType.DIALOGUE

        await controller.set_filter(None)
        params = dict(server.calls("GET", "/records")[2].url.params)
        assert "activityType" not in params

    @pytest.mark.asyncio
    async def test_change_page_size(self, controller, server):
        server.reply("GET", "/records", records_page(page_size=50, total_pages=1))

        await controller.change_page_size(50)

        assert dict(server.calls("GET", "/records")[0].url.params)["pageSize"] == "50"
        assert controller.page_size == 50

    @pytest.mark.asyncio
    async def test_change_page_size_rejects_zero(self, controller):
        with pytest.raises(ValueError):
            await controller.change_page_size(0)


class TestStatistics:
    """Statistics summary"""

    @pytest.mark.asyncio
    async def test_fetch_statistics(self, controller, server):
        server.reply("GET", "/records/statistics", {
            "totalWordQueries": 12,
            "totalDialogueSessions": 3,
            "totalQuizzes": 4,
            "averageQuizScore": 72.5,
            "totalActivities": 19,
            "activitiesLast7Days": 5,
            "activitiesLast30Days": 19,
        })

        statistics = await controller.fetch_statistics()

        assert statistics.total_word_queries == 12
        assert statistics.average_quiz_score == 72.5
        assert statistics.activities_last7_days == 5
        assert statistics.activities_last30_days == 19
        assert controller.has_statistics is True

    @pytest.mark.asyncio
    async def test_statistics_failure_returns_none(self, controller, server):
        server.route("GET", "/records/statistics", lambda request: httpx.Response(500))

        assert await controller.fetch_statistics() is None
        assert controller.has_statistics is False


class TestLabels:
    """Display helpers"""

    def test_activity_type_helpers(self):
        assert RecordsController.get_activity_type_label("WORD_QUERY") == "Word Query"
        assert RecordsController.get_activity_type_icon(ActivityType.DIALOGUE) == "💬"
        assert RecordsController.get_activity_type_color("QUIZ") == "warning"
        assert RecordsController.get_activity_type_label("OTHER") == "OTHER"
        assert RecordsController.get_activity_type_color("OTHER") == "info"
