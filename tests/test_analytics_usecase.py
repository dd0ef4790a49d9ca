"""Tests for the analytics query use case."""

import pytest

from conftest import utc
from trafficlens.application.use_cases.analytics_usecase import AnalyticsQueryUseCase
from trafficlens.domain.entities.page_view import NewPageView
from trafficlens.domain.value_objects.date_range import DateRange
from trafficlens.domain.value_objects.interval import Interval

CURRENT = DateRange(utc(2024, 1, 8), utc(2024, 1, 14, 23, 59))


async def record(store, day, visitor_id, session_id="s", page_url="/", **kwargs):
    await store.record_page_view(NewPageView(
        page_url=page_url,
        visitor_id=visitor_id,
        session_id=session_id,
        timestamp=utc(2024, 1, day, 12),
        **kwargs,
    ))


@pytest.fixture
async def populated_store(memory_store):
    """Two visitors in the previous week, four in the current one."""
    # previous week (Jan 1-7)
    await record(memory_store, 2, "old1", session_id="p1", referrer="https://www.google.com/")
    await record(memory_store, 3, "old2", session_id="p2", duration=30)

    # current week (Jan 8-14)
    await record(memory_store, 8, "v1", session_id="s1", country="Japan", device="Mobile",
                 referrer="https://www.google.com/", duration=60, page_title="Home Page")
    await record(memory_store, 8, "v1", session_id="s1", page_url="/news", country="Canada",
                 referrer="https://www.google.com/", duration=120)
    await record(memory_store, 10, "v2", session_id="s2", country="Japan", device="Desktop")
    await record(memory_store, 12, "v3", session_id="s3", country="Brazil", device="Mobile",
                 referrer="https://twitter.com/")
    await record(memory_store, 14, "v4", session_id="s4", device="Tablet")
    return memory_store


@pytest.fixture
def usecase(populated_store) -> AnalyticsQueryUseCase:
    return AnalyticsQueryUseCase(populated_store)


class TestOverview:
    """Test suite for the overview query."""

    async def test_overview_against_previous_period(self, usecase):
        """Values are for the current range, change vs the previous week."""
        overview = (await usecase.get_overview(CURRENT)).to_dict()

        assert overview["uniqueVisitors"]["value"] == 4
        assert overview["uniqueVisitors"]["change"] == 100.0
        assert overview["pageViews"] == {"value": 5, "change": 150.0}
        assert overview["avgSessionDuration"] == {"value": 90.0, "change": 200.0}
        # s2, s3, s4 bounce; s1 has two views
        assert overview["bounceRate"]["value"] == 75.0

    async def test_empty_range(self, usecase):
        """A range without events yields zeros, never errors."""
        overview = await usecase.get_overview(DateRange(utc(2030, 1, 1), utc(2030, 1, 7)))

        assert overview.page_views.value == 0
        assert overview.bounce_rate.value == 0.0
        assert overview.page_views.change == 0.0

    async def test_page_views_match_range_query(self, usecase, populated_store):
        """totalPageViews(range) == len(getPageViews(range))."""
        overview = await usecase.get_overview(CURRENT)
        events = await populated_store.get_page_views(CURRENT.start, CURRENT.end)

        assert overview.page_views.value == len(events)


class TestBreakdowns:
    """Test suite for the per-dimension queries."""

    async def test_geography(self, usecase):
        """One country per visitor with percentages of attributed visitors."""
        countries = [c.to_dict() for c in await usecase.get_geography(CURRENT)]

        assert countries == [
            {"name": "Japan", "visitors": 2, "percentage": 67},
            {"name": "Brazil", "visitors": 1, "percentage": 33},
        ]

    async def test_devices(self, usecase):
        """Device breakdown percentages stay within 100."""
        devices = await usecase.get_devices(CURRENT)

        assert [(d.name, d.count) for d in devices] == [("Mobile", 2), ("Desktop", 1), ("Tablet", 1)]
        assert sum(d.percentage for d in devices) <= 100

    async def test_traffic_sources(self, usecase):
        """Sources are classified and compared against the previous week."""
        sources = [s.to_dict() for s in await usecase.get_traffic_sources(CURRENT)]

        assert sources == [
            {"name": "Google", "visitors": 2, "icon": "search", "conversion": None, "change": 100.0},
            {"name": "Direct", "visitors": 2, "icon": "globe", "conversion": None, "change": 100.0},
            {"name": "Twitter", "visitors": 1, "icon": "twitter", "conversion": None, "change": 0.0},
        ]

    async def test_popular_pages(self, usecase):
        """Popular pages are formatted for the dashboard."""
        pages = await usecase.get_popular_pages(CURRENT, limit=1)

        assert [p.to_dict() for p in pages] == [{
            "pageUrl": "/",
            "pageTitle": "Home Page",
            "views": 4,
            "avgTime": "1m 0s",
            "bounceRate": 75.0,
        }]


class TestSeriesAndCompare:
    """Test suite for the series and comparison queries."""

    async def test_daily_series(self, usecase):
        """One record per day of the range, zero-filled."""
        series = await usecase.get_visitors_over_time(CURRENT, Interval.DAY)

        assert [p.date for p in series.data] == [f"2024-01-{d:02d}" for d in range(8, 15)]
        assert [p.page_views for p in series.data] == [2, 0, 1, 0, 1, 0, 1]

    async def test_compare_with_explicit_range(self, usecase):
        """compare() accepts an arbitrary comparison range."""
        rows = await usecase.compare(CURRENT, DateRange(utc(2024, 1, 2), utc(2024, 1, 2, 23)))

        assert rows["pageViews"].to_dict() == {"current": 5, "previous": 1, "difference": 400.0}

    async def test_compare_defaults_to_previous_period(self, usecase):
        """Without a comparison range the previous period is used."""
        rows = await usecase.compare(CURRENT)

        assert rows["uniqueVisitors"].previous == 2
