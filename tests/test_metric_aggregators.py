"""Unit tests for the metric aggregators."""

import pytest

from trafficlens.domain.services import metric_aggregators as aggregators
from trafficlens.domain.services.metric_context import MetricContext
from trafficlens.domain.value_objects.metrics import DimensionCount


def ctx_of(*events) -> MetricContext:
    return MetricContext.from_events(events)


class TestOverviewAggregators:
    """Test suite for the headline metrics."""

    def test_unique_visitors_counts_distinct_ids(self, make_event):
        """uniqueVisitors equals the number of distinct visitor ids."""
        ctx = ctx_of(
            make_event(visitor_id="v1"),
            make_event(visitor_id="v2"),
            make_event(visitor_id="v1"),
        )

        assert aggregators.unique_visitors(ctx) == 2
        assert aggregators.total_page_views(ctx) == 3

    def test_avg_duration_ignores_missing_values(self, make_event):
        """Events without duration do not pull the mean down."""
        ctx = ctx_of(
            make_event(duration=30),
            make_event(duration=None),
            make_event(duration=90),
        )

        assert aggregators.avg_session_duration(ctx) == 60.0

    def test_avg_duration_without_durations_is_zero(self, make_event):
        """No duration values in range → avgSessionDuration == 0."""
        ctx = ctx_of(make_event(), make_event())

        assert aggregators.avg_session_duration(ctx) == 0.0

    def test_empty_context_yields_zeros(self):
        """An empty range never raises and produces zeros."""
        values = aggregators.overview_values(ctx_of())

        assert values.unique_visitors == 0
        assert values.page_views == 0
        assert values.avg_session_duration == 0.0
        assert values.bounce_rate == 0.0

    def test_bounce_rate_uses_context_sessions(self, make_event):
        """Overview bounce rate comes from the reconstructed sessions."""
        ctx = ctx_of(
            make_event(session_id="s1"),
            make_event(session_id="s2"),
            make_event(session_id="s2"),
        )

        assert aggregators.bounce_rate(ctx) == 50.0


class TestDimensionBreakdowns:
    """Test suite for country / device attribution."""

    def test_visitor_attributed_to_first_country(self, make_event):
        """Same visitor, two countries → only the first one counts."""
        ctx = ctx_of(
            make_event(visitor_id="v1", country="Japan"),
            make_event(visitor_id="v1", country="Canada"),
        )

        assert aggregators.visitors_by_country(ctx) == [DimensionCount("Japan", 1)]

    def test_null_country_does_not_claim_visitor(self, make_event):
        """The first NON-null value decides the attribution."""
        ctx = ctx_of(
            make_event(visitor_id="v1", country=None),
            make_event(visitor_id="v1", country="Brazil"),
        )

        assert aggregators.visitors_by_country(ctx) == [DimensionCount("Brazil", 1)]

    def test_countries_sorted_by_count_desc(self, make_event):
        """Breakdown is ordered by visitor count, ties keep encounter order."""
        ctx = ctx_of(
            make_event(visitor_id="v1", country="France"),
            make_event(visitor_id="v2", country="Germany"),
            make_event(visitor_id="v3", country="Germany"),
            make_event(visitor_id="v4", country="India"),
        )

        names = [c.name for c in aggregators.visitors_by_country(ctx)]

        assert names == ["Germany", "France", "India"]

    def test_device_breakdown_counts_visitors_not_views(self, make_event):
        """Many page views of one visitor count once."""
        ctx = ctx_of(
            make_event(visitor_id="v1", device="Mobile"),
            make_event(visitor_id="v1", device="Mobile"),
            make_event(visitor_id="v2", device="Desktop"),
        )

        counts = {d.name: d.count for d in aggregators.device_breakdown(ctx)}

        assert counts == {"Mobile": 1, "Desktop": 1}


class TestPercentages:
    """Test suite for percentage rounding."""

    def test_round_half_up(self):
        """0.5 rounds up, unlike Python's banker's rounding."""
        assert aggregators.round_half_up(2.5) == 3
        assert aggregators.round_half_up(2.4) == 2
        assert aggregators.round_half_up(0.5) == 1

    def test_percentages_of_simple_split(self):
        """1 of 4 → 25%, 3 of 4 → 75%."""
        entries = aggregators.with_percentages([
            DimensionCount("Mobile", 3),
            DimensionCount("Desktop", 1),
        ])

        assert [e.percentage for e in entries] == [75, 25]

    def test_percentages_never_exceed_100(self):
        """Three 1/3 shares round to 33 each; 3 × 1/6 + 1/2 stays ≤ 100."""
        thirds = aggregators.with_percentages([DimensionCount(n, 1) for n in "abc"])
        halves = aggregators.with_percentages([
            DimensionCount("a", 1),
            DimensionCount("b", 1),
        ])
        eighths = aggregators.with_percentages([DimensionCount(n, 1) for n in "abcdefgh"])

        assert sum(e.percentage for e in thirds) <= 100
        assert sum(e.percentage for e in halves) == 100
        # 12.5 → 13 each would add up to 104
        assert sum(e.percentage for e in eighths) <= 100

    def test_equal_counts_get_equal_percentages(self):
        """The overflow correction lowers every tied count together."""
        eighths = aggregators.with_percentages([DimensionCount(n, 1) for n in "abcdefgh"])
        mixed = aggregators.with_percentages(
            [DimensionCount("a", 3)] + [DimensionCount(n, 1) for n in "bcdef"]
        )

        assert [e.percentage for e in eighths] == [12] * 8
        # 37.5 and 12.5 both round up; the sum would be 103
        assert [e.percentage for e in mixed] == [37, 12, 12, 12, 12, 12]

    def test_zero_total_gives_zero_percentages(self):
        """No attributed visitors → every percentage is 0."""
        entries = aggregators.with_percentages([DimensionCount("x", 0)])

        assert entries[0].percentage == 0
        assert aggregators.with_percentages([]) == []


class TestTrafficSources:
    """Test suite for raw traffic source counting."""

    def test_missing_referrer_is_direct(self, make_event):
        """A null referrer is counted as "Direct"."""
        ctx = ctx_of(
            make_event(referrer=None),
            make_event(referrer="https://www.google.com/"),
            make_event(referrer=None),
        )

        assert aggregators.traffic_sources(ctx) == [
            DimensionCount("Direct", 2),
            DimensionCount("https://www.google.com/", 1),
        ]

    def test_sources_count_every_event(self, make_event):
        """Traffic sources are NOT deduplicated per visitor."""
        ctx = ctx_of(
            make_event(visitor_id="v1", referrer="https://twitter.com/"),
            make_event(visitor_id="v1", referrer="https://twitter.com/"),
        )

        assert aggregators.traffic_sources(ctx)[0].count == 2


class TestPopularPages:
    """Test suite for popular pages."""

    def test_limit_and_descending_order(self, make_event):
        """Result length ≤ limit and sorted by views descending."""
        events = []
        for url, views in (("/a", 1), ("/b", 4), ("/c", 2), ("/d", 3)):
            events += [make_event(page_url=url, session_id=f"{url}-{i}") for i in range(views)]

        pages = aggregators.popular_pages(ctx_of(*events), limit=3)

        assert [p.page_url for p in pages] == ["/b", "/d", "/c"]
        assert all(a.views > b.views for a, b in zip(pages, pages[1:]))

    def test_ties_keep_encounter_order(self, make_event):
        """Pages with equal views keep first-seen order."""
        ctx = ctx_of(
            make_event(page_url="/z"),
            make_event(page_url="/y"),
            make_event(page_url="/x"),
        )

        pages = aggregators.popular_pages(ctx, limit=5)

        assert [p.page_url for p in pages] == ["/z", "/y", "/x"]

    def test_non_positive_limit_returns_nothing(self, make_event):
        """limit <= 0 → empty list."""
        ctx = ctx_of(make_event())

        assert aggregators.popular_pages(ctx, limit=0) == []

    def test_title_falls_back_to_url(self, make_event):
        """The first non-null title is used, otherwise the URL."""
        ctx = ctx_of(
            make_event(page_url="/news", page_title=None),
            make_event(page_url="/news", page_title="Anime News"),
            make_event(page_url="/raw"),
        )

        titles = {p.page_url: p.page_title for p in aggregators.popular_pages(ctx)}

        assert titles == {"/news": "Anime News", "/raw": "/raw"}

    def test_page_stats(self, make_event):
        """avg_time and bounce rate are computed per page."""
        ctx = ctx_of(
            make_event(page_url="/", session_id="s1", duration=60),
            make_event(page_url="/about", session_id="s1", duration=20),
            make_event(page_url="/", session_id="s2", duration=120),
        )

        home = aggregators.popular_pages(ctx)[0]

        assert home.page_url == "/"
        assert home.views == 2
        assert home.avg_time == 90.0
        # s1 has two views in range, s2 only one
        assert home.bounce_rate == 50.0

    def test_page_bounce_matches_overview_definition(self, make_event):
        """Per-page and overall bounce rates agree on a single page site."""
        ctx = ctx_of(
            make_event(session_id="s1"),
            make_event(session_id="s2"),
            make_event(session_id="s2"),
        )

        page = aggregators.popular_pages(ctx)[0]

        assert page.bounce_rate == pytest.approx(aggregators.bounce_rate(ctx))
