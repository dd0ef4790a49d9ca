"""Domain value objects."""
from trafficlens.domain.value_objects.date_range import DateRange, as_utc, utc_now
from trafficlens.domain.value_objects.interval import Interval
from trafficlens.domain.value_objects.metrics import (
    BreakdownEntry,
    DimensionCount,
    MetricComparison,
    MetricSnapshot,
    OverviewMetrics,
    OverviewValues,
    PageStats,
    SeriesPoint,
    TrafficSourceEntry,
    VisitorSeries,
)

__all__ = [
    "DateRange",
    "as_utc",
    "utc_now",
    "Interval",
    "BreakdownEntry",
    "DimensionCount",
    "MetricComparison",
    "MetricSnapshot",
    "OverviewMetrics",
    "OverviewValues",
    "PageStats",
    "SeriesPoint",
    "TrafficSourceEntry",
    "VisitorSeries",
]
