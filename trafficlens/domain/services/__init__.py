"""Domain services - Pure business logic with no external dependencies."""
from trafficlens.domain.services.comparison import (
    compare_overview,
    compare_values,
    percentage_change,
)
from trafficlens.domain.services.metric_context import MetricContext
from trafficlens.domain.services.series_builder import SeriesBuilder
from trafficlens.domain.services.session_reconstructor import (
    Session,
    SessionIndex,
    SessionReconstructor,
)
from trafficlens.domain.services.traffic_source_classifier import classify_source

__all__ = [
    "compare_overview",
    "compare_values",
    "percentage_change",
    "MetricContext",
    "SeriesBuilder",
    "Session",
    "SessionIndex",
    "SessionReconstructor",
    "classify_source",
]
