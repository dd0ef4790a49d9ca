"""Application use cases - Orquestación de lectura y escritura."""

from trafficlens.application.use_cases.analytics_usecase import AnalyticsQueryUseCase
from trafficlens.application.use_cases.track_page_view_usecase import TrackPageViewUseCase

__all__ = [
    "AnalyticsQueryUseCase",
    "TrackPageViewUseCase",
]
