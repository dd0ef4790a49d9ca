"""
Analytics Query Use Case.

Caso de uso de lectura: una consulta de rango al Event Store por periodo,
todas las métricas derivadas del mismo MetricContext.

FLUJO:
  DateRange → IEventStore.get_page_views → MetricContext
       → agregadores / SeriesBuilder → value objects → DTO / dict

PERIODO ANTERIOR:
  Overview y traffic sources leen el periodo actual y el anterior en
  paralelo (asyncio.gather). La corrección no depende del paralelismo.
"""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

from trafficlens.application.dto.report_dto import CountryDTO, DeviceDTO, PopularPageDTO
from trafficlens.domain.repositories.event_store import IEventStore
from trafficlens.domain.services import metric_aggregators as aggregators
from trafficlens.domain.services.comparison import (
    compare_overview,
    compare_values,
    percentage_change,
)
from trafficlens.domain.services.metric_context import MetricContext
from trafficlens.domain.services.series_builder import SeriesBuilder
from trafficlens.domain.services.traffic_source_classifier import classify_source
from trafficlens.domain.value_objects.date_range import DateRange
from trafficlens.domain.value_objects.interval import Interval
from trafficlens.domain.value_objects.metrics import (
    MetricComparison,
    OverviewMetrics,
    TrafficSourceEntry,
    VisitorSeries,
)
from trafficlens.shared.logging.logger import get_logger

logger = get_logger("usecase.analytics")


class AnalyticsQueryUseCase:
    """
    Caso de uso: consultar métricas de tráfico sobre un rango.

    Cada método hace UNA lectura por periodo involucrado.
    """

    def __init__(self, event_store: IEventStore):
        self._store = event_store

    async def load_context(self, date_range: DateRange) -> MetricContext:
        """Lectura única del rango → contexto compartido."""
        events = await self._store.get_page_views(date_range.start, date_range.end)
        logger.debug(
            "Contexto cargado: %d eventos [%s, %s]",
            len(events), date_range.start.isoformat(), date_range.end.isoformat(),
        )
        return MetricContext.from_events(events, date_range)

    async def _load_pair(
        self,
        current: DateRange,
        previous: DateRange,
    ) -> tuple[MetricContext, MetricContext]:
        return await asyncio.gather(self.load_context(current), self.load_context(previous))

    # ─── Overview / comparación ──────────────────────────────────────

    async def get_overview(
        self,
        date_range: DateRange,
        comparison_range: Optional[DateRange] = None,
    ) -> OverviewMetrics:
        """Overview {value, change} frente al periodo anterior."""
        current, previous = await self._load_pair(
            date_range, comparison_range or date_range.previous(),
        )
        return compare_overview(
            aggregators.overview_values(current),
            aggregators.overview_values(previous),
        )

    async def compare(
        self,
        date_range: DateRange,
        comparison_range: Optional[DateRange] = None,
    ) -> Dict[str, MetricComparison]:
        """Filas {current, previous, difference} entre dos rangos."""
        current, previous = await self._load_pair(
            date_range, comparison_range or date_range.previous(),
        )
        return compare_values(
            aggregators.overview_values(current),
            aggregators.overview_values(previous),
        )

    # ─── Serie temporal ──────────────────────────────────────────────

    async def get_visitors_over_time(
        self,
        date_range: DateRange,
        interval: Interval = Interval.DAY,
    ) -> VisitorSeries:
        ctx = await self.load_context(date_range)
        return SeriesBuilder.build(ctx.events, date_range, interval)

    # ─── Breakdowns ──────────────────────────────────────────────────

    async def get_geography(self, date_range: DateRange) -> List[CountryDTO]:
        ctx = await self.load_context(date_range)
        return self._geography(ctx)

    async def get_devices(self, date_range: DateRange) -> List[DeviceDTO]:
        ctx = await self.load_context(date_range)
        return self._devices(ctx)

    async def get_popular_pages(
        self,
        date_range: DateRange,
        limit: int = aggregators.DEFAULT_POPULAR_PAGES_LIMIT,
    ) -> List[PopularPageDTO]:
        ctx = await self.load_context(date_range)
        return self._popular_pages(ctx, limit)

    async def get_traffic_sources(self, date_range: DateRange) -> List[TrafficSourceEntry]:
        current, previous = await self._load_pair(date_range, date_range.previous())
        return self._traffic_sources(current, previous)

    # ─── Derivaciones sobre contexto ─────────────────────────────────

    @staticmethod
    def _geography(ctx: MetricContext) -> List[CountryDTO]:
        entries = aggregators.with_percentages(aggregators.visitors_by_country(ctx))
        return [CountryDTO.from_entry(e) for e in entries]

    @staticmethod
    def _devices(ctx: MetricContext) -> List[DeviceDTO]:
        entries = aggregators.with_percentages(aggregators.device_breakdown(ctx))
        return [DeviceDTO.from_entry(e) for e in entries]

    @staticmethod
    def _popular_pages(ctx: MetricContext, limit: int) -> List[PopularPageDTO]:
        return [PopularPageDTO.from_stats(p) for p in aggregators.popular_pages(ctx, limit)]

    @staticmethod
    def _traffic_sources(
        current: MetricContext,
        previous: MetricContext,
    ) -> List[TrafficSourceEntry]:
        prior_counts = {s.name: s.count for s in aggregators.traffic_sources(previous)}
        result: List[TrafficSourceEntry] = []
        for source in aggregators.traffic_sources(current):
            name, icon = classify_source(source.name)
            result.append(TrafficSourceEntry(
                name=name,
                visitors=source.count,
                icon=icon,
                change=percentage_change(source.count, prior_counts.get(source.name, 0)),
            ))
        return result
