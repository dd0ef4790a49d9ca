"""
TrafficLens – Domain Service: Metric Aggregators
==================================================
Familia de funciones puras sobre un MetricContext.

PRINCIPIO CENTRAL:
  Ninguna función consulta el store. Todas operan sobre la misma lista
  filtrada del request y nunca lanzan por falta de datos: un contexto
  vacío produce 0, 0.0 o listas vacías.

══════════════════════════════════════════════════════════════════
  FÓRMULAS (referencia rápida)
══════════════════════════════════════════════════════════════════

  Unique Visitors  = |{visitor_id}|
  Page Views       = len(events)
  Avg Duration     = mean(duration) sobre eventos con duration != None
  Bounce Rate      = sesiones_de_1_evento / sesiones * 100

  Country / Device = 1 conteo por visitante (gana la primera aparición)
  Percentage       = round_half_up(count / total_atribuido * 100), suma <= 100

  Traffic Sources  = 1 conteo por evento, referrer None → "Direct"
  Popular Pages    = top-N por vistas, orden estable ante empates

══════════════════════════════════════════════════════════════════
"""

from __future__ import annotations

import math
from typing import Callable, Dict, Iterable, List, Optional

from trafficlens.domain.entities.page_view import PageViewEvent
from trafficlens.domain.services.metric_context import MetricContext
from trafficlens.domain.services.session_reconstructor import bounce_rate_of
from trafficlens.domain.value_objects.metrics import (
    BreakdownEntry,
    DimensionCount,
    OverviewValues,
    PageStats,
)

DEFAULT_POPULAR_PAGES_LIMIT = 5


# ═══════════════════════════════════════════════════════════════════
#  OVERVIEW
# ═══════════════════════════════════════════════════════════════════

def unique_visitors(ctx: MetricContext) -> int:
    return len({event.visitor_id for event in ctx.events})


def total_page_views(ctx: MetricContext) -> int:
    return len(ctx.events)


def _mean_duration(events: Iterable[PageViewEvent]) -> float:
    """Media de duration ignorando None. 0.0 si ningún evento la tiene."""
    durations = [e.duration for e in events if e.duration is not None]
    if not durations:
        return 0.0
    return sum(durations) / len(durations)


def avg_session_duration(ctx: MetricContext) -> float:
    return _mean_duration(ctx.events)


def bounce_rate(ctx: MetricContext) -> float:
    return ctx.sessions.bounce_rate()


def overview_values(ctx: MetricContext) -> OverviewValues:
    """Las cuatro métricas de cabecera sobre el mismo contexto."""
    return OverviewValues(
        unique_visitors=unique_visitors(ctx),
        page_views=total_page_views(ctx),
        avg_session_duration=avg_session_duration(ctx),
        bounce_rate=bounce_rate(ctx),
    )


# ═══════════════════════════════════════════════════════════════════
#  BREAKDOWNS POR DIMENSIÓN
# ═══════════════════════════════════════════════════════════════════

def _sorted_counts(counts: Dict[str, int]) -> List[DimensionCount]:
    # sorted() es estable: los empates conservan el orden de aparición
    return sorted(
        (DimensionCount(name=name, count=count) for name, count in counts.items()),
        key=lambda entry: entry.count,
        reverse=True,
    )


def _attribute_per_visitor(
    ctx: MetricContext,
    dimension: Callable[[PageViewEvent], Optional[str]],
) -> List[DimensionCount]:
    """
    Un conteo por visitante: el primer evento del visitante con la
    dimensión no nula decide a qué valor se atribuye.
    """
    attributed: Dict[str, str] = {}
    counts: Dict[str, int] = {}
    for event in ctx.events:
        value = dimension(event)
        if not value or event.visitor_id in attributed:
            continue
        attributed[event.visitor_id] = value
        counts[value] = counts.get(value, 0) + 1
    return _sorted_counts(counts)


def visitors_by_country(ctx: MetricContext) -> List[DimensionCount]:
    return _attribute_per_visitor(ctx, lambda e: e.country)


def device_breakdown(ctx: MetricContext) -> List[DimensionCount]:
    return _attribute_per_visitor(ctx, lambda e: e.device)


def round_half_up(value: float) -> int:
    """Redondeo .5 hacia arriba (round() de Python es bancario)."""
    return int(math.floor(value + 0.5))


def with_percentages(counts: List[DimensionCount]) -> List[BreakdownEntry]:
    """
    Añade el porcentaje redondeado sobre el total atribuido.

    Si el redondeo individual suma más de 100, se descuenta un punto a
    los conteos redondeados hacia arriba, menor parte fraccionaria
    primero. El descuento se aplica a TODAS las entradas con el mismo
    conteo a la vez: conteos iguales dan siempre porcentajes iguales,
    aunque la suma pueda quedar por debajo de 100 (8 × 12.5% → 8 × 12%).
    """
    total = sum(entry.count for entry in counts)
    if total == 0:
        return [BreakdownEntry(name=e.name, count=e.count, percentage=0) for e in counts]

    raw = [entry.count / total * 100 for entry in counts]
    rounded = [round_half_up(value) for value in raw]

    overflow = sum(rounded) - 100
    if overflow > 0:
        ties: Dict[int, List[int]] = {}
        for i, entry in enumerate(counts):
            if rounded[i] > raw[i]:
                ties.setdefault(entry.count, []).append(i)
        by_fraction = sorted(
            ties.values(),
            key=lambda group: raw[group[0]] - math.floor(raw[group[0]]),
        )
        for group in by_fraction:
            if overflow <= 0:
                break
            for i in group:
                rounded[i] -= 1
            overflow -= len(group)

    return [
        BreakdownEntry(name=entry.name, count=entry.count, percentage=pct)
        for entry, pct in zip(counts, rounded)
    ]


def traffic_sources(ctx: MetricContext) -> List[DimensionCount]:
    """Cada evento cuenta (sin deduplicar por visitante)."""
    counts: Dict[str, int] = {}
    for event in ctx.events:
        counts[event.source] = counts.get(event.source, 0) + 1
    return _sorted_counts(counts)


# ═══════════════════════════════════════════════════════════════════
#  POPULAR PAGES
# ═══════════════════════════════════════════════════════════════════

def _page_bounce_rate(ctx: MetricContext, page_events: List[PageViewEvent]) -> float:
    """
    Bounce rate de las sesiones que tocan la página.

    El rebote se decide con el total de eventos de la sesión en TODO el
    rango (no solo en esta página): una sesión /a → /b no rebota en /a.
    """
    touching = dict.fromkeys(e.session_id for e in page_events if e.session_id)
    bounced = sum(1 for sid in touching if ctx.sessions.view_count(sid) == 1)
    return bounce_rate_of(bounced, len(touching))


def popular_pages(
    ctx: MetricContext,
    limit: int = DEFAULT_POPULAR_PAGES_LIMIT,
) -> List[PageStats]:
    """Top-N páginas por vistas (desc, estable ante empates)."""
    if limit <= 0:
        return []

    groups: Dict[str, List[PageViewEvent]] = {}
    titles: Dict[str, Optional[str]] = {}
    for event in ctx.events:
        groups.setdefault(event.page_url, []).append(event)
        if titles.get(event.page_url) is None and event.page_title:
            titles[event.page_url] = event.page_title

    pages = [
        PageStats(
            page_url=url,
            page_title=titles.get(url) or url,
            views=len(page_events),
            avg_time=_mean_duration(page_events),
            bounce_rate=_page_bounce_rate(ctx, page_events),
        )
        for url, page_events in groups.items()
    ]
    pages.sort(key=lambda page: page.views, reverse=True)
    return pages[:limit]
