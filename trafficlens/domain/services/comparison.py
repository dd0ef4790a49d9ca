"""
TrafficLens – Domain Service: Comparison Calculator
=====================================================
Variación porcentual entre dos snapshots ya calculados.

    change(c, p) = 0                    si p == 0
                 = (c - p) / p * 100    en otro caso

El calculador no sabe cómo se eligió el periodo previo: solo consume
dos OverviewValues. El periodo por defecto lo da DateRange.previous().
"""

from __future__ import annotations

from dataclasses import fields
from typing import Dict, Optional

from trafficlens.domain.value_objects.metrics import (
    MetricComparison,
    MetricSnapshot,
    OverviewMetrics,
    OverviewValues,
)

# Nombre de campo → clave del frontend
_METRIC_KEYS: Dict[str, str] = {
    "unique_visitors": "uniqueVisitors",
    "page_views": "pageViews",
    "avg_session_duration": "avgSessionDuration",
    "bounce_rate": "bounceRate",
}


def percentage_change(current: float, previous: float) -> float:
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def snapshot(current: float, previous: Optional[float] = None) -> MetricSnapshot:
    """MetricSnapshot; change solo se calcula si hay valor de comparación."""
    if previous is None:
        return MetricSnapshot(value=current)
    return MetricSnapshot(value=current, change=percentage_change(current, previous))


def compare_overview(
    current: OverviewValues,
    previous: Optional[OverviewValues] = None,
) -> OverviewMetrics:
    """Overview {value, change} por métrica."""

    def pick(name: str) -> MetricSnapshot:
        prior = getattr(previous, name) if previous is not None else None
        return snapshot(getattr(current, name), prior)

    return OverviewMetrics(
        unique_visitors=pick("unique_visitors"),
        page_views=pick("page_views"),
        avg_session_duration=pick("avg_session_duration"),
        bounce_rate=pick("bounce_rate"),
    )


def compare_values(
    current: OverviewValues,
    previous: OverviewValues,
) -> Dict[str, MetricComparison]:
    """Filas {current, previous, difference} para la vista de comparación."""
    result: Dict[str, MetricComparison] = {}
    for f in fields(OverviewValues):
        c = getattr(current, f.name)
        p = getattr(previous, f.name)
        result[_METRIC_KEYS[f.name]] = MetricComparison(
            current=c, previous=p, difference=percentage_change(c, p),
        )
    return result
