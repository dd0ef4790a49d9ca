"""
TrafficLens – Domain Value Objects: Metrics
=============================================
Estructuras inmutables con los resultados de la agregación.

PRINCIPIO DE DISEÑO:
  Son VALUE OBJECTS puros: no tienen identidad ni lógica de negocio,
  solo transportan datos ya calculados. Cada consulta genera objetos
  NUEVOS a partir del mismo MetricContext.

SERIALIZACIÓN:
  to_dict() produce las claves camelCase que consume el frontend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class MetricSnapshot:
    """Valor actual + variación % frente al periodo de comparación."""

    value: float
    change: float = 0.0

    def to_dict(self) -> dict:
        return {"value": self.value, "change": self.change}


@dataclass(frozen=True, slots=True)
class OverviewValues:
    """Las cuatro métricas de cabecera de un rango (sin comparar)."""

    unique_visitors: int = 0
    page_views: int = 0
    avg_session_duration: float = 0.0
    bounce_rate: float = 0.0


@dataclass(frozen=True, slots=True)
class OverviewMetrics:
    """Overview con cada métrica expresada como MetricSnapshot."""

    unique_visitors: MetricSnapshot
    page_views: MetricSnapshot
    avg_session_duration: MetricSnapshot
    bounce_rate: MetricSnapshot

    def to_dict(self) -> dict:
        return {
            "uniqueVisitors": self.unique_visitors.to_dict(),
            "pageViews": self.page_views.to_dict(),
            "avgSessionDuration": self.avg_session_duration.to_dict(),
            "bounceRate": self.bounce_rate.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class MetricComparison:
    """Fila de la vista de comparación entre dos rangos arbitrarios."""

    current: float
    previous: float
    difference: float

    def to_dict(self) -> dict:
        return {
            "current": self.current,
            "previous": self.previous,
            "difference": self.difference,
        }


@dataclass(frozen=True, slots=True)
class DimensionCount:
    """Conteo crudo por valor de dimensión (país, device, referrer)."""

    name: str
    count: int


@dataclass(frozen=True, slots=True)
class BreakdownEntry:
    """Conteo con porcentaje redondeado sobre el total atribuido."""

    name: str
    count: int
    percentage: int


@dataclass(frozen=True, slots=True)
class TrafficSourceEntry:
    """
    Fuente de tráfico ya clasificada para presentación.

    conversion es siempre None: no existe input de conversiones.
    change es la variación real del conteo frente al periodo anterior.
    """

    name: str
    visitors: int
    icon: str
    change: float = 0.0
    conversion: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "visitors": self.visitors,
            "icon": self.icon,
            "conversion": self.conversion,
            "change": self.change,
        }


@dataclass(frozen=True, slots=True)
class PageStats:
    """Métricas por página (popular pages). avg_time en segundos."""

    page_url: str
    page_title: str
    views: int
    avg_time: float
    bounce_rate: float


@dataclass(frozen=True, slots=True)
class SeriesPoint:
    date: str
    visitors: int = 0
    page_views: int = 0

    def to_dict(self) -> dict:
        return {"date": self.date, "visitors": self.visitors, "pageViews": self.page_views}


@dataclass(frozen=True, slots=True)
class VisitorSeries:
    interval: str
    data: tuple = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "interval": self.interval,
            "data": [point.to_dict() for point in self.data],
        }
