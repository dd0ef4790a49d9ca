"""
TrafficLens – Domain Service: Series Builder
==============================================
Agrupa eventos en buckets day/week/month y produce una serie SIN HUECOS.

CLAVES DE BUCKET (UTC):
  - day   → "YYYY-MM-DD" (fecha truncada a medianoche)
  - week  → "YYYY-MM-DD" del domingo igual o anterior a la fecha
  - month → "YYYY-MM"

ALGORITMO:
  1. Para cada evento → clave de bucket; se acumula un set de
     visitor_id (serie de visitantes) y un contador (serie de vistas).
  2. Independientemente de los datos, se enumeran TODOS los buckets
     que intersectan [start, end]: se alinea start al inicio de su
     bucket y se avanza bucket a bucket hasta pasar el de end.
  3. Un registro por bucket enumerado, con 0 donde no hubo eventos.

ALINEACIÓN:
  Avanzar desde el inicio alineado (y no desde start tal cual) evita
  perder el último bucket cuando end cae a una hora anterior a la de
  start, y evita saltarse febrero al sumar meses desde un día 31.

INVARIANTE:
  len(data) == número de buckets que abarcan [start, end], también con
  una lista de eventos vacía.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, Iterator, List, Set

from trafficlens.domain.entities.page_view import PageViewEvent
from trafficlens.domain.value_objects.date_range import DateRange, as_utc
from trafficlens.domain.value_objects.interval import Interval
from trafficlens.domain.value_objects.metrics import SeriesPoint, VisitorSeries


def bucket_start(instant: datetime, interval: Interval) -> date:
    """Primer día del bucket que contiene al instante (en UTC)."""
    day = as_utc(instant).date()
    if interval is Interval.WEEK:
        # weekday(): lunes=0 … domingo=6 → retroceso hasta el domingo
        return day - timedelta(days=(day.weekday() + 1) % 7)
    if interval is Interval.MONTH:
        return day.replace(day=1)
    return day


def next_bucket(start: date, interval: Interval) -> date:
    if interval is Interval.WEEK:
        return start + timedelta(days=7)
    if interval is Interval.MONTH:
        if start.month == 12:
            return date(start.year + 1, 1, 1)
        return date(start.year, start.month + 1, 1)
    return start + timedelta(days=1)


def bucket_key(start: date, interval: Interval) -> str:
    if interval is Interval.MONTH:
        return f"{start.year:04d}-{start.month:02d}"
    return start.isoformat()


def iter_bucket_keys(date_range: DateRange, interval: Interval) -> Iterator[str]:
    """Claves de todos los buckets de [start, end], cronológicas y únicas."""
    current = bucket_start(date_range.start, interval)
    last = bucket_start(date_range.end, interval)
    while current <= last:
        yield bucket_key(current, interval)
        current = next_bucket(current, interval)


class SeriesBuilder:
    """
    Construye la serie de visitantes y page views por intervalo.

    Uso:
        series = SeriesBuilder.build(events, date_range, Interval.WEEK)
        series.to_dict()  # {"interval": "week", "data": [...]}
    """

    @staticmethod
    def build(
        events: Iterable[PageViewEvent],
        date_range: DateRange,
        interval: Interval = Interval.DAY,
    ) -> VisitorSeries:
        visitors: Dict[str, Set[str]] = {}
        views: Dict[str, int] = {}

        for event in events:
            key = bucket_key(bucket_start(event.timestamp, interval), interval)
            visitors.setdefault(key, set()).add(event.visitor_id)
            views[key] = views.get(key, 0) + 1

        data: List[SeriesPoint] = [
            SeriesPoint(
                date=key,
                visitors=len(visitors.get(key, ())),
                page_views=views.get(key, 0),
            )
            for key in iter_bucket_keys(date_range, interval)
        ]
        return VisitorSeries(interval=interval.value, data=tuple(data))
