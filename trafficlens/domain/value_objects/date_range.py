"""
TrafficLens – Domain Value Object: DateRange
==============================================
Rango temporal inclusivo [start, end] sobre el que se agregan métricas.

Todos los instantes se normalizan a UTC-aware: un datetime naive se
interpreta como UTC (así lo envían los clientes con toISOString()).

PERIODO ANTERIOR:
  previous() devuelve el tramo inmediatamente anterior de igual longitud:
    previous_end   = start
    previous_start = start - (end - start)
  Es el periodo de comparación por defecto del overview.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from trafficlens.domain.exceptions.domain_errors import InvalidDateRangeError


def as_utc(value: datetime) -> datetime:
    """Normaliza un datetime a UTC-aware."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class DateRange:
    """Rango inclusivo de instantes UTC."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        # frozen → object.__setattr__ para normalizar
        object.__setattr__(self, "start", as_utc(self.start))
        object.__setattr__(self, "end", as_utc(self.end))
        if self.start > self.end:
            raise InvalidDateRangeError("startDate must not be after endDate")

    @property
    def length(self) -> timedelta:
        return self.end - self.start

    def contains(self, instant: datetime) -> bool:
        return self.start <= as_utc(instant) <= self.end

    def previous(self) -> "DateRange":
        """Periodo anterior de igual longitud que termina en self.start."""
        return DateRange(start=self.start - self.length, end=self.start)

    @classmethod
    def trailing(cls, days: int, now: Optional[datetime] = None) -> "DateRange":
        """Ventana de los últimos `days` días terminando en `now`."""
        end = as_utc(now) if now is not None else utc_now()
        return cls(start=end - timedelta(days=days), end=end)
