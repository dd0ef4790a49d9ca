"""
TrafficLens – Domain Value Object: Interval
=============================================
Granularidad de las series temporales: day, week, month.
"""

from __future__ import annotations

from enum import Enum

from trafficlens.domain.exceptions.domain_errors import UnsupportedIntervalError


class Interval(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @classmethod
    def parse(cls, value: str | None, strict: bool = False) -> "Interval":
        """
        Convierte el query param en Interval.

        Un valor desconocido cae a DAY (comportamiento histórico del
        endpoint) salvo con strict=True, donde se rechaza.
        """
        if value is None:
            return cls.DAY
        try:
            return cls(value.lower())
        except ValueError:
            if strict:
                raise UnsupportedIntervalError(value)
            return cls.DAY
