"""
TrafficLens – Application DTO: Reports
========================================
Formas que consume el frontend para breakdowns y páginas populares.

Los DTOs sirven como contratos entre capas.
Son estructuras simples sin lógica de negocio.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from trafficlens.domain.value_objects.metrics import BreakdownEntry, PageStats


def format_avg_time(seconds: float) -> str:
    """Segundos → "<min>m <seg>s" (truncando)."""
    return f"{int(seconds // 60)}m {int(seconds % 60)}s"


@dataclass
class CountryDTO:
    name: str
    visitors: int
    percentage: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "visitors": self.visitors, "percentage": self.percentage}

    @classmethod
    def from_entry(cls, entry: BreakdownEntry) -> "CountryDTO":
        return cls(name=entry.name, visitors=entry.count, percentage=entry.percentage)


@dataclass
class DeviceDTO:
    name: str
    count: int
    percentage: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self.count, "percentage": self.percentage}

    @classmethod
    def from_entry(cls, entry: BreakdownEntry) -> "DeviceDTO":
        return cls(name=entry.name, count=entry.count, percentage=entry.percentage)


@dataclass
class PopularPageDTO:
    page_url: str
    page_title: str
    views: int
    avg_time: str
    bounce_rate: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pageUrl": self.page_url,
            "pageTitle": self.page_title,
            "views": self.views,
            "avgTime": self.avg_time,
            "bounceRate": self.bounce_rate,
        }

    @classmethod
    def from_stats(cls, stats: PageStats) -> "PopularPageDTO":
        return cls(
            page_url=stats.page_url,
            page_title=stats.page_title,
            views=stats.views,
            avg_time=format_avg_time(stats.avg_time),
            bounce_rate=stats.bounce_rate,
        )
