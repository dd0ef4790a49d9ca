"""
TrafficLens – Domain Service: MetricContext
=============================================
Una lectura del store, muchas métricas derivadas.

Cada request construye UN MetricContext con la lista filtrada por rango
y el SessionIndex calculado una sola vez. Todos los agregadores reciben
la misma instancia, así la respuesta es internamente consistente y no
se re-escanea el log por métrica.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from trafficlens.domain.entities.page_view import PageViewEvent
from trafficlens.domain.services.session_reconstructor import SessionIndex, SessionReconstructor
from trafficlens.domain.value_objects.date_range import DateRange


@dataclass(frozen=True)
class MetricContext:
    """Eventos de un rango + sus sesiones reconstruidas."""

    events: tuple
    sessions: SessionIndex
    date_range: Optional[DateRange] = None

    @classmethod
    def from_events(
        cls,
        events: Iterable[PageViewEvent],
        date_range: Optional[DateRange] = None,
    ) -> "MetricContext":
        frozen = tuple(events)
        return cls(
            events=frozen,
            sessions=SessionReconstructor.reconstruct(frozen),
            date_range=date_range,
        )
