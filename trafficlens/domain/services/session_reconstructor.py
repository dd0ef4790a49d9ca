"""
TrafficLens – Domain Service: Session Reconstructor
=====================================================
Agrupa page views en sesiones usando el session_id del evento.

ALGORITMO:
  1. Particionar eventos por session_id, descartando los que no tienen.
  2. view_count de una sesión = número de eventos en su partición.
  3. Una sesión rebota (bounced) sii view_count == 1.

La entrada YA viene restringida al rango consultado: una sesión que
cruza el borde del rango solo cuenta los eventos que caen dentro.

BOUNCE RATE:
  bounced / total * 100, y exactamente 0.0 si no hay sesiones
  (nunca NaN). Eventos sin session_id no cuentan ni en numerador
  ni en denominador.

COMPLEJIDAD: O(n) una pasada.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from trafficlens.domain.entities.page_view import PageViewEvent


@dataclass(frozen=True, slots=True)
class Session:
    """Sesión derivada (nunca se persiste)."""

    session_id: str
    events: tuple = field(default_factory=tuple)

    @property
    def view_count(self) -> int:
        return len(self.events)

    @property
    def bounced(self) -> bool:
        return self.view_count == 1


class SessionIndex:
    """
    Sesiones de un conjunto de eventos, en orden de primera aparición.

    Es de solo lectura una vez construido.
    """

    def __init__(self, sessions: Dict[str, Session]) -> None:
        self._sessions = sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(self._sessions.values())

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def get(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def view_count(self, session_id: str) -> int:
        session = self._sessions.get(session_id)
        return session.view_count if session else 0

    @property
    def bounced_count(self) -> int:
        return sum(1 for s in self._sessions.values() if s.bounced)

    def bounce_rate(self) -> float:
        """Porcentaje de sesiones con un solo evento. 0.0 si no hay sesiones."""
        return bounce_rate_of(self.bounced_count, len(self._sessions))


def bounce_rate_of(bounced: int, total: int) -> float:
    """Division protegida: sin sesiones el bounce rate es 0."""
    if total == 0:
        return 0.0
    return bounced / total * 100


class SessionReconstructor:
    """Construye el SessionIndex de una lista de eventos ya filtrada."""

    @staticmethod
    def reconstruct(events: Iterable[PageViewEvent]) -> SessionIndex:
        partitions: Dict[str, List[PageViewEvent]] = {}
        for event in events:
            if not event.session_id:
                continue
            partitions.setdefault(event.session_id, []).append(event)

        return SessionIndex({
            session_id: Session(session_id=session_id, events=tuple(session_events))
            for session_id, session_events in partitions.items()
        })
