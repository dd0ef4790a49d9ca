"""
TrafficLens – Domain Entity: Visitor
======================================
Visitante identificado por un id estable que aporta el cliente
(el store NO genera ids de visitante).

Ciclo de vida:
  1. Primer evento de tracking → save (visits = 1)
  2. Cada evento posterior     → update (last_seen, visits + 1)
  Nunca se borra mientras viva el store.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Visitor:
    """Registro de visitante con contador de visitas."""

    id: str
    first_seen: datetime
    last_seen: datetime
    visits: int = 1

    def touched(self, last_seen: datetime) -> "Visitor":
        """Nueva instancia con la visita registrada."""
        return replace(self, last_seen=last_seen, visits=self.visits + 1)
