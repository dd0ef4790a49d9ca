"""
TrafficLens – Domain Entity: PageViewEvent
============================================
Registro inmutable de una visita a una página.

DECISIONES DE DISEÑO:
- frozen=True → el log de eventos es append-only. Una vez registrado,
  nadie puede alterar un evento (ni su duración ni su sesión).
- Los campos opcionales son explícitos (Optional), no dicts sin tipar.
- NewPageView es el mismo registro SIN id: el id lo asigna el Event Store
  al insertar, de forma monótona creciente.

CAMPOS:
- page_url / visitor_id: obligatorios (la frontera HTTP los valida)
- session_id: sin él, el evento no cuenta para métricas de sesión
- referrer:   None se normaliza a la fuente "Direct" al agregar
- duration:   segundos; None = aún desconocida (vista en curso)
- bounced:    reservado, la agregación no lo usa
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

DIRECT_SOURCE = "Direct"


@dataclass(frozen=True, slots=True)
class NewPageView:
    """Evento de página antes de ser persistido (sin id)."""

    page_url: str
    visitor_id: str
    timestamp: datetime
    page_title: Optional[str] = None
    session_id: Optional[str] = None
    referrer: Optional[str] = None
    user_agent: Optional[str] = None
    country: Optional[str] = None
    device: Optional[str] = None
    duration: Optional[int] = None
    bounced: Optional[bool] = None

    def with_id(self, event_id: int) -> "PageViewEvent":
        """Congela el evento con el id asignado por el store."""
        return PageViewEvent(
            id=event_id,
            page_url=self.page_url,
            visitor_id=self.visitor_id,
            timestamp=self.timestamp,
            page_title=self.page_title,
            session_id=self.session_id,
            referrer=self.referrer,
            user_agent=self.user_agent,
            country=self.country,
            device=self.device,
            duration=self.duration,
            bounced=self.bounced,
        )


@dataclass(frozen=True, slots=True)
class PageViewEvent:
    """Page view persistida en el log append-only."""

    id: int
    page_url: str
    visitor_id: str
    timestamp: datetime
    page_title: Optional[str] = None
    session_id: Optional[str] = None
    referrer: Optional[str] = None
    user_agent: Optional[str] = None
    country: Optional[str] = None
    device: Optional[str] = None
    duration: Optional[int] = None
    bounced: Optional[bool] = None

    @property
    def source(self) -> str:
        """Referrer normalizado: ausente → "Direct"."""
        return self.referrer or DIRECT_SOURCE
