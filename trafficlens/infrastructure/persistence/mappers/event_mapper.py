"""
TrafficLens – Event Mappers
=============================
Mapea entre entidades de dominio y modelos ORM.

Los DATETIME se guardan naive en UTC (MySQL no conserva tz); al leer
se les vuelve a adjuntar UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from trafficlens.domain.entities.page_view import NewPageView, PageViewEvent
from trafficlens.domain.entities.visitor import Visitor
from trafficlens.domain.value_objects.date_range import as_utc


def to_db_time(value: datetime) -> datetime:
    """Instante → DATETIME naive UTC."""
    return as_utc(value).replace(tzinfo=None)


def from_db_time(value: datetime) -> datetime:
    """DATETIME naive UTC → instante UTC-aware."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class PageViewMapper:
    """
    Mapper bidireccional PageViewEvent ↔ PageViewModel.
    """

    def to_model(self, page_view: NewPageView) -> Dict[str, Any]:
        """
        Convierte NewPageView a dict para crear PageViewModel.

        El id no se incluye: lo asigna la base de datos.
        """
        return {
            "page_url": page_view.page_url,
            "page_title": page_view.page_title,
            "visitor_id": page_view.visitor_id,
            "session_id": page_view.session_id,
            "referrer": page_view.referrer,
            "user_agent": page_view.user_agent,
            "country": page_view.country,
            "device": page_view.device,
            "timestamp": to_db_time(page_view.timestamp),
            "duration": page_view.duration,
            "bounced": page_view.bounced,
        }

    def to_entity(self, model: Any) -> PageViewEvent:
        return PageViewEvent(
            id=model.id,
            page_url=model.page_url,
            page_title=model.page_title,
            visitor_id=model.visitor_id,
            session_id=model.session_id,
            referrer=model.referrer,
            user_agent=model.user_agent,
            country=model.country,
            device=model.device,
            timestamp=from_db_time(model.timestamp),
            duration=model.duration,
            bounced=model.bounced,
        )


class VisitorMapper:
    """Mapper VisitorModel → Visitor."""

    def to_entity(self, model: Any) -> Visitor:
        return Visitor(
            id=model.id,
            first_seen=from_db_time(model.first_seen),
            last_seen=from_db_time(model.last_seen),
            visits=model.visits,
        )
