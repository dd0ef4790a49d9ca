"""
TrafficLens – Application DTO: Tracking
=========================================
Data Transfer Objects para la ingesta de page views.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from trafficlens.domain.entities.page_view import NewPageView, PageViewEvent
from trafficlens.domain.entities.visitor import Visitor
from trafficlens.domain.exceptions.domain_errors import MissingRequiredFieldsError


@dataclass
class TrackPageViewRequestDTO:
    """Evento recibido del script de tracking."""

    page_url: Optional[str] = None
    visitor_id: Optional[str] = None
    page_title: Optional[str] = None
    session_id: Optional[str] = None
    referrer: Optional[str] = None
    user_agent: Optional[str] = None
    country: Optional[str] = None
    device: Optional[str] = None

    def validate(self) -> None:
        """pageUrl y visitorId son obligatorios (y no vacíos)."""
        missing = []
        if not (self.page_url or "").strip():
            missing.append("pageUrl")
        if not (self.visitor_id or "").strip():
            missing.append("visitorId")
        if missing:
            raise MissingRequiredFieldsError(missing)

    def to_new_page_view(self, timestamp: datetime) -> NewPageView:
        """duration y bounced quedan en None: se conocen más tarde."""
        return NewPageView(
            page_url=self.page_url,
            visitor_id=self.visitor_id,
            timestamp=timestamp,
            page_title=self.page_title,
            session_id=self.session_id or None,
            referrer=self.referrer or None,
            user_agent=self.user_agent,
            country=self.country or None,
            device=self.device or None,
            duration=None,
            bounced=None,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackPageViewRequestDTO":
        return cls(
            page_url=data.get("pageUrl"),
            visitor_id=data.get("visitorId"),
            page_title=data.get("pageTitle"),
            session_id=data.get("sessionId"),
            referrer=data.get("referrer"),
            user_agent=data.get("userAgent"),
            country=data.get("country"),
            device=data.get("device"),
        )


@dataclass
class TrackPageViewResult:
    """Resultado de registrar una page view."""

    event: PageViewEvent
    visitor: Visitor
    new_visitor: bool = False
