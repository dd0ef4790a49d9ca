"""
TrafficLens – API Schemas (Pydantic)
======================================
Schemas de validación para request/response de la API REST.

Los campos viajan en camelCase (contrato del script de tracking y del
dashboard); en Python se usan en snake_case vía alias.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from trafficlens.application.dto.tracking_dto import TrackPageViewRequestDTO


class TrackPageViewRequest(BaseModel):
    """
    Body de POST /api/analytics/track.

    Todos los campos son opcionales a nivel de schema: la ausencia de
    pageUrl/visitorId la reporta el dominio como MISSING_REQUIRED_FIELDS
    (400) en lugar del 422 genérico de FastAPI.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page_url: Optional[str] = Field(default=None, alias="pageUrl")
    page_title: Optional[str] = Field(default=None, alias="pageTitle")
    visitor_id: Optional[str] = Field(default=None, alias="visitorId")
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    referrer: Optional[str] = None
    user_agent: Optional[str] = Field(default=None, alias="userAgent")
    country: Optional[str] = None
    device: Optional[str] = None

    def to_dto(self) -> TrackPageViewRequestDTO:
        return TrackPageViewRequestDTO(
            page_url=self.page_url,
            visitor_id=self.visitor_id,
            page_title=self.page_title,
            session_id=self.session_id,
            referrer=self.referrer,
            user_agent=self.user_agent,
            country=self.country,
            device=self.device,
        )


class TrackPageViewResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    service: str
    pageViews: int
    visitors: int
