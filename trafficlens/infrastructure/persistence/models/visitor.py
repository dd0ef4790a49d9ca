"""
TrafficLens – Visitor ORM Model
================================
Modelo para la tabla `visitors`. El id lo aporta el cliente.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from trafficlens.infrastructure.persistence.database import Base


class VisitorModel(Base):
    """Modelo ORM para visitantes."""

    __tablename__ = "visitors"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    first_seen: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    last_seen: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    visits: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def __repr__(self) -> str:
        return f"<Visitor(id='{self.id}', visits={self.visits})>"
