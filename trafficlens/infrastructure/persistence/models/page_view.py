"""
TrafficLens – PageView ORM Model
=================================
Modelo para la tabla `page_views` (log append-only de visitas).

DECISIONES DE DISEÑO:

- id BIGINT autoincrement: monótono creciente, es el orden de inserción.
- timestamp DATETIME naive en UTC: el mapper normaliza en ambos sentidos.
- Índice por timestamp para las lecturas por rango.
- duration / bounced nullable: None = aún desconocido.

RELACIÓN CON ENTIDAD DE DOMINIO:
- Este modelo mapea a/desde domain.entities.PageViewEvent.
- La conversión se hace en PageViewMapper (no aquí).
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trafficlens.infrastructure.persistence.database import Base


class PageViewModel(Base):
    """Modelo ORM para page views."""

    __tablename__ = "page_views"

    # ─── Primary Key ──────────────────────────────────────────────────
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )

    # ─── Página ───────────────────────────────────────────────────────
    page_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    page_title: Mapped[str | None] = mapped_column(String(512), default=None)

    # ─── Identificación ───────────────────────────────────────────────
    visitor_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    session_id: Mapped[str | None] = mapped_column(String(128), default=None, index=True)

    # ─── Contexto ─────────────────────────────────────────────────────
    referrer: Mapped[str | None] = mapped_column(Text, default=None)
    user_agent: Mapped[str | None] = mapped_column(Text, default=None)
    country: Mapped[str | None] = mapped_column(String(128), default=None)
    device: Mapped[str | None] = mapped_column(String(32), default=None)

    # ─── Tiempo ───────────────────────────────────────────────────────
    timestamp: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, index=True,
        comment="Instante UTC de la vista",
    )
    duration: Mapped[int | None] = mapped_column(
        Integer, default=None,
        comment="Segundos en la página (None = desconocido)",
    )
    bounced: Mapped[bool | None] = mapped_column(Boolean, default=None)

    def __repr__(self) -> str:
        return f"<PageView(id={self.id}, url='{self.page_url}')>"
