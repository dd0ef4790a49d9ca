"""
TrafficLens – Domain Repository Interface: Event Store
========================================================
Interfaz abstracta del log de page views y de la tabla de visitantes.

Esta interfaz define el CONTRATO que debe cumplir cualquier
implementación (InMemory para tests/demo, SQLAlchemy para producción).

REGLA DE CLEAN ARCHITECTURE:
- Esta interfaz vive en domain/ (capa interna)
- Las implementaciones viven en infrastructure/ (capa externa)
- Los agregadores NO conocen el store: reciben la lista ya filtrada
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from trafficlens.domain.entities.page_view import NewPageView, PageViewEvent
from trafficlens.domain.entities.visitor import Visitor


class IEventStore(ABC):
    """
    Interfaz abstracta del Event Store.

    OPERACIONES ASYNC:
    Todas las operaciones son async para no bloquear el event loop.

    APPEND-ONLY:
    Los eventos nunca se modifican ni se borran. Los ids son únicos y
    estrictamente crecientes en orden de inserción.

    CONSISTENCIA:
    Una lectura concurrente con escrituras ve un prefijo del log.
    """

    @abstractmethod
    async def record_page_view(self, page_view: NewPageView) -> PageViewEvent:
        """
        Asigna el siguiente id y agrega el evento al log.

        No valida campos más allá de lo que ya exigió la frontera
        (page_url y visitor_id).

        Returns:
            El evento persistido con su id
        """
        pass

    @abstractmethod
    async def get_page_views(self, start: datetime, end: datetime) -> List[PageViewEvent]:
        """
        Eventos con start <= timestamp <= end, en orden de inserción.

        Sin paginación: el caller restringe el rango si necesita acotar
        el coste.
        """
        pass

    @abstractmethod
    async def get_visitor(self, visitor_id: str) -> Optional[Visitor]:
        """Visitor si existe, None si no."""
        pass

    @abstractmethod
    async def save_visitor(
        self,
        visitor_id: str,
        first_seen: datetime,
        last_seen: datetime,
    ) -> Visitor:
        """
        Crea el visitante con visits = 1.

        Raises:
            VisitorAlreadyExistsError: si el id ya está registrado
        """
        pass

    @abstractmethod
    async def update_visitor(self, visitor_id: str, last_seen: datetime) -> Optional[Visitor]:
        """
        Incrementa visits y fija last_seen.

        Returns:
            Visitor actualizado, o None si el visitante no existe
            (no es un error: el caller decide crearlo).
        """
        pass

    @abstractmethod
    async def count_page_views(self) -> int:
        """Total de eventos en el log."""
        pass

    @abstractmethod
    async def count_visitors(self) -> int:
        """Total de visitantes registrados."""
        pass
