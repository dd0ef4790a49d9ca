"""
Track Page View Use Case.

Registra una page view y crea/actualiza el visitante.

CONCURRENCIA:
  El upsert de visitante es get → save|update. Dos requests simultáneos
  del mismo visitor_id podrían perder un incremento de visits, así que
  se serializan con un asyncio.Lock por visitor_id. Visitantes distintos
  no se bloquean entre sí.

  Cada lock lleva un contador de tareas que lo usan; cuando la última
  lo suelta se elimina del mapa, que solo contiene visitantes en vuelo.

  El lock es por proceso. Con varios workers sobre el mismo store SQL,
  dos "primeros" eventos pueden llegar a save_visitor a la vez: el
  perdedor recibe VisitorAlreadyExistsError y registra la visita con
  update_visitor.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Dict, List, Optional

from trafficlens.application.dto.tracking_dto import TrackPageViewRequestDTO, TrackPageViewResult
from trafficlens.domain.entities.visitor import Visitor
from trafficlens.domain.exceptions.domain_errors import VisitorAlreadyExistsError
from trafficlens.domain.repositories.event_store import IEventStore
from trafficlens.domain.value_objects.date_range import utc_now
from trafficlens.shared.logging.logger import get_logger

logger = get_logger("usecase.track_page_view")


class TrackPageViewUseCase:
    """
    Caso de uso: registrar una page view.

    1. Valida pageUrl / visitorId (MissingRequiredFieldsError si faltan)
    2. Agrega el evento al log con timestamp del servidor
    3. Crea el visitante o incrementa sus visitas
    """

    def __init__(self, event_store: IEventStore):
        self._store = event_store
        # visitor_id → [lock, tareas que lo usan o esperan]
        self._visitor_locks: Dict[str, List] = {}

    @property
    def active_locks(self) -> int:
        """Visitantes con un upsert en curso."""
        return len(self._visitor_locks)

    @asynccontextmanager
    async def _visitor_lock(self, visitor_id: str) -> AsyncIterator[None]:
        entry = self._visitor_locks.setdefault(visitor_id, [asyncio.Lock(), 0])
        entry[1] += 1
        try:
            async with entry[0]:
                yield
        finally:
            entry[1] -= 1
            if entry[1] == 0:
                del self._visitor_locks[visitor_id]

    async def execute(
        self,
        request: TrackPageViewRequestDTO,
        now: Optional[datetime] = None,
    ) -> TrackPageViewResult:
        request.validate()
        timestamp = now or utc_now()

        event = await self._store.record_page_view(request.to_new_page_view(timestamp))

        async with self._visitor_lock(event.visitor_id):
            visitor, new_visitor = await self._upsert_visitor(event.visitor_id, timestamp)

        logger.debug(
            "Page view registrada: id=%d visitor=%s visits=%d",
            event.id, visitor.id, visitor.visits,
        )
        return TrackPageViewResult(event=event, visitor=visitor, new_visitor=new_visitor)

    async def _upsert_visitor(self, visitor_id: str, timestamp: datetime) -> tuple[Visitor, bool]:
        visitor = await self._store.get_visitor(visitor_id)
        if visitor is not None:
            return await self._store.update_visitor(visitor_id, timestamp), False

        try:
            visitor = await self._store.save_visitor(
                visitor_id, first_seen=timestamp, last_seen=timestamp,
            )
        except VisitorAlreadyExistsError:
            logger.debug("Visitante %s creado por otro writer, se actualiza", visitor_id)
            return await self._store.update_visitor(visitor_id, timestamp), False
        return visitor, True
