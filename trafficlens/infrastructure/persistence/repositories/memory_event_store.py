"""
In-Memory Event Store.

Implementación en proceso de IEventStore: una lista append-only para
los eventos y un dict para los visitantes. Sirve para tests, demo y
despliegues de un solo proceso.

CONCURRENCIA:
  Las escrituras se serializan con un asyncio.Lock. Las lecturas no
  toman el lock: copian el prefijo del log visible en ese momento.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Optional

from trafficlens.domain.entities.page_view import NewPageView, PageViewEvent
from trafficlens.domain.entities.visitor import Visitor
from trafficlens.domain.exceptions.domain_errors import VisitorAlreadyExistsError
from trafficlens.domain.repositories.event_store import IEventStore
from trafficlens.domain.value_objects.date_range import as_utc

logger = logging.getLogger("trafficlens.infrastructure.memory_event_store")


class InMemoryEventStore(IEventStore):
    """Event Store en memoria del proceso."""

    def __init__(self) -> None:
        self._page_views: List[PageViewEvent] = []
        self._visitors: Dict[str, Visitor] = {}
        self._next_id = 1
        self._write_lock = asyncio.Lock()

    async def record_page_view(self, page_view: NewPageView) -> PageViewEvent:
        async with self._write_lock:
            event = page_view.with_id(self._next_id)
            self._next_id += 1
            self._page_views.append(event)

        logger.debug("Page view guardada: id=%d url=%s", event.id, event.page_url)
        return event

    async def get_page_views(self, start: datetime, end: datetime) -> List[PageViewEvent]:
        start, end = as_utc(start), as_utc(end)
        snapshot = self._page_views[:]
        return [e for e in snapshot if start <= as_utc(e.timestamp) <= end]

    async def get_visitor(self, visitor_id: str) -> Optional[Visitor]:
        return self._visitors.get(visitor_id)

    async def save_visitor(
        self,
        visitor_id: str,
        first_seen: datetime,
        last_seen: datetime,
    ) -> Visitor:
        visitor = Visitor(id=visitor_id, first_seen=first_seen, last_seen=last_seen, visits=1)
        async with self._write_lock:
            if visitor_id in self._visitors:
                raise VisitorAlreadyExistsError(visitor_id)
            self._visitors[visitor_id] = visitor
        return visitor

    async def update_visitor(self, visitor_id: str, last_seen: datetime) -> Optional[Visitor]:
        async with self._write_lock:
            visitor = self._visitors.get(visitor_id)
            if visitor is None:
                return None
            updated = visitor.touched(last_seen)
            self._visitors[visitor_id] = updated
        return updated

    async def count_page_views(self) -> int:
        return len(self._page_views)

    async def count_visitors(self) -> int:
        return len(self._visitors)
