"""
SQL Event Store Implementation.

Implementación concreta de IEventStore usando SQLAlchemy async.
Funciona con MySQL (aiomysql) en producción y SQLite (aiosqlite) en tests.

TRANSACCIONES:
  Cada operación abre su propia sesión desde la factory y hace commit
  al escribir. El log sigue siendo append-only: no hay UPDATE ni DELETE
  sobre page_views.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from trafficlens.domain.entities.page_view import NewPageView, PageViewEvent
from trafficlens.domain.entities.visitor import Visitor
from trafficlens.domain.exceptions.domain_errors import VisitorAlreadyExistsError
from trafficlens.domain.repositories.event_store import IEventStore
from trafficlens.infrastructure.persistence.mappers.event_mapper import (
    PageViewMapper,
    VisitorMapper,
    to_db_time,
)
from trafficlens.infrastructure.persistence.models import PageViewModel, VisitorModel

logger = logging.getLogger("trafficlens.infrastructure.sql_event_store")


class SqlEventStore(IEventStore):
    """
    Implementación async del Event Store.

    Implementa IEventStore usando SQLAlchemy 2.0 + driver async.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self._page_view_mapper = PageViewMapper()
        self._visitor_mapper = VisitorMapper()

    # ════════════════════════════════════════════════════════════════
    #  PAGE VIEWS
    # ════════════════════════════════════════════════════════════════

    async def record_page_view(self, page_view: NewPageView) -> PageViewEvent:
        model = PageViewModel(**self._page_view_mapper.to_model(page_view))
        async with self._session_factory() as session:
            session.add(model)
            await session.commit()
            event = self._page_view_mapper.to_entity(model)

        logger.debug("Page view guardada: id=%d url=%s", event.id, event.page_url)
        return event

    async def get_page_views(self, start: datetime, end: datetime) -> List[PageViewEvent]:
        query = (
            select(PageViewModel)
            .where(PageViewModel.timestamp >= to_db_time(start))
            .where(PageViewModel.timestamp <= to_db_time(end))
            .order_by(PageViewModel.id)
        )
        async with self._session_factory() as session:
            result = await session.execute(query)
            models = result.scalars().all()

        return [self._page_view_mapper.to_entity(m) for m in models]

    async def count_page_views(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(select(func.count()).select_from(PageViewModel))
            return result.scalar() or 0

    # ════════════════════════════════════════════════════════════════
    #  VISITORS
    # ════════════════════════════════════════════════════════════════

    async def get_visitor(self, visitor_id: str) -> Optional[Visitor]:
        async with self._session_factory() as session:
            model = await session.get(VisitorModel, visitor_id)
            if model is None:
                return None
            return self._visitor_mapper.to_entity(model)

    async def save_visitor(
        self,
        visitor_id: str,
        first_seen: datetime,
        last_seen: datetime,
    ) -> Visitor:
        model = VisitorModel(
            id=visitor_id,
            first_seen=to_db_time(first_seen),
            last_seen=to_db_time(last_seen),
            visits=1,
        )
        async with self._session_factory() as session:
            session.add(model)
            try:
                await session.commit()
            except IntegrityError as exc:
                # PK duplicada: otro worker creó el visitante primero
                await session.rollback()
                raise VisitorAlreadyExistsError(visitor_id) from exc
            return self._visitor_mapper.to_entity(model)

    async def update_visitor(self, visitor_id: str, last_seen: datetime) -> Optional[Visitor]:
        # Incremento atómico en la base: no hay read-modify-write en Python
        statement = (
            update(VisitorModel)
            .where(VisitorModel.id == visitor_id)
            .values(visits=VisitorModel.visits + 1, last_seen=to_db_time(last_seen))
        )
        async with self._session_factory() as session:
            result = await session.execute(statement)
            if result.rowcount == 0:
                await session.rollback()
                return None
            await session.commit()
            model = await session.get(VisitorModel, visitor_id, populate_existing=True)

        return self._visitor_mapper.to_entity(model)

    async def count_visitors(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(select(func.count()).select_from(VisitorModel))
            return result.scalar() or 0
