"""Shared fixtures for TrafficLens tests."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import pytest

from trafficlens.domain.entities.page_view import PageViewEvent
from trafficlens.infrastructure.persistence.database import DatabaseManager
from trafficlens.infrastructure.persistence.repositories.memory_event_store import InMemoryEventStore
from trafficlens.infrastructure.persistence.repositories.sql_event_store import SqlEventStore
from trafficlens.shared.config.settings import Settings


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    """Build a UTC-aware datetime."""
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def make_event() -> Callable[..., PageViewEvent]:
    """Factory for PageViewEvent with sequential ids and sane defaults."""
    ids = itertools.count(1)

    def _make(
        visitor_id: str = "v1",
        session_id: str | None = "s1",
        page_url: str = "/",
        timestamp: datetime | None = None,
        **kwargs,
    ) -> PageViewEvent:
        return PageViewEvent(
            id=next(ids),
            page_url=page_url,
            visitor_id=visitor_id,
            session_id=session_id,
            timestamp=timestamp or utc(2024, 1, 1, 12),
            **kwargs,
        )

    return _make


@pytest.fixture
def memory_store() -> InMemoryEventStore:
    """Empty in-memory event store."""
    return InMemoryEventStore()


@pytest.fixture
def sql_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(db_url=f"sqlite+aiosqlite:///{tmp_path / 'trafficlens.db'}", store_backend="sql")


@pytest.fixture
async def db_manager(sql_settings: Settings) -> DatabaseManager:
    """Initialized DatabaseManager with the schema created."""
    manager = DatabaseManager(sql_settings)
    await manager.initialize()
    yield manager
    await manager.close()


@pytest.fixture
async def sql_store(db_manager: DatabaseManager) -> SqlEventStore:
    """SQL event store over the SQLite test database."""
    return SqlEventStore(db_manager.session_factory)
