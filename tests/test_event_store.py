"""Contract tests for the in-memory and SQL event stores."""

import asyncio

import pytest

from conftest import utc
from trafficlens.domain.entities.page_view import NewPageView
from trafficlens.domain.exceptions.domain_errors import VisitorAlreadyExistsError
from trafficlens.infrastructure.persistence.database import DatabaseManager
from trafficlens.infrastructure.persistence.repositories.memory_event_store import InMemoryEventStore
from trafficlens.infrastructure.persistence.repositories.sql_event_store import SqlEventStore
from trafficlens.shared.config.settings import Settings


def new_view(visitor_id="v1", page_url="/", timestamp=None, **kwargs) -> NewPageView:
    return NewPageView(
        page_url=page_url,
        visitor_id=visitor_id,
        timestamp=timestamp or utc(2024, 1, 1, 12),
        **kwargs,
    )


@pytest.fixture(params=["memory", "sql"])
async def store(request, tmp_path):
    """Run every contract test against both implementations."""
    if request.param == "memory":
        yield InMemoryEventStore()
        return

    manager = DatabaseManager(Settings(db_url=f"sqlite+aiosqlite:///{tmp_path / 'contract.db'}"))
    await manager.initialize()
    yield SqlEventStore(manager.session_factory)
    await manager.close()


class TestPageViews:
    """Test suite for the append-only page view log."""

    async def test_ids_are_monotonic(self, store):
        """Each recorded event gets a strictly increasing id."""
        first = await store.record_page_view(new_view())
        second = await store.record_page_view(new_view(page_url="/about"))

        assert second.id > first.id
        assert await store.count_page_views() == 2

    async def test_optional_fields_round_trip(self, store):
        """Optional fields keep their values and nulls."""
        event = await store.record_page_view(new_view(
            page_title="Home Page",
            session_id="s1",
            referrer=None,
            country="Japan",
            device="Mobile",
            duration=None,
            bounced=None,
        ))

        [stored] = await store.get_page_views(utc(2024, 1, 1), utc(2024, 1, 2))

        assert stored.id == event.id
        assert stored.page_title == "Home Page"
        assert stored.referrer is None
        assert stored.source == "Direct"
        assert stored.duration is None
        assert stored.bounced is None
        assert stored.timestamp == utc(2024, 1, 1, 12)

    async def test_range_is_inclusive(self, store):
        """Events exactly on start or end are included."""
        for day in (1, 2, 3, 4):
            await store.record_page_view(new_view(timestamp=utc(2024, 1, day)))

        events = await store.get_page_views(utc(2024, 1, 2), utc(2024, 1, 3))

        assert [e.timestamp for e in events] == [utc(2024, 1, 2), utc(2024, 1, 3)]

    async def test_events_in_insertion_order(self, store):
        """Range queries return events in insertion order."""
        await store.record_page_view(new_view(page_url="/late", timestamp=utc(2024, 1, 1, 15)))
        await store.record_page_view(new_view(page_url="/early", timestamp=utc(2024, 1, 1, 9)))

        events = await store.get_page_views(utc(2024, 1, 1), utc(2024, 1, 2))

        assert [e.page_url for e in events] == ["/late", "/early"]

    async def test_empty_range(self, store):
        """A range with no events returns an empty list."""
        assert await store.get_page_views(utc(2030, 1, 1), utc(2030, 1, 2)) == []


class TestVisitors:
    """Test suite for visitor records."""

    async def test_unknown_visitor(self, store):
        """get_visitor of an unknown id returns None."""
        assert await store.get_visitor("nobody") is None

    async def test_save_then_update(self, store):
        """update_visitor bumps visits and last_seen."""
        await store.save_visitor("v1", first_seen=utc(2024, 1, 1), last_seen=utc(2024, 1, 1))

        updated = await store.update_visitor("v1", utc(2024, 1, 5))

        assert updated.visits == 2
        assert updated.first_seen == utc(2024, 1, 1)
        assert updated.last_seen == utc(2024, 1, 5)
        assert (await store.get_visitor("v1")).visits == 2
        assert await store.count_visitors() == 1

    async def test_update_unknown_visitor_returns_none(self, store):
        """Updating a visitor that was never saved is a no-op."""
        assert await store.update_visitor("ghost", utc(2024, 1, 1)) is None
        assert await store.count_visitors() == 0

    async def test_duplicate_save_raises(self, store):
        """Saving an existing id fails and leaves the stored visitor untouched."""
        await store.save_visitor("v1", first_seen=utc(2024, 1, 1), last_seen=utc(2024, 1, 1))
        await store.update_visitor("v1", utc(2024, 1, 2))

        with pytest.raises(VisitorAlreadyExistsError) as exc_info:
            await store.save_visitor("v1", first_seen=utc(2024, 1, 3), last_seen=utc(2024, 1, 3))

        assert exc_info.value.visitor_id == "v1"
        assert (await store.get_visitor("v1")).visits == 2
        assert await store.count_visitors() == 1


class TestMemoryStoreConcurrency:
    """Concurrent writes against the in-memory store."""

    async def test_concurrent_appends_keep_unique_ids(self, memory_store):
        """Parallel writers never reuse an id."""
        events = await asyncio.gather(*(
            memory_store.record_page_view(new_view(visitor_id=f"v{i}")) for i in range(50)
        ))

        assert len({e.id for e in events}) == 50
        assert await memory_store.count_page_views() == 50
