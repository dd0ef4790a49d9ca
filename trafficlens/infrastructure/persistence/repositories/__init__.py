"""
Infrastructure Repositories.

Implementaciones concretas de IEventStore.
"""

from trafficlens.infrastructure.persistence.repositories.memory_event_store import InMemoryEventStore
from trafficlens.infrastructure.persistence.repositories.sql_event_store import SqlEventStore

__all__ = [
    "InMemoryEventStore",
    "SqlEventStore",
]
