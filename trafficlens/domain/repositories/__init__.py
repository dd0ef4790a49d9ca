"""Domain repository interfaces (ABCs)."""
from trafficlens.domain.repositories.event_store import IEventStore

__all__ = ["IEventStore"]
