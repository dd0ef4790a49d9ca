"""
TrafficLens – Demo Data Seeder
================================
Puebla un Event Store con tráfico sintético de los últimos 7 días.

Cada visitante tiene 1–5 visitas registradas y UNA sesión con 3–10 page
views repartidas al azar por la ventana, sobre 5 páginas, 10 países,
9 referrers y 3 devices. Duraciones 30–299s, 10% de eventos con bounced=True.

Todo pasa por el contrato de escritura de IEventStore, así el mismo
seeder sirve para el store en memoria y para el SQL.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from trafficlens.domain.entities.page_view import NewPageView
from trafficlens.domain.repositories.event_store import IEventStore
from trafficlens.domain.value_objects.date_range import as_utc, utc_now
from trafficlens.shared.logging.logger import get_logger

logger = get_logger("seed")

PAGES = (
    ("/", "Home Page"),
    ("/anime/attack-on-titan", "Attack on Titan"),
    ("/anime/demon-slayer", "Demon Slayer"),
    ("/news", "Anime News"),
    ("/reviews", "Anime Reviews"),
)

COUNTRIES = (
    "United States", "Japan", "United Kingdom", "Canada", "Germany",
    "France", "Australia", "Brazil", "India", "South Korea",
)

REFERRERS = (
    "Direct", "https://www.google.com/", "https://twitter.com/", "https://www.reddit.com/",
    "https://www.facebook.com/", "https://www.instagram.com/", "https://www.youtube.com/",
    "https://www.bing.com/", "https://duckduckgo.com/",
)

DEVICES = ("Mobile", "Desktop", "Tablet")


@dataclass
class SeedResult:
    visitors: int = 0
    page_views: int = 0


async def seed_demo_data(
    store: IEventStore,
    visitors: int = 100,
    days: int = 7,
    seed: Optional[int] = None,
    now: Optional[datetime] = None,
) -> SeedResult:
    """Genera y registra tráfico sintético. Determinista con `seed`."""
    rng = random.Random(seed)
    end = as_utc(now) if now is not None else utc_now()
    start = end - timedelta(days=days)
    span = (end - start).total_seconds()

    result = SeedResult()
    for i in range(1, visitors + 1):
        visitor_id = f"visitor-{i}"
        session_id = f"session-{i}"
        await store.save_visitor(visitor_id, first_seen=start, last_seen=end)
        for _ in range(rng.randint(1, 5) - 1):
            await store.update_visitor(visitor_id, end)
        result.visitors += 1

        for _ in range(rng.randint(3, 10)):
            page_url, page_title = rng.choice(PAGES)
            referrer = rng.choice(REFERRERS)
            await store.record_page_view(NewPageView(
                page_url=page_url,
                page_title=page_title,
                visitor_id=visitor_id,
                session_id=session_id,
                referrer=None if referrer == "Direct" else referrer,
                user_agent="Sample User Agent",
                country=rng.choice(COUNTRIES),
                device=rng.choice(DEVICES),
                timestamp=start + timedelta(seconds=rng.random() * span),
                duration=rng.randint(30, 299),
                bounced=rng.random() < 0.1,
            ))
            result.page_views += 1

    logger.info(
        "Datos demo generados: %d visitantes, %d page views",
        result.visitors, result.page_views,
    )
    return result
