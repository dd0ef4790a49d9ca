"""
TrafficLens – SQLAlchemy ORM Base Configuration
================================================
Configuración base para los modelos ORM y el engine async.

Clean Architecture: Esta es la implementación concreta de la infraestructura
de base de datos. Los casos de uso dependen de IEventStore, no de esta clase.

URL:
  - settings.db_url si está definido (p. ej. sqlite+aiosqlite para tests)
  - si no, MySQL async construido desde db_host/db_user/... (aiomysql)
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from trafficlens.shared.config.settings import Settings
from trafficlens.shared.logging.logger import get_logger

logger = get_logger("infrastructure.database")

# ─── Naming Convention (para migraciones consistentes) ─────────────────────
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base declarativa para todos los modelos ORM."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class DatabaseManager:
    """
    Manager de la conexión async.

    USO:
        db = DatabaseManager(settings)
        await db.initialize()  # En startup de FastAPI

        async with db.session_factory() as session:
            result = await session.execute(...)

        await db.close()  # En shutdown de FastAPI
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def database_url(self) -> str:
        """URL explícita o MySQL construido desde settings."""
        s = self._settings
        if s.db_url:
            return s.db_url
        return (
            f"mysql+aiomysql://{s.db_user}:{s.db_password}"
            f"@{s.db_host}:{s.db_port}/{s.db_name}"
            f"?charset=utf8mb4"
        )

    async def initialize(self, create_schema: bool = True) -> None:
        """Inicializa el engine async, la session factory y el schema."""
        if self._engine is not None:
            return

        s = self._settings
        url = self.database_url
        engine_kwargs = {"echo": s.db_echo}
        if url.startswith("mysql"):
            engine_kwargs.update(
                pool_size=s.db_pool_size,
                max_overflow=s.db_max_overflow,
                pool_recycle=3600,
                pool_pre_ping=True,
            )

        self._engine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        if create_schema:
            # Registrar modelos en Base.metadata antes de create_all
            from trafficlens.infrastructure.persistence import models  # noqa: F401

            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        logger.info("Database inicializada (%s)", self._engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        """Cierra el engine y todas las conexiones del pool."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise RuntimeError("DatabaseManager no inicializado. Llama a initialize() primero.")
        return self._session_factory


# ─── Singleton global ────────────────────────────────────────────────────
_db_manager: Optional[DatabaseManager] = None


def get_db_manager(settings: Optional[Settings] = None) -> DatabaseManager:
    """Obtiene la instancia global del DatabaseManager."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(settings)
    return _db_manager


def reset_db_manager() -> None:
    """Olvida la instancia global (tests)."""
    global _db_manager
    _db_manager = None
