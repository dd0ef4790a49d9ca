"""
Dependency Injection Container.

Este módulo proporciona el contenedor de inyección de dependencias
que gestiona el Event Store y los casos de uso.

Clean Architecture: Este contenedor vive en la capa más externa y es el único
lugar donde se crean dependencias concretas.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from trafficlens.application.use_cases.analytics_usecase import AnalyticsQueryUseCase
from trafficlens.application.use_cases.track_page_view_usecase import TrackPageViewUseCase
from trafficlens.domain.repositories.event_store import IEventStore
from trafficlens.shared.config.settings import Settings


@dataclass
class Container:
    """
    Contenedor de Inyección de Dependencias.

    El Event Store se elige según settings.store_backend:
      memory → InMemoryEventStore (log en proceso)
      sql    → SqlEventStore sobre el DatabaseManager global
    """

    # Configuración
    settings: Settings = field(default_factory=Settings)

    # Repositorios (implementaciones concretas)
    _event_store: Optional[IEventStore] = None

    # Use cases con estado compartido (locks por visitante)
    _track_page_view_usecase: Optional[TrackPageViewUseCase] = None

    # ==================== Repositories ====================

    @property
    def event_store(self) -> IEventStore:
        """Obtiene el Event Store configurado (singleton)."""
        if self._event_store is None:
            if self.settings.store_backend == "sql":
                # El DatabaseManager debe estar inicializado (lifespan)
                from trafficlens.infrastructure.persistence.database import get_db_manager
                from trafficlens.infrastructure.persistence.repositories.sql_event_store import SqlEventStore
                self._event_store = SqlEventStore(get_db_manager(self.settings).session_factory)
            else:
                from trafficlens.infrastructure.persistence.repositories.memory_event_store import InMemoryEventStore
                self._event_store = InMemoryEventStore()
        return self._event_store

    # ==================== Use Cases ====================

    @property
    def track_page_view_usecase(self) -> TrackPageViewUseCase:
        """
        TrackPageViewUseCase compartido.

        Es singleton porque guarda los locks por visitor_id: dos instancias
        no se coordinarían entre sí.
        """
        if self._track_page_view_usecase is None:
            self._track_page_view_usecase = TrackPageViewUseCase(self.event_store)
        return self._track_page_view_usecase

    def get_analytics_usecase(self) -> AnalyticsQueryUseCase:
        """Factory para AnalyticsQueryUseCase (sin estado)."""
        return AnalyticsQueryUseCase(self.event_store)

    # ==================== Lifecycle ====================

    def reset(self) -> None:
        """Resetea todas las instancias (útil para tests)."""
        self._event_store = None
        self._track_page_view_usecase = None

    def override(self, name: str, instance: Any) -> None:
        """
        Override una dependencia (útil para tests con mocks).

        Args:
            name: Nombre de la dependencia (ej: 'event_store')
            instance: Instancia a usar
        """
        attr_name = f"_{name}"
        if hasattr(self, attr_name):
            setattr(self, attr_name, instance)
        else:
            raise ValueError(f"Unknown dependency: {name}")


# ==================== Global Container ====================

_container: Optional[Container] = None


def get_container() -> Container:
    """
    Obtiene la instancia global del contenedor.

    Patrón Singleton para asegurar una única instancia
    compartida en toda la aplicación.
    """
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Resetea el contenedor global."""
    global _container
    if _container is not None:
        _container.reset()
    _container = None


def init_container(settings: Optional[Settings] = None) -> Container:
    """
    Inicializa el contenedor con configuración específica.

    Args:
        settings: Configuración opcional. Si es None, usa valores por defecto.
    """
    global _container
    if settings is None:
        settings = Settings()
    _container = Container(settings=settings)
    return _container


# ==================== Testing Utilities ====================

class TestContainer(Container):
    """
    Contenedor especializado para tests.

    Permite inyectar dobles sin modificar el contenedor de producción.
    """

    __test__ = False  # no es una clase de tests para pytest

    def __init__(self, settings: Optional[Settings] = None, **mocks):
        super().__init__(settings=settings or Settings())
        for name, mock in mocks.items():
            self.override(name, mock)

    @classmethod
    def with_mocks(cls, settings: Optional[Settings] = None, **mocks) -> "TestContainer":
        """Factory method para crear contenedor con mocks."""
        return cls(settings=settings, **mocks)


def create_test_container(settings: Optional[Settings] = None, **mocks) -> TestContainer:
    """
    Crea un contenedor de pruebas con dependencias inyectadas.

    Ejemplo:
        container = create_test_container(event_store=InMemoryEventStore())
    """
    return TestContainer.with_mocks(settings=settings, **mocks)
