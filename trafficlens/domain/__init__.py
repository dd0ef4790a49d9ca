"""
TrafficLens – Domain Layer
===========================
Núcleo puro del motor de agregación. CERO dependencias externas.

Este módulo contiene:
- entities/: PageViewEvent, Visitor
- value_objects/: DateRange, Interval, métricas inmutables
- services/: Sesiones, agregadores, series, comparación
- repositories/: Interfaz abstracta del Event Store
- exceptions/: Excepciones de dominio

REGLA DE DEPENDENCIA:
Este módulo NO puede importar de:
- infrastructure/
- presentation/
- application/
- Frameworks externos (SQLAlchemy, FastAPI, etc.)
"""

from trafficlens.domain.entities.page_view import NewPageView, PageViewEvent
from trafficlens.domain.entities.visitor import Visitor
from trafficlens.domain.value_objects.date_range import DateRange
from trafficlens.domain.value_objects.interval import Interval

__all__ = [
    "NewPageView",
    "PageViewEvent",
    "Visitor",
    "DateRange",
    "Interval",
]
