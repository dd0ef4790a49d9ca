"""
TrafficLens – Application Layer
================================
Capa de casos de uso y orquestación.

Este módulo contiene:
- use_cases/: Tracking (escritura) y consultas de analítica (lectura)
- dto/: Data Transfer Objects

REGLA DE DEPENDENCIA:
Esta capa puede importar de:
- domain/ (entidades, servicios, interfaces)

NO puede importar de:
- infrastructure/ (implementaciones concretas)
- presentation/ (API)
"""

from trafficlens.application.use_cases.analytics_usecase import AnalyticsQueryUseCase
from trafficlens.application.use_cases.track_page_view_usecase import TrackPageViewUseCase

__all__ = [
    "AnalyticsQueryUseCase",
    "TrackPageViewUseCase",
]
