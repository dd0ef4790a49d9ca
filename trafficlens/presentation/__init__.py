"""
TrafficLens – Presentation Layer
==================================
Capa de presentación: API REST (FastAPI).

Este módulo contiene:
- api/: Routes y schemas Pydantic

REGLA DE DEPENDENCIA:
Esta capa puede importar de application/ y domain/.
Las implementaciones concretas le llegan por el Container.
"""
