"""
TrafficLens – Web Analytics Aggregation Engine
================================================
Ingesta de page views y métricas de tráfico en capas:

  domain/          → entidades, value objects, servicios de agregación
  application/     → casos de uso (tracking, consultas) y DTOs
  infrastructure/  → Event Store en memoria / SQLAlchemy, datos demo
  presentation/    → API REST FastAPI
  shared/          → configuración y logging
"""

__version__ = "0.1.0"
