"""
TrafficLens – Infrastructure Layer
====================================
Implementaciones concretas de las interfaces del dominio.

Este módulo contiene:
- persistence/: Event Store en memoria y SQLAlchemy, modelos ORM, mappers
- seed/: Generador de tráfico de demostración

REGLA DE DEPENDENCIA:
Puede importar de domain/ y shared/. Nada de aquí se importa desde domain/.
"""
