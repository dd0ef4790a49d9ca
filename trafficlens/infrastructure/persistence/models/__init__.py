"""
Infrastructure Models Package.

Contiene los modelos ORM de SQLAlchemy para la persistencia.
Estos modelos representan la estructura de la base de datos,
NO las entidades de dominio.
"""

from trafficlens.infrastructure.persistence.models.page_view import PageViewModel
from trafficlens.infrastructure.persistence.models.visitor import VisitorModel

__all__ = [
    "PageViewModel",
    "VisitorModel",
]
