"""
TrafficLens – Domain Exceptions
================================
Excepciones específicas del dominio de analítica.

Capturan errores de entrada en la frontera (rango de fechas, campos de
tracking), NO condiciones de "sin datos": los agregadores nunca lanzan
por falta de eventos, devuelven ceros y listas vacías.

JERARQUÍA:
    DomainError (base)
    ├── InvalidDateRangeError
    ├── MissingRequiredFieldsError
    ├── UnsupportedIntervalError
    └── VisitorAlreadyExistsError
"""

from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Excepción base para errores de dominio."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "message": self.message,
        }


class InvalidDateRangeError(DomainError):
    """Rango de fechas no parseable o con inicio posterior al fin."""

    def __init__(self, message: str = "Invalid date format", value: Optional[str] = None):
        super().__init__(message, code="INVALID_DATE_RANGE")
        self.value = value


class MissingRequiredFieldsError(DomainError):
    """Evento de tracking sin pageUrl o visitorId."""

    def __init__(self, fields: Sequence[str] = ()):
        super().__init__("Missing required fields", code="MISSING_REQUIRED_FIELDS")
        self.fields = tuple(fields)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["fields"] = list(self.fields)
        return data


class UnsupportedIntervalError(DomainError):
    """Intervalo de serie temporal desconocido (modo estricto)."""

    def __init__(self, interval: str):
        super().__init__(f"Unsupported interval: {interval}", code="UNSUPPORTED_INTERVAL")
        self.interval = interval


class VisitorAlreadyExistsError(DomainError):
    """save_visitor sobre un id ya registrado (otro writer llegó antes)."""

    def __init__(self, visitor_id: str):
        super().__init__(f"Visitor already exists: {visitor_id}", code="VISITOR_ALREADY_EXISTS")
        self.visitor_id = visitor_id
