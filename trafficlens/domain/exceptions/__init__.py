"""Domain exceptions."""
from trafficlens.domain.exceptions.domain_errors import (
    DomainError,
    InvalidDateRangeError,
    MissingRequiredFieldsError,
    UnsupportedIntervalError,
    VisitorAlreadyExistsError,
)

__all__ = [
    "DomainError",
    "InvalidDateRangeError",
    "MissingRequiredFieldsError",
    "UnsupportedIntervalError",
    "VisitorAlreadyExistsError",
]
