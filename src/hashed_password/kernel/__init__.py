"""Kernel – error taxonomy and the password hasher port."""

from hashed_password.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    InfrastructureError,
    MalformedHashError,
    UnavailablePrimitiveError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InfrastructureError",
    "MalformedHashError",
    "UnavailablePrimitiveError",
    "ValidationError",
]
