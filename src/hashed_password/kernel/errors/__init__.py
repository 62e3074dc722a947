"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── ValidationError      unusable plaintext handed to hash()
    │   └── MalformedHashError   stored value is not a recognised hash
    ├── ApplicationError         (application.py)
    │   └── ConfigError          (hashed_password.config.validation)
    └── InfrastructureError      (infrastructure.py)
        └── UnavailablePrimitiveError
"""

from hashed_password.kernel.errors.application import ApplicationError
from hashed_password.kernel.errors.base import BaseError
from hashed_password.kernel.errors.domain import (
    DomainError,
    MalformedHashError,
    ValidationError,
)
from hashed_password.kernel.errors.infrastructure import (
    InfrastructureError,
    UnavailablePrimitiveError,
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
