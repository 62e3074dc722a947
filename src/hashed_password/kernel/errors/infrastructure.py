"""Infrastructure errors – missing host capabilities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from hashed_password.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Host / environment failure that is not a problem with the input."""

    default_code = "infrastructure_error"


class UnavailablePrimitiveError(InfrastructureError):
    """No usable hashing primitive exists on this host, not even the fallback."""

    default_code = "unavailable_primitive"

    def __init__(
        self,
        schemes: Sequence[str],
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        tried = ", ".join(schemes) or "<none>"
        super().__init__(message or f"No password hashing primitive available (tried: {tried})", **kwargs)
        self.schemes = tuple(schemes)
        self.detail.setdefault("schemes", list(self.schemes))


__all__ = [
    "InfrastructureError",
    "UnavailablePrimitiveError",
]
