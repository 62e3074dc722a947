"""Domain errors – bad input to hash() and corrupt stored values."""

from __future__ import annotations

from typing import Any

from hashed_password.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a value handed to the hashing domain is unusable."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Plaintext does not meet the rules for hashing (empty, not a string).

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class MalformedHashError(DomainError):
    """A stored value does not parse as any recognised self-describing hash.

    Distinct from a failed match: ``verify()`` returns ``False`` for a wrong
    password and raises this for a corrupt column value.
    """

    default_code = "malformed_hash"

    def __init__(
        self,
        message: str = "Stored value is not a recognised password hash",
        *,
        scheme: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.scheme = scheme
        if scheme is not None:
            self.detail.setdefault("scheme", scheme)


__all__ = [
    "DomainError",
    "MalformedHashError",
    "ValidationError",
]
