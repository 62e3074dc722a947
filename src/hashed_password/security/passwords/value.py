"""Password schemes – HashedPassword value wrapper."""
from __future__ import annotations

import hmac
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hashed_password.security.passwords.hasher import PasswordHashService

__all__ = ["HashedPassword"]


class HashedPassword:
    """A stored password hash paired with the service that can verify it.

    ``inflate`` builds one from the raw column value after a read; ``deflate``
    (and ``str()``) gives back that raw value for the next write. Comparing a
    ``HashedPassword`` to a plain string is never equal, so a plaintext is not
    matched against a hash by accident; use :meth:`check_password`.
    """

    __slots__ = ("_value", "_hasher")

    def __init__(self, value: str, hasher: PasswordHashService) -> None:
        if not isinstance(value, str):
            raise TypeError(f"HashedPassword wraps a str, got {type(value).__name__}")
        self._value = value
        self._hasher = hasher

    @classmethod
    def inflate(cls, raw: str, hasher: PasswordHashService | None = None) -> HashedPassword:
        if isinstance(raw, HashedPassword):
            return raw
        if hasher is None:
            from hashed_password.security.passwords.hasher import default_hasher

            hasher = default_hasher()
        return cls(raw, hasher)

    def deflate(self) -> str:
        return self._value

    @property
    def hasher(self) -> PasswordHashService:
        return self._hasher

    @property
    def scheme(self) -> str | None:
        return self._hasher.identify(self._value)

    def check_password(self, candidate: str) -> bool:
        """``True`` when *candidate* matches; raises ``MalformedHashError`` on a corrupt value."""
        return self._hasher.verify(candidate, self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"HashedPassword(scheme={self.scheme!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, HashedPassword):
            return False
        return hmac.compare_digest(self._value.encode("utf-8"), other._value.encode("utf-8"))

    def __ne__(self, other: Any) -> bool:
        return not self == other

    def __hash__(self) -> int:
        return hash((HashedPassword, self._value))

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_hasher"):
            raise AttributeError("HashedPassword is immutable")
        object.__setattr__(self, name, value)

    def __reduce__(self) -> Any:
        return (HashedPassword.inflate, (self._value,))
