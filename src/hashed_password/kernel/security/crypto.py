"""Kernel security – PasswordHasher and PasswordScheme ports."""
from __future__ import annotations

import abc
from typing import ClassVar


class PasswordScheme(abc.ABC):
    """Port: one concrete self-describing hash format.

    A scheme owns its wire format end to end. ``hash`` embeds the scheme id,
    cost parameters and a fresh salt in its output; ``verify`` parses those
    back out and raises :class:`~hashed_password.kernel.errors.MalformedHashError`
    when it cannot.
    """

    name: ClassVar[str]
    prefixes: ClassVar[tuple[str, ...]]

    @abc.abstractmethod
    def is_available(self) -> bool: ...

    @abc.abstractmethod
    def is_well_formed(self, hashed: str) -> bool: ...

    @abc.abstractmethod
    def hash(self, password: str) -> str: ...

    @abc.abstractmethod
    def verify(self, password: str, hashed: str) -> bool: ...

    def handles(self, hashed: str) -> bool:
        """``True`` when *hashed* carries one of this scheme's prefixes."""
        return hashed.startswith(self.prefixes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class PasswordHasher(abc.ABC):
    """Port: one-way password hashing."""

    @abc.abstractmethod
    def hash(self, password: str) -> str: ...

    @abc.abstractmethod
    def verify(self, password: str, hashed: str) -> bool: ...


__all__ = ["PasswordHasher", "PasswordScheme"]
