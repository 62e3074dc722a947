"""Password schemes – PasswordHashService (hash / verify)."""
from __future__ import annotations

import threading
from typing import Any

from hashed_password.kernel.errors import MalformedHashError, ValidationError
from hashed_password.kernel.security import PasswordHasher, PasswordScheme
from hashed_password.observability.logging import get_logger
from hashed_password.security.passwords.selector import AlgorithmChoice, select
from hashed_password.security.passwords.value import HashedPassword

__all__ = [
    "PasswordHashService",
    "default_hasher",
    "hash_password",
    "verify_password",
]

_log = get_logger(__name__)


class PasswordHashService(PasswordHasher):
    """Hash new passwords with the selected scheme; verify against any known scheme.

    The :class:`AlgorithmChoice` is resolved in ``__init__``, so building the
    service at startup surfaces a missing primitive immediately.

    Usage::

        hasher = PasswordHashService()
        stored = hasher.hash("s3cr3t!")        # '$argon2id$v=19$...'
        hasher.verify("s3cr3t!", stored)       # True
        hasher.verify("wrong", stored)         # False
        hasher.verify("s3cr3t!", "garbage")    # raises MalformedHashError
    """

    def __init__(self, choice: AlgorithmChoice | None = None) -> None:
        self._choice = choice or select()

    @property
    def choice(self) -> AlgorithmChoice:
        return self._choice

    @property
    def scheme(self) -> PasswordScheme:
        return self._choice.scheme

    def _scheme_for(self, stored: str) -> PasswordScheme | None:
        for scheme in self._choice.schemes.values():
            if scheme.handles(stored):
                return scheme
        return None

    def identify(self, stored: Any) -> str | None:
        """Name of the scheme that produced *stored*, or ``None`` if it is not a well-formed hash."""
        stored = str(stored) if isinstance(stored, HashedPassword) else stored
        if not isinstance(stored, str):
            return None
        scheme = self._scheme_for(stored)
        if scheme is None or not scheme.is_well_formed(stored):
            return None
        return scheme.name

    def is_hashed(self, value: Any) -> bool:
        return self.identify(value) is not None

    def hash(self, password: str) -> str:
        """Return a self-describing hash of *password*.

        A value that already is a hash (a :class:`HashedPassword` or a string
        that fully parses as a known format) is returned unchanged.

        Raises
        ------
        ValidationError
            *password* is not a string, is empty, or cannot be encoded.
        """
        if isinstance(password, HashedPassword):
            return str(password)
        if not isinstance(password, str):
            raise ValidationError(
                "Password must be a string",
                errors=[{"field": "password", "reason": "not_a_string", "type": type(password).__name__}],
            )
        if not password:
            raise ValidationError("Password must not be empty", errors=[{"field": "password", "reason": "empty"}])

        existing = self.identify(password)
        if existing is not None:
            _log.debug("password.already_hashed", scheme=existing)
            return password

        hashed = self._choice.scheme.hash(password)
        _log.debug("password.hashed", scheme=self._choice.name)
        return hashed

    def verify(self, password: str, hashed: str | HashedPassword) -> bool:
        """Check *password* against a stored hash.

        Returns ``False`` on mismatch. Raises :class:`MalformedHashError` when
        *hashed* is not a recognised, well-formed hash; a corrupt column is
        never reported as a wrong password.
        """
        stored = str(hashed) if isinstance(hashed, HashedPassword) else hashed
        if not isinstance(stored, str):
            raise MalformedHashError(f"Stored value must be a string, got {type(stored).__name__}")
        scheme = self._scheme_for(stored)
        if scheme is None:
            _log.warning("password.malformed_hash", scheme=None)
            raise MalformedHashError()
        if not isinstance(password, str):
            raise ValidationError(
                "Candidate password must be a string",
                errors=[{"field": "candidate", "reason": "not_a_string", "type": type(password).__name__}],
            )
        try:
            if not password:
                # hash() never accepts an empty password, so nothing can match
                if not scheme.is_well_formed(stored):
                    raise MalformedHashError(f"Stored value is not a valid {scheme.name} hash", scheme=scheme.name)
                return False
            return scheme.verify(password, stored)
        except MalformedHashError:
            _log.warning("password.malformed_hash", scheme=scheme.name)
            raise

    def wrap(self, stored: str) -> HashedPassword:
        """Attach verify capability to a raw stored hash (the after-read hook)."""
        return HashedPassword.inflate(stored, hasher=self)


_default: PasswordHashService | None = None
_default_lock = threading.Lock()


def default_hasher() -> PasswordHashService:
    """Process-wide :class:`PasswordHashService` bound to :func:`select`."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = PasswordHashService()
    return _default


def hash_password(password: str) -> str:
    return default_hasher().hash(password)


def verify_password(password: str, hashed: str | HashedPassword) -> bool:
    return default_hasher().verify(password, hashed)
