"""Password schemes – AlgorithmSelector and the process-wide choice.

The selector walks an explicit priority list and settles on the first scheme
the host can execute. PBKDF2-SHA512 is the hardcoded floor; it is tried last
whatever the configured priority says.

:func:`select` caches one :class:`AlgorithmChoice` for the lifetime of the
process so every hash produced in a run uses the same scheme.
"""
from __future__ import annotations

import dataclasses
import threading
from collections.abc import Mapping, Sequence

from hashed_password.config.settings import EnvSettingsLoader, HashingSettings
from hashed_password.config.validation import InvalidSettingValueError
from hashed_password.kernel.errors import UnavailablePrimitiveError
from hashed_password.kernel.security import PasswordScheme
from hashed_password.observability.logging import get_logger
from hashed_password.security.passwords.schemes import FALLBACK_SCHEME, build_schemes

__all__ = [
    "AlgorithmChoice",
    "AlgorithmSelector",
    "DEFAULT_PRIORITY",
    "select",
]

DEFAULT_PRIORITY: tuple[str, ...] = ("argon2", "bcrypt")

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class AlgorithmChoice:
    """The scheme new hashes are produced with, plus every scheme known for verification."""

    scheme: PasswordScheme
    schemes: Mapping[str, PasswordScheme]
    fallback: bool = False

    @property
    def name(self) -> str:
        return self.scheme.name


class AlgorithmSelector:
    """Pick the strongest available scheme from a prioritised list."""

    def __init__(
        self,
        priority: Sequence[str] | None = None,
        schemes: Mapping[str, PasswordScheme] | None = None,
        settings: HashingSettings | None = None,
    ) -> None:
        settings = settings or HashingSettings()
        self._schemes = dict(schemes) if schemes is not None else build_schemes(settings)
        self._priority = tuple(priority if priority is not None else (settings.schemes or DEFAULT_PRIORITY))
        unknown = [name for name in self._priority if name not in self._schemes]
        if unknown:
            raise InvalidSettingValueError(
                "schemes", list(self._priority), f"unknown scheme(s): {', '.join(unknown)}"
            )
        if FALLBACK_SCHEME not in self._schemes:
            raise InvalidSettingValueError("schemes", sorted(self._schemes), f"{FALLBACK_SCHEME} must be registered")

    @property
    def priority(self) -> tuple[str, ...]:
        return self._priority

    def select(self) -> AlgorithmChoice:
        """Return the first available scheme, or the fallback.

        Raises
        ------
        UnavailablePrimitiveError
            When not even the fallback primitive exists on this host.
        """
        for name in self._priority:
            scheme = self._schemes[name]
            if scheme.is_available():
                is_fallback = name == FALLBACK_SCHEME
                _log.info("password_scheme.selected", scheme=name, fallback=is_fallback)
                return AlgorithmChoice(scheme=scheme, schemes=self._schemes, fallback=is_fallback)
            _log.debug("password_scheme.unavailable", scheme=name)

        fallback = self._schemes[FALLBACK_SCHEME]
        if not fallback.is_available():
            tried = [*self._priority, FALLBACK_SCHEME]
            _log.error("password_scheme.none_available", tried=tried)
            raise UnavailablePrimitiveError(tried)
        _log.warning("password_scheme.selected", scheme=FALLBACK_SCHEME, fallback=True)
        return AlgorithmChoice(scheme=fallback, schemes=self._schemes, fallback=True)


_choice: AlgorithmChoice | None = None
_lock = threading.Lock()


def select() -> AlgorithmChoice:
    """Return the process-wide :class:`AlgorithmChoice`, selecting it on first use.

    Settings come from ``PASSWORD_HASH_*`` environment variables. Concurrent
    first callers serialise on a lock; exactly one selection is stored.
    """
    global _choice
    choice = _choice
    if choice is not None:
        return choice
    with _lock:
        if _choice is None:
            settings = EnvSettingsLoader().load(HashingSettings)
            _choice = AlgorithmSelector(settings=settings).select()
        return _choice
