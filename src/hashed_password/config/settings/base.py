"""Config settings – Settings base class and HashingSettings."""
from __future__ import annotations

import dataclasses

from hashed_password.config.validation import InvalidSettingValueError

_MIN_SALT_BYTES = 16
_INT_MAX = 2**31 - 1


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class HashingSettings(Settings):
    """Work factors and scheme priority for password hashing.

    Every field can be set from the environment with the ``PASSWORD_HASH_``
    prefix, e.g. ``PASSWORD_HASH_SCHEMES=bcrypt,argon2`` or
    ``PASSWORD_HASH_BCRYPT_ROUNDS=14``.

    ``schemes`` is the priority order walked by the algorithm selector; the
    PBKDF2-SHA512 fallback is always appended implicitly and need not be listed.
    ``pbkdf2_max_iterations`` caps the count a stored PBKDF2 value may ask
    for; anything above it fails verification as a corrupt hash.
    """

    _prefix: dataclasses.ClassVar[str] = "PASSWORD_HASH"

    schemes: list[str] = dataclasses.field(default_factory=lambda: ["argon2", "bcrypt"])
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 4
    bcrypt_rounds: int = 12
    pbkdf2_iterations: int = 210_000
    pbkdf2_max_iterations: int = 10_000_000
    sha512_crypt_rounds: int = 656_000
    salt_size: int = _MIN_SALT_BYTES

    def _validate(self) -> None:
        if self.salt_size < _MIN_SALT_BYTES:
            raise InvalidSettingValueError(
                "salt_size", self.salt_size, f"must be at least {_MIN_SALT_BYTES} bytes"
            )
        if not 4 <= self.bcrypt_rounds <= 31:
            raise InvalidSettingValueError("bcrypt_rounds", self.bcrypt_rounds, "must be between 4 and 31")
        if self.pbkdf2_iterations < 1000:
            raise InvalidSettingValueError("pbkdf2_iterations", self.pbkdf2_iterations, "must be at least 1000")
        if not self.pbkdf2_iterations <= self.pbkdf2_max_iterations <= _INT_MAX:
            raise InvalidSettingValueError(
                "pbkdf2_max_iterations",
                self.pbkdf2_max_iterations,
                f"must be between pbkdf2_iterations and {_INT_MAX}",
            )
        if not 1000 <= self.sha512_crypt_rounds <= 999_999_999:
            raise InvalidSettingValueError(
                "sha512_crypt_rounds", self.sha512_crypt_rounds, "must be between 1000 and 999999999"
            )
        for name in ("argon2_time_cost", "argon2_memory_cost", "argon2_parallelism"):
            if getattr(self, name) < 1:
                raise InvalidSettingValueError(name, getattr(self, name), "must be positive")
        # argon2 requires at least 8 KiB of memory per lane
        if self.argon2_memory_cost < 8 * self.argon2_parallelism:
            raise InvalidSettingValueError(
                "argon2_memory_cost", self.argon2_memory_cost, "must be at least 8 * argon2_parallelism"
            )
        self.schemes = [s.strip().lower() for s in self.schemes if s and s.strip()]


__all__ = ["HashingSettings", "Settings"]
