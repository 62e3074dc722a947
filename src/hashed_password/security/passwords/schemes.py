"""Password schemes – one class per self-describing hash format.

Each scheme recognises its own wire format, hashes with a fresh CSPRNG salt
and verifies by recomputing with the parameters embedded in the stored value.

Formats::

    argon2          $argon2id$v=19$m=65536,t=3,p=4$<salt>$<digest>
    bcrypt          $2b$12$<22 salt chars><31 digest chars>
    sha512_crypt    $6$[rounds=N$]<salt>$<86 digest chars>
    pbkdf2_sha512   $pbkdf2-sha512$<iterations>$<salt>$<digest>

``pbkdf2_sha512`` is the fallback: it needs nothing beyond ``hashlib`` and
``hmac`` and therefore exists on every host that ships SHA-512.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import importlib
import re
import secrets
from typing import Any, ClassVar

from hashed_password.config.settings import HashingSettings
from hashed_password.kernel.errors import MalformedHashError, UnavailablePrimitiveError, ValidationError
from hashed_password.kernel.security import PasswordScheme

__all__ = [
    "Argon2Scheme",
    "BcryptScheme",
    "FALLBACK_SCHEME",
    "PBKDF2_MAX_ITERATIONS",
    "Pbkdf2Sha512Scheme",
    "Sha512CryptScheme",
    "build_schemes",
]

FALLBACK_SCHEME = "pbkdf2_sha512"

_BCRYPT_MAX_BYTES = 72

# hashlib.pbkdf2_hmac takes a C int
PBKDF2_MAX_ITERATIONS = 2**31 - 1


def _module_available(module: str) -> bool:
    try:
        importlib.import_module(module)
    except ImportError:
        return False
    return True


def _encode(password: str) -> bytes:
    try:
        return password.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValidationError(
            "Password is not encodable as UTF-8",
            errors=[{"field": "password", "reason": "not_utf8"}],
            cause=exc,
        ) from exc


def _encode_candidate(password: str) -> bytes | None:
    """UTF-8 bytes of a login attempt, or ``None`` when it cannot be encoded."""
    try:
        return password.encode("utf-8")
    except UnicodeEncodeError:
        return None


def _reject_nul(scheme: str, password: str) -> None:
    if "\x00" in password:
        raise ValidationError(
            f"{scheme} cannot hash passwords containing NUL characters",
            errors=[{"field": "password", "reason": "nul_character"}],
        )


class _BackendScheme(PasswordScheme):
    """Scheme whose primitive lives in a third-party backend module."""

    backend_module: ClassVar[str]

    def is_available(self) -> bool:
        return _module_available(self.backend_module)

    def _backend(self) -> Any:
        try:
            return importlib.import_module(self.backend_module)
        except ImportError as exc:
            raise UnavailablePrimitiveError([self.name], cause=exc) from exc

    def _check_format(self, hashed: str) -> None:
        if not isinstance(hashed, str) or not self.is_well_formed(hashed):
            raise MalformedHashError(f"Stored value is not a valid {self.name} hash", scheme=self.name)


class Argon2Scheme(_BackendScheme):
    """Argon2id via ``argon2-cffi``; verifies argon2i / argon2d hashes too."""

    name = "argon2"
    prefixes = ("$argon2id$", "$argon2i$", "$argon2d$")
    backend_module = "argon2"

    _FORMAT = re.compile(
        r"^\$argon2(?:id|i|d)\$(?:v=\d{1,3}\$)?m=\d{1,10},t=\d{1,10},p=\d{1,3}\$[A-Za-z0-9+/]+={0,2}\$[A-Za-z0-9+/]+={0,2}$"
    )

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
        salt_len: int = 16,
        hash_len: int = 32,
    ) -> None:
        self._params = {
            "time_cost": time_cost,
            "memory_cost": memory_cost,
            "parallelism": parallelism,
            "salt_len": salt_len,
            "hash_len": hash_len,
        }
        self._hasher: Any = None

    def _argon2(self) -> Any:
        if self._hasher is None:
            argon2 = self._backend()
            self._hasher = argon2.PasswordHasher(type=argon2.Type.ID, **self._params)
        return self._hasher

    def is_well_formed(self, hashed: str) -> bool:
        return bool(self._FORMAT.match(hashed))

    def hash(self, password: str) -> str:
        _encode(password)
        return self._argon2().hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        self._check_format(hashed)
        hasher = self._argon2()
        secret = _encode_candidate(password)
        if secret is None:
            return False
        from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

        try:
            return hasher.verify(hashed, secret)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError, OverflowError) as exc:
            raise MalformedHashError(
                "Stored argon2 hash could not be decoded", scheme=self.name, cause=exc
            ) from exc


class BcryptScheme(_BackendScheme):
    """bcrypt via the ``bcrypt`` package.

    bcrypt only reads the first 72 bytes of its input. Longer passwords are
    refused by :meth:`hash` and never match in :meth:`verify`, so two
    passwords sharing a 72-byte prefix cannot verify against each other.
    """

    name = "bcrypt"
    prefixes = ("$2b$", "$2a$", "$2y$")
    backend_module = "bcrypt"

    _FORMAT = re.compile(r"^\$2[aby]\$(?:0[4-9]|[12]\d|3[01])\$[./A-Za-z0-9]{53}$")

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def is_well_formed(self, hashed: str) -> bool:
        return bool(self._FORMAT.match(hashed))

    def hash(self, password: str) -> str:
        _reject_nul(self.name, password)
        secret = _encode(password)
        if len(secret) > _BCRYPT_MAX_BYTES:
            raise ValidationError(
                f"bcrypt cannot hash passwords longer than {_BCRYPT_MAX_BYTES} bytes",
                errors=[{"field": "password", "reason": "too_long", "max_bytes": _BCRYPT_MAX_BYTES}],
            )
        bcrypt = self._backend()
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        self._check_format(hashed)
        bcrypt = self._backend()
        secret = _encode_candidate(password)
        if secret is None or b"\x00" in secret or len(secret) > _BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(secret, hashed.encode("ascii"))
        except ValueError as exc:
            raise MalformedHashError("Stored bcrypt hash has an invalid salt", scheme=self.name, cause=exc) from exc


class Sha512CryptScheme(_BackendScheme):
    """SHA-512 crypt (``$6$``) via passlib's portable implementation.

    This is the format written by hosts whose ``crypt(3)`` offered nothing
    stronger, so records produced there keep verifying.
    """

    name = "sha512_crypt"
    prefixes = ("$6$",)
    backend_module = "passlib.hash"

    _FORMAT = re.compile(r"^\$6\$(?:rounds=\d{1,9}\$)?[./0-9A-Za-z]{0,16}\$[./0-9A-Za-z]{86}$")

    def __init__(self, rounds: int = 656_000) -> None:
        self._rounds = rounds

    def is_well_formed(self, hashed: str) -> bool:
        return bool(self._FORMAT.match(hashed))

    def hash(self, password: str) -> str:
        _reject_nul(self.name, password)
        _encode(password)
        sha512_crypt = self._backend().sha512_crypt
        # 16 chars is the format maximum (96 bits)
        return sha512_crypt.using(rounds=self._rounds, salt_size=16).hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        self._check_format(hashed)
        sha512_crypt = self._backend().sha512_crypt
        secret = _encode_candidate(password)
        if secret is None or b"\x00" in secret:
            return False
        try:
            return sha512_crypt.verify(secret, hashed)
        except ValueError as exc:
            raise MalformedHashError("Stored sha512_crypt hash is invalid", scheme=self.name, cause=exc) from exc


def _ab64_encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii").rstrip("=").replace("+", ".")


def _ab64_decode(data: str) -> bytes:
    padded = data.replace(".", "+") + "=" * (-len(data) % 4)
    return base64.b64decode(padded, validate=True)


class Pbkdf2Sha512Scheme(PasswordScheme):
    """PBKDF2-HMAC-SHA512 using only the standard library.

    Salt and digest use the adapted base64 alphabet (``.`` for ``+``, no
    padding), the same layout passlib's ``pbkdf2_sha512`` reads and writes.

    A stored iteration count above *max_iterations* is treated as corrupt
    rather than computed.
    """

    name = FALLBACK_SCHEME
    prefixes = ("$pbkdf2-sha512$",)

    _DIGEST = "sha512"
    _DIGEST_SIZE = 64
    _FORMAT = re.compile(r"^\$pbkdf2-sha512\$(\d{1,10})\$([./A-Za-z0-9]+)\$([./A-Za-z0-9]+)$")

    def __init__(
        self,
        iterations: int = 210_000,
        salt_size: int = 16,
        max_iterations: int = PBKDF2_MAX_ITERATIONS,
    ) -> None:
        self._iterations = iterations
        self._salt_size = salt_size
        self._max_iterations = min(max_iterations, PBKDF2_MAX_ITERATIONS)

    def is_available(self) -> bool:
        return self._DIGEST in hashlib.algorithms_available and hasattr(hashlib, "pbkdf2_hmac")

    def is_well_formed(self, hashed: str) -> bool:
        try:
            self._parse(hashed)
        except MalformedHashError:
            return False
        return True

    def _parse(self, hashed: str) -> tuple[int, bytes, bytes]:
        match = self._FORMAT.match(hashed) if isinstance(hashed, str) else None
        if match is None:
            raise MalformedHashError("Stored value is not a valid pbkdf2_sha512 hash", scheme=self.name)
        iterations = int(match.group(1))
        try:
            salt = _ab64_decode(match.group(2))
            digest = _ab64_decode(match.group(3))
        except (binascii.Error, ValueError) as exc:
            raise MalformedHashError("pbkdf2_sha512 salt or digest is not base64", scheme=self.name, cause=exc) from exc
        if not 1 <= iterations <= self._max_iterations or not salt or len(digest) != self._DIGEST_SIZE:
            raise MalformedHashError("pbkdf2_sha512 parameters are out of range", scheme=self.name)
        return iterations, salt, digest

    def _derive(self, secret: bytes, salt: bytes, iterations: int) -> bytes:
        if not self.is_available():
            raise UnavailablePrimitiveError([self.name])
        return hashlib.pbkdf2_hmac(self._DIGEST, secret, salt, iterations)

    def hash(self, password: str) -> str:
        salt = secrets.token_bytes(self._salt_size)
        digest = self._derive(_encode(password), salt, self._iterations)
        return f"$pbkdf2-sha512${self._iterations}${_ab64_encode(salt)}${_ab64_encode(digest)}"

    def verify(self, password: str, hashed: str) -> bool:
        iterations, salt, expected = self._parse(hashed)
        secret = _encode_candidate(password)
        if secret is None:
            return False
        actual = self._derive(secret, salt, iterations)
        return hmac.compare_digest(actual, expected)


def build_schemes(settings: HashingSettings | None = None) -> dict[str, PasswordScheme]:
    """Return every known scheme keyed by name, configured from *settings*.

    The fallback is always the last entry.
    """
    settings = settings or HashingSettings()
    schemes: list[PasswordScheme] = [
        Argon2Scheme(
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
            salt_len=settings.salt_size,
        ),
        BcryptScheme(rounds=settings.bcrypt_rounds),
        Sha512CryptScheme(rounds=settings.sha512_crypt_rounds),
        Pbkdf2Sha512Scheme(
            iterations=settings.pbkdf2_iterations,
            salt_size=settings.salt_size,
            max_iterations=settings.pbkdf2_max_iterations,
        ),
    ]
    return {scheme.name: scheme for scheme in schemes}
