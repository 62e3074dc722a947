"""Security – Password hashing and verification."""
from hashed_password.security.passwords.hasher import (
    PasswordHashService,
    default_hasher,
    hash_password,
    verify_password,
)
from hashed_password.security.passwords.schemes import (
    FALLBACK_SCHEME,
    Argon2Scheme,
    BcryptScheme,
    Pbkdf2Sha512Scheme,
    Sha512CryptScheme,
    build_schemes,
)
from hashed_password.security.passwords.selector import (
    DEFAULT_PRIORITY,
    AlgorithmChoice,
    AlgorithmSelector,
    select,
)
from hashed_password.security.passwords.value import HashedPassword

__all__ = [
    "AlgorithmChoice",
    "AlgorithmSelector",
    "Argon2Scheme",
    "BcryptScheme",
    "DEFAULT_PRIORITY",
    "FALLBACK_SCHEME",
    "HashedPassword",
    "PasswordHashService",
    "Pbkdf2Sha512Scheme",
    "Sha512CryptScheme",
    "build_schemes",
    "default_hasher",
    "hash_password",
    "select",
    "verify_password",
]
