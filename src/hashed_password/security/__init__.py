"""Security – password hashing."""
from hashed_password.security.passwords import (
    AlgorithmChoice,
    AlgorithmSelector,
    HashedPassword,
    PasswordHashService,
    hash_password,
    select,
    verify_password,
)

__all__ = [
    "AlgorithmChoice",
    "AlgorithmSelector",
    "HashedPassword",
    "PasswordHashService",
    "hash_password",
    "select",
    "verify_password",
]
