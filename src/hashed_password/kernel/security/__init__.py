"""Kernel security – hashing ports and default sensitive log fields."""
from hashed_password.kernel.security.crypto import PasswordHasher, PasswordScheme
from hashed_password.kernel.security.pii import DEFAULT_SENSITIVE_FIELDS

__all__ = ["DEFAULT_SENSITIVE_FIELDS", "PasswordHasher", "PasswordScheme"]
