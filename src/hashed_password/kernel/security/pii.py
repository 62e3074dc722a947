"""Kernel security – keys whose values must never reach a log sink."""
from __future__ import annotations

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "password", "passwd", "plaintext", "candidate", "new_password",
    "password_hash", "hashed", "stored", "secret", "token", "authorization",
})


__all__ = ["DEFAULT_SENSITIVE_FIELDS"]
