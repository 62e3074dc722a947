"""SQLAlchemy adapter – HashedPasswordType column type."""
from __future__ import annotations

from typing import Any

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from hashed_password.security.passwords import HashedPassword, PasswordHashService, default_hasher


class HashedPasswordType(TypeDecorator):  # type: ignore[type-arg]
    """String column that hashes on write and wraps on read.

    Usage::

        class User(Base):
            __tablename__ = "users"
            id: Mapped[int] = mapped_column(primary_key=True)
            password: Mapped[HashedPassword] = mapped_column(HashedPasswordType())

        session.add(User(password="s3cr3t!"))   # stored as '$argon2id$...'
        user = session.get(User, 1)
        user.password.check_password("s3cr3t!")  # True

    Values that are already hashes (a loaded :class:`HashedPassword`, or a
    string in a known hash format) are written back untouched, so saving an
    unmodified row never double-hashes. Filtering with ``User.password == x``
    hashes ``x`` with a fresh salt and therefore never matches; look rows up by
    another key and call ``check_password``.
    """

    impl = String
    cache_ok = True

    def __init__(self, length: int = 255, hasher: PasswordHashService | None = None, **kwargs: Any) -> None:
        super().__init__(length=length, **kwargs)
        # resolved now so a host without any primitive fails at model import
        self._hasher = hasher or default_hasher()

    @property
    def hasher(self) -> PasswordHashService:
        return self._hasher

    def process_bind_param(self, value: Any, dialect: Any) -> str | None:  # noqa: ARG002
        if value is None:
            return None
        if isinstance(value, HashedPassword):
            return value.deflate()
        return self._hasher.hash(value)

    def process_result_value(self, value: Any, dialect: Any) -> HashedPassword | None:  # noqa: ARG002
        if value is None:
            return None
        return HashedPassword.inflate(value, hasher=self._hasher)


__all__ = ["HashedPasswordType"]
