"""SQLAlchemy ORM mixins – HashedPasswordMixin."""
from __future__ import annotations

from typing import ClassVar

from sqlalchemy import inspect

from hashed_password.adapters.sqlalchemy.types import HashedPasswordType
from hashed_password.security.passwords import HashedPassword, PasswordHashService, default_hasher


class HashedPasswordMixin:
    """Adds ``check_password`` to a model with a :class:`HashedPasswordType` column.

    The column is looked up by ``__password_attribute__`` (default
    ``"password"``)::

        class User(HashedPasswordMixin, Base):
            __tablename__ = "users"
            id: Mapped[int] = mapped_column(primary_key=True)
            password: Mapped[HashedPassword] = mapped_column(HashedPasswordType())

        user.check_password("s3cr3t!")

    Works on loaded rows and on instances whose plaintext has not been
    flushed yet.
    """

    __password_attribute__: ClassVar[str] = "password"

    def _password_hasher(self) -> PasswordHashService:
        mapper = inspect(type(self))
        column = mapper.columns.get(self.__password_attribute__)
        if column is not None and isinstance(column.type, HashedPasswordType):
            return column.type.hasher
        return default_hasher()

    def check_password(self, candidate: str) -> bool:
        value = getattr(self, self.__password_attribute__)
        if value is None:
            return False
        if isinstance(value, HashedPassword):
            return value.check_password(candidate)
        hasher = self._password_hasher()
        # plaintext assigned but not flushed yet; hash() returns stored hashes unchanged
        return hasher.verify(candidate, hasher.hash(value))


__all__ = ["HashedPasswordMixin"]
