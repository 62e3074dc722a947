"""Unit tests for the SQLAlchemy hashed-password column type and mixin.

Uses an in-memory SQLite database – no running server needed.
"""
from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import Integer, String, create_engine, select, text
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from hashed_password.adapters.sqlalchemy import HashedPasswordMixin, HashedPasswordType
from hashed_password.config.settings import HashingSettings
from hashed_password.kernel.errors import MalformedHashError
from hashed_password.security.passwords import AlgorithmSelector, HashedPassword, PasswordHashService

FAST = HashingSettings(
    argon2_time_cost=1,
    argon2_memory_cost=8,
    argon2_parallelism=1,
    bcrypt_rounds=4,
    pbkdf2_iterations=1000,
)
HASHER = PasswordHashService(AlgorithmSelector(settings=FAST).select())

# ---------------------------------------------------------------------------
# Shared ORM base and test models
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class User(HashedPasswordMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100))
    password: Mapped[HashedPassword | None] = mapped_column(HashedPasswordType(hasher=HASHER), nullable=True)


class ServiceAccount(HashedPasswordMixin, Base):
    """Password column under a different attribute name."""

    __tablename__ = "service_accounts"
    __password_attribute__ = "secret"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    secret: Mapped[HashedPassword] = mapped_column(HashedPasswordType(hasher=HASHER))


@pytest.fixture()
def session() -> Iterator[Session]:
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as s:
        yield s
    engine.dispose()


def _raw_password(session: Session, user_id: int) -> str | None:
    return session.execute(text("SELECT password FROM users WHERE id = :id"), {"id": user_id}).scalar_one()


def _add_user(session: Session, password: object, username: str = "alice") -> User:
    user = User(username=username, password=password)
    session.add(user)
    session.commit()
    return user


class TestBeforeWriteHook:
    def test_plaintext_is_hashed_in_column(self, session: Session) -> None:
        user = _add_user(session, "s3cr3t!")
        raw = _raw_password(session, user.id)
        assert raw != "s3cr3t!"
        assert HASHER.identify(raw) == HASHER.choice.name

    def test_hashed_password_written_verbatim(self, session: Session) -> None:
        original = _add_user(session, "s3cr3t!")
        loaded = session.get(User, original.id)
        clone = _add_user(session, loaded.password, username="bob")
        assert _raw_password(session, clone.id) == _raw_password(session, original.id)

    def test_hash_string_not_rehashed(self, session: Session) -> None:
        stored = HASHER.hash("s3cr3t!")
        user = _add_user(session, stored)
        assert _raw_password(session, user.id) == stored

    def test_none_passes_through(self, session: Session) -> None:
        user = _add_user(session, None)
        assert _raw_password(session, user.id) is None
        assert session.get(User, user.id).password is None

    def test_update_with_new_plaintext(self, session: Session) -> None:
        user = _add_user(session, "old-password")
        before = _raw_password(session, user.id)
        user.password = "new-password"
        session.commit()
        assert _raw_password(session, user.id) != before
        assert user.check_password("new-password")
        assert not user.check_password("old-password")


class TestAfterReadHook:
    def test_loaded_value_is_hashed_password(self, session: Session) -> None:
        user = _add_user(session, "s3cr3t!")
        session.expire_all()
        loaded = session.scalars(select(User).where(User.username == "alice")).one()
        assert isinstance(loaded.password, HashedPassword)
        assert loaded.password.hasher is HASHER

    def test_check_password_on_loaded_value(self, session: Session) -> None:
        user = _add_user(session, "s3cr3t!")
        session.expire_all()
        loaded = session.get(User, user.id)
        assert loaded.password.check_password("s3cr3t!")
        assert not loaded.password.check_password("wrong")

    def test_corrupt_column_raises(self, session: Session) -> None:
        session.execute(text("INSERT INTO users (username, password) VALUES ('mallory', 'plaintext')"))
        session.commit()
        loaded = session.scalars(select(User).where(User.username == "mallory")).one()
        with pytest.raises(MalformedHashError):
            loaded.check_password("plaintext")


class TestHashedPasswordMixin:
    def test_before_flush(self) -> None:
        user = User(username="alice", password="s3cr3t!")
        assert user.check_password("s3cr3t!")
        assert not user.check_password("wrong")

    def test_after_load(self, session: Session) -> None:
        user = _add_user(session, "s3cr3t!")
        session.expire_all()
        assert session.get(User, user.id).check_password("s3cr3t!")

    def test_no_password_never_matches(self, session: Session) -> None:
        user = _add_user(session, None)
        assert user.check_password("") is False
        assert user.check_password("anything") is False

    def test_custom_attribute(self, session: Session) -> None:
        account = ServiceAccount(secret="token-123")
        session.add(account)
        session.commit()
        session.expire_all()
        loaded = session.get(ServiceAccount, account.id)
        assert isinstance(loaded.secret, HashedPassword)
        assert loaded.check_password("token-123")


class TestHashedPasswordType:
    def test_exposes_hasher(self) -> None:
        assert HashedPasswordType(hasher=HASHER).hasher is HASHER

    def test_column_length(self) -> None:
        assert HashedPasswordType(length=128, hasher=HASHER).impl.length == 128

    def test_bind_param_directly(self) -> None:
        column_type = HashedPasswordType(hasher=HASHER)
        stored = column_type.process_bind_param("pw", None)
        assert HASHER.verify("pw", stored)
        assert column_type.process_bind_param(stored, None) == stored
