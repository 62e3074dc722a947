"""Shared fixtures: low work factors so the suite stays fast."""
from __future__ import annotations

import os

import pytest

# The process-wide selection reads these on first use.
os.environ.setdefault("PASSWORD_HASH_ARGON2_TIME_COST", "1")
os.environ.setdefault("PASSWORD_HASH_ARGON2_MEMORY_COST", "8")
os.environ.setdefault("PASSWORD_HASH_ARGON2_PARALLELISM", "1")
os.environ.setdefault("PASSWORD_HASH_BCRYPT_ROUNDS", "4")
os.environ.setdefault("PASSWORD_HASH_PBKDF2_ITERATIONS", "1000")
os.environ.setdefault("PASSWORD_HASH_SHA512_CRYPT_ROUNDS", "1000")

from hashed_password.config.settings import HashingSettings  # noqa: E402
from hashed_password.security.passwords import (  # noqa: E402
    AlgorithmSelector,
    PasswordHashService,
)


def make_fast_settings(**overrides: object) -> HashingSettings:
    values: dict[str, object] = {
        "argon2_time_cost": 1,
        "argon2_memory_cost": 8,
        "argon2_parallelism": 1,
        "bcrypt_rounds": 4,
        "pbkdf2_iterations": 1000,
        "sha512_crypt_rounds": 1000,
    }
    values.update(overrides)
    return HashingSettings(**values)  # type: ignore[arg-type]


def make_hasher(*priority: str) -> PasswordHashService:
    selector = AlgorithmSelector(priority=priority or None, settings=make_fast_settings())
    return PasswordHashService(selector.select())


@pytest.fixture()
def fast_settings() -> HashingSettings:
    return make_fast_settings()


@pytest.fixture()
def hasher() -> PasswordHashService:
    """Service on the default priority (argon2 first)."""
    return make_hasher()


@pytest.fixture(params=["argon2", "bcrypt", "sha512_crypt", "pbkdf2_sha512"])
def scheme_hasher(request: pytest.FixtureRequest) -> PasswordHashService:
    """Service pinned to each known scheme in turn."""
    return make_hasher(request.param)
