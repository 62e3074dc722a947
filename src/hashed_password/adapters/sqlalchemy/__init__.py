"""SQLAlchemy adapter – hashed password column type and model mixin."""
from hashed_password.adapters.sqlalchemy.types import HashedPasswordType
from hashed_password.adapters.sqlalchemy.mixins import HashedPasswordMixin

__all__ = [
    "HashedPasswordMixin",
    "HashedPasswordType",
]
