"""
hashed_password – store password hashes instead of plaintext.

Import path convention::

    from hashed_password.security.passwords import PasswordHashService, HashedPassword
    from hashed_password.adapters.sqlalchemy import HashedPasswordType
    from hashed_password.kernel.errors import MalformedHashError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
