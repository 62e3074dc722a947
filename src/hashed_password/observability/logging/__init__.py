"""Observability – structured logging helpers."""
from hashed_password.observability.logging.filters import SensitiveFieldsFilter
from hashed_password.observability.logging.factory import JsonLoggerFactory
from hashed_password.observability.logging.processors import get_logger

__all__ = [
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
