"""Config – hashing settings loaded from the environment."""

from hashed_password.config.settings import EnvSettingsLoader, HashingSettings, Settings, SettingsLoader
from hashed_password.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "HashingSettings",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
