"""Config settings – 12-factor env-based configuration."""
from hashed_password.config.settings.base import HashingSettings, Settings
from hashed_password.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "HashingSettings", "Settings", "SettingsLoader"]
