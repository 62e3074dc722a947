"""Config validation errors – bad ``PASSWORD_HASH_*`` settings."""
from __future__ import annotations

from hashed_password.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Hashing configuration could not be loaded or parsed.

    Raised at startup (selector construction or the first :func:`select`),
    never from ``hash()`` or ``verify()`` on an already configured service.
    """

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Environment variable '{setting_name}' must be set", detail={"setting": setting_name})
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A work factor, salt size or scheme list is outside what the schemes accept.

    ``detail`` names the setting and the rule it broke; the value itself is
    kept on the instance only.
    """

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Hashing setting '{setting_name}' = {value!r} rejected: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
