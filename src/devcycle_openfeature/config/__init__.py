"""Config – 12-factor settings and validation errors."""

from devcycle_openfeature.config.settings import EnvSettingsLoader, Settings, SettingsLoader
from devcycle_openfeature.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
