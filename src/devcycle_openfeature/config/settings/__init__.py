"""Config settings – 12-factor env-based configuration."""
from devcycle_openfeature.config.settings.base import Settings
from devcycle_openfeature.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsLoader"]
