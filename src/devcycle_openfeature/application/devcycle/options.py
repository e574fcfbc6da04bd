"""DevCycleOptions — vendor client settings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from devcycle_openfeature.config.settings import Settings
from devcycle_openfeature.config.validation import (
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

DEFAULT_BASE_URL = "https://bucketing-api.devcycle.com"


@dataclasses.dataclass
class DevCycleOptions(Settings):
    """Options handed to the DevCycle client factory.

    Loaded from ``DEVCYCLE_BASE_URL``, ``DEVCYCLE_TIMEOUT`` and
    ``DEVCYCLE_LOG_LEVEL`` by :class:`~devcycle_openfeature.config.EnvSettingsLoader`.
    """

    _prefix: ClassVar[str] = "DEVCYCLE"

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    log_level: str | None = None

    def _validate(self) -> None:
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be positive")
        if self.log_level is not None:
            level = self.log_level.upper()
            if level not in logging.getLevelNamesMapping():
                raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")
            self.log_level = level
        self.base_url = self.base_url.rstrip("/")


@dataclasses.dataclass
class DevCycleSettings(DevCycleOptions):
    """:class:`DevCycleOptions` plus the SDK key (``DEVCYCLE_SDK_KEY``)."""

    sdk_key: str = dataclasses.field(default="", kw_only=True)

    def _validate(self) -> None:
        super()._validate()
        if not self.sdk_key:
            raise MissingRequiredSettingError(f"{self._prefix}_SDK_KEY")

    def options(self) -> DevCycleOptions:
        return DevCycleOptions(
            base_url=self.base_url, timeout=self.timeout, log_level=self.log_level
        )


__all__ = ["DEFAULT_BASE_URL", "DevCycleOptions", "DevCycleSettings"]
