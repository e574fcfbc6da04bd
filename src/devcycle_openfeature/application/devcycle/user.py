"""DevCycleUser — the vendor's fixed-schema user model."""
from __future__ import annotations

import dataclasses
import uuid
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any


class UserBuildError(ValueError):
    """Raised by :meth:`DevCycleUserBuilder.build` when the user is incomplete."""


@dataclasses.dataclass(frozen=True)
class DevCycleUser:
    user_id: str
    is_anonymous: bool = False
    email: str | None = None
    name: str | None = None
    language: str | None = None
    country: str | None = None
    custom_data: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    private_custom_data: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "custom_data", MappingProxyType(dict(self.custom_data)))
        object.__setattr__(
            self, "private_custom_data", MappingProxyType(dict(self.private_custom_data))
        )

    @staticmethod
    def builder() -> DevCycleUserBuilder:
        return DevCycleUserBuilder()

    def to_payload(self) -> dict[str, Any]:
        """Render the JSON body expected by the DevCycle API."""
        payload: dict[str, Any] = {"user_id": self.user_id, "isAnonymous": self.is_anonymous}
        for key in ("email", "name", "language", "country"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        if self.custom_data:
            payload["customData"] = dict(self.custom_data)
        if self.private_custom_data:
            payload["privateCustomData"] = dict(self.private_custom_data)
        return payload


class DevCycleUserBuilder:
    """Fluent builder for :class:`DevCycleUser`.

    Usage::

        user = DevCycleUser.builder().user_id("u-1").email("a@b.c").build()
    """

    def __init__(self) -> None:
        self._user_id: str | None = None
        self._is_anonymous: bool | None = None
        self._fields: dict[str, str] = {}
        self._custom_data: dict[str, Any] = {}
        self._private_custom_data: dict[str, Any] = {}

    def user_id(self, user_id: str) -> DevCycleUserBuilder:
        self._user_id = user_id
        return self

    def is_anonymous(self, is_anonymous: bool) -> DevCycleUserBuilder:
        self._is_anonymous = is_anonymous
        return self

    def email(self, email: str) -> DevCycleUserBuilder:
        self._fields["email"] = email
        return self

    def name(self, name: str) -> DevCycleUserBuilder:
        self._fields["name"] = name
        return self

    def language(self, language: str) -> DevCycleUserBuilder:
        self._fields["language"] = language
        return self

    def country(self, country: str) -> DevCycleUserBuilder:
        self._fields["country"] = country
        return self

    def custom_data(self, data: Mapping[str, Any]) -> DevCycleUserBuilder:
        self._custom_data = dict(data)
        return self

    def private_custom_data(self, data: Mapping[str, Any]) -> DevCycleUserBuilder:
        self._private_custom_data = dict(data)
        return self

    def build(self) -> DevCycleUser:
        is_anonymous = bool(self._is_anonymous)
        user_id = self._user_id
        if not user_id:
            if not is_anonymous:
                raise UserBuildError("Missing user_id for a non-anonymous DevCycleUser")
            user_id = str(uuid.uuid4())
        return DevCycleUser(
            user_id=user_id,
            is_anonymous=is_anonymous,
            custom_data=self._custom_data,
            private_custom_data=self._private_custom_data,
            **self._fields,
        )


__all__ = ["DevCycleUser", "DevCycleUserBuilder", "UserBuildError"]
