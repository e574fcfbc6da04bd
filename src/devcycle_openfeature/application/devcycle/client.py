"""DevCycle client capability ports.

The provider only needs three capabilities from the vendor SDK: evaluate a
variable, identify a user, and build a started client.  Production code uses
:mod:`devcycle_openfeature.adapters.devcycle`; tests use
:mod:`devcycle_openfeature.testing.fakes`.
"""
from __future__ import annotations

from typing import Any, Protocol, TypeVar

from devcycle_openfeature.application.devcycle.options import DevCycleOptions
from devcycle_openfeature.application.devcycle.user import DevCycleUser
from devcycle_openfeature.application.devcycle.variable import Variable

T = TypeVar("T")


class DevCycleClient(Protocol):
    """Port: a started DevCycle client bound to one user at a time."""

    def variable(self, key: str, default_value: T) -> Variable[T]:
        """Evaluate *key* for the current user; never blocks on I/O."""
        ...

    async def identify_user(self, user: DevCycleUser) -> dict[str, Variable[Any]]:
        """Switch to *user* and fetch its configuration."""
        ...

    async def close(self) -> None: ...


class DevCycleClientFactory(Protocol):
    """Port: build and start a :class:`DevCycleClient`."""

    async def build(
        self,
        sdk_key: str,
        user: DevCycleUser,
        options: DevCycleOptions,
    ) -> DevCycleClient: ...


__all__ = ["DevCycleClient", "DevCycleClientFactory"]
