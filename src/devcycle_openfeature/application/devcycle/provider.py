"""DevCycleProvider — OpenFeature provider backed by a DevCycle client.

Lifecycle::

    NOT_READY ──initialize ok──▶ READY ──context change──▶ STALE ──identify ok──▶ READY
        │                                                     │   (CONFIGURATION_CHANGED)
        └──initialize failed──▶ ERROR          identify failed ┴──▶ ERROR

Usage::

    provider = DevCycleProvider("dvc_mobile_key")
    stream = provider.observe()
    await provider.initialize(EvaluationContext(targeting_key="user-1"))
    provider.get_boolean_evaluation("new-checkout", False).value
"""
from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

from devcycle_openfeature.application.devcycle.client import DevCycleClient, DevCycleClientFactory
from devcycle_openfeature.application.devcycle.codec import dict_to_value, value_to_dict
from devcycle_openfeature.application.devcycle.mapper import user_from_context
from devcycle_openfeature.application.devcycle.options import DevCycleOptions, DevCycleSettings
from devcycle_openfeature.application.devcycle.results import build_evaluation, default_evaluation
from devcycle_openfeature.application.devcycle.user import DevCycleUser
from devcycle_openfeature.application.provider import (
    EventHandler,
    EventStream,
    FeatureProvider,
    Observer,
    ProviderEvaluation,
    ProviderEvent,
    ProviderMetadata,
    ProviderStatus,
)
from devcycle_openfeature.config.settings import EnvSettingsLoader, SettingsLoader
from devcycle_openfeature.kernel.context import EvaluationContext
from devcycle_openfeature.kernel.errors import (
    BaseError,
    ErrorCode,
    GeneralError,
    ProviderFatalError,
)
from devcycle_openfeature.kernel.values import Value
from devcycle_openfeature.observability.logging import JsonLoggerFactory, get_logger

logger = get_logger(__name__)

T = TypeVar("T")

PROVIDER_NAME = "DevCycle Provider"


def _error_fields(exc: BaseException) -> dict[str, Any]:
    if isinstance(exc, BaseError):
        return exc.log_fields()
    return {"error_type": type(exc).__name__, "error": repr(exc)}


class DevCycleProvider(FeatureProvider):
    """Adapter between the evaluation contract and a DevCycle client.

    Parameters
    ----------
    sdk_key:
        DevCycle SDK key.
    options:
        Client options; ``options.log_level`` also sets the level of the
        library's loggers.
    client_factory:
        Builds the vendor client.  Defaults to
        :class:`~devcycle_openfeature.adapters.devcycle.HttpDevCycleClientFactory`.
    """

    def __init__(
        self,
        sdk_key: str,
        options: DevCycleOptions | None = None,
        *,
        client_factory: DevCycleClientFactory | None = None,
    ) -> None:
        if client_factory is None:
            from devcycle_openfeature.adapters.devcycle import HttpDevCycleClientFactory

            client_factory = HttpDevCycleClientFactory()
        self.metadata = ProviderMetadata(name=PROVIDER_NAME)
        self.hooks: list[Any] = []
        self._sdk_key = sdk_key
        self._options = options or DevCycleOptions()
        self._client_factory = client_factory
        self._client: DevCycleClient | None = None
        self._events = EventHandler()
        self._status = ProviderStatus.NOT_READY
        self._background: set[asyncio.Task[None]] = set()
        self._init_task: asyncio.Task[None] | None = None
        if self._options.log_level is not None:
            JsonLoggerFactory.set_level(self._options.log_level)

    @classmethod
    def from_env(
        cls,
        loader: SettingsLoader | None = None,
        *,
        client_factory: DevCycleClientFactory | None = None,
    ) -> DevCycleProvider:
        """Build a provider from ``DEVCYCLE_*`` environment variables."""
        settings = (loader or EnvSettingsLoader()).load(DevCycleSettings)
        return cls(settings.sdk_key, settings.options(), client_factory=client_factory)

    @property
    def devcycle_client(self) -> DevCycleClient | None:
        return self._client

    @property
    def status(self) -> ProviderStatus:
        return self._status

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self, initial_context: EvaluationContext | None = None) -> None:
        """Build the vendor client; emits ``READY`` or ``ERROR``.

        Raises
        ------
        ProviderFatalError
            When the context cannot be mapped or the client fails to start.
        """
        task = self._init_task
        if task is None or task.done():
            task = self._spawn(self._initialize(initial_context))
            self._init_task = task
        else:
            logger.warning("devcycle.provider.initialize_in_progress")
        await asyncio.shield(task)

    async def on_context_changed(
        self,
        old_context: EvaluationContext | None,
        new_context: EvaluationContext,
    ) -> None:
        """Identify the new user; emits ``STALE`` then ``CONFIGURATION_CHANGED`` or ``ERROR``.

        Raises
        ------
        GeneralError
            When the context cannot be mapped or identification fails.
        """
        await asyncio.shield(self._spawn(self._change_context(new_context)))

    async def shutdown(self) -> None:
        client = self._client
        if client is not None:
            await client.close()

    def observe(self) -> EventStream:
        return self._events.observe()

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        return self._events.subscribe(observer)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        # Awaited through asyncio.shield: a cancelled caller still lets the
        # operation emit its terminal event.
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._on_background_done)
        return task

    def _on_background_done(self, task: asyncio.Task[None]) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.debug("devcycle.provider.background_failed", **_error_fields(exc))

    async def _initialize(self, initial_context: EvaluationContext | None) -> None:
        if self._client is not None:
            logger.warning("devcycle.provider.already_initialized")
            return

        if initial_context is None:
            logger.warning(
                "devcycle.provider.initialized_without_context",
                hint="Set an evaluation context before setting the provider "
                "to avoid multiple API fetch calls.",
            )

        try:
            if initial_context is not None:
                user = user_from_context(initial_context)
            else:
                user = DevCycleUser.builder().is_anonymous(True).build()
            client = await self._client_factory.build(self._sdk_key, user, self._options)
        except Exception as exc:
            logger.error("devcycle.provider.initialize_failed", **_error_fields(exc))
            self._emit(ProviderEvent.error(ErrorCode.PROVIDER_NOT_READY, "Initialization error"))
            raise ProviderFatalError(
                f"DevCycle client initialization error: {exc}", cause=exc
            ) from exc

        self._client = client
        logger.info("devcycle.provider.ready", user_id=user.user_id)
        self._emit(ProviderEvent.ready())

    async def _change_context(self, new_context: EvaluationContext) -> None:
        logger.debug("devcycle.provider.context_changed", targeting_key=new_context.targeting_key)
        client = self._client
        if client is None:
            logger.warning(
                "devcycle.provider.context_before_initialize",
                hint="The context is ignored until initialization completes.",
            )
            return

        try:
            user = user_from_context(new_context)
        except Exception as exc:
            raise self._context_change_failed(exc) from exc

        self._emit(ProviderEvent.stale())
        try:
            await client.identify_user(user)
        except Exception as exc:
            raise self._context_change_failed(exc) from exc
        self._emit(ProviderEvent.configuration_changed())

    def _context_change_failed(self, exc: Exception) -> GeneralError:
        logger.error("devcycle.provider.context_change_failed", **_error_fields(exc))
        self._emit(ProviderEvent.error(ErrorCode.GENERAL, "Context set error"))
        return GeneralError(f"Error setting context: {exc}", cause=exc)

    def _emit(self, event: ProviderEvent) -> None:
        self._status = event.status
        self._events.send(event)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def get_boolean_evaluation(
        self, key: str, default_value: bool, context: EvaluationContext | None = None
    ) -> ProviderEvaluation[bool]:
        return self._evaluate(key, default_value)

    def get_string_evaluation(
        self, key: str, default_value: str, context: EvaluationContext | None = None
    ) -> ProviderEvaluation[str]:
        return self._evaluate(key, default_value)

    def get_integer_evaluation(
        self, key: str, default_value: int, context: EvaluationContext | None = None
    ) -> ProviderEvaluation[int]:
        client = self._client
        if client is None:
            return default_evaluation(default_value)
        # DevCycle has no integer type; numbers are evaluated as floats.
        variable = client.variable(key, float(default_value))
        return build_evaluation(variable, int(variable.value))

    def get_float_evaluation(
        self, key: str, default_value: float, context: EvaluationContext | None = None
    ) -> ProviderEvaluation[float]:
        return self._evaluate(key, default_value)

    def get_object_evaluation(
        self, key: str, default_value: Value, context: EvaluationContext | None = None
    ) -> ProviderEvaluation[Value]:
        """Evaluate a JSON flag.

        Raises
        ------
        ParseError
            When a client is installed and *default_value* is not a structure.
        """
        client = self._client
        if client is None:
            return default_evaluation(default_value)
        variable = client.variable(key, value_to_dict(default_value))
        value = default_value if variable.is_defaulted else dict_to_value(variable.value)
        return build_evaluation(variable, value)

    def _evaluate(self, key: str, default_value: T) -> ProviderEvaluation[T]:
        client = self._client
        if client is None:
            return default_evaluation(default_value)
        variable = client.variable(key, default_value)
        return build_evaluation(variable, variable.value)


__all__ = ["PROVIDER_NAME", "DevCycleProvider"]
