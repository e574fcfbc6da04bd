"""Unit tests for DevCycleProvider lifecycle and emitted events."""

from __future__ import annotations

import asyncio

import pytest
from structlog.testing import capture_logs

from devcycle_openfeature.application.devcycle import DevCycleProvider
from devcycle_openfeature.application.provider import (
    ProviderEvent,
    ProviderEventType,
    ProviderStatus,
)
from devcycle_openfeature.config import EnvSettingsLoader, MissingRequiredSettingError
from devcycle_openfeature.kernel.context import EvaluationContext
from devcycle_openfeature.kernel.errors import (
    ErrorCode,
    ExternalServiceError,
    GeneralError,
    ProviderFatalError,
)
from devcycle_openfeature.kernel.values import Value
from devcycle_openfeature.testing.fakes import FakeDevCycleClient, FakeDevCycleClientFactory

READY = ProviderEventType.READY
STALE = ProviderEventType.STALE
CHANGED = ProviderEventType.CONFIGURATION_CHANGED
ERROR = ProviderEventType.ERROR


def _types(events: list[ProviderEvent]) -> list[ProviderEventType]:
    return [event.type for event in events]


def _provider(factory: FakeDevCycleClientFactory | None = None) -> DevCycleProvider:
    return DevCycleProvider("dvc_test_key", client_factory=factory or FakeDevCycleClientFactory())


class TestInitialize:
    def test_success_emits_ready(self) -> None:
        factory = FakeDevCycleClientFactory()
        provider = _provider(factory)
        stream = provider.observe()

        asyncio.run(provider.initialize(EvaluationContext(targeting_key="u1", attributes={})))

        assert _types(stream.drain()) == [READY]
        assert provider.status is ProviderStatus.READY
        assert provider.devcycle_client is factory.client
        sdk_key, user, _ = factory.builds[0]
        assert sdk_key == "dvc_test_key"
        assert user.user_id == "u1"

    def test_context_attributes_reach_the_user(self) -> None:
        factory = FakeDevCycleClientFactory()
        context = EvaluationContext(
            "u1", {"email": Value.of_string("a@b.c"), "plan": Value.of_string("pro")}
        )
        asyncio.run(_provider(factory).initialize(context))
        user = factory.builds[0][1]
        assert user.email == "a@b.c"
        assert dict(user.custom_data) == {"plan": "pro"}

    def test_without_context_uses_anonymous_user(self) -> None:
        factory = FakeDevCycleClientFactory()
        provider = _provider(factory)
        with capture_logs() as logs:
            asyncio.run(provider.initialize())
        user = factory.builds[0][1]
        assert user.is_anonymous is True
        assert "devcycle.provider.initialized_without_context" in [log["event"] for log in logs]
        assert provider.status is ProviderStatus.READY

    def test_client_failure_emits_error_and_raises(self) -> None:
        factory = FakeDevCycleClientFactory(error=ExternalServiceError("devcycle", "HTTP 401"))
        provider = _provider(factory)
        stream = provider.observe()

        with pytest.raises(ProviderFatalError) as exc_info:
            asyncio.run(provider.initialize(EvaluationContext("u1")))

        events = stream.drain()
        assert _types(events) == [ERROR]
        assert events[0].error_code is ErrorCode.PROVIDER_NOT_READY
        assert events[0].message == "Initialization error"
        assert exc_info.value.error_code is ErrorCode.PROVIDER_FATAL
        assert isinstance(exc_info.value.__cause__, ExternalServiceError)
        assert provider.status is ProviderStatus.ERROR
        assert provider.devcycle_client is None

    def test_client_failure_is_logged(self) -> None:
        factory = FakeDevCycleClientFactory(error=ExternalServiceError("devcycle", "HTTP 401"))
        provider = _provider(factory)

        with capture_logs() as logs, pytest.raises(ProviderFatalError):
            asyncio.run(provider.initialize(EvaluationContext("u1")))

        failure = next(log for log in logs if log["event"] == "devcycle.provider.initialize_failed")
        assert failure["log_level"] == "error"
        assert failure["error_type"] == "ExternalServiceError"
        assert failure["error"]["message"] == "HTTP 401"

    def test_unmappable_context_fails_without_building_client(self) -> None:
        factory = FakeDevCycleClientFactory()
        provider = _provider(factory)
        stream = provider.observe()
        context = EvaluationContext(attributes={"isAnonymous": Value.of_bool(False)})

        with pytest.raises(ProviderFatalError):
            asyncio.run(provider.initialize(context))

        assert _types(stream.drain()) == [ERROR]
        assert factory.builds == []

    def test_second_initialize_is_ignored(self) -> None:
        factory = FakeDevCycleClientFactory()
        provider = _provider(factory)

        async def run() -> list[ProviderEvent]:
            await provider.initialize(EvaluationContext("u1"))
            stream = provider.observe()
            await provider.initialize(EvaluationContext("u2"))
            return stream.drain()

        assert asyncio.run(run()) == []
        assert len(factory.builds) == 1

    def test_concurrent_initialize_builds_once(self) -> None:
        factory = FakeDevCycleClientFactory()
        provider = _provider(factory)
        received: list[ProviderEvent] = []
        provider.subscribe(received.append)

        async def run() -> None:
            gate = factory.hold_build()
            pending = asyncio.gather(
                provider.initialize(EvaluationContext("u1")),
                provider.initialize(EvaluationContext("u2")),
            )
            await asyncio.sleep(0)
            gate.set()
            await pending

        asyncio.run(run())
        assert len(factory.builds) == 1
        assert factory.builds[0][1].user_id == "u1"
        assert _types(received) == [READY]
        assert provider.status is ProviderStatus.READY

    def test_concurrent_initialize_shares_failure(self) -> None:
        factory = FakeDevCycleClientFactory(error=RuntimeError("bad key"))
        provider = _provider(factory)
        received: list[ProviderEvent] = []
        provider.subscribe(received.append)

        async def run() -> list[BaseException | None]:
            gate = factory.hold_build()
            pending = asyncio.gather(
                provider.initialize(EvaluationContext("u1")),
                provider.initialize(EvaluationContext("u2")),
                return_exceptions=True,
            )
            await asyncio.sleep(0)
            gate.set()
            return await pending

        results = asyncio.run(run())
        assert all(isinstance(result, ProviderFatalError) for result in results)
        assert len(factory.builds) == 1
        assert _types(received) == [ERROR]

    def test_retry_after_failure_builds_again(self) -> None:
        factory = FakeDevCycleClientFactory(error=RuntimeError("bad key"))
        provider = _provider(factory)
        with pytest.raises(ProviderFatalError):
            asyncio.run(provider.initialize(EvaluationContext("u1")))

        factory.fail_build(None)
        asyncio.run(provider.initialize(EvaluationContext("u1")))
        assert len(factory.builds) == 2
        assert provider.status is ProviderStatus.READY


class TestContextChange:
    def _ready(self, client: FakeDevCycleClient | None = None) -> DevCycleProvider:
        provider = _provider(FakeDevCycleClientFactory(client))
        asyncio.run(provider.initialize(EvaluationContext("u1")))
        return provider

    def test_success_emits_stale_then_configuration_changed(self) -> None:
        client = FakeDevCycleClient()
        provider = self._ready(client)
        stream = provider.observe()

        asyncio.run(provider.on_context_changed(EvaluationContext("u1"), EvaluationContext("u2")))

        assert _types(stream.drain()) == [STALE, CHANGED]
        assert [user.user_id for user in client.identified] == ["u2"]
        assert provider.status is ProviderStatus.READY

    def test_identify_failure_emits_stale_then_error(self) -> None:
        client = FakeDevCycleClient().fail_identify(RuntimeError("network down"))
        provider = self._ready(client)
        stream = provider.observe()

        with pytest.raises(GeneralError) as exc_info:
            asyncio.run(provider.on_context_changed(None, EvaluationContext("u2")))

        events = stream.drain()
        assert _types(events) == [STALE, ERROR]
        assert events[1].error_code is ErrorCode.GENERAL
        assert events[1].message == "Context set error"
        assert "network down" in exc_info.value.message
        assert provider.status is ProviderStatus.ERROR

    def test_unmappable_context_emits_only_error(self) -> None:
        client = FakeDevCycleClient()
        provider = self._ready(client)
        stream = provider.observe()
        context = EvaluationContext(attributes={"isAnonymous": Value.of_bool(False)})

        with pytest.raises(GeneralError):
            asyncio.run(provider.on_context_changed(None, context))

        assert _types(stream.drain()) == [ERROR]
        assert client.identified == []

    def test_before_initialize_is_a_no_op(self) -> None:
        provider = _provider()
        stream = provider.observe()
        with capture_logs() as logs:
            asyncio.run(provider.on_context_changed(None, EvaluationContext("u2")))
        assert stream.drain() == []
        assert provider.status is ProviderStatus.NOT_READY
        assert logs[-1]["event"] == "devcycle.provider.context_before_initialize"

    def test_repeated_changes_keep_event_order(self) -> None:
        client = FakeDevCycleClient()
        provider = self._ready(client)
        received: list[ProviderEvent] = []
        provider.subscribe(received.append)

        async def run() -> None:
            await provider.on_context_changed(None, EvaluationContext("u2"))
            await provider.on_context_changed(None, EvaluationContext("u3"))

        asyncio.run(run())
        assert _types(received) == [STALE, CHANGED, STALE, CHANGED]

    def test_concurrent_changes_are_not_coalesced(self) -> None:
        client = FakeDevCycleClient()
        provider = self._ready(client)
        received: list[ProviderEvent] = []
        provider.subscribe(received.append)

        async def run() -> list[ProviderEventType]:
            gate = client.hold_identify()
            pending = asyncio.gather(
                provider.on_context_changed(None, EvaluationContext("u2")),
                provider.on_context_changed(None, EvaluationContext("u3")),
            )
            for _ in range(20):
                if len(received) == 2:
                    break
                await asyncio.sleep(0)
            held = _types(received)
            gate.set()
            await pending
            return held

        assert asyncio.run(run()) == [STALE, STALE]
        assert _types(received) == [STALE, STALE, CHANGED, CHANGED]
        assert sorted(user.user_id for user in client.identified) == ["u2", "u3"]
        assert provider.status is ProviderStatus.READY

    def test_evaluations_served_while_stale(self) -> None:
        client = FakeDevCycleClient().set_variable("b", True)
        provider = self._ready(client)

        async def run() -> tuple[ProviderStatus, bool]:
            gate = client.hold_identify()
            task = asyncio.create_task(
                provider.on_context_changed(None, EvaluationContext("u2"))
            )
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            observed = (provider.status, provider.get_boolean_evaluation("b", False).value)
            gate.set()
            await task
            return observed

        assert asyncio.run(run()) == (ProviderStatus.STALE, True)

    def test_cancelled_caller_still_gets_terminal_event(self) -> None:
        client = FakeDevCycleClient()
        provider = self._ready(client)

        async def run() -> list[ProviderEventType]:
            gate = client.hold_identify()
            stream = provider.observe()
            task = asyncio.create_task(
                provider.on_context_changed(None, EvaluationContext("u2"))
            )
            first = await asyncio.wait_for(anext(stream), timeout=1)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            gate.set()
            second = await asyncio.wait_for(anext(stream), timeout=1)
            return [first.type, second.type]

        assert asyncio.run(run()) == [STALE, CHANGED]
        assert [user.user_id for user in client.identified] == ["u2"]

    def test_failure_after_cancelled_caller_is_logged(self) -> None:
        client = FakeDevCycleClient().fail_identify(RuntimeError("network down"))
        provider = self._ready(client)

        async def run() -> ProviderEvent:
            gate = client.hold_identify()
            stream = provider.observe()
            task = asyncio.create_task(
                provider.on_context_changed(None, EvaluationContext("u2"))
            )
            await asyncio.wait_for(anext(stream), timeout=1)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            gate.set()
            terminal = await asyncio.wait_for(anext(stream), timeout=1)
            await asyncio.sleep(0)
            return terminal

        with capture_logs() as logs:
            terminal = asyncio.run(run())

        assert terminal.type is ERROR
        failed = [log for log in logs if log["event"] == "devcycle.provider.background_failed"]
        assert len(failed) == 1
        assert failed[0]["error_type"] == "GeneralError"


class TestShutdown:
    def test_closes_client(self) -> None:
        factory = FakeDevCycleClientFactory()
        provider = _provider(factory)

        async def run() -> None:
            await provider.initialize(EvaluationContext("u1"))
            await provider.shutdown()

        asyncio.run(run())
        assert factory.client.closed is True

    def test_before_initialize_is_a_no_op(self) -> None:
        factory = FakeDevCycleClientFactory()
        asyncio.run(_provider(factory).shutdown())
        assert factory.client.closed is False


class TestFromEnv:
    def test_reads_devcycle_variables(self) -> None:
        factory = FakeDevCycleClientFactory()
        loader = EnvSettingsLoader(
            environ={
                "DEVCYCLE_SDK_KEY": "dvc_env_key",
                "DEVCYCLE_TIMEOUT": "2.5",
                "DEVCYCLE_BASE_URL": "http://localhost:8080/",
            }
        )
        provider = DevCycleProvider.from_env(loader, client_factory=factory)
        asyncio.run(provider.initialize(EvaluationContext("u1")))

        sdk_key, _, options = factory.builds[0]
        assert sdk_key == "dvc_env_key"
        assert options.timeout == 2.5
        assert options.base_url == "http://localhost:8080"

    def test_missing_sdk_key(self) -> None:
        with pytest.raises(MissingRequiredSettingError):
            DevCycleProvider.from_env(EnvSettingsLoader(environ={}))
