"""Evaluation contract – provider lifecycle events.

The event stream is an append-only ordered sequence per provider.  Observers
receive events synchronously, in emission order, from the moment they
subscribe; nothing emitted earlier is replayed.
"""
from __future__ import annotations

import asyncio
import dataclasses
import enum
from collections.abc import AsyncIterator, Callable

from devcycle_openfeature.kernel.errors import ErrorCode
from devcycle_openfeature.observability.logging import get_logger

logger = get_logger(__name__)

#: Synchronous observer callback.
Observer = Callable[["ProviderEvent"], None]


class ProviderEventType(enum.StrEnum):
    READY = "PROVIDER_READY"
    STALE = "PROVIDER_STALE"
    CONFIGURATION_CHANGED = "PROVIDER_CONFIGURATION_CHANGED"
    ERROR = "PROVIDER_ERROR"


class ProviderStatus(enum.StrEnum):
    NOT_READY = "NOT_READY"
    READY = "READY"
    STALE = "STALE"
    ERROR = "ERROR"


@dataclasses.dataclass(frozen=True)
class ProviderEvent:
    type: ProviderEventType
    error_code: ErrorCode | None = None
    message: str | None = None

    @classmethod
    def ready(cls) -> ProviderEvent:
        return cls(ProviderEventType.READY)

    @classmethod
    def stale(cls) -> ProviderEvent:
        return cls(ProviderEventType.STALE)

    @classmethod
    def configuration_changed(cls) -> ProviderEvent:
        return cls(ProviderEventType.CONFIGURATION_CHANGED)

    @classmethod
    def error(cls, error_code: ErrorCode, message: str) -> ProviderEvent:
        return cls(ProviderEventType.ERROR, error_code=error_code, message=message)

    @property
    def status(self) -> ProviderStatus:
        """The provider status this event moves to."""
        return _STATUS_BY_EVENT[self.type]


_STATUS_BY_EVENT: dict[ProviderEventType, ProviderStatus] = {
    ProviderEventType.READY: ProviderStatus.READY,
    ProviderEventType.STALE: ProviderStatus.STALE,
    ProviderEventType.CONFIGURATION_CHANGED: ProviderStatus.READY,
    ProviderEventType.ERROR: ProviderStatus.ERROR,
}


class EventStream:
    """Queue-backed async iterator over provider events.

    Usage::

        stream = provider.observe()
        async for event in stream:
            ...
        stream.close()
    """

    def __init__(self, handler: EventHandler) -> None:
        self._handler = handler
        self._queue: asyncio.Queue[ProviderEvent | None] = asyncio.Queue()
        self._closed = False

    def _push(self, event: ProviderEvent) -> None:
        self._queue.put_nowait(event)

    def __aiter__(self) -> AsyncIterator[ProviderEvent]:
        return self

    async def __anext__(self) -> ProviderEvent:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        event = await self._queue.get()
        if event is None:
            raise StopAsyncIteration
        return event

    def drain(self) -> list[ProviderEvent]:
        """Return every event buffered so far without waiting."""
        events: list[ProviderEvent] = []
        while not self._queue.empty():
            event = self._queue.get_nowait()
            if event is not None:
                events.append(event)
        return events

    def close(self) -> None:
        """Stop receiving events; a pending ``async for`` ends after the buffer."""
        if self._closed:
            return
        self._closed = True
        self._handler.unsubscribe(self._push)
        self._queue.put_nowait(None)


class EventHandler:
    """Observer list delivering :class:`ProviderEvent` objects in emission order."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register *observer*; returns a callable that unsubscribes it."""
        self._observers.append(observer)
        return lambda: self.unsubscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def observe(self) -> EventStream:
        stream = EventStream(self)
        self._observers.append(stream._push)
        return stream

    def send(self, event: ProviderEvent) -> None:
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:  # noqa: BLE001 – isolate observers
                logger.exception("provider.event.observer_failed", event_type=event.type.value)

    @property
    def observer_count(self) -> int:
        return len(self._observers)


__all__ = [
    "EventHandler",
    "EventStream",
    "Observer",
    "ProviderEvent",
    "ProviderEventType",
    "ProviderStatus",
]
