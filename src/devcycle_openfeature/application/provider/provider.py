"""Evaluation contract – FeatureProvider port."""
from __future__ import annotations

import abc
import dataclasses
from typing import Any

from devcycle_openfeature.application.provider.evaluation import ProviderEvaluation
from devcycle_openfeature.application.provider.events import EventStream, Observer
from devcycle_openfeature.kernel.context import EvaluationContext
from devcycle_openfeature.kernel.values import Value


@dataclasses.dataclass(frozen=True)
class ProviderMetadata:
    name: str | None = None


class FeatureProvider(abc.ABC):
    """Port: a vendor adapter behind the vendor-neutral evaluation contract.

    Lifecycle operations are async; evaluations are synchronous and never
    wait for an in-flight lifecycle operation.
    """

    metadata: ProviderMetadata
    hooks: list[Any]

    @abc.abstractmethod
    async def initialize(self, initial_context: EvaluationContext | None = None) -> None: ...

    @abc.abstractmethod
    async def on_context_changed(
        self,
        old_context: EvaluationContext | None,
        new_context: EvaluationContext,
    ) -> None: ...

    async def shutdown(self) -> None:
        """Release vendor resources.  No-op by default."""

    @abc.abstractmethod
    def observe(self) -> EventStream: ...

    @abc.abstractmethod
    def subscribe(self, observer: Observer) -> Any: ...

    @abc.abstractmethod
    def get_boolean_evaluation(
        self, key: str, default_value: bool, context: EvaluationContext | None = None
    ) -> ProviderEvaluation[bool]: ...

    @abc.abstractmethod
    def get_string_evaluation(
        self, key: str, default_value: str, context: EvaluationContext | None = None
    ) -> ProviderEvaluation[str]: ...

    @abc.abstractmethod
    def get_integer_evaluation(
        self, key: str, default_value: int, context: EvaluationContext | None = None
    ) -> ProviderEvaluation[int]: ...

    @abc.abstractmethod
    def get_float_evaluation(
        self, key: str, default_value: float, context: EvaluationContext | None = None
    ) -> ProviderEvaluation[float]: ...

    @abc.abstractmethod
    def get_object_evaluation(
        self, key: str, default_value: Value, context: EvaluationContext | None = None
    ) -> ProviderEvaluation[Value]: ...


__all__ = ["FeatureProvider", "ProviderMetadata"]
