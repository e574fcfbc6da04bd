"""Vendor variable → ProviderEvaluation."""
from __future__ import annotations

from typing import Any, TypeVar

from devcycle_openfeature.application.devcycle.variable import Variable
from devcycle_openfeature.application.provider.evaluation import (
    FlagMetadataValue,
    ProviderEvaluation,
    Reason,
)

T = TypeVar("T")


def eval_reason(variable: Variable[Any]) -> str:
    """Explicit vendor reason, else ``DEFAULT`` / ``TARGETING_MATCH`` from ``is_defaulted``."""
    if variable.eval is not None:
        return variable.eval.reason
    return Reason.DEFAULT.value if variable.is_defaulted else Reason.TARGETING_MATCH.value


def flag_metadata(variable: Variable[Any]) -> dict[str, FlagMetadataValue]:
    metadata: dict[str, FlagMetadataValue] = {}
    if variable.eval is not None:
        if variable.eval.details is not None:
            metadata["evalDetails"] = variable.eval.details
        if variable.eval.target_id is not None:
            metadata["evalTargetId"] = variable.eval.target_id
    return metadata


def build_evaluation(variable: Variable[Any], value: T) -> ProviderEvaluation[T]:
    """Wrap *value* with the reason and metadata carried by *variable*."""
    return ProviderEvaluation(
        value=value,
        reason=eval_reason(variable),
        flag_metadata=flag_metadata(variable),
    )


def default_evaluation(default_value: T) -> ProviderEvaluation[T]:
    """Result returned when no vendor client is installed."""
    return ProviderEvaluation(value=default_value, reason=Reason.DEFAULT.value)


__all__ = ["build_evaluation", "default_evaluation", "eval_reason", "flag_metadata"]
