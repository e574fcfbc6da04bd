"""Evaluation contract – ProviderEvaluation and the reason vocabulary."""
from __future__ import annotations

import dataclasses
import enum
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")

FlagMetadataValue: TypeAlias = str | int | float | bool


class Reason(enum.StrEnum):
    """Why a flag resolved to its value.  Vendor reasons outside this set pass through as-is."""

    DEFAULT = "DEFAULT"
    TARGETING_MATCH = "TARGETING_MATCH"
    STATIC = "STATIC"
    SPLIT = "SPLIT"
    CACHED = "CACHED"
    DISABLED = "DISABLED"
    UNKNOWN = "UNKNOWN"
    ERROR = "ERROR"


@dataclasses.dataclass(frozen=True)
class ProviderEvaluation(Generic[T]):
    """Result of a single flag evaluation."""

    value: T
    reason: str = Reason.DEFAULT.value
    flag_metadata: dict[str, FlagMetadataValue] = dataclasses.field(default_factory=dict)
    variant: str | None = None


__all__ = ["FlagMetadataValue", "ProviderEvaluation", "Reason"]
