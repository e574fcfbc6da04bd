"""DevCycle variable evaluation results."""
from __future__ import annotations

import dataclasses
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class EvalReason:
    """Evaluation detail attached by DevCycle to a variable."""

    reason: str
    details: str | None = None
    target_id: str | None = None


@dataclasses.dataclass(frozen=True)
class Variable(Generic[T]):
    key: str
    value: T
    default_value: T
    is_defaulted: bool = True
    eval: EvalReason | None = None

    @classmethod
    def defaulted(cls, key: str, default_value: T, eval: EvalReason | None = None) -> Variable[T]:
        return cls(key=key, value=default_value, default_value=default_value, eval=eval)


__all__ = ["EvalReason", "Variable"]
