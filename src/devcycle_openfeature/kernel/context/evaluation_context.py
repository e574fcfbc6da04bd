"""EvaluationContext — targeting key plus structured attributes."""
from __future__ import annotations

import dataclasses
from collections.abc import KeysView, Mapping
from types import MappingProxyType

from devcycle_openfeature.kernel.values import Value


@dataclasses.dataclass(frozen=True)
class EvaluationContext:
    """Caller-supplied identity and attributes used to personalise a flag decision.

    An empty ``targeting_key`` means "not set".
    """

    targeting_key: str = ""
    attributes: Mapping[str, Value] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def get_targeting_key(self) -> str:
        return self.targeting_key

    def get_value(self, key: str) -> Value | None:
        return self.attributes.get(key)

    def keys(self) -> KeysView[str]:
        return self.attributes.keys()

    def as_map(self) -> Mapping[str, Value]:
        return self.attributes


__all__ = ["EvaluationContext"]
