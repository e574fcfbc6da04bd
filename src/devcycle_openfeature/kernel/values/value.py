"""Structured Value — the tagged, recursively nestable value used at the
evaluation-contract boundary.

Variants::

    string      str
    boolean     bool
    integer     int (signed 64-bit range)
    float       float
    date        datetime
    null        None
    list        tuple[Value, ...]
    structure   Mapping[str, Value]

Values are immutable.  Equality is structural and ignores the insertion order
of structure keys.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Any

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueKind(enum.Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"
    NULL = "null"
    LIST = "list"
    STRUCTURE = "structure"


class Value:
    """Immutable tagged union; build instances through the ``of_*`` constructors."""

    __slots__ = ("_kind", "_raw")

    _kind: ValueKind
    _raw: Any

    def __init__(self, kind: ValueKind, raw: Any) -> None:
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def of_string(cls, value: str) -> Value:
        if not isinstance(value, str):
            raise TypeError(f"string value expected, got {type(value).__name__}")
        return cls(ValueKind.STRING, value)

    @classmethod
    def of_bool(cls, value: bool) -> Value:
        if not isinstance(value, bool):
            raise TypeError(f"boolean value expected, got {type(value).__name__}")
        return cls(ValueKind.BOOLEAN, value)

    @classmethod
    def of_int(cls, value: int) -> Value:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"integer value expected, got {type(value).__name__}")
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"integer {value} is outside the signed 64-bit range")
        return cls(ValueKind.INTEGER, value)

    @classmethod
    def of_float(cls, value: float) -> Value:
        if isinstance(value, bool) or not isinstance(value, float):
            raise TypeError(f"float value expected, got {type(value).__name__}")
        return cls(ValueKind.FLOAT, value)

    @classmethod
    def of_date(cls, value: datetime) -> Value:
        if not isinstance(value, datetime):
            raise TypeError(f"datetime value expected, got {type(value).__name__}")
        return cls(ValueKind.DATE, value)

    @classmethod
    def null(cls) -> Value:
        return cls(ValueKind.NULL, None)

    @classmethod
    def of_list(cls, values: Iterable[Value]) -> Value:
        items = tuple(values)
        for item in items:
            if not isinstance(item, Value):
                raise TypeError(f"list items must be Value, got {type(item).__name__}")
        return cls(ValueKind.LIST, items)

    @classmethod
    def of_structure(cls, attributes: Mapping[str, Value]) -> Value:
        copied: dict[str, Value] = {}
        for key, item in attributes.items():
            if not isinstance(key, str):
                raise TypeError(f"structure keys must be str, got {type(key).__name__}")
            if not isinstance(item, Value):
                raise TypeError(f"structure values must be Value, got {type(item).__name__}")
            copied[key] = item
        return cls(ValueKind.STRUCTURE, MappingProxyType(copied))

    @classmethod
    def of(cls, native: Any) -> Value:
        """Wrap plain Python data (JSON-like) into a :class:`Value`, recursively."""
        if isinstance(native, Value):
            return native
        if native is None:
            return cls.null()
        if isinstance(native, bool):
            return cls.of_bool(native)
        if isinstance(native, int):
            return cls.of_int(native)
        if isinstance(native, float):
            return cls.of_float(native)
        if isinstance(native, str):
            return cls.of_string(native)
        if isinstance(native, datetime):
            return cls.of_date(native)
        if isinstance(native, Mapping):
            return cls.of_structure({key: cls.of(item) for key, item in native.items()})
        if isinstance(native, (list, tuple)):
            return cls.of_list(cls.of(item) for item in native)
        raise TypeError(f"Cannot convert {type(native).__name__} to Value")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def kind(self) -> ValueKind:
        return self._kind

    @property
    def is_null(self) -> bool:
        return self._kind is ValueKind.NULL

    def as_string(self) -> str | None:
        return self._raw if self._kind is ValueKind.STRING else None

    def as_bool(self) -> bool | None:
        return self._raw if self._kind is ValueKind.BOOLEAN else None

    def as_int(self) -> int | None:
        return self._raw if self._kind is ValueKind.INTEGER else None

    def as_float(self) -> float | None:
        return self._raw if self._kind is ValueKind.FLOAT else None

    def as_date(self) -> datetime | None:
        return self._raw if self._kind is ValueKind.DATE else None

    def as_list(self) -> tuple[Value, ...] | None:
        return self._raw if self._kind is ValueKind.LIST else None

    def as_structure(self) -> Mapping[str, Value] | None:
        return self._raw if self._kind is ValueKind.STRUCTURE else None

    # ------------------------------------------------------------------
    # Equality / representation
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        if self._kind is ValueKind.STRUCTURE:
            return dict(self._raw) == dict(other._raw)
        return self._raw == other._raw

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._kind is ValueKind.NULL:
            return "Value.null()"
        if self._kind is ValueKind.STRUCTURE:
            return f"Value.{self._kind.value}({dict(self._raw)!r})"
        if self._kind is ValueKind.LIST:
            return f"Value.{self._kind.value}({list(self._raw)!r})"
        return f"Value.{self._kind.value}({self._raw!r})"


__all__ = ["INT64_MAX", "INT64_MIN", "Value", "ValueKind"]
