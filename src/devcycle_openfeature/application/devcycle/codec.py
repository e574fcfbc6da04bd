"""Structured Value ↔ dictionary conversion for JSON (object) flags."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from devcycle_openfeature.kernel.errors import ParseError
from devcycle_openfeature.kernel.values import INT64_MAX, INT64_MIN, Value, ValueKind
from devcycle_openfeature.observability.logging import get_logger

logger = get_logger(__name__)


def value_to_dict(value: Value) -> dict[str, Any]:
    """Convert a ``structure`` value into a plain dict.

    Unsupported leaves (``list``, ``null``, ``date``) are skipped with a
    warning.

    Raises
    ------
    ParseError
        When *value* itself is not a structure.
    """
    attributes = value.as_structure()
    if attributes is None:
        raise ParseError(
            "DevCycle only supports object values for JSON flags. "
            f"Received non-object value: {value!r}",
            detail={"kind": value.kind.value},
        )

    result: dict[str, Any] = {}
    for key, item in attributes.items():
        match item.kind:
            case ValueKind.STRING:
                result[key] = item.as_string()
            case ValueKind.BOOLEAN:
                result[key] = item.as_bool()
            case ValueKind.INTEGER:
                result[key] = item.as_int()
            case ValueKind.FLOAT:
                result[key] = item.as_float()
            case ValueKind.STRUCTURE:
                result[key] = value_to_dict(item)
            case _:
                logger.warning(
                    "devcycle.json_flag.unsupported_value",
                    key=key,
                    kind=item.kind.value,
                )
    return result


def dict_to_value(data: Mapping[str, Any]) -> Value:
    """Convert a vendor JSON object into a ``structure`` value.

    Arrays are skipped with a warning; ``None`` and other unknown types are
    skipped silently.
    """
    attributes: dict[str, Value] = {}
    for key, item in data.items():
        if isinstance(item, str):
            attributes[key] = Value.of_string(item)
        elif isinstance(item, bool):
            attributes[key] = Value.of_bool(item)
        elif isinstance(item, float):
            attributes[key] = Value.of_float(item)
        elif isinstance(item, int):
            if INT64_MIN <= item <= INT64_MAX:
                attributes[key] = Value.of_int(item)
            else:
                logger.warning("devcycle.json_flag.integer_out_of_range", key=key)
        elif isinstance(item, Mapping):
            attributes[key] = dict_to_value(item)
        elif isinstance(item, (list, tuple)):
            logger.warning(
                "devcycle.json_flag.array_skipped",
                key=key,
                hint="Arrays are not supported in structured values",
            )
    return Value.of_structure(attributes)


__all__ = ["dict_to_value", "value_to_dict"]
