"""Evaluation context → DevCycleUser mapping.

Resolution rules:

* user id: first non-empty of the targeting key, the ``user_id`` attribute
  and the ``userId`` attribute (string attributes only);
* ``email`` / ``name`` / ``language`` / ``country``: string attributes only;
* ``isAnonymous``: boolean attribute only;
* ``customData`` / ``privateCustomData``: maps, filtered to flat values;
* any other flat attribute is folded into ``customData``.

Type mismatches are logged and skipped; they never abort the mapping.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from devcycle_openfeature.application.devcycle.user import (
    DevCycleUser,
    DevCycleUserBuilder,
    UserBuildError,
)
from devcycle_openfeature.kernel.context import EvaluationContext
from devcycle_openfeature.kernel.errors import InvalidContextError
from devcycle_openfeature.kernel.values import Value, ValueKind, is_flat_json_value
from devcycle_openfeature.observability.logging import get_logger

logger = get_logger(__name__)

USER_ID_KEYS = ("targetingKey", "user_id", "userId")
STRING_USER_FIELDS = ("email", "name", "language", "country")


def unwrap_values(attributes: Mapping[str, Value]) -> dict[str, Any]:
    """Convert structured attributes to native scalars and dicts.

    ``list``, ``null`` and ``date`` values have no place in the DevCycle user
    schema and are dropped silently.
    """
    result: dict[str, Any] = {}
    for key, value in attributes.items():
        match value.kind:
            case ValueKind.STRING:
                result[key] = value.as_string()
            case ValueKind.BOOLEAN:
                result[key] = value.as_bool()
            case ValueKind.INTEGER:
                result[key] = value.as_int()
            case ValueKind.FLOAT:
                result[key] = value.as_float()
            case ValueKind.STRUCTURE:
                result[key] = unwrap_values(value.as_structure() or {})
            case _:
                pass
    return result


def convert_to_custom_data(data: Mapping[str, Any]) -> dict[str, Any]:
    """Keep the flat entries of *data*; warn about and drop the rest."""
    custom_data: dict[str, Any] = {}
    for key, value in data.items():
        if is_flat_json_value(value):
            custom_data[key] = value
        else:
            logger.warning(
                "devcycle.custom_data.unsupported_type",
                key=key,
                value_type=type(value).__name__,
                hint="DevCycleUser only supports flat customData properties of type "
                "string / number / boolean / null",
            )
    return custom_data


def resolve_user_id(targeting_key: str, attributes: Mapping[str, Any]) -> str | None:
    candidates = (
        targeting_key or None,
        attributes.get("user_id") if isinstance(attributes.get("user_id"), str) else None,
        attributes.get("userId") if isinstance(attributes.get("userId"), str) else None,
    )
    return next((candidate for candidate in candidates if candidate), None)


def user_from_context(context: EvaluationContext) -> DevCycleUser:
    """Build a :class:`DevCycleUser` from *context*.

    Raises
    ------
    InvalidContextError
        When no user can be built, e.g. ``isAnonymous=False`` without any
        resolvable user id.
    """
    attributes = unwrap_values(context.as_map())
    builder = DevCycleUserBuilder()

    user_id = resolve_user_id(context.get_targeting_key(), attributes)
    if user_id is not None:
        builder.user_id(user_id)

    anonymity_set = False
    custom_data: dict[str, Any] = {}
    private_custom_data: dict[str, Any] = {}

    for key, value in attributes.items():
        if key in USER_ID_KEYS:
            continue

        if key in STRING_USER_FIELDS:
            if isinstance(value, str):
                getattr(builder, key)(value)
            else:
                logger.warning(
                    "devcycle.context.unexpected_type",
                    key=key,
                    expected="str",
                    actual=type(value).__name__,
                )
        elif key == "isAnonymous":
            if isinstance(value, bool):
                builder.is_anonymous(value)
                anonymity_set = True
            else:
                logger.warning(
                    "devcycle.context.unexpected_type",
                    key=key,
                    expected="bool",
                    actual=type(value).__name__,
                )
        elif key == "privateCustomData" and isinstance(value, dict):
            private_custom_data = convert_to_custom_data(value)
        elif key == "customData" and isinstance(value, dict):
            custom_data.update(convert_to_custom_data(value))
        elif is_flat_json_value(value):
            custom_data[key] = value
        else:
            logger.warning(
                "devcycle.context.unsupported_property",
                key=key,
                value_type=type(value).__name__,
                hint="DevCycleUser only supports flat customData properties of type "
                "string / number / boolean / null",
            )

    if user_id is None and not anonymity_set:
        builder.is_anonymous(True)

    if custom_data:
        builder.custom_data(custom_data)
    if private_custom_data:
        builder.private_custom_data(private_custom_data)

    try:
        return builder.build()
    except UserBuildError as exc:
        raise InvalidContextError(str(exc), cause=exc) from exc


__all__ = [
    "convert_to_custom_data",
    "resolve_user_id",
    "unwrap_values",
    "user_from_context",
]
