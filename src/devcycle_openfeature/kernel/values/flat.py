"""Flat-value classification for vendor custom-data maps."""

from __future__ import annotations

from typing import Any


def is_flat_json_value(value: Any) -> bool:
    """Return ``True`` for JSON scalars: ``str``, ``int``, ``float``, ``bool`` or ``None``.

    Lists, mappings, dates and any other object are composite and may not
    enter a DevCycle ``customData`` / ``privateCustomData`` map.
    """
    return value is None or isinstance(value, (str, bool, int, float))


__all__ = ["is_flat_json_value"]
