"""Kernel values – Structured Value and flat-value classification."""
from devcycle_openfeature.kernel.values.flat import is_flat_json_value
from devcycle_openfeature.kernel.values.value import INT64_MAX, INT64_MIN, Value, ValueKind

__all__ = ["INT64_MAX", "INT64_MIN", "Value", "ValueKind", "is_flat_json_value"]
