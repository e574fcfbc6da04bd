"""Evaluation-contract errors surfaced to OpenFeature callers."""

from __future__ import annotations

import enum
from typing import Any

from devcycle_openfeature.kernel.errors.base import BaseError


class ErrorCode(enum.StrEnum):
    """Error codes shared by raised errors and ``ERROR`` provider events."""

    PROVIDER_NOT_READY = "PROVIDER_NOT_READY"
    PROVIDER_FATAL = "PROVIDER_FATAL"
    FLAG_NOT_FOUND = "FLAG_NOT_FOUND"
    PARSE_ERROR = "PARSE_ERROR"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    TARGETING_KEY_MISSING = "TARGETING_KEY_MISSING"
    INVALID_CONTEXT = "INVALID_CONTEXT"
    GENERAL = "GENERAL"


class OpenFeatureError(BaseError):
    """Base class for errors defined by the evaluation contract."""

    default_code = "openfeature_error"
    error_code: ErrorCode = ErrorCode.GENERAL

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["error_code"] = self.error_code.value
        return base


class InvalidContextError(OpenFeatureError):
    """The evaluation context cannot be turned into a vendor user."""

    default_code = "invalid_context"
    error_code = ErrorCode.INVALID_CONTEXT

    def __init__(self, message: str = "Invalid evaluation context", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ParseError(OpenFeatureError):
    """A value could not be interpreted (non-object JSON default, bad payload)."""

    default_code = "parse_error"
    error_code = ErrorCode.PARSE_ERROR


class ProviderFatalError(OpenFeatureError):
    """The vendor client could not be initialised."""

    default_code = "provider_fatal"
    error_code = ErrorCode.PROVIDER_FATAL


class GeneralError(OpenFeatureError):
    """Any other failure after initialisation (e.g. identify)."""

    default_code = "general_error"
    error_code = ErrorCode.GENERAL


__all__ = [
    "ErrorCode",
    "GeneralError",
    "InvalidContextError",
    "OpenFeatureError",
    "ParseError",
    "ProviderFatalError",
]
