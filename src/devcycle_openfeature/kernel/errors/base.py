"""BaseError — common root of every error raised by the provider."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Error carrying a stable slug and structured context.

    Args:
        message: Human-readable description.
        code: Stable slug; falls back to the class-level ``default_code``.
        detail: JSON-serialisable context (flag key, payload type, ...).
        cause: Underlying exception; also installed as ``__cause__``.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail) if detail else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def log_fields(self) -> dict[str, Any]:
        """Keyword arguments for a structlog event describing this error."""
        return {"error_type": type(self).__name__, "error": self.to_dict()}

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


__all__ = ["BaseError"]
