"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import Any

import structlog

ROOT_LOGGER_NAME = "devcycle_openfeature"


class JsonLoggerFactory:
    """Configure structlog to render JSON through stdlib logging."""

    @staticmethod
    def configure(level: int | str = logging.INFO) -> None:
        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]
        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)

    @staticmethod
    def set_level(level: int | str, name: str = ROOT_LOGGER_NAME) -> None:
        """Set the stdlib level of the library's loggers (effective once :meth:`configure` ran)."""
        logging.getLogger(name).setLevel(level)


__all__ = ["JsonLoggerFactory", "ROOT_LOGGER_NAME"]
