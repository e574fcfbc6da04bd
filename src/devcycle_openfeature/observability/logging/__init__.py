"""Observability – structured logging helpers."""
from devcycle_openfeature.observability.logging.factory import JsonLoggerFactory, ROOT_LOGGER_NAME
from devcycle_openfeature.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "ROOT_LOGGER_NAME", "get_logger"]
