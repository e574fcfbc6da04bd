"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── OpenFeatureError         (openfeature.py)
    │   ├── InvalidContextError
    │   ├── ParseError
    │   ├── ProviderFatalError
    │   └── GeneralError
    └── InfrastructureError      (infrastructure.py)
        ├── TimeoutError
        └── ExternalServiceError
"""

from devcycle_openfeature.kernel.errors.base import BaseError
from devcycle_openfeature.kernel.errors.infrastructure import (
    ExternalServiceError,
    InfrastructureError,
    TimeoutError,
)
from devcycle_openfeature.kernel.errors.openfeature import (
    ErrorCode,
    GeneralError,
    InvalidContextError,
    OpenFeatureError,
    ParseError,
    ProviderFatalError,
)

__all__ = [
    "BaseError",
    "ErrorCode",
    "ExternalServiceError",
    "GeneralError",
    "InfrastructureError",
    "InvalidContextError",
    "OpenFeatureError",
    "ParseError",
    "ProviderFatalError",
    "TimeoutError",
]
