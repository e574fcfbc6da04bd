"""Evaluation contract – ports, results and lifecycle events."""
from devcycle_openfeature.application.provider.evaluation import (
    FlagMetadataValue,
    ProviderEvaluation,
    Reason,
)
from devcycle_openfeature.application.provider.events import (
    EventHandler,
    EventStream,
    Observer,
    ProviderEvent,
    ProviderEventType,
    ProviderStatus,
)
from devcycle_openfeature.application.provider.provider import FeatureProvider, ProviderMetadata

__all__ = [
    "EventHandler",
    "EventStream",
    "FeatureProvider",
    "FlagMetadataValue",
    "Observer",
    "ProviderEvaluation",
    "ProviderEvent",
    "ProviderEventType",
    "ProviderMetadata",
    "ProviderStatus",
    "Reason",
]
