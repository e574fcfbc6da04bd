"""DevCycle adapter – production client over the DevCycle bucketing API."""
from devcycle_openfeature.adapters.devcycle.client import (
    HttpDevCycleClient,
    HttpDevCycleClientFactory,
)

__all__ = ["HttpDevCycleClient", "HttpDevCycleClientFactory"]
