"""Testing fakes – in-memory doubles for the DevCycle client ports."""
from devcycle_openfeature.testing.fakes.devcycle import FakeDevCycleClient, FakeDevCycleClientFactory

__all__ = ["FakeDevCycleClient", "FakeDevCycleClientFactory"]
